"""Console output for the non-interactive commands."""

import json
from typing import Any, Iterable

from rich.console import Console
from rich.table import Table

from ..models import Profile

# Shared console instance for all CLI output
console = Console()


def print_json(data: Any) -> None:
    """Print data as indented JSON on stdout; datetimes become strings."""
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def profiles_table(profiles: Iterable[Profile], title: str = "") -> Table:
    """One row per profile, in the order given."""
    table = Table(title=title or None)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Username", style="green")
    table.add_column("Verified", justify="center")

    for profile in profiles:
        table.add_row(
            profile.id,
            profile.label,
            profile.username or "",
            "✓" if profile.is_verified else "",
        )
    return table
