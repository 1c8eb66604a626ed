"""
TUI entry point for findpeople.
"""

import logging
from typing import Optional

import typer
from rich.markup import escape

from findpeople.config import load_directory_settings
from findpeople.exceptions import FindPeopleError
from findpeople.utils.logging import setup_logging
from findpeople.utils.output import console

app = typer.Typer()


@app.command()
def search(
    backend: Optional[str] = typer.Option(
        None, "--backend", "-b", help="Directory backend: rest or memory"
    ),
    theme: Optional[str] = typer.Option(
        None, "--theme", "-t", help="Theme to use (findpeople-dark, findpeople-light)"
    ),
):
    """Open the interactive user search screen."""
    from findpeople.services import create_directory
    from findpeople.ui.app import FindPeopleApp

    if not logging.getLogger("findpeople").handlers:
        setup_logging()
    try:
        directory = create_directory(load_directory_settings(backend))
    except FindPeopleError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    try:
        FindPeopleApp(directory, theme=theme).run()
    except KeyboardInterrupt:
        pass
