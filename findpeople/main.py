#!/usr/bin/env python3
"""
Main CLI entry point for findpeople
"""

import asyncio
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from findpeople import __version__
from findpeople.config import get_env_info, load_directory_settings, validate_all_env_vars
from findpeople.exceptions import FindPeopleError
from findpeople.services import create_directory
from findpeople.ui.gui import search
from findpeople.utils.logging import setup_logging
from findpeople.utils.output import console, print_json, profiles_table

app = typer.Typer(help="Find people in the user directory and send connection requests.")
app.command()(search)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """
    findpeople - search users and send connection requests

    [bold]Examples:[/bold]

    Open the search screen:
        [cyan]findpeople search[/cyan]

    One-shot search:
        [cyan]findpeople find alice[/cyan]

    Send a connection request:
        [cyan]findpeople connect u-0001[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)

    if verbose:
        setup_logging("DEBUG")
    elif quiet:
        setup_logging("ERROR")


@app.command()
def version():
    """Show findpeople version"""
    typer.echo(f"findpeople version {__version__}")


@app.command()
def find(
    query: str = typer.Argument(..., help="Username or display name to look for"),
    backend: Optional[str] = typer.Option(
        None, "--backend", "-b", help="Directory backend: rest or memory"
    ),
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON"),
):
    """Search the directory once and print the matching profiles"""
    if not query.strip():
        console.print("[yellow]Enter a username or display name to search for[/yellow]")
        raise typer.Exit(1)

    try:
        directory = create_directory(load_directory_settings(backend))
        profiles = asyncio.run(directory.search_users(query.strip()))
    except FindPeopleError as e:
        console.print(f"[red]Error searching for users: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    if json_output:
        print_json([profile.to_dict() for profile in profiles])
        return

    if not profiles:
        console.print(f'[yellow]No users found matching "{escape(query.strip())}"[/yellow]')
        return

    console.print(profiles_table(profiles, title=f'Users matching "{escape(query.strip())}"'))


@app.command()
def connect(
    user_id: str = typer.Argument(..., help="Id of the user to connect with"),
    backend: Optional[str] = typer.Option(
        None, "--backend", "-b", help="Directory backend: rest or memory"
    ),
):
    """Send a connection request to a user"""
    try:
        directory = create_directory(load_directory_settings(backend))

        async def _send():
            profile = await directory.get_profile(user_id)
            await directory.send_connection_request(user_id)
            return profile

        profile = asyncio.run(_send())
    except FindPeopleError as e:
        console.print(f"[red]Error sending connection request: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[green]Connection request sent to {escape(profile.label)}[/green]")


@app.command()
def env():
    """Show findpeople environment variables and whether they are valid"""
    table = Table(title="Environment")
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_column("Default", style="dim")
    table.add_column("Valid", justify="center")

    for name, info in get_env_info().items():
        table.add_row(
            name,
            escape(str(info["value"])) if info["is_set"] else "",
            str(info["default"]) if info["default"] is not None else "",
            "✓" if info["valid"] else "[red]✗[/red]",
        )

    console.print(table)

    errors = validate_all_env_vars()
    for error in errors:
        console.print(f"[red]{escape(error)}[/red]")
    if errors:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
