#!/usr/bin/env python3
"""
Notes CLI.

Command-line client for folders and notes on a running backend.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python notes_cli.py --help

    # Folders
    python notes_cli.py folders list
    python notes_cli.py folders create "Work"
    python notes_cli.py folders rename <folder-id> "Archive"
    python notes_cli.py folders delete <folder-id> -y

    # Notes
    python notes_cli.py notes list -f <folder-id>
    python notes_cli.py notes show <note-id>
    python notes_cli.py notes create <folder-id> -t "Plan" -c "# Goals"
    python notes_cli.py notes rename <note-id> "Plan v2"
    python notes_cli.py notes move <note-id> <folder-id>
    python notes_cli.py notes delete <note-id>

    # Health
    python notes_cli.py health status -d

Options:
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from notesapp.cli.commands import folders_app, health_app, notes_app

app = typer.Typer(
    name="notes",
    help="Folder Notes CLI - manage folders and notes on a running backend.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(folders_app, name="folders")
app.add_typer(notes_app, name="notes")
app.add_typer(health_app, name="health")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Folder Notes CLI.
    """
    from notesapp.backend.core.logging import setup_logging

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging(level="WARNING", format_type="console")


if __name__ == "__main__":
    app()
