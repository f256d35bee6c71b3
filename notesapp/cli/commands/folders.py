"""
Folder Commands.

List, create, rename and delete folders on a running backend.
"""

import typer
from rich.console import Console
from rich.table import Table

from notesapp.backend.schemas.folder import FolderResponse
from notesapp.cli.client import run_command
from notesapp.client.api import NotesAPIClient

app = typer.Typer(help="Folder commands")
console = Console()


def _folders_table(folders: list[FolderResponse], counts: dict[str, int]) -> Table:
    table = Table(title="Folders", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Notes", justify="right")
    table.add_column("Created")
    for folder in folders:
        table.add_row(
            folder.id,
            folder.name,
            str(counts.get(folder.id, 0)),
            folder.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


@app.command("list")
def list_folders() -> None:
    """
    List folders, oldest first, with their note counts.

    Examples:
        notes_cli.py folders list
    """

    async def body(client: NotesAPIClient) -> None:
        folders = await client.list_folders()
        notes = await client.list_notes()
        counts: dict[str, int] = {}
        for note in notes:
            counts[note.folder_id] = counts.get(note.folder_id, 0) + 1
        if not folders:
            console.print("[dim]No folders yet.[/dim]")
            return
        console.print(_folders_table(folders, counts))

    run_command(body)


@app.command()
def create(name: str = typer.Argument(..., help="Folder name")) -> None:
    """
    Create a folder.

    Examples:
        notes_cli.py folders create "Work"
    """

    async def body(client: NotesAPIClient) -> None:
        folder = await client.create_folder(name)
        console.print(f"[green]Created folder[/green] {folder.name} [dim]({folder.id})[/dim]")

    run_command(body)


@app.command()
def rename(
    folder_id: str = typer.Argument(..., help="Folder ID"),
    name: str = typer.Argument(..., help="New name"),
) -> None:
    """
    Rename a folder.

    Examples:
        notes_cli.py folders rename <folder-id> "Archive"
    """

    async def body(client: NotesAPIClient) -> None:
        folder = await client.rename_folder(folder_id, name)
        console.print(f"[green]Renamed folder[/green] to {folder.name}")

    run_command(body)


@app.command()
def delete(
    folder_id: str = typer.Argument(..., help="Folder ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """
    Delete a folder and every note inside it.

    Examples:
        notes_cli.py folders delete <folder-id>
        notes_cli.py folders delete <folder-id> -y
    """

    async def load(client: NotesAPIClient) -> FolderResponse:
        return await client.get_folder(folder_id)

    async def body(client: NotesAPIClient) -> None:
        await client.delete_folder(folder_id)
        console.print("[green]Folder deleted[/green]")

    if not yes:
        folder = run_command(load)
        typer.confirm(
            f'Are you sure you want to delete folder "{folder.name}"? '
            "This will also delete all notes inside.",
            abort=True,
        )
    run_command(body)
