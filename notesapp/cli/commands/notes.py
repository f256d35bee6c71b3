"""
Note Commands.

List, show, create, rename, move and delete notes on a running backend.
"""

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from notesapp.backend.schemas.note import NoteResponse
from notesapp.cli.client import run_command
from notesapp.client.api import NotesAPIClient
from notesapp.editor.store import display_title

app = typer.Typer(help="Note commands")
console = Console()


@app.command("list")
def list_notes(
    folder_id: str | None = typer.Option(None, "--folder", "-f", help="Only notes in this folder"),
) -> None:
    """
    List notes, newest first.

    Examples:
        notes_cli.py notes list
        notes_cli.py notes list -f <folder-id>
    """

    async def body(client: NotesAPIClient) -> None:
        notes = await client.list_notes(folder_id)
        if not notes:
            console.print("[dim]No notes.[/dim]")
            return
        table = Table(title="Notes", show_header=True)
        table.add_column("ID", style="dim")
        table.add_column("Title", style="cyan")
        table.add_column("Folder", style="dim")
        table.add_column("Updated")
        for note in notes:
            table.add_row(
                note.id,
                display_title(note),
                note.folder_id,
                note.updated_at.strftime("%Y-%m-%d %H:%M"),
            )
        console.print(table)

    run_command(body)


@app.command()
def show(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """
    Show a note with its markdown rendered.

    Examples:
        notes_cli.py notes show <note-id>
    """

    async def body(client: NotesAPIClient) -> None:
        note = await client.get_note(note_id)
        console.print(Panel(Markdown(note.content or ""), title=display_title(note)))

    run_command(body)


@app.command()
def create(
    folder_id: str = typer.Argument(..., help="Folder ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="Note title"),
    content: str | None = typer.Option(None, "--content", "-c", help="Markdown content"),
) -> None:
    """
    Create a note in a folder.

    Examples:
        notes_cli.py notes create <folder-id> -t "Plan" -c "# Goals"
    """

    async def body(client: NotesAPIClient) -> None:
        note = await client.create_note(folder_id, title=title, content=content)
        console.print(f"[green]Created note[/green] {display_title(note)} [dim]({note.id})[/dim]")

    run_command(body)


@app.command()
def rename(
    note_id: str = typer.Argument(..., help="Note ID"),
    title: str = typer.Argument(..., help="New title"),
) -> None:
    """
    Rename a note.

    Examples:
        notes_cli.py notes rename <note-id> "Plan v2"
    """
    if not title.strip():
        console.print("[red]Error: title must not be blank[/red]")
        raise typer.Exit(1)

    async def body(client: NotesAPIClient) -> None:
        note = await client.update_note(note_id, title=title.strip())
        console.print(f"[green]Renamed note[/green] to {display_title(note)}")

    run_command(body)


@app.command()
def move(
    note_id: str = typer.Argument(..., help="Note ID"),
    folder_id: str = typer.Argument(..., help="Target folder ID"),
) -> None:
    """
    Move a note to another folder.

    Examples:
        notes_cli.py notes move <note-id> <folder-id>
    """

    async def body(client: NotesAPIClient) -> None:
        note = await client.update_note(note_id, folder_id=folder_id)
        console.print(f"[green]Moved note[/green] {display_title(note)}")

    run_command(body)


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """
    Delete a note.

    Examples:
        notes_cli.py notes delete <note-id> -y
    """

    async def load(client: NotesAPIClient) -> NoteResponse:
        return await client.get_note(note_id)

    async def body(client: NotesAPIClient) -> None:
        await client.delete_note(note_id)
        console.print("[green]Note deleted[/green]")

    if not yes:
        note = run_command(load)
        typer.confirm(
            f'Are you sure you want to delete note "{display_title(note)}"?',
            abort=True,
        )
    run_command(body)
