"""
Health Check Commands.

Commands for checking backend health (require a running server).
"""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from notesapp.cli.client import run_command
from notesapp.client.api import NotesAPIClient

app = typer.Typer(help="Health check commands")
console = Console()


def _display_health(data: dict, detailed: bool) -> None:
    status = data.get("status", "unknown")
    status_color = "green" if status == "healthy" else "red"

    if not detailed:
        console.print(Panel(
            f"[{status_color}]{status.upper()}[/{status_color}]",
            title="Backend Status",
        ))
        return

    table = Table(title="Health Status", show_header=True)
    table.add_column("Component", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for component, check in data.get("checks", {}).items():
        check_status = check.get("status", "unknown")
        color = "green" if check_status == "healthy" else "red"
        details = []
        if "latency_ms" in check:
            details.append(f"latency: {check['latency_ms']}ms")
        if "error" in check:
            details.append(f"error: {check['error']}")
        table.add_row(component, f"[{color}]{check_status}[/{color}]", ", ".join(details) or "-")

    console.print(table)


@app.command()
def status(
    detailed: bool = typer.Option(False, "--detailed", "-d", help="Show per-component status"),
) -> None:
    """
    Check backend readiness (database included).

    Examples:
        notes_cli.py health status
        notes_cli.py health status -d
    """

    async def body(client: NotesAPIClient) -> dict:
        return await client.readiness()

    data = run_command(body)
    _display_health(data, detailed)
    if data.get("status") != "healthy":
        raise typer.Exit(1)
