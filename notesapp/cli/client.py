"""
API Client Access for CLI Commands.

Commands share one NotesAPIClient tagged with X-Frontend-ID: cli and run
their async bodies through run_command(), which turns application errors
into a red message and exit code 1.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console

from notesapp.backend.core.exceptions import ApplicationError, ExternalServiceError
from notesapp.backend.core.logging import get_logger, log_with_source
from notesapp.client.api import NotesAPIClient

logger = get_logger(__name__)
console = Console()

T = TypeVar("T")

_client: NotesAPIClient | None = None


def get_api_client() -> NotesAPIClient:
    """Get or create the API client singleton."""
    global _client
    if _client is None:
        _client = NotesAPIClient(frontend="cli")
    return _client


async def close_api_client() -> None:
    """Close the API client."""
    global _client
    if _client:
        await _client.close()
        _client = None


def run_command(body: Callable[[NotesAPIClient], Awaitable[T]]) -> T:
    """
    Run an async command body with the shared client.

    Raises:
        typer.Exit: With code 1 when the body raises an ApplicationError
    """

    async def _run() -> T:
        client = get_api_client()
        try:
            return await body(client)
        finally:
            await close_api_client()

    try:
        return asyncio.run(_run())
    except ExternalServiceError as e:
        log_with_source(logger, "cli", "error", "Backend call failed", error=e.message)
        console.print(f"[red]Error: {e.message}[/red]")
        if e.status_code is None:
            console.print("[dim]Is the server running? Start with: python cli.py --service server[/dim]")
        raise typer.Exit(1)
    except ApplicationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)
