"""
End-to-End Test Fixtures.

Fixtures for E2E tests - the editor state layer driving the real API
in-process, backed by the test database.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.backend.core.database import get_db_session
from notesapp.client.api import NotesAPIClient
from notesapp.editor.store import NotesStore


@pytest.fixture
async def e2e_client(db_session: AsyncSession) -> AsyncGenerator[NotesAPIClient, None]:
    """API client talking to a fresh app over ASGI."""
    from notesapp.backend.main import create_app

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    async with NotesAPIClient(
        base_url="http://test",
        timeout=5.0,
        api_prefix="/api",
        frontend="tui",
        transport=ASGITransport(app=app),
    ) as client:
        yield client


@pytest.fixture
async def store(e2e_client: NotesAPIClient) -> NotesStore:
    notes_store = NotesStore(e2e_client)
    await notes_store.load()
    return notes_store
