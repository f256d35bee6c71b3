"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases
or a running backend.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from itertools import count
from unittest.mock import AsyncMock, MagicMock

import pytest

from notesapp.backend.schemas.folder import FolderResponse
from notesapp.backend.schemas.note import NoteResponse


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Provides a fully mocked AsyncSession with common methods.

    Usage:
        def test_repository(mock_db_session: AsyncMock):
            repo = FolderRepository(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    session.get = AsyncMock()
    return session


@pytest.fixture
def mock_db_result() -> MagicMock:
    """
    Mock database query result.

    Use this to mock the result of session.execute().
    """
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=None)
    result.scalars = MagicMock()
    result.scalars.return_value.all = MagicMock(return_value=[])
    result.scalars.return_value.first = MagicMock(return_value=None)
    return result


# =============================================================================
# Response Builders
# =============================================================================


_BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_folder() -> Callable[..., FolderResponse]:
    """
    Build FolderResponse rows with increasing timestamps.

    Usage:
        folder = make_folder("Work")
        folder = make_folder("Work", id="folder-1")
    """
    seq = count(1)

    def _make(name: str = "Folder", **overrides: object) -> FolderResponse:
        n = next(seq)
        stamp = _BASE_TIME + timedelta(minutes=n)
        values = {
            "id": f"folder-{n}",
            "name": name,
            "created_at": stamp,
            "updated_at": stamp,
        }
        values.update(overrides)
        return FolderResponse(**values)

    return _make


@pytest.fixture
def make_note() -> Callable[..., NoteResponse]:
    """
    Build NoteResponse rows with increasing timestamps.

    Usage:
        note = make_note("folder-1", title="Plan", content="# Goals")
    """
    seq = count(1)

    def _make(
        folder_id: str = "folder-1",
        title: str | None = "Note",
        content: str | None = "",
        **overrides: object,
    ) -> NoteResponse:
        n = next(seq)
        stamp = _BASE_TIME + timedelta(minutes=n)
        values = {
            "id": f"note-{n}",
            "folder_id": folder_id,
            "title": title,
            "content": content,
            "created_at": stamp,
            "updated_at": stamp,
        }
        values.update(overrides)
        return NoteResponse(**values)

    return _make


# =============================================================================
# Client Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_api_client() -> AsyncMock:
    """
    Mock NotesAPIClient.

    Usage:
        async def test_store(mock_api_client):
            mock_api_client.list_folders.return_value = [folder]
            store = NotesStore(mock_api_client)
    """
    client = AsyncMock()
    client.list_folders = AsyncMock(return_value=[])
    client.list_notes = AsyncMock(return_value=[])
    client.close = AsyncMock()
    return client


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                ...
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
