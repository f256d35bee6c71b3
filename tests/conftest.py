"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    By default, tests use an in-memory SQLite database for speed.
    To test against another database, set the TEST_DATABASE_URL environment
    variable to an async SQLAlchemy URL.

    Every test gets a fresh schema, so no test can see another's rows.
"""

import os
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from notesapp.backend.core.database import enable_sqlite_foreign_keys
from notesapp.backend.models import Base


# =============================================================================
# Database Configuration
# =============================================================================


def get_test_database_url() -> str:
    """
    Get the test database URL.

    Returns TEST_DATABASE_URL if set, otherwise uses in-memory SQLite.
    """
    return os.environ.get(
        "TEST_DATABASE_URL",
        "sqlite+aiosqlite:///:memory:",
    )


def is_sqlite() -> bool:
    """Check if using SQLite database."""
    return "sqlite" in get_test_database_url()


# =============================================================================
# Database Engine Fixtures
# =============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create the test database engine.

    For SQLite: one shared in-memory connection with foreign keys enforced,
    the same way the application engine is configured.
    """
    url = get_test_database_url()

    if is_sqlite():
        # SQLite in-memory requires a single shared connection
        engine = create_async_engine(
            url,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(url, echo=False)

    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# =============================================================================
# Database Session Fixtures
# =============================================================================


@pytest.fixture
async def db_session(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for a single test.

    Changes are rolled back after the test.

    Usage:
        async def test_create_folder(db_session: AsyncSession):
            folder = Folder(name="Work")
            db_session.add(folder)
            await db_session.flush()
            assert folder.id is not None
    """
    async with db_session_factory() as session:
        yield session
        await session.rollback()


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
