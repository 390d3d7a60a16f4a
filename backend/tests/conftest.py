"""
Notes API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for storage-failure paths
    ├── test_settings:   Settings pointing at a SQLite file in tmp_path
    ├── database:        Database handle with tables created
    │   └── db_session:  One committed-on-exit session
    ├── app:             FastAPI app bound to `database`
    │   └── test_client: HTTPX AsyncClient talking to `app` over ASGI
    └── sample_note_data
"""

import os

# Override settings BEFORE any notesapi import: the module-level app in
# notesapi.main must never point at a real server
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from notesapi.config import Settings
from notesapi.database import Database
from notesapi.main import create_app

ALLOWED_ORIGIN = "http://localhost:5173"


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_note(mock_db_session):
            mock_db_session.get.return_value = None
            ...
    """
    session = AsyncMock()
    session.get = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'notes_test.db'}",
        cors_origin=ALLOWED_ORIGIN,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """A Database on a fresh SQLite file with the notes table created."""
    db = Database(test_settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def app(test_settings, database):
    return create_app(settings=test_settings, database=database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_note_data():
    now = datetime.now(timezone.utc)
    return {
        "id": 1,
        "title": "Groceries",
        "text": "Milk, eggs, bread",
        "created_at": now,
        "updated_at": now,
    }
