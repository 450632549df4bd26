"""
SVGboard Backend — Test Configuration (conftest.py)
=====================================================

Shared pytest fixtures for the test suite.

Fixtures:
    ├── mock_db_session:  AsyncMock session for service unit tests (no DB)
    ├── db_engine:        fresh in-memory SQLite engine with the schema created
    ├── session_factory:  async_sessionmaker bound to db_engine
    └── test_client:      HTTPX AsyncClient against a fresh app whose real
                          get_db_session dependency uses db_engine
"""

import os

# Must be set before any svgboard import: settings and the engine are
# created at module import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["PROJECT_DELETE_POLICY"] = "cascade"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from svgboard import database
from svgboard.database import Base, build_session_factory
import svgboard.models  # noqa: F401


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        async def test_x(mock_db_session):
            with patch("svgboard.services.project_service.project_crud") as crud:
                crud.get_project = AsyncMock(return_value=None)
                ...
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite shared by every session of one test (StaticPool)."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return build_session_factory(db_engine)


@pytest_asyncio.fixture
async def test_client(db_engine, session_factory, monkeypatch):
    """
    HTTPX AsyncClient talking to a fresh app instance.

    Requests go through the real get_db_session dependency; only its
    session factory and the health-check engine are pointed at the
    per-test in-memory database.
    """
    from svgboard.main import create_app

    monkeypatch.setattr(database, "engine", db_engine)
    monkeypatch.setattr(database, "async_session_factory", session_factory)

    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
