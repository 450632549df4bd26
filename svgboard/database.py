"""
SVGboard Backend — Database Session Management
================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine with connection pooling, provides a session
       dependency that commits on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Transaction boundary:
    One session == one transaction == one HTTP request. Services and crud
    functions only ever `flush()`; the commit happens here once the route
    handler returns. Any exception raised while handling the request rolls
    back every write made during it, which is what keeps a snapshot insert
    and the parent project's `last_shapes_data` update all-or-nothing.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from svgboard.config import settings
from svgboard.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def build_engine(database_url: str, **overrides: Any) -> AsyncEngine:
    """
    Create an async engine for `database_url`.

    Pool sizing options only apply to server databases; SQLite drivers use
    their own pool classes that reject them.
    """
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    options.update(overrides)
    return create_async_engine(database_url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: response models are built from ORM objects
    # after flush, outside any lazy-load context
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = build_engine(settings.database_url)
async_session_factory = build_session_factory(engine)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On error: rolls back the transaction and re-raises
        4. On success: commits; a failed commit is rolled back and raised
           as DatabaseError (500 to the client)
        5. Always: closes the session (returns connection to pool)

    Routes must declare it with scope="function" so the commit finishes
    before the response is sent:
        @router.post("/projects")
        async def create_project(
            db: AsyncSession = Depends(get_db_session, scope="function"),
        ):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise

        try:
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("Commit failed: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save changes. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables() -> None:
    """Create any missing tables registered on `Base.metadata`."""
    # Registers Project and Snapshot on the metadata
    import svgboard.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Closes all connections in the pool. Called during application shutdown."""
    await engine.dispose()
