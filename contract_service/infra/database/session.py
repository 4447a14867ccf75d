"""Database engine and session factory management.

The engine and session factory are created lazily on first use and reused
for the life of the process. Pipeline services receive the
``async_sessionmaker`` explicitly so tests can pass one bound to an
in-memory SQLite engine.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from contract_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from contract_service.core.settings import DatabaseSettings

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def build_engine(db_settings: DatabaseSettings, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the configured URL.

    Pool options are only passed for server databases; SQLite uses
    SQLAlchemy's default pool for aiosqlite.
    """
    if db_settings.is_sqlite:
        return create_async_engine(db_settings.url, echo=echo)
    return create_async_engine(
        db_settings.url,
        pool_size=db_settings.pool_size,
        max_overflow=db_settings.max_overflow,
        pool_pre_ping=db_settings.pool_pre_ping,
        echo=echo,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it on first call."""
    global _engine
    if _engine is None:
        db_settings = get_db_settings()
        _engine = build_engine(db_settings, echo=db_settings.echo or get_app_settings().debug)
        logger.debug(
            "Database engine created",
            extra={"sqlite": db_settings.is_sqlite, "operation": "db.engine"},
        )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory, creating it on first call."""
    global _session_factory
    if _session_factory is None:
        _session_factory = build_session_factory(get_engine())
    return _session_factory


async def init_database(*, create_tables: bool = False) -> None:
    """Verify connectivity and optionally create all tables.

    Table creation is meant for local development and tests; production
    schemas are managed outside this service.
    """
    from contract_service.core.database import Base

    # Register model metadata
    import contract_service.features.notifications.models  # noqa: F401
    import contract_service.features.workflows.models  # noqa: F401

    engine = get_engine()
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if create_tables:
                await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        logger.error(
            "Failed to connect to database",
            extra={"error": str(e), "operation": "db.init"},
        )
        raise

    logger.info(
        "Database connection established",
        extra={"create_tables": create_tables, "operation": "db.init"},
    )


async def close_database() -> None:
    """Dispose the engine and forget the cached factory."""
    global _engine, _session_factory
    if _engine is None:
        return

    logger.info("Closing database connection")
    await _engine.dispose()
    _engine = None
    _session_factory = None


__all__ = [
    "build_engine",
    "build_session_factory",
    "close_database",
    "get_engine",
    "get_session_factory",
    "init_database",
]
