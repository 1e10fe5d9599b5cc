"""Database engine, session, and schema management.

Connection modes:
- PostgreSQL via asyncpg (pooled)
- SQLite via aiosqlite (local runs and tests)
"""

from __future__ import annotations

import asyncio
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool, StaticPool

from core.config import Settings, get_settings
from core.logger import get_logger

logger = get_logger(__name__)


class Base(AsyncAttrs, DeclarativeBase):
    pass


def _is_memory_sqlite(database_url: str) -> bool:
    return database_url in ("sqlite+aiosqlite://", "sqlite+aiosqlite:///:memory:")


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    # SQLite does not enforce foreign keys unless explicitly enabled.
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine(settings: Settings | None = None) -> AsyncEngine:
    settings = settings or get_settings()
    database_url = settings.database_url

    engine_kwargs: dict = {"echo": settings.db_echo}

    if settings.is_sqlite:
        if _is_memory_sqlite(database_url):
            # One shared connection, otherwise every checkout sees an empty DB
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs["poolclass"] = NullPool
    else:
        engine_kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_pool_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
        )

    engine = create_async_engine(database_url, **engine_kwargs)

    if settings.is_sqlite:
        _enable_sqlite_foreign_keys(engine)

    return engine


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create any missing tables for the registered models.

    create_all() only creates missing tables - it won't modify existing ones.
    """
    # Import models to ensure they're registered with Base.metadata
    import models  # noqa: F401

    logger.info("db.schema.creating", tables=sorted(Base.metadata.tables))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("db.schema.created")


async def check_db_connection(engine: AsyncEngine) -> None:
    """Verify database is reachable (30s timeout)."""
    async with asyncio.timeout(30):
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.rollback()


async def dispose_engine(engine: AsyncEngine) -> None:
    await engine.dispose()
    logger.info("db.engine.disposed")
