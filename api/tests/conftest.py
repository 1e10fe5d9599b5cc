"""Pytest configuration and shared fixtures.

This module provides:
- A fresh in-memory SQLite database per test (sqlite+aiosqlite, StaticPool)
- Async session fixtures for repository/service tests
- A session maker for UnitOfWork tests
"""

# Set environment variables BEFORE any imports that trigger Settings validation
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from core.config import Settings, clear_settings_cache
from core.database import Base, create_engine, create_session_maker

import models  # noqa: F401  (registers tables on Base.metadata)

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(autouse=True)
def _reset_settings():
    """Settings are lru_cached; give every test a fresh view of the env."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return Settings(database_url=TEST_DATABASE_URL, debug=True)


@pytest_asyncio.fixture(scope="function")
async def test_engine(test_settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create a fresh in-memory database engine for each test."""
    engine = create_engine(test_settings)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_maker(test_engine)


@pytest_asyncio.fixture(scope="function")
async def db_session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Provide a database session for each test, rolled back afterwards."""
    async with session_maker() as session:
        yield session
        await session.rollback()
