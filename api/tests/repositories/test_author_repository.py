"""Tests for AuthorRepository.

Tests lookups against an in-memory SQLite database.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from repositories.author_repository import AuthorRepository
from tests.factories import AuthorFactory, PrizeFactory, create_async

pytestmark = pytest.mark.integration


class TestAuthorRepositoryGetById:
    """Tests for AuthorRepository.get_by_id()."""

    async def test_returns_author_when_exists(self, db_session: AsyncSession):
        author = await create_async(AuthorFactory, db_session, name="Clarice Lispector")
        repo = AuthorRepository(db_session)

        result = await repo.get_by_id(author.id)

        assert result is not None
        assert result.id == author.id
        assert result.name == "Clarice Lispector"

    async def test_returns_none_when_not_exists(self, db_session: AsyncSession):
        repo = AuthorRepository(db_session)

        assert await repo.get_by_id(123_456) is None

    async def test_loads_prizes_in_id_order(self, db_session: AsyncSession):
        author = await create_async(AuthorFactory, db_session)
        first = await create_async(PrizeFactory, db_session, author_id=author.id)
        second = await create_async(PrizeFactory, db_session, author_id=author.id)
        repo = AuthorRepository(db_session)

        result = await repo.get_by_id(author.id)

        assert [p.id for p in await result.awaitable_attrs.prizes] == [
            first.id,
            second.id,
        ]
