"""Tests for core.unit_of_work.UnitOfWork.

Each test opens separate units of work against the same in-memory engine, so
what one block committed (or rolled back) is observed from a fresh session.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.unit_of_work import UnitOfWork
from schemas import AuthorReference
from services.exceptions import EntityNotFoundError
from tests.factories import AuthorFactory, BookFactory, PrizeFactory, create_async

pytestmark = pytest.mark.integration


async def _seed(session_maker: async_sessionmaker[AsyncSession]) -> dict[str, int]:
    async with session_maker() as session:
        book = await create_async(BookFactory, session)
        author = await create_async(AuthorFactory, session)
        prize = await create_async(PrizeFactory, session)
        ids = {"book": book.id, "author": author.id, "prize": prize.id}
        await session.commit()
    return ids


class TestCommit:
    async def test_changes_are_committed_on_exit(self, session_maker):
        ids = await _seed(session_maker)

        async with UnitOfWork(session_maker) as uow:
            await uow.book_authors.add_author(ids["book"], ids["author"])
            await uow.prize_authors.add_author(ids["author"], ids["prize"])

        async with UnitOfWork(session_maker) as uow:
            authors = await uow.book_authors.get_authors(ids["book"])
            prize_author = await uow.prize_authors.get_author(ids["prize"])

        assert [a.id for a in authors] == [ids["author"]]
        assert prize_author.id == ids["author"]

    async def test_explicit_commit_is_not_repeated(self, session_maker):
        ids = await _seed(session_maker)

        async with UnitOfWork(session_maker) as uow:
            await uow.book_authors.add_author(ids["book"], ids["author"])
            await uow.commit()

        async with UnitOfWork(session_maker) as uow:
            assert len(await uow.book_authors.get_authors(ids["book"])) == 1


class TestRollback:
    async def test_error_discards_every_change(self, session_maker):
        ids = await _seed(session_maker)

        with pytest.raises(EntityNotFoundError):
            async with UnitOfWork(session_maker) as uow:
                await uow.book_authors.add_authors(
                    ids["book"],
                    [AuthorReference(id=ids["author"]), AuthorReference(id=404)],
                )

        async with UnitOfWork(session_maker) as uow:
            assert await uow.book_authors.get_authors(ids["book"]) == []

    async def test_explicit_rollback_skips_commit(self, session_maker):
        ids = await _seed(session_maker)

        async with UnitOfWork(session_maker) as uow:
            await uow.prize_authors.add_author(ids["author"], ids["prize"])
            await uow.rollback()

        async with UnitOfWork(session_maker) as uow:
            with pytest.raises(EntityNotFoundError, match="The author was not found"):
                await uow.prize_authors.get_author(ids["prize"])

    async def test_failed_rollback_keeps_original_error(self, session_maker):
        with pytest.raises(ValueError, match="boom"):
            async with UnitOfWork(session_maker) as uow:
                uow.rollback = AsyncMock(side_effect=RuntimeError("db gone"))
                raise ValueError("boom")

    async def test_commit_failure_rolls_back_and_reraises(self, session_maker):
        ids = await _seed(session_maker)
        commit_error = RuntimeError("commit failed")

        with pytest.raises(RuntimeError) as exc_info:
            async with UnitOfWork(session_maker) as uow:
                await uow.book_authors.add_author(ids["book"], ids["author"])
                session = uow.session
                session.commit = AsyncMock(side_effect=commit_error)
                session.rollback = AsyncMock()

        assert exc_info.value is commit_error
        session.rollback.assert_awaited_once()


class TestSessionLifecycle:
    async def test_session_unavailable_outside_block(self, session_maker):
        uow = UnitOfWork(session_maker)

        with pytest.raises(RuntimeError, match="outside"):
            _ = uow.session

        async with uow:
            assert uow.session is not None

        with pytest.raises(RuntimeError, match="outside"):
            _ = uow.session

    async def test_services_share_the_session(self, session_maker):
        async with UnitOfWork(session_maker) as uow:
            assert uow.book_authors.book_repository is uow.books
            assert uow.book_authors.author_repository is uow.authors
            assert uow.prize_authors.prize_repository is uow.prizes
            assert uow.books.db is uow.session
            assert uow.prizes.db is uow.session
