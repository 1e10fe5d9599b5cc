"""Unit of Work: one transaction per association operation.

Usage:
    async with UnitOfWork(session_maker) as uow:
        await uow.book_authors.add_author(book_id=1, author_id=10)
    # committed here; any exception inside the block rolls back and propagates

Repositories and services created by a unit of work share its session, so
everything done inside the block is committed or discarded together.
"""

from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.logger import get_logger
from repositories import AuthorRepository, BookRepository, PrizeRepository
from repositories.interfaces import (
    AuthorRepositoryProtocol,
    BookRepositoryProtocol,
    PrizeRepositoryProtocol,
)
from services import BookAuthorService, PrizeAuthorService

logger = get_logger(__name__)


class UnitOfWork:
    """Async context manager owning a session and the objects bound to it.

    Commits on successful exit unless commit() or rollback() was already
    called, rolls back when the block raises. The session is always closed.
    """

    authors: AuthorRepositoryProtocol
    books: BookRepositoryProtocol
    prizes: PrizeRepositoryProtocol
    book_authors: BookAuthorService
    prize_authors: PrizeAuthorService

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker
        self._session: AsyncSession | None = None
        self._finished = False

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork used outside of 'async with'")
        return self._session

    async def __aenter__(self) -> Self:
        self._session = self._session_maker()
        self._finished = False

        self.authors = AuthorRepository(self._session)
        self.books = BookRepository(self._session)
        self.prizes = PrizeRepository(self._session)
        self.book_authors = BookAuthorService(self.books, self.authors)
        self.prize_authors = PrizeAuthorService(self.prizes, self.authors)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is not None:
                await self._rollback_quietly()
            elif not self._finished:
                try:
                    await self.commit()
                except Exception:
                    await self._rollback_quietly()
                    raise
        finally:
            await self.session.close()
            self._session = None

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self.session.commit()
        self._finished = True

    async def rollback(self) -> None:
        """Discard the current transaction."""
        await self.session.rollback()
        self._finished = True

    async def _rollback_quietly(self) -> None:
        # The original error matters more than a failed rollback
        try:
            await self.rollback()
        except Exception as rollback_err:
            logger.warning("db.rollback.failed", error=str(rollback_err))
