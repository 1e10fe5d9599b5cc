"""Book repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models import Book
from repositories.utils import log_slow_query


class BookRepository:
    """Repository for Book database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @log_slow_query("book.get_by_id")
    async def get_by_id(self, book_id: int) -> Book | None:
        """Get a book by ID with its authors loaded."""
        result = await self.db.execute(
            select(Book).where(Book.id == book_id).options(selectinload(Book.authors))
        )
        return result.scalar_one_or_none()
