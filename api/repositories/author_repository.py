"""Author repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models import Author
from repositories.utils import log_slow_query


class AuthorRepository:
    """Repository for Author database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @log_slow_query("author.get_by_id")
    async def get_by_id(self, author_id: int) -> Author | None:
        """Get an author by ID, with prizes and books loaded."""
        result = await self.db.execute(
            select(Author)
            .where(Author.id == author_id)
            .options(selectinload(Author.prizes), selectinload(Author.books))
        )
        return result.scalar_one_or_none()
