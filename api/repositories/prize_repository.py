"""Prize repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models import Author, Prize
from repositories.utils import log_slow_query


class PrizeRepository:
    """Repository for Prize database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @log_slow_query("prize.get_by_id")
    async def get_by_id(self, prize_id: int) -> Prize | None:
        """Get a prize by ID.

        Loads the current author together with that author's prizes, so
        reassigning or clearing the author updates both sides in memory.
        """
        result = await self.db.execute(
            select(Prize)
            .where(Prize.id == prize_id)
            .options(selectinload(Prize.author).selectinload(Author.prizes))
        )
        return result.scalar_one_or_none()
