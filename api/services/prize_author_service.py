"""Prize-author association service.

A prize is awarded to at most one author. The prize holds the reference
(``Prize.author``); the author's ``prizes`` collection is its mirror and is
kept in step on every change.
"""

from core.logger import get_logger
from models import Author, Prize
from repositories.interfaces import AuthorRepositoryProtocol, PrizeRepositoryProtocol
from services.exceptions import EntityNotFoundError

logger = get_logger(__name__)

AUTHOR_NOT_FOUND = "The author with the given id was not found"
PRIZE_NOT_FOUND = "The prize with the given id was not found"
PRIZE_AUTHOR_NOT_FOUND = "The author was not found"
PRIZE_HAS_NO_AUTHOR = "The prize has no author"


class PrizeAuthorService:
    """Assigns, replaces and clears the author of a prize."""

    def __init__(
        self,
        prize_repository: PrizeRepositoryProtocol,
        author_repository: AuthorRepositoryProtocol,
    ) -> None:
        self.prize_repository = prize_repository
        self.author_repository = author_repository

    async def _get_author(self, author_id: int) -> Author:
        author = await self.author_repository.get_by_id(author_id)
        if author is None:
            raise EntityNotFoundError(AUTHOR_NOT_FOUND)
        return author

    async def _get_prize(self, prize_id: int) -> Prize:
        prize = await self.prize_repository.get_by_id(prize_id)
        if prize is None:
            raise EntityNotFoundError(PRIZE_NOT_FOUND)
        return prize

    async def _assign(self, prize_id: int, author_id: int) -> Author:
        author = await self._get_author(author_id)
        prize = await self._get_prize(prize_id)

        # Load the previous author so the relationship backref drops the
        # prize from its collection instead of leaving a stale entry.
        previous = await prize.awaitable_attrs.author
        if previous is not None:
            await previous.awaitable_attrs.prizes
        await author.awaitable_attrs.prizes

        prize.author = author
        logger.info(
            "prize_author.assigned",
            prize_id=prize_id,
            author_id=author_id,
            previous_author_id=previous.id if previous is not None else None,
        )
        return author

    async def add_author(self, author_id: int, prize_id: int) -> Author:
        """Award the prize to the author and return the author."""
        logger.info("prize_author.add.started", prize_id=prize_id, author_id=author_id)
        return await self._assign(prize_id, author_id)

    async def get_author(self, prize_id: int) -> Author:
        """Return the prize's author.

        Raises:
            EntityNotFoundError: the prize does not exist or has no author.
        """
        prize = await self._get_prize(prize_id)
        author = await prize.awaitable_attrs.author
        if author is None:
            raise EntityNotFoundError(PRIZE_AUTHOR_NOT_FOUND)
        return author

    async def replace_author(self, prize_id: int, author_id: int) -> Author:
        """Give the prize to a different author and return the new author."""
        logger.info(
            "prize_author.replace.started", prize_id=prize_id, author_id=author_id
        )
        return await self._assign(prize_id, author_id)

    async def remove_author(self, prize_id: int) -> None:
        """Clear the prize's author and drop the prize from that author's prizes.

        Raises:
            EntityNotFoundError: the prize does not exist or has no author.
        """
        logger.info("prize_author.remove.started", prize_id=prize_id)
        prize = await self._get_prize(prize_id)
        current = await prize.awaitable_attrs.author
        if current is None:
            raise EntityNotFoundError(PRIZE_HAS_NO_AUTHOR)

        author = await self._get_author(current.id)
        prizes = await author.awaitable_attrs.prizes

        prize.author = None
        if prize in prizes:
            prizes.remove(prize)

        logger.info(
            "prize_author.remove.completed", prize_id=prize_id, author_id=author.id
        )
