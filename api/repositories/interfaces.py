"""Record-store contracts the association services depend on.

Services receive these at construction, so any object with a matching
``get_by_id`` works: the SQLAlchemy repositories in production, AsyncMock
doubles in unit tests.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from models import Author, Book, Prize


class AuthorRepositoryProtocol(Protocol):
    """Lookup of persisted authors."""

    async def get_by_id(self, author_id: int) -> "Author | None": ...


class BookRepositoryProtocol(Protocol):
    """Lookup of persisted books."""

    async def get_by_id(self, book_id: int) -> "Book | None": ...


class PrizeRepositoryProtocol(Protocol):
    """Lookup of persisted prizes."""

    async def get_by_id(self, prize_id: int) -> "Prize | None": ...
