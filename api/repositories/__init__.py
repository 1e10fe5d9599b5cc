"""Repository layer for database operations.

Repositories encapsulate all database queries, keeping services focused
on association rules. This separation provides:
- Single source of truth for database operations
- Easier testing (repositories can be mocked)
- Reusable lookups across services
"""

from repositories.author_repository import AuthorRepository
from repositories.book_repository import BookRepository
from repositories.interfaces import (
    AuthorRepositoryProtocol,
    BookRepositoryProtocol,
    PrizeRepositoryProtocol,
)
from repositories.prize_repository import PrizeRepository
from repositories.utils import log_slow_query

__all__ = [
    "AuthorRepository",
    "AuthorRepositoryProtocol",
    "BookRepository",
    "BookRepositoryProtocol",
    "PrizeRepository",
    "PrizeRepositoryProtocol",
    "log_slow_query",
]
