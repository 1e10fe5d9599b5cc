"""Service layer for association rules.

Layer hierarchy:
    UnitOfWork (transaction) -> Services (association rules) -> Repositories (Database)

Services should:
- Validate that every referenced record exists before mutating anything
- Mutate relationship attributes only; the unit of work commits them
- Raise errors from services.exceptions for the caller to handle

Services should NOT:
- Directly execute SQL queries (use repositories)
- Commit or roll back (the unit of work owns the transaction)
- Create or delete authors, books or prizes
"""

from services.book_author_service import BookAuthorService
from services.exceptions import (
    BookstoreServiceError,
    EntityNotFoundError,
    IllegalOperationError,
)
from services.prize_author_service import PrizeAuthorService

__all__ = [
    "BookAuthorService",
    "BookstoreServiceError",
    "EntityNotFoundError",
    "IllegalOperationError",
    "PrizeAuthorService",
]
