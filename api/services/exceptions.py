"""Errors raised by the association services."""


class BookstoreServiceError(Exception):
    """Base class for service-layer errors."""


class EntityNotFoundError(BookstoreServiceError):
    """Raised when a referenced book, author or prize does not resolve."""


class IllegalOperationError(BookstoreServiceError):
    """Raised when an operation breaks a business rule on existing records."""
