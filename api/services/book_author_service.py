"""Book-author association service.

Manages the many-to-many relation between books and authors. Every
operation works on records that already exist; changes are written by the
enclosing unit of work when it commits.
"""

from collections.abc import Sequence
from typing import Protocol

from core.logger import get_logger
from models import Author, Book
from repositories.interfaces import AuthorRepositoryProtocol, BookRepositoryProtocol
from services.exceptions import EntityNotFoundError, IllegalOperationError

logger = get_logger(__name__)

AUTHOR_NOT_FOUND = "The author with the given id was not found"
BOOK_NOT_FOUND = "The book with the given id was not found"
AUTHOR_NOT_ASSOCIATED = "The author is not associated to the book"


class HasId(Protocol):
    """Anything that names an author by id: a reference schema or a row."""

    id: int


class BookAuthorService:
    """Associates existing authors with existing books."""

    def __init__(
        self,
        book_repository: BookRepositoryProtocol,
        author_repository: AuthorRepositoryProtocol,
    ) -> None:
        self.book_repository = book_repository
        self.author_repository = author_repository

    async def _get_author(self, author_id: int) -> Author:
        author = await self.author_repository.get_by_id(author_id)
        if author is None:
            raise EntityNotFoundError(AUTHOR_NOT_FOUND)
        return author

    async def _get_book(self, book_id: int) -> Book:
        book = await self.book_repository.get_by_id(book_id)
        if book is None:
            raise EntityNotFoundError(BOOK_NOT_FOUND)
        return book

    async def add_author(self, book_id: int, author_id: int) -> Author:
        """Associate an author with a book and return the author.

        Adding an author that is already associated leaves the book unchanged.
        """
        logger.info("book_author.add.started", book_id=book_id, author_id=author_id)
        author = await self._get_author(author_id)
        book = await self._get_book(book_id)

        authors = await book.awaitable_attrs.authors
        if author not in authors:
            authors.append(author)

        logger.info("book_author.add.completed", book_id=book_id, author_id=author_id)
        return author

    async def get_authors(self, book_id: int) -> list[Author]:
        """Return every author associated with the book."""
        book = await self._get_book(book_id)
        return list(await book.awaitable_attrs.authors)

    async def get_author(self, book_id: int, author_id: int) -> Author:
        """Return the author if it is associated with the book.

        Raises:
            EntityNotFoundError: the book or the author does not exist.
            IllegalOperationError: both exist but are not associated.
        """
        author = await self._get_author(author_id)
        book = await self._get_book(book_id)

        if author in await book.awaitable_attrs.authors:
            return author
        raise IllegalOperationError(AUTHOR_NOT_ASSOCIATED)

    async def add_authors(self, book_id: int, authors: Sequence[HasId]) -> list[Author]:
        """Associate several authors with a book.

        Each reference is resolved by id; a single unknown id fails the whole
        call. Authors already on the book are skipped. Returns the book's full
        author collection.
        """
        logger.info(
            "book_author.add_many.started",
            book_id=book_id,
            author_ids=[reference.id for reference in authors],
        )
        book = await self._get_book(book_id)
        book_authors = await book.awaitable_attrs.authors

        for reference in authors:
            author = await self._get_author(reference.id)
            if author not in book_authors:
                book_authors.append(author)

        logger.info(
            "book_author.add_many.completed",
            book_id=book_id,
            author_count=len(book_authors),
        )
        return list(book_authors)

    async def remove_author(self, book_id: int, author_id: int) -> None:
        """Dissociate an author from a book. No-op if they were not associated."""
        logger.info(
            "book_author.remove.started", book_id=book_id, author_id=author_id
        )
        author = await self._get_author(author_id)
        book = await self._get_book(book_id)

        authors = await book.awaitable_attrs.authors
        if author in authors:
            authors.remove(author)

        logger.info(
            "book_author.remove.completed", book_id=book_id, author_id=author_id
        )
