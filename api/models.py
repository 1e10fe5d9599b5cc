"""SQLAlchemy models for the bookstore catalog."""

from datetime import UTC, date, datetime

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship

from core.database import Base


def utcnow() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamp columns."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), default=utcnow)

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


# Composite primary key keeps a book's author set free of duplicates
book_authors = Table(
    "book_authors",
    Base.metadata,
    Column(
        "book_id",
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "author_id",
        Integer,
        ForeignKey("authors.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Author(TimestampMixin, Base):
    """Author of books and winner of prizes."""

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    books: Mapped[list["Book"]] = relationship(
        secondary=book_authors,
        back_populates="authors",
        order_by="Book.id",
    )
    prizes: Mapped[list["Prize"]] = relationship(
        back_populates="author",
        order_by="Prize.id",
    )

    def __repr__(self) -> str:
        return f"<Author id={self.id} name={self.name!r}>"


class Book(TimestampMixin, Base):
    """Catalog book, written by any number of authors."""

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    isbn: Mapped[str | None] = mapped_column(String(20), nullable=True, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    publishing_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    authors: Mapped[list[Author]] = relationship(
        secondary=book_authors,
        back_populates="books",
        order_by=Author.id,
    )

    def __repr__(self) -> str:
        return f"<Book id={self.id} name={self.name!r}>"


class Prize(TimestampMixin, Base):
    """Literary prize, awarded to at most one author."""

    __tablename__ = "prizes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    premiation_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    author_id: Mapped[int | None] = mapped_column(
        ForeignKey("authors.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    author: Mapped[Author | None] = relationship(back_populates="prizes")

    def __repr__(self) -> str:
        return f"<Prize id={self.id} name={self.name!r}>"
