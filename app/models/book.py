"""
Book Model

The central model of the Book Catalog API.

Soft Delete
===========
Books are never removed by the public API. Deleting a book stamps
``deleted_at``; every query of the catalog then treats the row as absent.
Rather than letting callers test the nullable column directly, the model
exposes the lifecycle as a tagged state:

    book.lifecycle  ->  Active()  or  Deleted(at=datetime)

and a hybrid ``is_active`` property that works both on instances and inside
``select()`` statements:

    select(Book).where(Book.is_active)

A separate hard-delete path (``app.services.books.purge_book``) physically
removes the row; the database then cascades the delete to favorites.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Index, String, func
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.favorite import Favorite

# Maximum length of the title, author and category columns
TEXT_FIELD_MAX_LENGTH = 255


# =============================================================================
# Lifecycle States
# =============================================================================
@dataclass(frozen=True)
class Active:
    """The book is visible to every catalog query."""


@dataclass(frozen=True)
class Deleted:
    """The book was soft-deleted at ``at``."""

    at: datetime


BookLifecycle = Active | Deleted


class Book(Base):
    """
    Book model representing catalog entries.

    Table: books

    Fields:
    - title: Book title (required, unique among active books)
    - author: Author name (required)
    - category: Free-text category such as "Fantasy" (required)
    - deleted_at: Soft-deletion timestamp, NULL while the book is active

    Relationships:
    - favorites: One-to-many (users who favorited this book)

    Indexes:
    - title, author, category: Lookup and sort columns
    - uq_books_active_title: lower(title) unique where deleted_at IS NULL

    Example:
        book = Book(
            title="1984",
            author="George Orwell",
            category="Dystopian",
        )
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(TEXT_FIELD_MAX_LENGTH),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(TEXT_FIELD_MAX_LENGTH),
        index=True,
        nullable=False,
        comment="Author name"
    )

    category: Mapped[str] = mapped_column(
        String(TEXT_FIELD_MAX_LENGTH),
        index=True,
        nullable=False,
        comment="Book category"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        index=True,
        nullable=True,
        comment="Soft-deletion timestamp"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    # passive_deletes lets the database's ON DELETE CASCADE remove favorites
    # instead of SQLAlchemy loading and deleting them one by one.
    favorites: Mapped[list["Favorite"]] = relationship(
        "Favorite",
        back_populates="book",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    @hybrid_property
    def is_active(self) -> bool:
        return self.deleted_at is None

    @is_active.inplace.expression
    @classmethod
    def _is_active_expression(cls):
        return cls.deleted_at.is_(None)

    @property
    def lifecycle(self) -> BookLifecycle:
        """Current lifecycle state of the book."""
        if self.deleted_at is None:
            return Active()
        return Deleted(at=self.deleted_at)

    def mark_deleted(self, at: datetime | None = None) -> Deleted:
        """Soft-delete the book and return the new state."""
        self.deleted_at = at or datetime.now(UTC)
        return Deleted(at=self.deleted_at)

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', author='{self.author}')"


# Title uniqueness only applies to active books and ignores case.
Index(
    "uq_books_active_title",
    func.lower(Book.title),
    unique=True,
    postgresql_where=Book.deleted_at.is_(None),
    sqlite_where=Book.deleted_at.is_(None),
)
