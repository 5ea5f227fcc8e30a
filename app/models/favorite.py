"""
Favorite Model

Links a user to a book they marked as a favorite.

Business Rules:
- One favorite per user per book (unique constraint)
- The book is referenced, not owned: deleting a favorite never touches the
  book, and hard-deleting a book cascades to its favorites in the database
- Users can only see and delete their own favorites
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.book import Book


class Favorite(Base):
    """
    Favorite model for a user's saved books.

    Attributes:
        id: Primary key
        user_id: Owning user (no users table; identity comes from the caller)
        book_id: Foreign key to books table
        created_at: When the book was favorited
    """

    __tablename__ = "favorites"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Owning user id",
    )
    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("books.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    book: Mapped[Book] = relationship("Book", back_populates="favorites")

    # Constraints
    __table_args__ = (
        # One favorite per user per book
        UniqueConstraint("user_id", "book_id", name="uq_favorite_user_book"),
    )

    def __repr__(self) -> str:
        return f"<Favorite(id={self.id}, user_id={self.user_id}, book_id={self.book_id})>"
