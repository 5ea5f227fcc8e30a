"""
Favorites Service

Links users to the books they favorite.

Identity is always an explicit ``user_id`` argument; the router resolves it
from the request. Every read and delete is scoped to that user, so one user
can never see or remove another user's favorites.

The book behind a favorite is a weak reference: it is re-checked on every
read, and favorites whose book is missing or soft-deleted are treated as
absent.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.exceptions import AlreadyFavoritedError, NotFoundError
from app.models import Book, Favorite
from app.services.validation import validate_book_id, validate_favorite_id

logger = logging.getLogger(__name__)


def _book_is_active(book: Book | None) -> bool:
    return book is not None and book.is_active


def _is_favorited(db: Session, user_id: int, book_id: int) -> bool:
    stmt = select(Favorite.id).where(
        Favorite.user_id == user_id,
        Favorite.book_id == book_id,
    )
    return db.execute(stmt).first() is not None


def add_favorite(db: Session, user_id: int, book_id: int) -> Favorite:
    """
    Add a book to a user's favorites.

    Returns the new favorite with its ``book`` relationship loaded.

    Raises:
        ValidationError: If book_id is not a valid id
        NotFoundError: If the book does not exist or was deleted
        AlreadyFavoritedError: If the user already favorited the book
    """
    validate_book_id(book_id, field="book_id")

    book = db.execute(
        select(Book).where(Book.id == book_id, Book.is_active)
    ).scalar_one_or_none()
    if book is None:
        raise NotFoundError("Book", "The specified book does not exist")

    if _is_favorited(db, user_id, book_id):
        raise AlreadyFavoritedError(user_id, book_id)

    favorite = Favorite(user_id=user_id, book_id=book_id)
    db.add(favorite)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(
            f"Favorite uniqueness conflict on commit: user={user_id} book={book_id}"
        )
        raise AlreadyFavoritedError(user_id, book_id) from None

    db.refresh(favorite)
    logger.info(f"User {user_id} favorited book {book_id} (favorite {favorite.id})")
    return favorite


def list_favorites(db: Session, user_id: int) -> list[Favorite]:
    """
    All favorites of a user, oldest first, each with its book loaded.

    Favorites whose book is gone or soft-deleted are skipped silently.
    """
    stmt = (
        select(Favorite)
        .options(joinedload(Favorite.book))
        .where(Favorite.user_id == user_id)
        .order_by(Favorite.id.asc())
    )
    favorites = db.execute(stmt).scalars().all()

    return [favorite for favorite in favorites if _book_is_active(favorite.book)]


def get_favorite(db: Session, user_id: int, favorite_id: int) -> Favorite:
    """
    A single favorite owned by ``user_id``.

    Raises:
        ValidationError: If the id is out of range
        NotFoundError: If the favorite does not exist, belongs to another
            user, or its book was deleted
    """
    validate_favorite_id(favorite_id)

    stmt = (
        select(Favorite)
        .options(joinedload(Favorite.book))
        .where(Favorite.id == favorite_id, Favorite.user_id == user_id)
    )
    favorite = db.execute(stmt).scalar_one_or_none()

    if favorite is None:
        raise NotFoundError("Favorite", f"favorite with id {favorite_id} not found")
    if not _book_is_active(favorite.book):
        raise NotFoundError("Favorite", f"book for favorite {favorite_id} not found")

    return favorite


def remove_favorite(db: Session, user_id: int, favorite_id: int) -> None:
    """
    Delete one of the user's favorites.

    Raises:
        ValidationError: If the id is out of range
        NotFoundError: If no favorite with that id belongs to the user
    """
    validate_favorite_id(favorite_id)

    result = db.execute(
        delete(Favorite).where(
            Favorite.id == favorite_id,
            Favorite.user_id == user_id,
        )
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError("Favorite", f"favorite with id {favorite_id} not found")

    db.commit()
    logger.info(f"User {user_id} removed favorite {favorite_id}")
