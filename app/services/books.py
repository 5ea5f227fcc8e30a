"""
Book Service

Business logic for the /books endpoints: listing, advanced search,
suggestions and the create/update/delete lifecycle.

Every function takes the request's SQLAlchemy session as its first
argument and raises ``app.exceptions`` errors instead of HTTP exceptions,
so routers stay thin and the logic can be tested without a client.

Only active (not soft-deleted) books are ever returned.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy import func, select, union
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import DuplicateTitleError, NotFoundError
from app.models import Book
from app.schemas.search import AdvancedSearchParams
from app.services.search import (
    build_ordering,
    build_search_predicate,
    contains,
    equals,
    relevance_rank,
    resolve_search_options,
)
from app.services.validation import validate_book_id, validate_book_payload

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 10
MAX_SUGGESTION_LIMIT = 20


# =============================================================================
# Helper Functions
# =============================================================================
def _find_active_book(db: Session, book_id: int) -> Book | None:
    stmt = select(Book).where(Book.id == book_id, Book.is_active)
    return db.execute(stmt).scalar_one_or_none()


def _ensure_unique_title(db: Session, title: str, exclude_id: int | None = None) -> None:
    """
    Raise DuplicateTitleError if another active book uses ``title``.

    Titles are compared case-insensitively, matching the partial unique
    index on lower(title).
    """
    stmt = select(Book.id).where(
        func.lower(Book.title) == title.lower(),
        Book.is_active,
    )
    if exclude_id is not None:
        stmt = stmt.where(Book.id != exclude_id)

    if db.execute(stmt.limit(1)).first() is not None:
        raise DuplicateTitleError(title)


def _commit_book(db: Session, book: Book) -> Book:
    """Commit pending changes, mapping a unique-index race to DuplicateTitleError."""
    title = book.title
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Title uniqueness conflict on commit: '{title}'")
        raise DuplicateTitleError(title) from None
    db.refresh(book)
    return book


# =============================================================================
# Queries
# =============================================================================
def list_books(
    db: Session,
    search: str | None = None,
    category: str | None = None,
) -> list[Book]:
    """
    List active books with optional basic search and category filter.

    - search: title or author contains the term (case-insensitive); results
      are ordered by relevance (exact title, title prefix, title substring,
      author substring), then title
    - category: exact category match, ignoring case

    Without a search term books come back in creation (id) order.
    """
    search = (search or "").strip()
    category = (category or "").strip()

    stmt = select(Book).where(Book.is_active)

    if search:
        stmt = stmt.where(contains(Book.title, search) | contains(Book.author, search))
    if category:
        stmt = stmt.where(equals(Book.category, category))

    if search:
        stmt = stmt.order_by(relevance_rank(search), Book.title.asc(), Book.id.asc())
    else:
        stmt = stmt.order_by(Book.id.asc())

    return list(db.execute(stmt).scalars().all())


def advanced_search(db: Session, params: AdvancedSearchParams) -> list[Book]:
    """
    Search books with a matching strategy, filters, sorting and pagination.

    Pipeline:
    1. Resolve defaults, clamp limit/offset, validate enum values
    2. Search-type predicate on the query term (skipped when blank)
    3. Exact category filter (case-insensitive)
    4. Author substring filter
    5. Sort (relevance ignores sort_order)
    6. Offset/limit

    Raises:
        InvalidSearchTypeError, InvalidSortFieldError, InvalidSortOrderError
    """
    options = resolve_search_options(params)
    logger.debug(f"Advanced search: {options}")

    stmt = select(Book).where(Book.is_active)

    predicate = build_search_predicate(options.query, options.search_type)
    if predicate is not None:
        stmt = stmt.where(predicate)

    if options.category:
        stmt = stmt.where(equals(Book.category, options.category))

    if options.author:
        stmt = stmt.where(contains(Book.author, options.author))

    stmt = (
        stmt
        .order_by(*build_ordering(options.sort_by, options.sort_order, options.query))
        .offset(options.offset)
        .limit(options.limit)
    )

    return list(db.execute(stmt).scalars().all())


def get_suggestions(
    db: Session,
    query: str | None,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[str]:
    """
    Autocomplete suggestions from existing titles and authors.

    Returns the de-duplicated union of active titles containing the query
    and active authors containing the query, alphabetically, capped at
    ``limit`` (values outside 1-20 become 10). A blank query yields [].
    """
    query = (query or "").strip()
    if not query:
        return []

    if limit <= 0 or limit > MAX_SUGGESTION_LIMIT:
        limit = DEFAULT_SUGGESTION_LIMIT

    titles = select(Book.title.label("suggestion")).where(
        Book.is_active, contains(Book.title, query)
    )
    authors = select(Book.author.label("suggestion")).where(
        Book.is_active, contains(Book.author, query)
    )
    combined = union(titles, authors).subquery()

    stmt = (
        select(combined.c.suggestion)
        .order_by(combined.c.suggestion.asc())
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def get_book(db: Session, book_id: int) -> Book:
    """
    Get an active book by ID.

    Raises:
        ValidationError: If the id is not positive
        NotFoundError: If no active book has that id
    """
    validate_book_id(book_id)

    book = _find_active_book(db, book_id)
    if book is None:
        raise NotFoundError("Book", f"book with id {book_id} not found")
    return book


def count_books(db: Session) -> int:
    """Number of active books."""
    stmt = select(func.count()).select_from(Book).where(Book.is_active)
    return db.execute(stmt).scalar() or 0


# =============================================================================
# Commands
# =============================================================================
def create_book(db: Session, title: str, author: str, category: str) -> Book:
    """
    Create a new book.

    Raises:
        ValidationError: If a field is blank or too long
        DuplicateTitleError: If an active book already uses the title
    """
    title, author, category = validate_book_payload(title, author, category)
    _ensure_unique_title(db, title)

    book = Book(title=title, author=author, category=category)
    db.add(book)
    _commit_book(db, book)

    logger.info(f"Created book {book.id}: '{book.title}'")
    return book


def update_book(
    db: Session,
    book_id: int,
    title: str,
    author: str,
    category: str,
) -> Book:
    """
    Replace the title, author and category of an active book.

    Raises:
        ValidationError: If a field is blank or too long
        NotFoundError: If no active book has that id
        DuplicateTitleError: If another active book uses the title
    """
    title, author, category = validate_book_payload(title, author, category)
    book = get_book(db, book_id)
    _ensure_unique_title(db, title, exclude_id=book.id)

    book.title = title
    book.author = author
    book.category = category
    _commit_book(db, book)

    logger.info(f"Updated book {book.id}")
    return book


def delete_book(db: Session, book_id: int) -> None:
    """
    Soft-delete an active book.

    The row stays in the table with deleted_at set; the book disappears
    from every query and from favorite listings.

    Raises:
        NotFoundError: If no active book has that id
    """
    book = get_book(db, book_id)
    book.mark_deleted(datetime.now(UTC))
    db.commit()

    logger.info(f"Soft-deleted book {book_id}")


def purge_book(db: Session, book_id: int) -> None:
    """
    Permanently remove a book row, active or soft-deleted.

    Favorites referencing the book are removed by the database's
    ON DELETE CASCADE.

    Raises:
        ValidationError: If the id is not positive
        NotFoundError: If the row does not exist
    """
    validate_book_id(book_id)

    book = db.get(Book, book_id)
    if book is None:
        raise NotFoundError("Book", f"book with id {book_id} not found")

    db.delete(book)
    db.commit()

    logger.info(f"Purged book {book_id}")
