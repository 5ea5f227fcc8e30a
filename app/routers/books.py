"""
Books Router

CRUD, listing, advanced search and suggestions for books.

Routes stay thin: they collect parameters, call ``app.services.books`` and
wrap the result in the response envelope. Domain errors raised by the
service are turned into error envelopes by the handlers in ``app.main``.

Route order matters: /books/search and /books/suggestions are declared
before /books/{book_id} so they are not captured by the path parameter.
"""

from fastapi import APIRouter, Query, Request, status

from app.config import get_settings
from app.dependencies import BookFilters, DbSession, SearchParams
from app.exceptions import ValidationError
from app.schemas import APIResponse, BookRequest, BookResponse
from app.services import books as book_service
from app.services.rate_limiter import limiter
from app.utils.responses import success

settings = get_settings()

# =============================================================================
# Router Configuration
# =============================================================================
router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        400: {"model": APIResponse, "description": "Invalid request"},
        404: {"model": APIResponse, "description": "Book not found"},
    },
)


# =============================================================================
# Listing and Search
# =============================================================================
@router.get(
    "",
    response_model=APIResponse[list[BookResponse]],
    response_model_exclude_none=True,
    summary="List books with basic search",
    description=(
        "List active books. `search` matches title or author (substring, "
        "case-insensitive) and orders results by relevance; `category` "
        "filters by exact category (case-insensitive)."
    ),
)
@limiter.limit(settings.rate_limit_search)
def list_books(
    request: Request,
    db: DbSession,
    filters: BookFilters,
) -> APIResponse:
    """
    List books.

    Examples:
        GET /books?search=harry&category=Fantasy
        GET /books?category=Satire
    """
    books = book_service.list_books(db, search=filters.search, category=filters.category)
    return success(
        "Books retrieved successfully",
        [BookResponse.model_validate(book) for book in books],
    )


@router.get(
    "/search",
    response_model=APIResponse[list[BookResponse]],
    response_model_exclude_none=True,
    summary="Advanced book search with relevance ordering",
    description="""
Search books with a matching strategy, filters, sorting and pagination.

**Matching strategies (`search_type`):**
- `exact`: title or author equals the query
- `starts_with`: title or author begins with the query
- `contains` (default): title, author or category contains the query
- `fuzzy`: also tries individual words and known spelling variants

**Sorting (`sort_by`):** `title`, `author`, `category`, `created_at`, or
`relevance` (default: exact title > title prefix > title substring >
author substring, then title; ignores `sort_order`).

**Pagination:** `limit` 1-100 (otherwise 20), `offset` >= 0.
""",
)
@limiter.limit(settings.rate_limit_search)
def advanced_search(
    request: Request,
    db: DbSession,
    params: SearchParams,
) -> APIResponse:
    """
    Advanced search.

    Examples:
        GET /books/search?query=harry%20potter&search_type=contains&limit=10
        GET /books/search?query=Dune&search_type=exact
        GET /books/search?author=tolkien&sort_by=created_at&sort_order=DESC
    """
    books = book_service.advanced_search(db, params)
    return success(
        "Search completed successfully",
        [BookResponse.model_validate(book) for book in books],
    )


@router.get(
    "/suggestions",
    response_model=APIResponse[list[str]],
    response_model_exclude_none=True,
    summary="Search suggestions for autocomplete",
    description="Titles and authors containing the query, de-duplicated.",
)
@limiter.limit(settings.rate_limit_search)
def get_suggestions(
    request: Request,
    db: DbSession,
    query: str = Query(
        default="",
        description="Search query (required, at least one non-blank character)",
        examples=["harry"],
    ),
    limit: int = Query(
        default=book_service.DEFAULT_SUGGESTION_LIMIT,
        description="Maximum suggestions (1-20; other values fall back to 10)",
    ),
) -> APIResponse:
    """Autocomplete suggestions."""
    if not query.strip():
        raise ValidationError("query", "Query parameter is required")

    suggestions = book_service.get_suggestions(db, query, limit)
    return success("Suggestions retrieved successfully", suggestions)


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.get(
    "/{book_id}",
    response_model=APIResponse[BookResponse],
    response_model_exclude_none=True,
    summary="Get a book by ID",
)
@limiter.limit(settings.rate_limit_default)
def get_book(
    request: Request,
    book_id: int,
    db: DbSession,
) -> APIResponse:
    """Get a single active book."""
    book = book_service.get_book(db, book_id)
    return success("Book retrieved successfully", BookResponse.model_validate(book))


@router.post(
    "",
    response_model=APIResponse[BookResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description=(
        "Title, author and category are required (1-255 characters after "
        "trimming). Titles must be unique among active books."
    ),
    responses={409: {"model": APIResponse, "description": "Duplicate title"}},
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    book_data: BookRequest,
    db: DbSession,
) -> APIResponse:
    """Create a book."""
    book = book_service.create_book(
        db,
        title=book_data.title,
        author=book_data.author,
        category=book_data.category,
    )
    return success("Book created successfully", BookResponse.model_validate(book))


@router.put(
    "/{book_id}",
    response_model=APIResponse[BookResponse],
    response_model_exclude_none=True,
    summary="Update a book",
    description="Replace title, author and category of an existing book.",
    responses={409: {"model": APIResponse, "description": "Duplicate title"}},
)
@limiter.limit(settings.rate_limit_write)
def update_book(
    request: Request,
    book_id: int,
    book_data: BookRequest,
    db: DbSession,
) -> APIResponse:
    """Update a book (full replace)."""
    book = book_service.update_book(
        db,
        book_id,
        title=book_data.title,
        author=book_data.author,
        category=book_data.category,
    )
    return success("Book updated successfully", BookResponse.model_validate(book))


@router.delete(
    "/{book_id}",
    response_model=APIResponse[None],
    response_model_exclude_none=True,
    summary="Delete a book",
    description=(
        "Soft-delete a book. It disappears from listings, search and "
        "favorites but stays in the database."
    ),
)
@limiter.limit(settings.rate_limit_write)
def delete_book(
    request: Request,
    book_id: int,
    db: DbSession,
) -> APIResponse:
    """Soft-delete a book."""
    book_service.delete_book(db, book_id)
    return success("Book deleted successfully")
