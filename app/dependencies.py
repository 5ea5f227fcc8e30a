"""
FastAPI Dependencies Module

Reusable pieces injected into route handlers with Depends():
- DbSession: request-scoped SQLAlchemy session
- CurrentUserId: the caller, from the identity header
- BookFilters, SearchParams: query-string parameter groups
"""

from typing import Annotated

from fastapi import Depends, Header, Query
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.exceptions import ValidationError
from app.schemas.search import AdvancedSearchParams
from app.services.validation import MAX_ID

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def get_books(db: Session = Depends(get_db)):
#
# You can write:
#   def get_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Caller Identity
# =============================================================================
def get_current_user_id(
    x_user_id: str | None = Header(
        default=None,
        alias=settings.user_id_header,
        description="Caller's user id (defaults to the configured user)",
    ),
) -> int:
    """
    Resolve the caller's user id.

    There is no authentication layer: the id comes from the identity header
    when present, otherwise from ``settings.default_user_id``. An auth
    middleware can replace this dependency without touching the services,
    which always receive the id explicitly.

    Raises:
        ValidationError: If the header is not an integer in 1..MAX_ID
    """
    if x_user_id is None or not x_user_id.strip():
        return settings.default_user_id

    try:
        user_id = int(x_user_id)
    except ValueError:
        raise ValidationError("user_id", "User ID must be a positive integer") from None

    if user_id <= 0 or user_id > MAX_ID:
        raise ValidationError("user_id", "User ID must be a positive integer")
    return user_id


CurrentUserId = Annotated[int, Depends(get_current_user_id)]


# =============================================================================
# Book Listing Filters
# =============================================================================
class BookListParams:
    """
    Query parameters for GET /books.

    Usage:
        GET /books?search=orwell
        GET /books?category=Satire
    """

    def __init__(
        self,
        search: str | None = Query(
            default=None,
            description="Title or author contains this term (case-insensitive)",
            examples=["orwell", "harry"],
        ),
        category: str | None = Query(
            default=None,
            description="Exact category match (case-insensitive)",
            examples=["Fantasy", "Satire"],
        ),
    ) -> None:
        self.search = search
        self.category = category


BookFilters = Annotated[BookListParams, Depends()]


# =============================================================================
# Advanced Search Parameters
# =============================================================================
def get_advanced_search_params(
    query: str = Query(
        default="",
        description="Search term matched against title, author and category",
        examples=["harry potter"],
    ),
    category: str = Query(default="", description="Exact category filter (case-insensitive)"),
    author: str = Query(default="", description="Author substring filter"),
    search_type: str = Query(
        default="contains",
        description="Matching strategy: exact, starts_with, contains, fuzzy",
    ),
    sort_by: str = Query(
        default="relevance",
        description="Sort field: title, author, category, created_at, relevance",
    ),
    sort_order: str = Query(default="ASC", description="ASC or DESC"),
    limit: int = Query(
        default=20,
        description="Maximum results (1-100; other values fall back to 20)",
    ),
    offset: int = Query(
        default=0,
        description="Results to skip (negative values count as 0)",
    ),
) -> AdvancedSearchParams:
    """
    Collect advanced search query parameters.

    Values are passed through unvalidated; the search service applies
    defaults, clamps limit/offset and rejects unknown enum values.
    """
    return AdvancedSearchParams(
        query=query,
        category=category,
        author=author,
        search_type=search_type,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
        offset=offset,
    )


SearchParams = Annotated[AdvancedSearchParams, Depends(get_advanced_search_params)]
