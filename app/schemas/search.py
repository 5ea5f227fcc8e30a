"""
Advanced Search Schemas

Raw advanced-search parameters as received from the query string.

The values are kept as plain strings and integers on purpose: unknown enum
values must reach the search service so it can reject them with a specific
error (InvalidSearchType, InvalidSortField, InvalidSortOrder), and
out-of-range limit/offset values are clamped by the service instead of being
rejected.
"""

from pydantic import BaseModel, Field


class AdvancedSearchParams(BaseModel):
    """
    Parameters for GET /books/search.

    Blank strings mean "use the default":
    - search_type: contains
    - sort_by: relevance
    - sort_order: ASC
    """

    query: str = Field(default="", description="Search term")
    category: str = Field(default="", description="Exact category filter (case-insensitive)")
    author: str = Field(default="", description="Author substring filter")
    search_type: str = Field(
        default="",
        description="exact, starts_with, contains or fuzzy",
    )
    sort_by: str = Field(
        default="",
        description="title, author, category, created_at or relevance",
    )
    sort_order: str = Field(default="", description="ASC or DESC")
    limit: int = Field(default=20, description="Page size, 1-100 (otherwise 20)")
    offset: int = Field(default=0, description="Rows to skip (negative means 0)")
