"""
Search Service

Turns search parameters into SQLAlchemy predicates and orderings for the
Book Query Service. Nothing here touches a session; every function is a
pure transform from strings to SQL expressions.

Features:
- Four matching strategies: exact, starts_with, contains, fuzzy
- Fuzzy matching through a small, fixed substitution table (no edit
  distance): "har" also tries "harr" and "harry", and so on
- Relevance ordering defined once as a rule table and compiled to a CASE
  expression, independent of the matching strategy in use

All substring comparisons are case-insensitive and escape LIKE wildcards in
the user's term, so "100%" matches the literal text.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy import ColumnElement, case, func, or_

from app.exceptions import (
    InvalidSearchParameterError,
    InvalidSearchTypeError,
    InvalidSortFieldError,
    InvalidSortOrderError,
)
from app.models import Book
from app.schemas.search import AdvancedSearchParams

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


# =============================================================================
# Search Parameter Enums
# =============================================================================
class SearchType(str, Enum):
    EXACT = "exact"
    STARTS_WITH = "starts_with"
    CONTAINS = "contains"
    FUZZY = "fuzzy"


class SortField(str, Enum):
    TITLE = "title"
    AUTHOR = "author"
    CATEGORY = "category"
    CREATED_AT = "created_at"
    RELEVANCE = "relevance"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class SearchOptions:
    """Advanced search parameters after defaults, clamping and validation."""

    query: str = ""
    category: str = ""
    author: str = ""
    search_type: SearchType = SearchType.CONTAINS
    sort_by: SortField = SortField.RELEVANCE
    sort_order: SortOrder = SortOrder.ASC
    limit: int = DEFAULT_LIMIT
    offset: int = 0


def _parse_choice(
    enum_cls: type[Enum],
    raw: str | None,
    default: Enum,
    error_cls: type[InvalidSearchParameterError],
) -> Any:
    value = (raw or "").strip()
    if not value:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        raise error_cls(value, [member.value for member in enum_cls]) from None


def resolve_search_options(params: AdvancedSearchParams) -> SearchOptions:
    """
    Apply defaults and clamping, then validate the enum parameters.

    - Blank search_type/sort_by/sort_order fall back to contains/relevance/ASC
    - limit outside [1, 100] becomes 20; a negative offset becomes 0
    - sort_order is accepted in any case ("desc" == "DESC")

    Raises:
        InvalidSearchTypeError, InvalidSortFieldError, InvalidSortOrderError
    """
    search_type = _parse_choice(
        SearchType, params.search_type, SearchType.CONTAINS, InvalidSearchTypeError
    )
    sort_by = _parse_choice(
        SortField, params.sort_by, SortField.RELEVANCE, InvalidSortFieldError
    )
    sort_order = _parse_choice(
        SortOrder, (params.sort_order or "").upper(), SortOrder.ASC, InvalidSortOrderError
    )

    limit = params.limit
    if limit <= 0 or limit > MAX_LIMIT:
        limit = DEFAULT_LIMIT

    return SearchOptions(
        query=(params.query or "").strip(),
        category=(params.category or "").strip(),
        author=(params.author or "").strip(),
        search_type=search_type,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
        offset=max(params.offset, 0),
    )


# =============================================================================
# Match Helpers
# =============================================================================
MatchFn = Callable[[Any, str], ColumnElement[bool]]


def equals(column, term: str) -> ColumnElement[bool]:
    return func.lower(column) == term.lower()


def starts_with(column, term: str) -> ColumnElement[bool]:
    return column.istartswith(term, autoescape=True)


def contains(column, term: str) -> ColumnElement[bool]:
    return column.icontains(term, autoescape=True)


# =============================================================================
# Fuzzy Pattern Generator
# =============================================================================
# Known fragments and the variants tried in their place. Deliberately small;
# adding rows widens matching without changing how patterns are built.
FUZZY_SUBSTITUTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("har", ("harr", "harry")),
    ("pot", ("pott", "potter")),
    ("lord", ("lords",)),
    ("ring", ("rings",)),
    ("game", ("gaming",)),
    ("throne", ("thrones",)),
)

# Words of this length or shorter are too noisy to match on their own
FUZZY_MIN_WORD_LENGTH = 2


def generate_fuzzy_patterns(term: str) -> list[str]:
    """
    Expand a search term into substring patterns for fuzzy matching.

    The result keeps first-seen order without duplicates:
    1. the whole term
    2. each whitespace-separated word longer than two characters
    3. the lower-cased term with each known fragment replaced by each of
       its variants, following FUZZY_SUBSTITUTIONS order

    Example:
        >>> generate_fuzzy_patterns("Lord Ring")
        ['Lord Ring', 'Lord', 'Ring', 'lords ring', 'lord rings']
    """
    term = term.strip()
    if not term:
        return []

    patterns = [term]
    patterns.extend(word for word in term.split() if len(word) > FUZZY_MIN_WORD_LENGTH)

    lowered = term.lower()
    for fragment, variants in FUZZY_SUBSTITUTIONS:
        if fragment in lowered:
            patterns.extend(lowered.replace(fragment, variant) for variant in variants)

    return list(dict.fromkeys(patterns))


# =============================================================================
# Search Strategy Selector
# =============================================================================
def build_search_predicate(term: str, search_type: SearchType) -> ColumnElement[bool] | None:
    """
    Build the WHERE clause for a search term under the given strategy.

    - exact: title or author equals the term
    - starts_with: title or author begins with the term
    - contains: title, author or category contains the term
    - fuzzy: title or author contains any generated fuzzy pattern

    Returns None for a blank term (no filtering).
    """
    term = term.strip()
    if not term:
        return None

    if search_type is SearchType.EXACT:
        return or_(equals(Book.title, term), equals(Book.author, term))

    if search_type is SearchType.STARTS_WITH:
        return or_(starts_with(Book.title, term), starts_with(Book.author, term))

    if search_type is SearchType.FUZZY:
        patterns = generate_fuzzy_patterns(term)
        logger.debug(f"Fuzzy patterns for '{term}': {patterns}")
        return or_(
            *(
                or_(contains(Book.title, pattern), contains(Book.author, pattern))
                for pattern in patterns
            )
        )

    return or_(
        contains(Book.title, term),
        contains(Book.author, term),
        contains(Book.category, term),
    )


# =============================================================================
# Relevance Ranking
# =============================================================================
# Ordered from best to worst; a book's rank is the position of the first rule
# it satisfies (1-based), or len(RELEVANCE_RULES) + 1 when none match.
RELEVANCE_RULES: tuple[tuple[str, MatchFn], ...] = (
    ("title", equals),
    ("title", starts_with),
    ("title", contains),
    ("author", contains),
)


def relevance_rank(term: str) -> ColumnElement[int]:
    """
    CASE expression ranking books against a term (lower is better).

    1 = exact title, 2 = title prefix, 3 = title substring,
    4 = author substring, 5 = anything else.
    """
    whens = [
        (match(getattr(Book, column), term), rank)
        for rank, (column, match) in enumerate(RELEVANCE_RULES, start=1)
    ]
    return case(*whens, else_=len(RELEVANCE_RULES) + 1)


SORT_COLUMNS = {
    SortField.TITLE: Book.title,
    SortField.AUTHOR: Book.author,
    SortField.CATEGORY: Book.category,
    SortField.CREATED_AT: Book.created_at,
}


def build_ordering(
    sort_by: SortField,
    sort_order: SortOrder,
    term: str = "",
) -> list[ColumnElement[Any]]:
    """
    ORDER BY clauses for a search.

    Relevance ignores sort_order: rank ascending, then title ascending. With
    no term to rank against it degrades to title ascending. Every ordering
    ends with the primary key so pagination is stable.
    """
    term = term.strip()

    if sort_by is SortField.RELEVANCE:
        if term:
            return [relevance_rank(term), Book.title.asc(), Book.id.asc()]
        return [Book.title.asc(), Book.id.asc()]

    column = SORT_COLUMNS[sort_by]
    if sort_order is SortOrder.DESC:
        return [column.desc(), Book.id.desc()]
    return [column.asc(), Book.id.asc()]
