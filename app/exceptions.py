"""
Domain Exceptions

Errors raised by the service layer. Each one knows the HTTP status it maps
to, the human-readable envelope ``message`` and the envelope ``error`` detail.
The exception handlers registered in ``app.main`` turn them into responses,
so services never build HTTP objects themselves.

Taxonomy:
- ValidationError: malformed or missing input (400)
- NotFoundError: referenced entity absent (404)
- DuplicateTitleError / AlreadyFavoritedError: uniqueness violation (409)
- InvalidSearchTypeError / InvalidSortFieldError / InvalidSortOrderError:
  bad search parameter (400)
- InternalError: unexpected persistence failure (500)
"""

from collections.abc import Iterable


class CatalogError(Exception):
    """Base class for all errors surfaced in the response envelope."""

    status_code: int = 500
    message: str = "An internal error occurred"

    def __init__(self, detail: str | None = None, message: str | None = None):
        if message is not None:
            self.message = message
        self.detail = detail or self.message
        super().__init__(self.detail)


class ValidationError(CatalogError):
    """Raised when an inbound payload fails a presence or length check."""

    status_code = 400
    message = "Validation failed"

    def __init__(self, field: str, message: str):
        self.field = field
        self.field_message = message
        super().__init__(detail=f"{field}: {message}")


class NotFoundError(CatalogError):
    """Raised when a referenced book or favorite does not exist."""

    status_code = 404

    def __init__(self, resource: str, detail: str | None = None):
        self.resource = resource
        super().__init__(
            detail=detail or f"{resource.lower()} not found",
            message=f"{resource} not found",
        )


class DuplicateTitleError(CatalogError):
    """Raised when another active book already uses the title."""

    status_code = 409
    message = "Book with this title already exists"

    def __init__(self, title: str):
        self.title = title
        super().__init__(detail=f"A book titled '{title}' already exists")


class AlreadyFavoritedError(CatalogError):
    """Raised when the (user, book) favorite pair already exists."""

    status_code = 409
    message = "Book already in favorites"

    def __init__(self, user_id: int, book_id: int):
        self.user_id = user_id
        self.book_id = book_id
        super().__init__(detail="This book is already in your favorites")


class InvalidSearchParameterError(CatalogError):
    """Base class for unrecognized advanced-search enum values."""

    status_code = 400
    message = "Search failed"
    parameter = "parameter"

    def __init__(self, value: str, allowed: Iterable[str]):
        self.value = value
        self.allowed = list(allowed)
        if len(self.allowed) > 2:
            choices = ", ".join(self.allowed[:-1]) + f", or {self.allowed[-1]}"
        else:
            choices = " or ".join(self.allowed)
        super().__init__(
            detail=f"invalid {self.parameter} '{value}'. Must be: {choices}"
        )


class InvalidSearchTypeError(InvalidSearchParameterError):
    parameter = "search type"


class InvalidSortFieldError(InvalidSearchParameterError):
    parameter = "sort field"


class InvalidSortOrderError(InvalidSearchParameterError):
    parameter = "sort order"


class InternalError(CatalogError):
    """Raised when persistence fails in a way the caller cannot fix."""

    status_code = 500
    message = "An internal error occurred"
