"""
Payload Validation

Presence and length checks for inbound book and favorite payloads.
These are pure functions: they either return normalized values or raise
``ValidationError`` naming the offending field.
"""

from app.exceptions import ValidationError
from app.models.book import TEXT_FIELD_MAX_LENGTH

# Identifiers live in 32-bit INTEGER columns
MAX_ID = 2**31 - 1


def _require_text(field: str, value: str | None) -> str:
    label = field.capitalize()
    trimmed = (value or "").strip()
    if not trimmed:
        raise ValidationError(field, f"{label} is required")
    if len(trimmed) > TEXT_FIELD_MAX_LENGTH:
        raise ValidationError(
            field, f"{label} must be less than {TEXT_FIELD_MAX_LENGTH} characters"
        )
    return trimmed


def validate_book_payload(
    title: str | None,
    author: str | None,
    category: str | None,
) -> tuple[str, str, str]:
    """
    Validate and trim the three text fields of a book.

    Fields are checked in order (title, author, category); the first
    failure is reported.

    Returns:
        (title, author, category) with surrounding whitespace removed

    Raises:
        ValidationError: If a field is blank or longer than 255 characters
    """
    return (
        _require_text("title", title),
        _require_text("author", author),
        _require_text("category", category),
    )


def validate_book_id(book_id: int, field: str = "id") -> int:
    """
    Reject book identifiers outside 1..MAX_ID.

    Raises:
        ValidationError: If the id is not a positive integer
    """
    if book_id is None or book_id <= 0:
        message = "Book ID is required" if field == "book_id" else "Invalid book ID"
        raise ValidationError(field, message)
    if book_id > MAX_ID:
        raise ValidationError(field, "Invalid book ID")
    return book_id


def validate_favorite_id(favorite_id: int) -> int:
    """
    Reject favorite identifiers outside 1..MAX_ID.

    Raises:
        ValidationError: If the id cannot exist
    """
    if favorite_id <= 0 or favorite_id > MAX_ID:
        raise ValidationError("id", "Invalid favorite ID")
    return favorite_id
