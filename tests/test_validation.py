"""
Tests for Payload Validation and the Book Lifecycle
"""

from datetime import UTC, datetime

import pytest

from app.exceptions import ValidationError
from app.models import Active, Book, Deleted
from app.services.validation import (
    MAX_ID,
    validate_book_id,
    validate_book_payload,
    validate_favorite_id,
)


class TestValidateBookPayload:
    """Tests for validate_book_payload()."""

    def test_returns_trimmed_values(self):
        assert validate_book_payload(" Dune ", "Frank Herbert ", " Science Fiction") == (
            "Dune",
            "Frank Herbert",
            "Science Fiction",
        )

    @pytest.mark.parametrize(
        "title, author, category, field",
        [
            (None, "A", "C", "title"),
            ("", "A", "C", "title"),
            ("T", "\t ", "C", "author"),
            ("T", "A", None, "category"),
        ],
    )
    def test_required_fields(self, title, author, category, field):
        with pytest.raises(ValidationError) as exc_info:
            validate_book_payload(title, author, category)

        assert exc_info.value.field == field
        assert exc_info.value.field_message == f"{field.capitalize()} is required"

    def test_first_failure_wins(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_book_payload("", "", "")

        assert exc_info.value.field == "title"

    def test_length_is_checked_after_trimming(self):
        """255 characters plus padding is still valid."""
        title, _, _ = validate_book_payload("  " + "t" * 255 + "  ", "A", "C")

        assert len(title) == 255

    def test_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_book_payload("T", "a" * 256, "C")

        assert exc_info.value.detail == "author: Author must be less than 255 characters"


class TestValidateBookId:
    """Tests for validate_book_id()."""

    def test_positive_id(self):
        assert validate_book_id(7) == 7

    @pytest.mark.parametrize("book_id", [0, -1])
    def test_path_id(self, book_id):
        with pytest.raises(ValidationError) as exc_info:
            validate_book_id(book_id)

        assert exc_info.value.detail == "id: Invalid book ID"

    @pytest.mark.parametrize("book_id", [None, 0])
    def test_body_id(self, book_id):
        with pytest.raises(ValidationError) as exc_info:
            validate_book_id(book_id, field="book_id")

        assert exc_info.value.detail == "book_id: Book ID is required"

    def test_largest_id(self):
        assert validate_book_id(MAX_ID) == MAX_ID

    @pytest.mark.parametrize("field", ["id", "book_id"])
    def test_id_beyond_column_range(self, field):
        with pytest.raises(ValidationError) as exc_info:
            validate_book_id(MAX_ID + 1, field=field)

        assert exc_info.value.detail == f"{field}: Invalid book ID"


class TestValidateFavoriteId:
    """Tests for validate_favorite_id()."""

    def test_in_range(self):
        assert validate_favorite_id(1) == 1
        assert validate_favorite_id(MAX_ID) == MAX_ID

    @pytest.mark.parametrize("favorite_id", [0, -3, MAX_ID + 1])
    def test_out_of_range(self, favorite_id):
        with pytest.raises(ValidationError) as exc_info:
            validate_favorite_id(favorite_id)

        assert exc_info.value.detail == "id: Invalid favorite ID"


class TestBookLifecycle:
    """Tests for Book.lifecycle, is_active and mark_deleted()."""

    def test_new_book_is_active(self):
        book = Book(title="Dune", author="Frank Herbert", category="Science Fiction")

        assert book.lifecycle == Active()
        assert book.is_active

    def test_mark_deleted(self):
        book = Book(title="Dune", author="Frank Herbert", category="Science Fiction")
        at = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)

        state = book.mark_deleted(at)

        assert state == Deleted(at=at)
        assert book.lifecycle == Deleted(at=at)
        assert book.deleted_at == at
        assert not book.is_active

    def test_mark_deleted_defaults_to_now(self):
        book = Book(title="Dune", author="Frank Herbert", category="Science Fiction")

        state = book.mark_deleted()

        assert isinstance(state, Deleted)
        assert state.at.tzinfo is not None
