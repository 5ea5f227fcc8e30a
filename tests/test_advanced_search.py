"""
Tests for Advanced Search

Tests GET /books/search:
- Matching strategies (exact, starts_with, contains, fuzzy)
- Relevance ordering and explicit sort fields
- Category and author filters
- Limit/offset clamping
- Rejection of unknown enum values
"""

import pytest
from fastapi import status


def titles(response) -> list[str]:
    return [book["title"] for book in response.json()["data"]]


class TestSearchStrategies:
    """Tests for the search_type parameter."""

    def test_default_is_contains(self, client, catalog):
        """contains also looks at the category."""
        response = client.get("/books/search?query=fiction")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Search completed successfully"
        assert titles(response) == ["Brave New World", "Dune"]

    def test_exact_title(self, client, catalog):
        response = client.get("/books/search?query=Dune&search_type=exact")

        assert titles(response) == ["Dune"]

    def test_exact_ignores_case(self, client, catalog):
        response = client.get("/books/search?query=dUNE&search_type=exact")

        assert titles(response) == ["Dune"]

    def test_exact_author(self, client, catalog):
        response = client.get("/books/search?query=George%20Orwell&search_type=exact")

        assert titles(response) == ["1984", "Animal Farm"]

    def test_exact_requires_whole_value(self, client, catalog):
        response = client.get("/books/search?query=Dun&search_type=exact")

        assert titles(response) == []

    def test_starts_with(self, client, catalog):
        response = client.get("/books/search?query=the&search_type=starts_with")

        assert titles(response) == [
            "The Catcher in the Rye",
            "The Great Gatsby",
            "The Hobbit",
            "The Lord of the Rings",
        ]

    def test_starts_with_matches_author(self, client, catalog):
        response = client.get("/books/search?query=jane&search_type=starts_with")

        assert titles(response) == ["Pride and Prejudice"]

    def test_fuzzy_matches_individual_words(self, client, catalog):
        """No title contains "Lord Ring", but fuzzy tries each word."""
        contains = client.get("/books/search?query=Lord%20Ring&search_type=contains")
        fuzzy = client.get("/books/search?query=Lord%20Ring&search_type=fuzzy")

        assert titles(contains) == []
        assert titles(fuzzy) == ["The Lord of the Rings"]

    def test_fuzzy_matches_substitutions(self, client, catalog):
        """'har' expands to harr/harry and also matches the author Harper Lee."""
        response = client.get("/books/search?query=har&search_type=fuzzy")

        assert titles(response) == [
            "Harry Potter and the Sorcerer's Stone",
            "To Kill a Mockingbird",
        ]

    def test_empty_query_applies_no_filter(self, client, catalog):
        response = client.get("/books/search?search_type=exact")

        assert len(response.json()["data"]) == len(catalog)

    def test_deleted_books_are_excluded(self, client, catalog):
        dune = catalog[2]
        client.delete(f"/books/{dune.id}")

        response = client.get("/books/search?query=dune")

        assert titles(response) == []


class TestSearchOrdering:
    """Tests for sort_by and sort_order."""

    def test_relevance_ranking(self, client, relevance_books):
        response = client.get("/books/search?query=harry")

        assert titles(response) == [
            "Harry",
            "Harry Potter and the Sorcerer's Stone",
            "The Harry Files",
            "Guns of the South",
        ]

    def test_relevance_ignores_sort_order(self, client, relevance_books):
        asc = client.get("/books/search?query=harry&sort_order=ASC")
        desc = client.get("/books/search?query=harry&sort_order=DESC")

        assert titles(asc) == titles(desc)

    def test_relevance_without_query_sorts_by_title(self, client, catalog):
        response = client.get("/books/search?category=Classic")

        assert titles(response) == [
            "The Catcher in the Rye",
            "The Great Gatsby",
            "To Kill a Mockingbird",
        ]

    def test_sort_by_author_ascending(self, client, catalog):
        response = client.get("/books/search?sort_by=author")

        assert titles(response)[0] == "Brave New World"

    def test_sort_by_author_descending(self, client, catalog):
        response = client.get("/books/search?sort_by=author&sort_order=DESC")

        assert titles(response)[0] == "Pride and Prejudice"

    def test_sort_order_is_case_insensitive(self, client, catalog):
        upper = client.get("/books/search?sort_by=title&sort_order=DESC")
        lower = client.get("/books/search?sort_by=title&sort_order=desc")

        assert upper.status_code == lower.status_code == status.HTTP_200_OK
        assert titles(upper) == titles(lower)
        assert titles(upper)[0] == "To Kill a Mockingbird"

    def test_sort_by_created_at(self, client, catalog):
        response = client.get("/books/search?sort_by=created_at")

        assert response.status_code == status.HTTP_200_OK
        # Timestamps tie within a second; id order breaks the tie
        assert titles(response) == [book.title for book in catalog]


class TestSearchFilters:
    """Tests for the category and author filters."""

    def test_category_filter_is_exact(self, client, catalog):
        assert titles(client.get("/books/search?category=Fantasy&sort_by=title")) == [
            "Harry Potter and the Sorcerer's Stone",
            "The Hobbit",
            "The Lord of the Rings",
        ]
        assert titles(client.get("/books/search?category=Fant")) == []

    def test_category_filter_ignores_case(self, client, catalog):
        response = client.get("/books/search?category=FANTASY&sort_by=title")

        assert titles(response) == [
            "Harry Potter and the Sorcerer's Stone",
            "The Hobbit",
            "The Lord of the Rings",
        ]

    def test_author_filter_is_substring(self, client, catalog):
        response = client.get("/books/search?author=tolkien")

        assert titles(response) == ["The Hobbit", "The Lord of the Rings"]

    def test_filters_combine_with_query(self, client, catalog):
        response = client.get("/books/search?query=the&category=Fantasy&author=tolkien")

        assert titles(response) == ["The Hobbit", "The Lord of the Rings"]


class TestSearchPagination:
    """Tests for limit and offset clamping."""

    def test_limit(self, client, catalog):
        response = client.get("/books/search?sort_by=title&limit=2")

        assert titles(response) == ["1984", "Animal Farm"]

    @pytest.mark.parametrize("limit", [0, -1, 101, 500])
    def test_out_of_range_limit_falls_back_to_default(self, client, catalog, limit):
        response = client.get(f"/books/search?limit={limit}")

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()["data"]) == len(catalog)

    def test_offset(self, client, catalog):
        response = client.get("/books/search?sort_by=title&offset=10")

        assert titles(response) == ["To Kill a Mockingbird"]

    def test_negative_offset_is_zero(self, client, catalog):
        first = client.get("/books/search?sort_by=title&offset=-5&limit=1")

        assert titles(first) == ["1984"]

    def test_offset_past_end(self, client, catalog):
        response = client.get("/books/search?offset=100")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"] == []


class TestSearchValidation:
    """Unknown enum values are rejected with a 400 envelope."""

    def test_invalid_search_type(self, client):
        response = client.get("/books/search?query=x&search_type=regex")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            "success": False,
            "message": "Search failed",
            "error": "invalid search type 'regex'. Must be: exact, starts_with, contains, or fuzzy",
        }

    def test_invalid_sort_field(self, client):
        response = client.get("/books/search?sort_by=rating")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == (
            "invalid sort field 'rating'. "
            "Must be: title, author, category, created_at, or relevance"
        )

    def test_invalid_sort_order(self, client):
        response = client.get("/books/search?sort_order=sideways")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["message"] == "Search failed"
        assert body["error"].startswith("invalid sort order")
        assert body["error"].endswith("Must be: ASC or DESC")

    def test_non_integer_limit(self, client):
        response = client.get("/books/search?limit=ten")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Invalid request parameters"
