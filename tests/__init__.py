"""
Test Suite for the Book Catalog API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_books.py: /books CRUD, soft delete and purge
- test_search.py: basic listing search and suggestions
- test_advanced_search.py: /books/search strategies, filters, sorting, paging
- test_search_service.py: fuzzy patterns, option resolution, ordering rules
- test_validation.py: payload validation and the book lifecycle
- test_favorites.py: /favorites endpoints
- test_app.py: health, root and error envelopes

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=app --cov-report=html

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
