"""
Services Package

This package contains business logic services that are:
- Separate from HTTP handling (routers)
- Reusable across different parts of the application
- Easier to test in isolation

Current services:
- books.py: Book listing, advanced search, suggestions and lifecycle
- favorites.py: Linking users to books
- search.py: Search strategies, fuzzy patterns and relevance ranking
- validation.py: Presence and length checks on inbound payloads
- rate_limiter.py: Rate limiting with slowapi
"""
