"""
Book Catalog API Application Package

This is the main application package for the Book Catalog API.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- exceptions.py: Domain errors mapped to HTTP status codes
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models (Book, Favorite)
- schemas/: Pydantic request/response schemas and the response envelope
- routers/: API route handlers
- services/: Business logic (books, search, favorites, validation, rate limiting)
- utils/: Helper functions
"""

__version__ = "0.1.0"
