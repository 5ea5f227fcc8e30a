"""
SQLAlchemy Models Package

This package contains all database models for the Book Catalog API.
Models are SQLAlchemy ORM classes that map to database tables.

Model Relationships:
- Book <- Favorite: Many-to-One (a favorite references one book,
                    a book can be favorited by many users)

Import all models here to:
1. Make them available as: from app.models import Book, Favorite
2. Ensure Alembic discovers them for migrations
3. Provide a single import point for the application
"""

# The order matters for SQLAlchemy to resolve relationships
from app.models.book import Active, Book, BookLifecycle, Deleted
from app.models.favorite import Favorite

__all__ = [
    "Active",
    "Book",
    "BookLifecycle",
    "Deleted",
    "Favorite",
]
