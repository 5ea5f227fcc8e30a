#!/usr/bin/env python3
"""
Database Seed Script

Populates the catalog with sample books and a few favorites for the
default user.

USAGE:
    # From the project root, with the virtualenv activated
    python scripts/seed_data.py

    # Wipe books and favorites first
    python scripts/seed_data.py --clear

This script:
1. Connects to the database using app settings
2. Creates missing tables
3. Clears existing data (optional)
4. Creates sample books, skipping titles that already exist
5. Favorites a handful of them for the default user
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import SessionLocal, create_tables
from app.models import Book, Favorite

BOOKS_DATA = [
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "category": "Classic"},
    {"title": "Harry Potter and the Sorcerer's Stone", "author": "J.K. Rowling", "category": "Fantasy"},
    {"title": "Dune", "author": "Frank Herbert", "category": "Science Fiction"},
    {"title": "1984", "author": "George Orwell", "category": "Dystopian"},
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "category": "Classic"},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "category": "Fantasy"},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "category": "Romance"},
    {"title": "The Catcher in the Rye", "author": "J.D. Salinger", "category": "Classic"},
    {"title": "Brave New World", "author": "Aldous Huxley", "category": "Science Fiction"},
    {"title": "The Lord of the Rings", "author": "J.R.R. Tolkien", "category": "Fantasy"},
]

FAVORITE_TITLES = ["The Great Gatsby", "Dune", "1984", "Pride and Prejudice"]


def clear_data(db: Session) -> None:
    """Remove all favorites and books, including soft-deleted ones."""
    print("Clearing existing data...")
    db.execute(delete(Favorite))
    db.execute(delete(Book))
    db.commit()
    print("Data cleared.")


def create_books(db: Session) -> dict[str, Book]:
    """Create the sample books; existing active titles are reused."""
    print("Creating books...")

    books = {}
    created = 0
    for data in BOOKS_DATA:
        book = db.scalars(
            select(Book).where(
                Book.is_active,
                func.lower(Book.title) == data["title"].lower(),
            )
        ).first()
        if book is None:
            book = Book(**data)
            db.add(book)
            created += 1
        books[data["title"]] = book

    db.commit()
    for book in books.values():
        db.refresh(book)

    print(f"Created {created} books ({len(books) - created} already present).")
    return books


def create_favorites(db: Session, books: dict[str, Book], user_id: int) -> list[Favorite]:
    """Favorite a few sample books for ``user_id``."""
    print(f"Creating favorites for user {user_id}...")

    favorites = []
    for title in FAVORITE_TITLES:
        book = books[title]
        exists = db.scalars(
            select(Favorite).where(Favorite.user_id == user_id, Favorite.book_id == book.id)
        ).first()
        if exists is None:
            favorite = Favorite(user_id=user_id, book_id=book.id)
            db.add(favorite)
            favorites.append(favorite)

    db.commit()
    print(f"Created {len(favorites)} favorites.")
    return favorites


def seed_database(clear_existing: bool = False) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    settings = get_settings()

    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    # Create tables if they don't exist
    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        books = create_books(db)
        favorites = create_favorites(db, books, settings.default_user_id)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Books: {len(books)}")
        print(f"  - New favorites: {len(favorites)}")
        print(f"\nYou can now access the API at http://localhost:{settings.port}")
        print(f"API documentation at http://localhost:{settings.port}/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the book catalog with sample data.")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="delete all books and favorites before seeding",
    )
    args = parser.parse_args()
    seed_database(clear_existing=args.clear)


if __name__ == "__main__":
    main()
