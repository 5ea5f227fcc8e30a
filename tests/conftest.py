"""
pytest Fixtures for Book Catalog API Tests

This file contains shared fixtures used across all test files.

For database tests, every test gets its own SQLite in-memory database:
- function scope for the engine (tables created fresh per test)
- function scope for sessions (isolation between tests)

A fresh database per test keeps commits real: services commit, roll back
on IntegrityError and rely on ON DELETE CASCADE, none of which behaves
normally inside an outer transaction that the test later rolls back.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# This disables rate limiting and keeps the app engine off PostgreSQL
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import Book, Favorite

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory is fast and needs no external database. The partial
# unique index on lower(title) and foreign-key cascades work on SQLite too
# (app.database switches the foreign_keys pragma on for every connection).

CATALOG_BOOKS = [
    ("The Great Gatsby", "F. Scott Fitzgerald", "Classic"),
    ("Harry Potter and the Sorcerer's Stone", "J.K. Rowling", "Fantasy"),
    ("Dune", "Frank Herbert", "Science Fiction"),
    ("1984", "George Orwell", "Dystopian"),
    ("To Kill a Mockingbird", "Harper Lee", "Classic"),
    ("The Hobbit", "J.R.R. Tolkien", "Fantasy"),
    ("Pride and Prejudice", "Jane Austen", "Romance"),
    ("The Catcher in the Rye", "J.D. Salinger", "Classic"),
    ("Brave New World", "Aldous Huxley", "Science Fiction"),
    ("The Lord of the Rings", "J.R.R. Tolkien", "Fantasy"),
    ("Animal Farm", "George Orwell", "Satire"),
]


@pytest.fixture(scope="function")
def engine():
    """
    Create a SQLite in-memory database engine with all tables.

    StaticPool keeps the single connection alive for the whole test.
    Without it, the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """Create a database session bound to the per-test engine."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
def _add_books(db_session: Session, rows) -> list[Book]:
    books = [Book(title=title, author=author, category=category) for title, author, category in rows]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books


@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """Create a single book for testing."""
    return _add_books(db_session, [("1984", "George Orwell", "Dystopian")])[0]


@pytest.fixture
def catalog(db_session: Session) -> list[Book]:
    """Create the sample catalog (ids follow CATALOG_BOOKS order)."""
    return _add_books(db_session, CATALOG_BOOKS)


@pytest.fixture
def relevance_books(db_session: Session) -> list[Book]:
    """
    Books that each hit a different relevance rank for "harry".

    Inserted in reverse rank order so that id order and relevance order
    disagree.
    """
    return _add_books(
        db_session,
        [
            ("Guns of the South", "Harry Turtledove", "Alternate History"),
            ("The Harry Files", "Unknown", "Mystery"),
            ("Harry Potter and the Sorcerer's Stone", "J.K. Rowling", "Fantasy"),
            ("Harry", "Someone", "Biography"),
        ],
    )


@pytest.fixture
def sample_favorite(db_session: Session, sample_book: Book) -> Favorite:
    """A favorite of sample_book owned by user 1."""
    favorite = Favorite(user_id=1, book_id=sample_book.id)
    db_session.add(favorite)
    db_session.commit()
    db_session.refresh(favorite)
    return favorite

