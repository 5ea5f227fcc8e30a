"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Book Catalog API.

We use SYNCHRONOUS SQLAlchemy: every request is a short request/response
cycle that issues one or two statements, so async brings no benefit here.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives -> create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

This is implemented using FastAPI's dependency injection.
"""

import sqlite3
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import get_settings

# Get settings instance
settings = get_settings()


# =============================================================================
# SQLite Foreign Keys
# =============================================================================
# SQLite ignores FOREIGN KEY clauses unless the pragma is switched on for
# every connection. Without it, ON DELETE CASCADE on favorites.book_id would
# silently do nothing in development and in the test suite.

@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# =============================================================================
# Database Engine
# =============================================================================
# Key parameters:
# - pool_size: Number of connections to keep open permanently
# - max_overflow: How many extra connections can be created during high load
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements (useful for debugging, disable in production)

def _engine_options() -> dict[str, Any]:
    """Build create_engine() keyword arguments for the configured backend."""
    options: dict[str, Any] = {"echo": settings.debug}

    if settings.is_sqlite:
        # SQLite connections may be shared across FastAPI's threadpool
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )

    return options


engine = create_engine(settings.database_url, **_engine_options())


# =============================================================================
# Session Factory
# =============================================================================
# - autocommit=False: We control when to commit
# - autoflush=False: Don't auto-flush before queries (more predictable behavior)
# - bind=engine: Connect sessions to our database engine

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models inherit from this class:

        class Book(Base):
            __tablename__ = "books"
            ...

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Creates a new session, yields it to the route handler and closes it
    when the request ends (the finally block runs even on exceptions).

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    This function doesn't track schema changes or allow rollbacks.
    """
    # Importing the models registers them with Base.metadata
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
