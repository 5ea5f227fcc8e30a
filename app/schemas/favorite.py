"""
Favorite Pydantic Schemas

Favorites are returned joined with a snapshot of the referenced book.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.book import BookResponse


class FavoriteRequest(BaseModel):
    """
    Schema for adding a book to the caller's favorites.

    A missing book_id is reported as "Book ID is required".

    Example request body:
    {
        "book_id": 1
    }
    """

    book_id: int | None = Field(
        default=None,
        description="ID of the book to favorite",
        examples=[1],
    )


class FavoriteResponse(BaseModel):
    """Schema for favorite responses, including the book's current fields."""

    id: int = Field(..., description="Unique identifier")
    user_id: int = Field(..., description="Owning user")
    book_id: int = Field(..., description="Referenced book")
    created_at: datetime = Field(..., description="When the book was favorited")
    book: BookResponse | None = Field(
        default=None,
        description="Current snapshot of the referenced book",
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "user_id": 1,
                "book_id": 1,
                "created_at": "2024-01-15T10:30:00Z",
                "book": {
                    "id": 1,
                    "title": "Harry Potter and the Sorcerer's Stone",
                    "author": "J.K. Rowling",
                    "category": "Fantasy",
                    "created_at": "2024-01-15T10:30:00Z",
                    "updated_at": "2024-01-15T10:30:00Z",
                },
            }
        },
    )
