"""
Book Pydantic Schemas

Request and response shapes for the /books endpoints.

Presence and length rules (trimmed, 1-255 characters) are enforced by
``app.services.validation`` rather than by Field constraints, so that the
same checks run for every caller of the service layer and failures carry
the field name in the response envelope.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BookRequest(BaseModel):
    """
    Schema for creating or fully replacing a book.

    PUT uses full-replace semantics: all three fields are required. They are
    optional here so a missing field is reported as "<Field> is required"
    by the validation service instead of a generic body error.

    Example request body:
    {
        "title": "1984",
        "author": "George Orwell",
        "category": "Dystopian"
    }
    """

    title: str | None = Field(
        default=None,
        description="Book title (1-255 characters, unique)",
        examples=["1984", "Pride and Prejudice"],
    )

    author: str | None = Field(
        default=None,
        description="Author name (1-255 characters)",
        examples=["George Orwell", "Jane Austen"],
    )

    category: str | None = Field(
        default=None,
        description="Book category (1-255 characters)",
        examples=["Dystopian", "Romance"],
    )


class BookResponse(BaseModel):
    """
    Schema for book responses.

    Soft-deleted books are never returned, so the deletion timestamp is
    not part of the public shape.
    """

    id: int = Field(..., description="Unique identifier")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Author name")
    category: str = Field(..., description="Book category")
    created_at: datetime = Field(..., description="When the book was created")
    updated_at: datetime = Field(..., description="When the book was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "1984",
                "author": "George Orwell",
                "category": "Dystopian",
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )
