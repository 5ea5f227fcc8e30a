"""
Response Envelope

Every endpoint under /books and /favorites answers with the same shape:

    {
        "success": true,
        "message": "Books retrieved successfully",
        "data": [...]
    }

and failures carry an ``error`` detail instead of ``data``:

    {
        "success": false,
        "message": "Book not found",
        "error": "book not found"
    }

Keys that are not set are omitted from the JSON body.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Uniform success/error envelope."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable summary")
    data: T | None = Field(default=None, description="Operation result")
    error: str | None = Field(default=None, description="Error detail on failure")

    def to_content(self) -> dict[str, Any]:
        """Serialize for a JSONResponse, dropping unset keys."""
        return self.model_dump(mode="json", exclude_none=True)
