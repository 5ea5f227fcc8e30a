"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Security: Control exactly what data is exposed in API responses
2. Validation: Different rules for requests and responses
3. Decoupling: Database schema can evolve independently of API
4. Documentation: Schemas generate OpenAPI documentation

Schema Naming Convention:
- XxxRequest: Request body for create/update
- XxxResponse: Fields returned in API responses
- APIResponse[T]: Envelope wrapping every response
"""

from app.schemas.book import BookRequest, BookResponse
from app.schemas.envelope import APIResponse
from app.schemas.favorite import FavoriteRequest, FavoriteResponse
from app.schemas.search import AdvancedSearchParams

__all__ = [
    "APIResponse",
    "AdvancedSearchParams",
    "BookRequest",
    "BookResponse",
    "FavoriteRequest",
    "FavoriteResponse",
]
