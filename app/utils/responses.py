"""
Response Envelope Helpers

Small builders used by routers and exception handlers so every response
goes through the same envelope.
"""

from typing import Any

from fastapi.responses import JSONResponse

from app.exceptions import CatalogError
from app.schemas.envelope import APIResponse


def success(message: str, data: Any = None) -> APIResponse:
    """Successful envelope; ``data`` is omitted from the body when None."""
    return APIResponse(success=True, message=message, data=data)


def failure(status_code: int, message: str, error: str) -> JSONResponse:
    """Error envelope as a ready-to-send JSONResponse."""
    return JSONResponse(
        status_code=status_code,
        content=APIResponse(success=False, message=message, error=error).to_content(),
    )


def error_response(exc: CatalogError) -> JSONResponse:
    """Error envelope for a domain exception."""
    return failure(exc.status_code, exc.message, exc.detail)
