"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: log configuration, optionally create tables
   - shutdown: dispose the connection pool

3. Middleware Stack
   - Rate limiting (slowapi)
   - CORS: Allow cross-origin requests

4. Exception Handlers
   - Every error, expected or not, leaves as the same envelope:
     {"success": false, "message": ..., "error": ...}
   - Domain errors carry their own status code and message
   - Database and unexpected errors are logged and hidden behind a 500
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import get_settings
from app.database import create_tables, engine
from app.dependencies import DbSession
from app.exceptions import CatalogError, InternalError
from app.routers import books_router, favorites_router
from app.services import books as book_service
from app.services.rate_limiter import limiter, rate_limit_exceeded_handler
from app.utils.responses import error_response, failure

# =============================================================================
# Logging Configuration
# =============================================================================
# Configure logging before creating the app
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.environment}, debug mode: {settings.debug}")
    logger.info(f"API version: {settings.api_version}")

    if settings.create_tables_on_startup:
        logger.warning("CREATE_TABLES_ON_STARTUP is set - creating missing tables")
        create_tables()

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


# =============================================================================
# Request Validation Errors
# =============================================================================
def _describe_validation_error(exc: RequestValidationError) -> tuple[str, str]:
    """
    Summarize FastAPI's validation error list as (message, detail).

    Only the first error is reported; body errors (malformed JSON, wrong
    types) and parameter errors (non-integer path ids) get different
    messages.
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request", "request could not be parsed"

    first = errors[0]
    loc = [str(part) for part in first.get("loc", ())]
    message = "Invalid request body" if loc and loc[0] == "body" else "Invalid request parameters"

    field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
    detail = f"{field}: {first.get('msg', 'invalid value')}" if field else first.get("msg", "invalid value")
    return message, detail


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Book Catalog API

A RESTful API for a book catalog.

### Features
- **Books**: CRUD with soft delete and unique titles
- **Search**: basic listing search, advanced search with exact, prefix,
  substring and fuzzy matching, relevance ordering
- **Suggestions**: autocomplete over titles and authors
- **Favorites**: per-user favorite books (user from the `X-User-ID` header)

### Response Envelope
Every response body is `{"success", "message", "data"?, "error"?}`.
        """,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    # Attach the limiter to the app state so it can be accessed by decorators
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(CatalogError)
    async def catalog_exception_handler(
        request: Request,
        exc: CatalogError,
    ) -> JSONResponse:
        """Domain errors raised by the services."""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        else:
            logger.warning(
                f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}"
            )
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Malformed request shape.

        Reported as 400 (not FastAPI's default 422) so that every client
        input problem shares one status code.
        """
        message, detail = _describe_validation_error(exc)
        logger.warning(f"{request.method} {request.url.path} -> 400: {detail}")
        return failure(status.HTTP_400_BAD_REQUEST, message, detail)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Routing errors (unknown path, wrong method) in envelope form."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return failure(
                exc.status_code,
                "Endpoint not found",
                f"no route matches {request.method} {request.url.path}",
            )
        return failure(exc.status_code, str(exc.detail), str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return error_response(
            InternalError("A database error occurred. Please try again later.")
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return error_response(InternalError(str(exc) if settings.debug else None))

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(books_router)
    app.include_router(favorites_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and the database is reachable.",
    )
    def health_check(db: DbSession) -> dict:
        """
        Health check endpoint.

        Used by load balancers, liveness/readiness probes and monitoring.
        A database failure surfaces as the usual 500 envelope.
        """
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.api_version,
            "environment": settings.environment,
            "database": {
                "connected": True,
                "active_books": book_service.count_books(db),
            },
            "rate_limiting": {
                "enabled": settings.rate_limit_enabled,
                "default_limit": settings.rate_limit_default,
            },
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "build": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn app.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m app.main runs the development server

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
