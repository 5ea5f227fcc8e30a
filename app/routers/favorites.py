"""
Favorites Router

Endpoints for the caller's favorite books.

The caller is identified by the ``CurrentUserId`` dependency (identity
header, or the configured default user). Every operation is scoped to that
user.
"""

from fastapi import APIRouter, Request, status

from app.config import get_settings
from app.dependencies import CurrentUserId, DbSession
from app.models import Favorite
from app.schemas import APIResponse, FavoriteRequest, FavoriteResponse
from app.services import favorites as favorite_service
from app.services.rate_limiter import limiter
from app.utils.responses import success

settings = get_settings()

router = APIRouter(
    prefix="/favorites",
    tags=["Favorites"],
    responses={
        400: {"model": APIResponse, "description": "Invalid request"},
        404: {"model": APIResponse, "description": "Favorite or book not found"},
    },
)


def _to_response(favorite: Favorite) -> FavoriteResponse:
    return FavoriteResponse.model_validate(favorite)


@router.get(
    "",
    response_model=APIResponse[list[FavoriteResponse]],
    response_model_exclude_none=True,
    summary="List the caller's favorites",
    description="Each favorite includes the current fields of its book.",
)
@limiter.limit(settings.rate_limit_search)
def list_favorites(
    request: Request,
    db: DbSession,
    user_id: CurrentUserId,
) -> APIResponse:
    """List favorites."""
    favorites = favorite_service.list_favorites(db, user_id)
    return success(
        "Favorites retrieved successfully",
        [_to_response(favorite) for favorite in favorites],
    )


@router.get(
    "/{favorite_id}",
    response_model=APIResponse[FavoriteResponse],
    response_model_exclude_none=True,
    summary="Get a favorite by ID",
)
@limiter.limit(settings.rate_limit_default)
def get_favorite(
    request: Request,
    favorite_id: int,
    db: DbSession,
    user_id: CurrentUserId,
) -> APIResponse:
    """Get one of the caller's favorites."""
    favorite = favorite_service.get_favorite(db, user_id, favorite_id)
    return success("Favorite retrieved successfully", _to_response(favorite))


@router.post(
    "",
    response_model=APIResponse[FavoriteResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Add a book to favorites",
    responses={409: {"model": APIResponse, "description": "Book already in favorites"}},
)
@limiter.limit(settings.rate_limit_write)
def add_favorite(
    request: Request,
    favorite_data: FavoriteRequest,
    db: DbSession,
    user_id: CurrentUserId,
) -> APIResponse:
    """Favorite an existing book."""
    favorite = favorite_service.add_favorite(db, user_id, favorite_data.book_id)
    return success("Favorite added successfully", _to_response(favorite))


@router.delete(
    "/{favorite_id}",
    response_model=APIResponse[None],
    response_model_exclude_none=True,
    summary="Remove a favorite",
)
@limiter.limit(settings.rate_limit_write)
def remove_favorite(
    request: Request,
    favorite_id: int,
    db: DbSession,
    user_id: CurrentUserId,
) -> APIResponse:
    """Remove one of the caller's favorites."""
    favorite_service.remove_favorite(db, user_id, favorite_id)
    return success("Favorite removed successfully")
