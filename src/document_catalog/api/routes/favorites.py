"""Favorites endpoints."""

from fastapi import APIRouter, Depends

from ...core.favorites_manager import FavoritesManager
from ...core.identity import require_identity
from ...models.requests import OperationResult
from ...models.session import Identity
from ..dependencies import get_current_user, get_favorites_manager
from ..responses import respond

router = APIRouter(prefix="/api/v1/favorites", tags=["favorites"])


@router.get("", response_model=OperationResult, summary="List Favorites")
async def list_favorites(
    user: Identity = Depends(get_current_user),
    favorites: FavoritesManager = Depends(get_favorites_manager),
):
    """Document ids the current user has favorited."""
    async def operation():
        signed_in = require_identity(user)
        return {"favorite_ids": await favorites.list_favorite_ids(signed_in.email)}

    return await respond(operation())


@router.post("/{document_id}/toggle", response_model=OperationResult, summary="Toggle Favorite")
async def toggle_favorite(
    document_id: str,
    user: Identity = Depends(get_current_user),
    favorites: FavoritesManager = Depends(get_favorites_manager),
):
    """Add the document to the user's favorites, or remove it if already there."""
    async def operation():
        return {"favorited": await favorites.toggle(user, document_id)}

    return await respond(operation())
