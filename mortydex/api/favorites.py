"""FastAPI router exposing the per-user favorites store."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status

from mortydex.schemas.favorites import (
    FavoriteCharacterSnapshot,
    FavoriteEntry,
    FavoriteListResponse,
)
from mortydex.services.dependencies import get_favorites_store
from mortydex.services.favorites import FavoriteAlreadyExists, FavoritesStore

router = APIRouter()

_USER_ID_QUERY = Query(
    ...,
    min_length=1,
    max_length=128,
    description="Identifier of the owner, as issued by the identity provider",
)


@router.get("", response_model=FavoriteListResponse)
async def list_favorites(
    user_id: str = _USER_ID_QUERY,
    store: FavoritesStore = Depends(get_favorites_store),
) -> FavoriteListResponse:
    """Return the caller's favorites, newest first."""

    favorites = list(await store.list_for_user(user_id))
    return FavoriteListResponse(total=len(favorites), favorites=favorites)


@router.post("", response_model=FavoriteEntry, status_code=status.HTTP_201_CREATED)
async def add_favorite(
    payload: FavoriteCharacterSnapshot,
    user_id: str = _USER_ID_QUERY,
    store: FavoritesStore = Depends(get_favorites_store),
) -> FavoriteEntry:
    """Store a character snapshot as a new favorite."""

    try:
        entry = await store.insert(user_id, payload)
    except FavoriteAlreadyExists as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    if entry is None:
        raise HTTPException(status_code=500, detail="Store did not return the new favorite")
    return entry


@router.delete("/{character_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_favorite(
    character_id: int = Path(..., ge=1),
    user_id: str = _USER_ID_QUERY,
    store: FavoritesStore = Depends(get_favorites_store),
) -> Response:
    """Remove a favorite; deleting an absent favorite is not an error."""

    await store.delete(user_id, character_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
