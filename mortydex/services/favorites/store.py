"""Contract shared by every favorites store adapter."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from mortydex.errors import StoreError
from mortydex.schemas.favorites import FavoriteCharacterSnapshot, FavoriteEntry


@runtime_checkable
class FavoritesStore(Protocol):
    """Per-user keyed collection with read-all, insert-one and delete-one.

    Implementations raise :class:`mortydex.errors.StoreError` on failure.
    There is deliberately no update operation: favorites are created and
    deleted, never mutated.
    """

    async def list_for_user(self, user_id: str) -> Sequence[FavoriteEntry]:
        """Return every favorite owned by ``user_id``, newest first."""

    async def insert(
        self, user_id: str, snapshot: FavoriteCharacterSnapshot
    ) -> FavoriteEntry | None:
        """Persist a favorite and return it when the store assigns an id synchronously."""

    async def delete(self, user_id: str, character_id: int) -> None:
        """Remove the favorite for ``(user_id, character_id)`` if present."""


class FavoriteAlreadyExists(StoreError):
    """Raised by stores when ``(user_id, character_id)`` is already a favorite."""


__all__ = ["FavoriteAlreadyExists", "FavoritesStore"]
