"""Favorites store adapter that talks to the ``/favorites`` HTTP routes."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from mortydex.errors import StoreError
from mortydex.schemas.favorites import (
    FavoriteCharacterSnapshot,
    FavoriteEntry,
    FavoriteListResponse,
)
from mortydex.services.favorites.store import FavoriteAlreadyExists

logger = logging.getLogger(__name__)


class HttpFavoritesStore:
    """Remote favorites store reached through a shared ``httpx.AsyncClient``.

    The client's ``base_url`` must point at the Mortydex API root.
    """

    def __init__(self, client: httpx.AsyncClient, *, prefix: str = "/favorites") -> None:
        self._client = client
        self._prefix = prefix.rstrip("/")

    async def _request(self, method: str, url: str, **kwargs: object) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Favorites request %s %s failed: %s", method, url, exc)
            raise StoreError(f"Favorites service unreachable: {exc}") from exc

        if response.status_code == httpx.codes.CONFLICT:
            raise FavoriteAlreadyExists(_error_message(response))
        if response.is_error:
            logger.error(
                "Favorites request %s %s returned %s",
                method,
                url,
                response.status_code,
            )
            raise StoreError(_error_message(response))
        return response

    async def list_for_user(self, user_id: str) -> list[FavoriteEntry]:
        response = await self._request("GET", self._prefix, params={"user_id": user_id})
        try:
            payload = FavoriteListResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise StoreError("Favorites service returned a malformed list") from exc
        return payload.favorites

    async def insert(
        self, user_id: str, snapshot: FavoriteCharacterSnapshot
    ) -> FavoriteEntry | None:
        response = await self._request(
            "POST",
            self._prefix,
            params={"user_id": user_id},
            json=snapshot.model_dump(),
        )
        if not response.content:
            return None
        try:
            return FavoriteEntry.model_validate(response.json())
        except (ValueError, ValidationError):
            # The write succeeded; the caller synthesizes a provisional entry.
            logger.warning("Favorites service returned an unreadable entry body")
            return None

    async def delete(self, user_id: str, character_id: int) -> None:
        await self._request(
            "DELETE",
            f"{self._prefix}/{character_id}",
            params={"user_id": user_id},
        )


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"Favorites service returned status {response.status_code}"
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if isinstance(message, str) and message:
            return message
    return f"Favorites service returned status {response.status_code}"


__all__ = ["HttpFavoritesStore"]
