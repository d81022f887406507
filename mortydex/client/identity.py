"""Resolution of the user on whose behalf favorites are managed."""

from __future__ import annotations

from typing import Protocol

from mortydex.errors import IdentityError


class IdentityProvider(Protocol):
    """Source of the currently authenticated user.

    ``get_current_user`` returns ``None`` for an anonymous session and raises
    :class:`mortydex.errors.IdentityError` when the lookup itself fails.
    """

    async def get_current_user(self) -> str | None:
        ...


class StaticIdentityProvider:
    """Identity provider pinned to a single user id (or anonymous)."""

    def __init__(self, user_id: str | None = None) -> None:
        self._user_id = user_id

    def sign_in(self, user_id: str) -> None:
        if not user_id:
            raise IdentityError("user_id must be a non-empty string")
        self._user_id = user_id

    def sign_out(self) -> None:
        self._user_id = None

    async def get_current_user(self) -> str | None:
        return self._user_id


__all__ = ["IdentityProvider", "StaticIdentityProvider"]
