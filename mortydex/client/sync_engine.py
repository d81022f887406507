"""Session-side favorites engine.

The engine keeps a local copy of the user's favorites that is authoritative
between explicit :meth:`FavoritesSyncEngine.refetch` calls. Local state is
only touched after the remote store confirms a mutation, and every mutation
for a given character goes through an :class:`OperationGate` so double
clicks and rapid repeats never reach the store twice.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum

from mortydex.client.identity import IdentityProvider
from mortydex.client.notifications import (
    LoggingNotifier,
    Notification,
    NotificationLevel,
    Notifier,
)
from mortydex.client.operation_gate import DEFAULT_WINDOW_SECONDS, OperationGate
from mortydex.errors import IdentityError, StoreError
from mortydex.schemas.character import Character
from mortydex.schemas.favorites import FavoriteCharacterSnapshot, FavoriteEntry
from mortydex.services.favorites.store import FavoritesStore
from mortydex.settings import AppSettings, get_settings

logger = logging.getLogger(__name__)

RATE_LIMITED_MESSAGE = "Please wait before trying again"
AUTH_FAILED_MESSAGE = "Authentication error. Please try logging in again."
AUTH_REQUIRED_MESSAGE = "You must be logged in to manage favorites"
REMOVE_FAILED_MESSAGE = "Failed to remove from favorites"
ADD_FAILED_MESSAGE = "Failed to add to favorites"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class FavoriteOutcome(str, Enum):
    """Result of a favorite mutation attempt."""

    ADDED = "added"
    REMOVED = "removed"
    IN_PROGRESS = "in_progress"
    RATE_LIMITED = "rate_limited"
    AUTH_FAILED = "auth_failed"
    AUTH_REQUIRED = "auth_required"
    FAILED = "failed"
    NOT_FAVORITE = "not_favorite"


class FavoritesSyncEngine:
    """Optimistically consistent view of one user's favorites.

    Dependencies are injected so each session owns its own store handle,
    identity provider and notifier. The notifier can be swapped at any time
    with :meth:`set_notifier`; pending operations pick up the replacement
    when they complete.
    """

    def __init__(
        self,
        store: FavoritesStore,
        identity: IdentityProvider,
        notifier: Notifier | None = None,
        *,
        rate_limit_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store = store
        self._identity = identity
        self._notifier: Notifier = notifier or LoggingNotifier()
        self._gate = OperationGate(rate_limit_seconds, clock=clock)
        self._favorites: list[FavoriteEntry] = []
        self._closed = False
        self.loading = False
        self.error: str | None = None

    @classmethod
    def from_settings(
        cls,
        store: FavoritesStore,
        identity: IdentityProvider,
        notifier: Notifier | None = None,
        *,
        settings: AppSettings | None = None,
    ) -> FavoritesSyncEngine:
        """Build an engine whose cooldown comes from ``FAVORITES_RATE_LIMIT_MS``."""

        resolved = settings or get_settings()
        return cls(
            store,
            identity,
            notifier,
            rate_limit_seconds=resolved.favorites_rate_limit_seconds,
        )

    # -- read side -----------------------------------------------------------------

    @property
    def favorites(self) -> tuple[FavoriteEntry, ...]:
        return tuple(self._favorites)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def gate(self) -> OperationGate:
        return self._gate

    def is_favorite(self, character_id: int) -> bool:
        return any(entry.character_id == character_id for entry in self._favorites)

    def get_favorite(self, character_id: int) -> FavoriteEntry | None:
        for entry in self._favorites:
            if entry.character_id == character_id:
                return entry
        return None

    # -- configuration -------------------------------------------------------------

    def set_notifier(self, notifier: Notifier) -> None:
        self._notifier = notifier

    def close(self) -> None:
        """Retire the engine; completions arriving afterwards change nothing."""

        self._closed = True

    def _notify(self, message: str, level: NotificationLevel) -> None:
        if self._closed:
            return
        self._notifier.notify(Notification(message=message, level=level))

    # -- synchronization -----------------------------------------------------------

    async def refetch(self) -> None:
        """Replace the local collection with the store's rows for the current user.

        Failures are recorded on :attr:`error`; the previous collection is kept.
        Nothing is written once the engine has been closed.
        """

        self.loading = True
        self.error = None
        error: str | None = None
        try:
            user_id = await self._identity.get_current_user()
            if user_id is None:
                if not self._closed:
                    self._favorites = []
                return

            rows = await self._store.list_for_user(user_id)
            if not self._closed:
                self._favorites = sorted(
                    rows, key=lambda entry: entry.created_at, reverse=True
                )
        except IdentityError as exc:
            logger.error("Identity lookup failed during refetch: %s", exc)
            error = f"Failed to get user: {exc}"
        except StoreError as exc:
            logger.error("Favorites refetch failed: %s", exc)
            error = f"Failed to fetch favorites: {exc}"
        except Exception as exc:
            logger.exception("Unexpected error while refetching favorites")
            error = str(exc) or "Failed to fetch favorites"
        finally:
            if not self._closed:
                self.error = error
                self.loading = False

    async def toggle_favorite(self, character: Character) -> FavoriteOutcome:
        """Add ``character`` when absent, remove it when present."""

        try:
            return await self._mutate(character, toggle=True)
        except Exception as exc:
            return self._report_unexpected(character, exc)

    async def remove_favorite(self, character: Character) -> FavoriteOutcome:
        """Remove ``character``; a no-op when it is not a local favorite."""

        try:
            return await self._mutate(character, toggle=False)
        except Exception as exc:
            return self._report_unexpected(character, exc)

    async def _mutate(self, character: Character, *, toggle: bool) -> FavoriteOutcome:
        character_id = character.character_id
        if not toggle and not self.is_favorite(character_id):
            return FavoriteOutcome.NOT_FAVORITE

        blocked = self._check_gate(character_id)
        if blocked is not None:
            return blocked

        self._gate.try_acquire(character_id)
        try:
            return await self._run_mutation(character, toggle=toggle)
        finally:
            self._gate.release(character_id)

    def _report_unexpected(self, character: Character, exc: Exception) -> FavoriteOutcome:
        logger.exception("Unexpected error while updating favorite %r", character.id)
        self._notify(str(exc) or UNEXPECTED_ERROR_MESSAGE, NotificationLevel.ERROR)
        return FavoriteOutcome.FAILED

    def _check_gate(self, character_id: int) -> FavoriteOutcome | None:
        if self._gate.is_in_flight(character_id):
            return FavoriteOutcome.IN_PROGRESS
        if self._gate.is_rate_limited(character_id):
            self._notify(RATE_LIMITED_MESSAGE, NotificationLevel.INFO)
            return FavoriteOutcome.RATE_LIMITED
        return None

    async def _run_mutation(self, character: Character, *, toggle: bool) -> FavoriteOutcome:
        try:
            user_id = await self._identity.get_current_user()
        except IdentityError as exc:
            logger.error("Identity lookup failed: %s", exc)
            self._notify(AUTH_FAILED_MESSAGE, NotificationLevel.ERROR)
            return FavoriteOutcome.AUTH_FAILED

        if user_id is None:
            self._notify(AUTH_REQUIRED_MESSAGE, NotificationLevel.ERROR)
            return FavoriteOutcome.AUTH_REQUIRED

        if toggle and not self.is_favorite(character.character_id):
            return await self._add(character, user_id)
        return await self._remove(character, user_id)

    async def _add(self, character: Character, user_id: str) -> FavoriteOutcome:
        snapshot = FavoriteCharacterSnapshot.from_character(character)
        try:
            entry = await self._store.insert(user_id, snapshot)
        except StoreError as exc:
            logger.error("Failed to add favorite %s: %s", snapshot.character_id, exc)
            self._notify(ADD_FAILED_MESSAGE, NotificationLevel.ERROR)
            return FavoriteOutcome.FAILED

        if entry is None:
            entry = FavoriteEntry(
                id=str(uuid.uuid4()),
                user_id=user_id,
                created_at=datetime.now(UTC),
                provisional=True,
                **snapshot.model_dump(),
            )

        if self._closed:
            return FavoriteOutcome.ADDED

        self._favorites = [entry] + [
            existing
            for existing in self._favorites
            if existing.character_id != entry.character_id
        ]
        self._notify(f"{character.name} added to favorites!", NotificationLevel.SUCCESS)
        return FavoriteOutcome.ADDED

    async def _remove(self, character: Character, user_id: str) -> FavoriteOutcome:
        character_id = character.character_id
        try:
            await self._store.delete(user_id, character_id)
        except StoreError as exc:
            logger.error("Failed to remove favorite %s: %s", character_id, exc)
            self._notify(REMOVE_FAILED_MESSAGE, NotificationLevel.ERROR)
            return FavoriteOutcome.FAILED

        if self._closed:
            return FavoriteOutcome.REMOVED

        self._favorites = [
            entry for entry in self._favorites if entry.character_id != character_id
        ]
        self._notify(f"{character.name} removed from favorites", NotificationLevel.INFO)
        return FavoriteOutcome.REMOVED


__all__ = ["FavoriteOutcome", "FavoritesSyncEngine"]
