"""Per-character in-flight tracking with a cooldown window."""

from __future__ import annotations

import time
from collections.abc import Callable

DEFAULT_WINDOW_SECONDS = 1.0


class OperationGate:
    """Serialize mutations per character and throttle rapid repeats.

    The cooldown is measured from the moment a mutation *starts*, so a slow
    remote call does not extend the window. State lives for as long as the
    owning engine; there is no expiry sweep because a session touches a
    bounded number of characters.
    """

    def __init__(
        self,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if window_seconds < 0:
            raise ValueError("window_seconds must be non-negative")
        self._window = window_seconds
        self._clock = clock
        self._in_flight: set[int] = set()
        self._last_started_at: dict[int, float] = {}

    @property
    def window_seconds(self) -> float:
        return self._window

    def is_in_flight(self, character_id: int) -> bool:
        return character_id in self._in_flight

    def is_rate_limited(self, character_id: int) -> bool:
        started = self._last_started_at.get(character_id)
        if started is None:
            return False
        return self._clock() - started < self._window

    def try_acquire(self, character_id: int) -> bool:
        """Mark ``character_id`` in flight and start its cooldown.

        Returns ``False`` without side effects when an operation for the same
        character is already running. Callers check :meth:`is_rate_limited`
        first; acquisition itself does not consult the cooldown.
        """

        if character_id in self._in_flight:
            return False
        self._in_flight.add(character_id)
        self._last_started_at[character_id] = self._clock()
        return True

    def release(self, character_id: int) -> None:
        self._in_flight.discard(character_id)


__all__ = ["DEFAULT_WINDOW_SECONDS", "OperationGate"]
