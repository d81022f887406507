"""User-facing notices emitted by the favorites engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Notification:
    message: str
    level: NotificationLevel


class Notifier(Protocol):
    """Sink for transient notices (toasts in a UI, log lines in a CLI)."""

    def notify(self, notification: Notification) -> None:
        ...


class LoggingNotifier:
    """Default notifier: errors at ``warning``, everything else at ``info``."""

    def notify(self, notification: Notification) -> None:
        level = (
            logging.WARNING
            if notification.level is NotificationLevel.ERROR
            else logging.INFO
        )
        logger.log(level, "[%s] %s", notification.level.value, notification.message)


class CollectingNotifier:
    """Keeps every notice in memory, newest last."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def messages(self) -> list[str]:
        return [notification.message for notification in self.notifications]

    def clear(self) -> None:
        self.notifications.clear()


__all__ = [
    "CollectingNotifier",
    "LoggingNotifier",
    "Notification",
    "NotificationLevel",
    "Notifier",
]
