"""Session-side favorites synchronization."""

from mortydex.client.identity import IdentityProvider, StaticIdentityProvider
from mortydex.client.notifications import (
    CollectingNotifier,
    LoggingNotifier,
    Notification,
    NotificationLevel,
    Notifier,
)
from mortydex.client.operation_gate import OperationGate
from mortydex.client.sync_engine import FavoriteOutcome, FavoritesSyncEngine

__all__ = [
    "CollectingNotifier",
    "FavoriteOutcome",
    "FavoritesSyncEngine",
    "IdentityProvider",
    "LoggingNotifier",
    "Notification",
    "NotificationLevel",
    "Notifier",
    "OperationGate",
    "StaticIdentityProvider",
]
