"""Request-scoped identifier used to correlate log lines with error payloads."""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar, Token

__all__ = [
    "REQUEST_ID_CONTEXT",
    "REQUEST_ID_HEADER",
    "clear_request_id",
    "get_request_id",
    "resolve_request_id",
    "set_request_id",
]

REQUEST_ID_HEADER = "X-Request-ID"

# Caller-supplied IDs are echoed back in headers and logs, so only a
# conservative alphabet is accepted.
_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._\-]{1,64}$")

REQUEST_ID_CONTEXT: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(incoming: str | None) -> str:
    """Reuse a well-formed incoming ID, otherwise mint a fresh UUID4."""

    if incoming and _SAFE_REQUEST_ID.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


def set_request_id(request_id: str) -> Token[str]:
    """Store ``request_id`` for the current task and return the reset token."""

    return REQUEST_ID_CONTEXT.set(request_id)


def get_request_id() -> str:
    return REQUEST_ID_CONTEXT.get()


def clear_request_id(token: Token[str] | None = None) -> None:
    """Restore the previous value via ``token``, or blank the ID outright."""

    if token is not None:
        REQUEST_ID_CONTEXT.reset(token)
    else:
        REQUEST_ID_CONTEXT.set("")
