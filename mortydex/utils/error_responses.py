"""Builders for the structured error payloads returned by every route.

Each exception handler in :mod:`mortydex.main` goes through these helpers so
the request ID and timestamp are attached in one place.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from mortydex.schemas.error import (
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from mortydex.utils.request_context import get_request_id

__all__ = [
    "build_error_response",
    "build_validation_error_response",
]


def _current_timestamp() -> datetime:
    """Return the timestamp stamped onto error payloads (patched in tests)."""

    return datetime.now(UTC)


def build_validation_error_response(
    *,
    errors: Sequence[ValidationErrorDetail],
    message: str,
    detail: str | None,
    status_code: int,
    path: str,
    request_id: str | None = None,
) -> ValidationErrorResponse:
    """Wrap field-level failures such as bad filter values or an invalid page."""

    return ValidationErrorResponse(
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=request_id or get_request_id() or None,
        path=path,
        errors=list(errors),
    )


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    detail: str | None,
    status_code: int,
    path: str,
    retry_after: int | None = None,
    request_id: str | None = None,
) -> ErrorResponse:
    """Build a non-validation error payload.

    ``retry_after`` is only set for failures the caller may reasonably retry,
    such as an unavailable favorites store.
    """

    return ErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=request_id or get_request_id() or None,
        path=path,
        retry_after=retry_after,
    )
