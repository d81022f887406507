"""Domain exceptions raised by the gateway, favorites stores, and identity lookups.

API routers never catch these directly; :mod:`mortydex.main` registers
exception handlers that translate them into structured error payloads.
"""

from __future__ import annotations

from collections.abc import Sequence

from mortydex.schemas.error import ValidationErrorDetail


class GatewayError(Exception):
    """Base class for failures surfaced by the character query gateway."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidPage(GatewayError):
    """The requested page is not a positive integer within the page ceiling."""

    def __init__(self, message: str, *, value: object = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidFilter(GatewayError):
    """One or more filter fields failed validation."""

    def __init__(self, errors: Sequence[ValidationErrorDetail]) -> None:
        super().__init__("Invalid filter parameters")
        self.errors = list(errors)


class UpstreamError(GatewayError):
    """The directory data source failed or rejected the query."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StoreError(Exception):
    """A favorites store read, insert, or delete failed."""


class IdentityError(Exception):
    """The identity provider could not resolve the current user."""


__all__ = [
    "GatewayError",
    "IdentityError",
    "InvalidFilter",
    "InvalidPage",
    "StoreError",
    "UpstreamError",
]
