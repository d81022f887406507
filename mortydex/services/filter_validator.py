"""Validation and sanitization of untrusted directory filters.

The validator is a pure function: it never raises for bad input and never
touches the network. Callers receive the complete list of field errors in one
pass so that a form can highlight every offending input at once.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from mortydex.schemas.character import (
    ALLOWED_GENDER_VALUES,
    ALLOWED_SPECIES_VALUES,
    ALLOWED_STATUS_VALUES,
    MAX_TEXT_FILTER_LENGTH,
    FilterCriteria,
)
from mortydex.schemas.error import ValidationErrorDetail

_STRIPPED_CHARACTERS = str.maketrans("", "", "<>")

# (key, label used in messages, allowed values or None for free text), in the
# order errors are reported.
_FIELDS: tuple[tuple[str, str, tuple[str, ...] | None], ...] = (
    ("name", "Name", None),
    ("status", "Status", ALLOWED_STATUS_VALUES),
    ("species", "Species", ALLOWED_SPECIES_VALUES),
    ("gender", "Gender", ALLOWED_GENDER_VALUES),
    ("type", "Type", None),
)


@dataclass(frozen=True)
class FilterValidationResult:
    """Outcome of :func:`validate_filter`."""

    sanitized: FilterCriteria | None
    errors: list[ValidationErrorDetail] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def sanitize_text(value: str) -> str:
    """Trim ``value`` and strip angle brackets."""

    return value.strip().translate(_STRIPPED_CHARACTERS).strip()


def _validate_text_field(
    key: str,
    label: str,
    value: Any,
    errors: list[ValidationErrorDetail],
) -> str | None:
    field_name = f"filter.{key}"
    if not isinstance(value, str):
        errors.append(
            ValidationErrorDetail(
                field=field_name, message=f"{label} must be a string", value=value
            )
        )
        return None
    if len(value) > MAX_TEXT_FILTER_LENGTH:
        errors.append(
            ValidationErrorDetail(
                field=field_name,
                message=f"{label} must be at most {MAX_TEXT_FILTER_LENGTH} characters",
                value=value,
            )
        )
        return None
    return sanitize_text(value) or None


def _validate_choice_field(
    key: str,
    label: str,
    allowed: tuple[str, ...],
    value: Any,
    errors: list[ValidationErrorDetail],
) -> str | None:
    field_name = f"filter.{key}"
    if not isinstance(value, str):
        errors.append(
            ValidationErrorDetail(
                field=field_name, message=f"{label} must be a string", value=value
            )
        )
        return None
    if not value:
        return None
    if value not in allowed:
        errors.append(
            ValidationErrorDetail(
                field=field_name,
                message=f"{label} must be one of: {', '.join(allowed)}",
                value=value,
            )
        )
        return None
    return value


def validate_filter(raw_filter: Any) -> FilterValidationResult:
    """Validate ``raw_filter`` and return the sanitized criteria plus any errors.

    * ``None`` means "no filter" and is always valid.
    * Anything other than a mapping yields a single structural error.
    * Unknown keys are ignored; ``None`` values count as absent.
    * A filter whose every field is empty after sanitization collapses to
      ``None`` so that the upstream never receives an empty filter object.
    """

    if raw_filter is None:
        return FilterValidationResult(sanitized=None)

    if not isinstance(raw_filter, Mapping):
        return FilterValidationResult(
            sanitized=None,
            errors=[
                ValidationErrorDetail(
                    field="filter", message="Filter must be an object", value=raw_filter
                )
            ],
        )

    errors: list[ValidationErrorDetail] = []
    cleaned: dict[str, str] = {}

    for key, label, allowed in _FIELDS:
        value = raw_filter.get(key)
        if value is None:
            continue
        if allowed is None:
            accepted = _validate_text_field(key, label, value, errors)
        else:
            accepted = _validate_choice_field(key, label, allowed, value, errors)
        if accepted:
            cleaned[key] = accepted

    return FilterValidationResult(
        sanitized=FilterCriteria(**cleaned) if cleaned else None,
        errors=errors,
    )


__all__ = ["FilterValidationResult", "sanitize_text", "validate_filter"]
