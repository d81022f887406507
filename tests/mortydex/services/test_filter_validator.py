"""Unit tests for directory filter sanitization and validation."""

from __future__ import annotations

import pytest

from mortydex.schemas.character import FilterCriteria
from mortydex.services.filter_validator import sanitize_text, validate_filter


def test_none_filter_is_valid_and_empty() -> None:
    result = validate_filter(None)

    assert result.is_valid
    assert result.sanitized is None


def test_angle_brackets_are_stripped_from_name() -> None:
    """Markup characters are removed while the allowed status passes through."""

    result = validate_filter({"name": "<script>rick", "status": "Alive"})

    assert result.is_valid
    assert result.sanitized == FilterCriteria(name="scriptrick", status="Alive")


def test_text_fields_are_trimmed() -> None:
    result = validate_filter({"name": "  Morty  ", "type": " Parasite "})

    assert result.sanitized == FilterCriteria(name="Morty", type="Parasite")


def test_sanitization_is_idempotent() -> None:
    first = validate_filter({"name": " <b>Summer</b> ", "gender": "Female"})
    assert first.sanitized is not None

    second = validate_filter(first.sanitized.to_variables())

    assert second.sanitized == first.sanitized
    assert sanitize_text(sanitize_text(" <<x>> ")) == sanitize_text(" <<x>> ")


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"name": ""},
        {"name": "   "},
        {"name": "<>"},
        {"status": ""},
        {"name": None, "species": None},
    ],
)
def test_effectively_empty_filter_collapses_to_none(raw: dict[str, object]) -> None:
    result = validate_filter(raw)

    assert result.is_valid
    assert result.sanitized is None


def test_disallowed_status_is_reported_on_its_field() -> None:
    result = validate_filter({"status": "Martian"})

    assert not result.is_valid
    assert [error.field for error in result.errors] == ["filter.status"]
    assert result.errors[0].value == "Martian"
    assert "Alive, Dead, unknown" in result.errors[0].message


def test_one_error_per_invalid_field_in_declaration_order() -> None:
    result = validate_filter(
        {"gender": "Robot", "species": "Gazorpazorpian", "status": "Sleeping"}
    )

    assert [error.field for error in result.errors] == [
        "filter.status",
        "filter.species",
        "filter.gender",
    ]


def test_allowed_values_are_case_sensitive() -> None:
    result = validate_filter({"status": "alive"})

    assert [error.field for error in result.errors] == ["filter.status"]


def test_overlong_name_is_rejected() -> None:
    result = validate_filter({"name": "r" * 101})

    assert [error.field for error in result.errors] == ["filter.name"]
    assert result.errors[0].message == "Name must be at most 100 characters"


def test_name_at_length_limit_is_accepted() -> None:
    result = validate_filter({"name": "r" * 100})

    assert result.is_valid
    assert result.sanitized == FilterCriteria(name="r" * 100)


def test_non_string_values_are_rejected() -> None:
    result = validate_filter({"name": 42, "species": ["Human"]})

    assert [(error.field, error.message) for error in result.errors] == [
        ("filter.name", "Name must be a string"),
        ("filter.species", "Species must be a string"),
    ]


def test_non_mapping_filter_is_a_structural_error() -> None:
    result = validate_filter(["Rick"])

    assert [error.field for error in result.errors] == ["filter"]
    assert result.sanitized is None


def test_unknown_keys_are_ignored() -> None:
    result = validate_filter({"dimension": "C-137", "species": "Human"})

    assert result.is_valid
    assert result.sanitized == FilterCriteria(species="Human")


def test_valid_fields_survive_alongside_invalid_ones() -> None:
    result = validate_filter({"name": "Rick", "status": "Martian"})

    assert [error.field for error in result.errors] == ["filter.status"]
    assert result.sanitized == FilterCriteria(name="Rick")


def test_to_variables_omits_absent_fields() -> None:
    criteria = FilterCriteria(name="Rick", gender="Male")

    assert criteria.to_variables() == {"name": "Rick", "gender": "Male"}
