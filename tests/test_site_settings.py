"""Tests for the settings record and its merge rules."""

from datetime import date

import pytest

from love_days.domain.settings import (
    DEFAULT_SETTINGS,
    merge_settings,
    settings_from_document,
    settings_to_document,
)
from love_days.errors import ValidationError


def test_missing_keys_fall_back_to_defaults() -> None:
    settings = settings_from_document({"coupleName": "A & B", "unknownKey": 1})

    assert settings.couple_name == "A & B"
    assert settings.anniversary_date == DEFAULT_SETTINGS.anniversary_date
    assert settings.enable_parallax is True


def test_document_uses_camel_case_keys() -> None:
    doc = settings_to_document(DEFAULT_SETTINGS)

    assert doc["anniversaryDate"] == "2024-12-04"
    assert doc["gradientColor1"] == "#FF6B9D"
    assert doc["avatar2Url"] == ""
    assert settings_from_document(doc) == DEFAULT_SETTINGS


def test_merge_parses_dates_and_keeps_other_fields() -> None:
    merged = merge_settings(DEFAULT_SETTINGS, {"anniversary_date": "2023-05-06"})

    assert merged.anniversary_date == date(2023, 5, 6)
    assert merged.couple_name == DEFAULT_SETTINGS.couple_name


@pytest.mark.parametrize(
    "changes",
    [
        {"not_a_field": 1},
        {"anniversary_date": "yesterday"},
        {"background_type": "video"},
    ],
)
def test_merge_rejects_invalid_changes(changes: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        merge_settings(DEFAULT_SETTINGS, changes)
