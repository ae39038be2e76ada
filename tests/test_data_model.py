# tests/test_data_model.py

from __future__ import annotations

import datetime

import pytest

from study_tracker.data_model import Task, parse_bool, parse_iso_date


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2024-03-05", datetime.date(2024, 3, 5)),
        ("2024-3-5", None),
        ("20240305", None),
        ("2024-02-30", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_iso_date_accepts_only_canonical_dates(text, expected) -> None:
    assert parse_iso_date(text) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, True), (False, False), ("false", False), ("FALSE", False), ("0", False),
     ("true", True), ("yes", True)],
)
def test_parse_bool(value, expected: bool) -> None:
    assert parse_bool(value) is expected


@pytest.mark.parametrize("value", ["maybe", None, 2])
def test_parse_bool_rejects_other_values(value) -> None:
    with pytest.raises(ValueError):
        parse_bool(value)


def test_from_dict_rejects_missing_id() -> None:
    with pytest.raises(ValueError):
        Task.from_dict({"name": "Quiz", "category": "Exam", "date": "2024-03-01", "priority": "Low"})
