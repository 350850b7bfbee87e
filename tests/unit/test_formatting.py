"""Unit tests for display formatting helpers."""

from datetime import datetime, timezone

import pytest

from notebook_index.utils.formatting import format_date_short, format_similarity_summary, format_updated


pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (datetime(2026, 3, 5, 9, 7, tzinfo=timezone.utc), "Mar 5 09:07"),
        ("2026-10-19T14:05:00", "Oct 19 14:05"),
        ("2026-10-19T16:05:00+02:00", "Oct 19 14:05"),
        (None, "—"),
        ("garbage", "—"),
        ("9999-12-31T23:59:59-05:00", "—"),
    ],
)
def test_format_date_short(value, expected):
    assert format_date_short(value) == expected


def test_format_updated(make_note):
    assert format_updated(make_note("a", "A")) == "Updated Oct 19 14:05"
    assert format_updated(make_note("b", "B", age_days=None)) == "Updated —"


def test_summary_truncates_links_and_words(make_note):
    note = make_note("a", "A")

    summary = format_similarity_summary(["garden", "spring", "basil", "tomato"], ["Seeds", "Compost", "Tools"], note)

    assert summary == "Links: [[Seeds]], [[Compost]] · Words: garden, spring, basil"


def test_summary_with_only_words(make_note):
    assert format_similarity_summary(["garden"], [], make_note("a", "A")) == "Words: garden"


def test_summary_falls_back_to_update_date(make_note):
    assert format_similarity_summary([], [], make_note("a", "A")) == "Updated Oct 19 14:05"
