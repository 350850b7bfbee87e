"""Unit tests for recency weighting and weak-query detection."""

from datetime import datetime, timedelta, timezone

import pytest

from notebook_index.domain.model import Note, NoteMetadata
from notebook_index.search.recency import is_weak_query, most_recent, parse_timestamp, recency_boost


pytestmark = pytest.mark.unit


def test_parse_timestamp_reads_naive_datetimes_as_utc():
    parsed = parse_timestamp(datetime(2026, 10, 19, 12, 0))

    assert parsed == datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def test_parse_timestamp_accepts_iso_strings():
    assert parse_timestamp("2026-10-19T14:05:00Z") == datetime(2026, 10, 19, 14, 5, tzinfo=timezone.utc)
    assert parse_timestamp("2026-10-19T16:05:00+02:00") == datetime(2026, 10, 19, 14, 5, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "value",
    [None, "", "   ", "yesterday", 12345, "0001-01-01T00:00:00+05:00", "9999-12-31T23:59:59-05:00"],
)
def test_parse_timestamp_invalid_values(value):
    assert parse_timestamp(value) is None


@pytest.mark.parametrize(
    ("age_days", "expected"),
    [
        (0, 35.0),
        (-2, 35.0),
        (45, 17.5),
        (90, 0.0),
        (120, 0.0),
    ],
)
def test_recency_boost_decays_linearly(make_note, now, age_days, expected):
    note = make_note("a", "A", age_days=age_days)

    assert recency_boost(note, now) == pytest.approx(expected)


def test_recency_boost_without_timestamp(make_note, now):
    assert recency_boost(make_note("a", "A", age_days=None), now) == 0.0


def test_recency_boost_with_malformed_timestamp(now):
    note = Note(id="a", metadata=NoteMetadata(updated_at="not a date"))

    assert recency_boost(note, now) == 0.0


def test_recency_boost_with_timestamp_outside_utc_range(now):
    note = Note(id="a", metadata=NoteMetadata(updated_at="0001-01-01T00:00:00+05:00"))

    assert recency_boost(note, now) == 0.0
    assert most_recent([note], 1) == [note]


def test_recency_boost_custom_scale(make_note, now):
    note = make_note("a", "A", age_days=5)

    assert recency_boost(note, now, max_boost=10.0, window_days=10.0) == pytest.approx(5.0)


@pytest.mark.parametrize(
    ("query", "weak"),
    [
        ("", True),
        ("a", True),
        ("  A ", True),
        ("with", True),
        ("which", True),
        ("because", False),
        ("garden", False),
        ("pr", False),
    ],
)
def test_is_weak_query(query, weak):
    assert is_weak_query(query) is weak


def test_most_recent_orders_newest_first_and_undated_last(make_note):
    old = make_note("old", "Old", age_days=10)
    new = make_note("new", "New", age_days=1)
    undated = make_note("undated", "Undated", age_days=None)

    assert [note.id for note in most_recent([undated, old, new], 5)] == ["new", "old", "undated"]
    assert [note.id for note in most_recent([undated, old, new], 1)] == ["new"]
    assert most_recent([old, new], 0) == []


def test_most_recent_handles_mixed_timestamp_types(now):
    as_string = Note(id="s", metadata=NoteMetadata(updated_at=(now - timedelta(days=1)).isoformat()))
    as_datetime = Note(id="d", metadata=NoteMetadata(updated_at=now))

    assert [note.id for note in most_recent([as_string, as_datetime], 2)] == ["d", "s"]
