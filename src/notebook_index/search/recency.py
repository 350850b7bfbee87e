"""Recency weighting and weak-query detection.

Missing or unparseable timestamps never raise: they simply carry no recency
signal. Naive datetimes are read as UTC.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from notebook_index.domain.model import Note
from notebook_index.search.analyzers import STOPWORDS


MAX_RECENCY_BOOST = 35.0
RECENCY_WINDOW_DAYS = 90.0
WEAK_QUERY_MIN_LENGTH = 2
WEAK_STOPWORD_MAX_LENGTH = 5

_SECONDS_PER_DAY = 60 * 60 * 24
_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    """Coerce a stored timestamp into an aware UTC datetime, or ``None``."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # offset pushes the instant outside years 1..9999
        return None


def updated_at(note: Note) -> datetime | None:
    metadata = note.metadata
    if metadata is None:
        return None
    return parse_timestamp(metadata.updated_at)


def recency_boost(
    note: Note,
    now: datetime | None = None,
    *,
    max_boost: float = MAX_RECENCY_BOOST,
    window_days: float = RECENCY_WINDOW_DAYS,
) -> float:
    """Bonus for recently edited notes.

    ``max_boost`` for notes updated now or in the future (clock skew is
    tolerated), decaying linearly to 0 at ``window_days``, and 0 after that
    or when the note has no valid update timestamp.
    """
    updated = updated_at(note)
    if updated is None:
        return 0.0

    reference = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    age_days = (reference - updated).total_seconds() / _SECONDS_PER_DAY
    if age_days <= 0:
        return max_boost
    if window_days <= 0 or age_days >= window_days:
        return 0.0
    return max(0.0, max_boost * (1 - age_days / window_days))


def is_weak_query(query: str | None) -> bool:
    """True for queries too unspecific to search productively.

    Examples:
        >>> is_weak_query("a")
        True
        >>> is_weak_query("with")
        True
        >>> is_weak_query("garden")
        False
    """
    normalized = (query or "").strip().lower()
    if len(normalized) < WEAK_QUERY_MIN_LENGTH:
        return True
    return normalized in STOPWORDS and len(normalized) <= WEAK_STOPWORD_MAX_LENGTH


def most_recent(notes: Iterable[Note], limit: int) -> list[Note]:
    """Notes ordered by last update, newest first; undated notes sort last."""
    if limit <= 0:
        return []
    ordered = sorted(notes, key=lambda note: updated_at(note) or _EPOCH, reverse=True)
    return ordered[:limit]
