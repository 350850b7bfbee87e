"""Display strings for suggestion subtitles and similar-note summaries."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from notebook_index.domain.model import Note
from notebook_index.search.recency import parse_timestamp


MISSING_DATE = "—"
SUMMARY_SEPARATOR = " · "


def format_date_short(value: datetime | str | None) -> str:
    """Compact "Oct 19 14:05" rendering (UTC); "—" when missing or invalid."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return MISSING_DATE
    return f"{parsed:%b} {parsed.day} {parsed:%H:%M}"


def format_updated(note: Note) -> str:
    return f"Updated {format_date_short(note.metadata.updated_at)}"


def format_similarity_summary(tokens: Sequence[str], links: Sequence[str], note: Note) -> str:
    """Why two notes are related, e.g. "Links: [[Budget]] · Words: garden, spring".

    Shows at most two links and three words; falls back to the candidate's
    update date when neither is available.
    """
    parts: list[str] = []
    if links:
        formatted = ", ".join(f"[[{link}]]" for link in links[:2])
        parts.append(f"Links: {formatted}")
    if tokens:
        parts.append(f"Words: {', '.join(tokens[:3])}")
    if not parts:
        parts.append(format_updated(note))
    return SUMMARY_SEPARATOR.join(parts)
