"""Link autocomplete while typing a ``[[`` marker.

The trigger helpers work on plain text and a character offset; mapping a
visual caret to that offset is the editor's job.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from notebook_index.domain.model import Note
from notebook_index.domain.search import LinkTrigger
from notebook_index.search.analyzers import extract_query_terms
from notebook_index.search.ranges import TextRange
from notebook_index.search.recency import MAX_RECENCY_BOOST, RECENCY_WINDOW_DAYS, most_recent, recency_boost
from notebook_index.search.title_matcher import MatchOptions, evaluate_title_match


LINK_OPEN = "[["
LINK_CLOSE = "]]"
DEFAULT_SUGGESTION_LIMIT = 6
DEFAULT_RECENT_LIMIT = 5
SUGGESTION_FUZZY_MIN_LENGTH = 3


@dataclass(frozen=True)
class SuggestionCandidate:
    """A ranked autocomplete candidate; ``note`` is ``None`` for the create entry."""

    title: str
    note: Note | None
    score: float = 0.0
    ranges: tuple[TextRange, ...] = field(default_factory=tuple)

    @property
    def kind(self) -> str:
        return "note" if self.note is not None else "create"


def compute_link_trigger(text: str, cursor: int) -> LinkTrigger | None:
    """Find an open ``[[`` before ``cursor`` that the user is still typing into.

    Returns ``None`` when there is no ``[[`` before the cursor, or when a
    ``]]``, another ``[[`` or a newline sits between it and the cursor.
    """
    if not text or cursor <= 0:
        return None
    cursor = min(cursor, len(text))
    open_index = text.rfind(LINK_OPEN, 0, cursor)
    if open_index == -1:
        return None
    typed = text[open_index + len(LINK_OPEN) : cursor]
    if LINK_CLOSE in typed or LINK_OPEN in typed or "\n" in typed:
        return None
    return LinkTrigger(start=open_index, cursor=cursor, query=typed)


def apply_link_suggestion(text: str, trigger: LinkTrigger, title: str) -> tuple[str, int]:
    """Replace the trigger span with ``[[title]]``; returns new text and cursor."""
    before = text[: trigger.start]
    after = text[trigger.cursor :]
    replacement = f"{LINK_OPEN}{title}{LINK_CLOSE}"
    return f"{before}{replacement}{after}", len(before) + len(replacement)


def build_link_suggestions(
    query: str,
    notes: Sequence[Note],
    *,
    now: datetime | None = None,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
    max_boost: float = MAX_RECENCY_BOOST,
    window_days: float = RECENCY_WINDOW_DAYS,
) -> list[SuggestionCandidate]:
    """Rank link targets for the text typed after ``[[``.

    An empty query lists the most recently updated notes. Otherwise every
    titled note is title-matched, boosted by recency, and the best ``limit``
    are kept; a "create" candidate is appended unless some note title matched
    the query exactly.
    """
    trimmed = (query or "").strip()
    titled = [note for note in notes if note.title and note.title.strip()]

    if not trimmed:
        return [SuggestionCandidate(title=note.title.strip(), note=note) for note in most_recent(titled, recent_limit)]

    normalized = trimmed.lower()
    terms = extract_query_terms(trimmed)
    options = MatchOptions(
        allow_loose_substring=True,
        allow_fuzzy=len(normalized) >= SUGGESTION_FUZZY_MIN_LENGTH,
        require_boundary=len(terms) > 1,
    )

    has_exact = False
    candidates: list[SuggestionCandidate] = []
    for note in titled:
        title = note.title.strip()
        match = evaluate_title_match(title, normalized, terms, options)
        if match is None:
            continue
        has_exact = has_exact or match.exact
        boost = recency_boost(note, now, max_boost=max_boost, window_days=window_days)
        candidates.append(SuggestionCandidate(title=title, note=note, score=match.score + boost, ranges=match.ranges))

    candidates.sort(key=lambda candidate: candidate.score, reverse=True)
    suggestions = candidates[:limit]
    if not has_exact:
        suggestions.append(SuggestionCandidate(title=trimmed, note=None))
    return suggestions
