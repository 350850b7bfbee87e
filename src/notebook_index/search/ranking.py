"""Search ranking across all notes.

For each note the title match (plus a flat bonus) competes with the content
strategies; the note keeps whichever scored highest. Content strategies are
evaluated after the title and win ties, so a body hit that scores exactly as
well as the title shows the body snippet.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging

from notebook_index.domain.model import Note
from notebook_index.search.analyzers import extract_query_terms
from notebook_index.search.content_matcher import find_substring_match, find_token_match, find_wiki_link_match
from notebook_index.search.ranges import TextRange
from notebook_index.search.snippet import DEFAULT_RADIUS
from notebook_index.search.title_matcher import MatchOptions, evaluate_title_match


logger = logging.getLogger(__name__)

TITLE_MATCH_BONUS = 60.0
TITLE_FUZZY_MIN_LENGTH = 3
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class RankedNote:
    note: Note
    score: float
    snippet: str
    ranges: tuple[TextRange, ...]
    source: str


def score_note(
    note: Note,
    query: str,
    normalized_query: str,
    query_terms: list[str],
    *,
    title_only: bool = False,
    snippet_radius: int = DEFAULT_RADIUS,
) -> RankedNote | None:
    """Best match for one note, or ``None`` when nothing scored above zero."""
    best: RankedNote | None = None

    title_options = MatchOptions(
        allow_loose_substring=True,
        allow_fuzzy=len(normalized_query) >= TITLE_FUZZY_MIN_LENGTH,
        require_boundary=False,
    )
    title_match = evaluate_title_match(note.title, normalized_query, query_terms, title_options)
    if title_match is not None:
        best = RankedNote(
            note=note,
            score=title_match.score + TITLE_MATCH_BONUS,
            snippet=note.title,
            ranges=title_match.ranges,
            source="title",
        )
    elif title_only:
        return None

    if not title_only:
        content = note.content or ""
        candidates = [("wiki_link", find_wiki_link_match(content, query))]
        candidates.append(("substring", find_substring_match(content, normalized_query, snippet_radius)))
        if len(query_terms) > 1:
            candidates.append(("tokens", find_token_match(content, query_terms, snippet_radius)))

        for source, match in candidates:
            if match is None:
                continue
            if best is None or match.score >= best.score:
                best = RankedNote(note=note, score=match.score, snippet=match.snippet, ranges=match.ranges, source=source)

    if best is None or best.score <= 0:
        return None
    return best


def rank_notes(
    notes: Iterable[Note],
    query: str,
    *,
    limit: int = DEFAULT_LIMIT,
    title_only: bool = False,
    snippet_radius: int = DEFAULT_RADIUS,
) -> list[RankedNote]:
    """Rank ``notes`` against ``query``.

    Args:
        notes: Note snapshot in collection order; ties keep this order.
        query: Raw user query. Empty or whitespace-only yields no results.
        limit: Maximum number of results.
        title_only: Ignore note bodies.
        snippet_radius: Context characters around body matches.

    Returns:
        Ranked notes, best first.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    trimmed = (query or "").strip()
    if not trimmed:
        return []

    normalized_query = trimmed.lower()
    query_terms = extract_query_terms(trimmed)

    results: list[RankedNote] = []
    for note in notes:
        ranked = score_note(
            note,
            trimmed,
            normalized_query,
            query_terms,
            title_only=title_only,
            snippet_radius=snippet_radius,
        )
        if ranked is not None:
            results.append(ranked)

    results.sort(key=lambda item: item.score, reverse=True)
    logger.debug("Ranked %d matching notes for query %r (limit=%d)", len(results), trimmed, limit)
    return results[:limit]
