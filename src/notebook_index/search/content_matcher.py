"""Content matching: how well a query matches a note body.

Three independent strategies, each returning an optional ``ContentMatch``:

- wiki-link: the title matcher run against every ``[[Title]]`` in the body,
  best occurrence plus 40; the snippet is the bracketed link itself
- substring: first case-insensitive occurrence of the whole query,
  ``max(40, 180 - 0.5 * index)``
- tokens: every distinct query term somewhere in the body, in any order,
  ``max(30, 130 - 0.4 * earliest + 8 * term_count)``
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from notebook_index.search.analyzers import extract_query_terms, fold_case, iter_link_titles
from notebook_index.search.ranges import TextRange
from notebook_index.search.snippet import DEFAULT_RADIUS, extract_snippet
from notebook_index.search.title_matcher import MatchOptions, evaluate_title_match


WIKI_LINK_BONUS = 40.0
WIKI_LINK_FUZZY_MIN_LENGTH = 4
LINK_OPEN = "[["
LINK_CLOSE = "]]"

SUBSTRING_BASE_SCORE = 180.0
SUBSTRING_INDEX_PENALTY = 0.5
SUBSTRING_MIN_SCORE = 40.0

TOKEN_BASE_SCORE = 130.0
TOKEN_INDEX_PENALTY = 0.4
TOKEN_TERM_BONUS = 8.0
TOKEN_MIN_SCORE = 30.0


@dataclass(frozen=True)
class ContentMatch:
    snippet: str
    ranges: tuple[TextRange, ...]
    score: float


def find_wiki_link_match(content: str, query: str) -> ContentMatch | None:
    """Best-matching ``[[Title]]`` occurrence in ``content`` for ``query``."""
    if not content or not query:
        return None
    normalized = query.strip().lower()
    if not normalized:
        return None

    terms = extract_query_terms(query)
    options = MatchOptions(
        allow_loose_substring=True,
        allow_fuzzy=len(normalized) >= WIKI_LINK_FUZZY_MIN_LENGTH,
        require_boundary=len(terms) > 1,
    )

    best: ContentMatch | None = None
    for title in iter_link_titles(content):
        evaluation = evaluate_title_match(title, normalized, terms, options)
        if evaluation is None:
            continue
        score = evaluation.score + WIKI_LINK_BONUS
        if best is None or score > best.score:
            shift = len(LINK_OPEN)
            best = ContentMatch(
                snippet=f"{LINK_OPEN}{title}{LINK_CLOSE}",
                ranges=tuple(item.shifted(shift) for item in evaluation.ranges),
                score=score,
            )
    return best


def find_substring_match(
    content: str,
    normalized_query: str,
    radius: int = DEFAULT_RADIUS,
) -> ContentMatch | None:
    """First case-insensitive occurrence of the full query in ``content``."""
    if not content or not normalized_query:
        return None
    index = fold_case(content).find(normalized_query)
    if index == -1:
        return None

    snippet = extract_snippet(content, range(index, index + len(normalized_query)), radius)
    score = max(SUBSTRING_MIN_SCORE, SUBSTRING_BASE_SCORE - index * SUBSTRING_INDEX_PENALTY)
    return ContentMatch(snippet=snippet.text, ranges=snippet.ranges, score=score)


def find_token_match(
    content: str,
    terms: Sequence[str],
    radius: int = DEFAULT_RADIUS,
) -> ContentMatch | None:
    """Every distinct term must occur somewhere in ``content``; order is irrelevant."""
    if not content or not terms:
        return None

    lowered = fold_case(content)
    unique_terms = list(dict.fromkeys(term for term in terms if term))
    if not unique_terms:
        return None

    positions: list[int] = []
    earliest: int | None = None
    for term in unique_terms:
        index = lowered.find(term)
        if index == -1:
            return None
        if earliest is None or index < earliest:
            earliest = index
        positions.extend(range(index, index + len(term)))

    snippet = extract_snippet(content, positions, radius)
    score = max(
        TOKEN_MIN_SCORE,
        TOKEN_BASE_SCORE - (earliest or 0) * TOKEN_INDEX_PENALTY + len(unique_terms) * TOKEN_TERM_BONUS,
    )
    return ContentMatch(snippet=snippet.text, ranges=snippet.ranges, score=score)
