"""Title matching: how well one query matches one title.

Every strategy below is an independent pure function returning an optional
``TitleMatch``. ``evaluate_title_match`` runs all enabled strategies and
keeps the highest score; it is a max, not a first-match, so adding a
strategy never changes how the others are computed.

Score ladder (before any caller bonus):

=================  ==========================================
exact              620
word boundary      460 - 1.5 * index
loose substring    320 - index
multi-term         mean(240 - 1.2 * index + 40 * boundary) + 80
fuzzy subsequence  180 + fuzzy score (see ``search.fuzzy``)
=================  ==========================================
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from notebook_index.search.analyzers import find_word_boundary_index, fold_case, is_word_boundary
from notebook_index.search.fuzzy import fuzzy_subsequence_match
from notebook_index.search.ranges import TextRange, compress_ranges, ranges_from_positions


EXACT_SCORE = 620.0
BOUNDARY_BASE_SCORE = 460.0
BOUNDARY_INDEX_PENALTY = 1.5
SUBSTRING_BASE_SCORE = 320.0
MULTI_TERM_BASE_SCORE = 240.0
MULTI_TERM_INDEX_PENALTY = 1.2
MULTI_TERM_BOUNDARY_BONUS = 40.0
MULTI_TERM_COMBINATION_BONUS = 80.0
FUZZY_BASE_SCORE = 180.0


@dataclass(frozen=True)
class MatchOptions:
    """Switches for the optional strategies.

    ``require_boundary`` disables the loose substring strategy so that a
    multi-word query cannot match inside unrelated words.
    """

    allow_loose_substring: bool = True
    allow_fuzzy: bool = True
    require_boundary: bool = False


DEFAULT_OPTIONS = MatchOptions()


@dataclass(frozen=True)
class TitleMatch:
    score: float
    ranges: tuple[TextRange, ...]
    exact: bool = False


def match_exact(title: str, lowered: str, normalized_query: str) -> TitleMatch | None:
    if lowered != normalized_query:
        return None
    return TitleMatch(EXACT_SCORE, (TextRange(0, len(title)),), exact=True)


def match_word_boundary(lowered: str, normalized_query: str) -> TitleMatch | None:
    index = find_word_boundary_index(lowered, normalized_query)
    if index == -1:
        return None
    score = BOUNDARY_BASE_SCORE - index * BOUNDARY_INDEX_PENALTY
    return TitleMatch(score, (TextRange(index, index + len(normalized_query)),))


def match_loose_substring(lowered: str, normalized_query: str) -> TitleMatch | None:
    index = lowered.find(normalized_query)
    if index == -1:
        return None
    return TitleMatch(SUBSTRING_BASE_SCORE - index, (TextRange(index, index + len(normalized_query)),))


def match_multi_term(lowered: str, terms: Sequence[str]) -> TitleMatch | None:
    """All terms must appear somewhere; boundary occurrences are preferred."""
    present = [term for term in terms if term]
    if not present:
        return None

    total = 0.0
    ranges: list[TextRange] = []
    for term in present:
        index = find_word_boundary_index(lowered, term)
        if index == -1:
            index = lowered.find(term)
        if index == -1:
            return None
        bonus = MULTI_TERM_BOUNDARY_BONUS if is_word_boundary(lowered, index) else 0.0
        total += MULTI_TERM_BASE_SCORE - index * MULTI_TERM_INDEX_PENALTY + bonus
        ranges.append(TextRange(index, index + len(term)))

    score = total / len(present) + MULTI_TERM_COMBINATION_BONUS
    return TitleMatch(score, tuple(ranges))


def match_fuzzy(lowered: str, normalized_query: str) -> TitleMatch | None:
    fuzzy = fuzzy_subsequence_match(lowered, normalized_query)
    if fuzzy is None:
        return None
    return TitleMatch(FUZZY_BASE_SCORE + fuzzy.score, tuple(ranges_from_positions(fuzzy.positions)))


def evaluate_title_match(
    title: str,
    normalized_query: str,
    query_terms: Sequence[str],
    options: MatchOptions | None = None,
) -> TitleMatch | None:
    """Return the best-scoring strategy for ``title``, or ``None``.

    Args:
        title: Title as stored (original casing); ranges index into it.
        normalized_query: Trimmed, lowercased query.
        query_terms: Output of ``extract_query_terms`` for the same query.
        options: Strategy switches; defaults enable everything.

    Only strictly positive scores count. On equal scores the strategy
    evaluated first is kept. ``exact`` is reported whenever the lowercased
    title equals the query.
    """
    if not title or not normalized_query:
        return None

    opts = options or DEFAULT_OPTIONS
    lowered = fold_case(title)

    strategies: list[Callable[[], TitleMatch | None]] = [
        lambda: match_exact(title, lowered, normalized_query),
        lambda: match_word_boundary(lowered, normalized_query),
    ]
    if opts.allow_loose_substring and not opts.require_boundary:
        strategies.append(lambda: match_loose_substring(lowered, normalized_query))
    if len(query_terms) > 1:
        strategies.append(lambda: match_multi_term(lowered, query_terms))
    if opts.allow_fuzzy:
        strategies.append(lambda: match_fuzzy(lowered, normalized_query))

    best: TitleMatch | None = None
    for strategy in strategies:
        candidate = strategy()
        if candidate is None or candidate.score <= 0:
            continue
        if best is None or candidate.score > best.score:
            best = candidate

    if best is None:
        return None
    return TitleMatch(
        score=best.score,
        ranges=tuple(compress_ranges(best.ranges)),
        exact=lowered == normalized_query,
    )
