"""Fuzzy subsequence matching for typo-tolerant title search.

A query fuzzy-matches a title when its characters appear in the title in
order, not necessarily next to each other ("prjpln" matches "project plan").

Scoring:
- Contiguous occurrence of the whole query: 140 minus its start index
- Otherwise: 80, minus 4 per skipped character between consecutive matched
  characters, minus the index of the first matched character, floored at 1
"""

from __future__ import annotations

from dataclasses import dataclass

from notebook_index.search.analyzers import fold_case


CONTIGUOUS_BASE_SCORE = 140.0
SCATTERED_BASE_SCORE = 80.0
GAP_PENALTY = 4.0
MIN_SCATTERED_SCORE = 1.0


@dataclass(frozen=True)
class FuzzyMatch:
    """Score plus the haystack positions of each matched query character."""

    score: float
    positions: tuple[int, ...]


def find_subsequence_positions(haystack: str, needle: str) -> list[int] | None:
    """Greedy in-order positions of ``needle``'s characters in ``haystack``.

    Each character is searched strictly after the previous match. Returns
    ``None`` as soon as one character cannot be placed.
    """
    positions: list[int] = []
    last_index = -1
    for char in needle:
        found = haystack.find(char, last_index + 1)
        if found == -1:
            return None
        positions.append(found)
        last_index = found
    return positions


def fuzzy_subsequence_match(text: str, query: str) -> FuzzyMatch | None:
    """Score how well ``query`` matches ``text`` as an in-order subsequence.

    Both inputs are compared lowercased.

    Examples:
        >>> fuzzy_subsequence_match("project plan", "plan")
        FuzzyMatch(score=132.0, positions=(8, 9, 10, 11))
        >>> fuzzy_subsequence_match("abc", "acb") is None
        True
    """
    if not text or not query:
        return None

    haystack = fold_case(text)
    needle = query.lower()

    positions = find_subsequence_positions(haystack, needle)
    if positions is None:
        return None

    exact_index = haystack.find(needle)
    if exact_index != -1:
        contiguous = tuple(range(exact_index, exact_index + len(needle)))
        return FuzzyMatch(score=CONTIGUOUS_BASE_SCORE - exact_index, positions=contiguous)

    score = SCATTERED_BASE_SCORE
    for previous, current in zip(positions, positions[1:]):
        gap = current - previous - 1
        if gap > 0:
            score -= gap * GAP_PENALTY
    score -= positions[0]
    return FuzzyMatch(score=max(score, MIN_SCATTERED_SCORE), positions=tuple(positions))
