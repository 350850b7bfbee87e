"""Character ranges used for highlighting matches."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class TextRange:
    """Half-open ``[start, end)`` range of character offsets."""

    start: int
    end: int

    def shifted(self, offset: int) -> TextRange:
        return TextRange(self.start + offset, self.end + offset)

    @property
    def length(self) -> int:
        return self.end - self.start


def compress_ranges(ranges: Iterable[TextRange]) -> list[TextRange]:
    """Sort ranges and merge the ones that overlap or touch.

    Starts are clamped at zero and ends at their start, so the result is
    sorted, pairwise disjoint, and covers exactly the positions covered by
    the input.

    Examples:
        >>> compress_ranges([TextRange(4, 6), TextRange(0, 2), TextRange(2, 3)])
        [TextRange(start=0, end=3), TextRange(start=4, end=6)]
    """
    cleaned = sorted((_clamped(item) for item in ranges), key=lambda item: item.start)
    if not cleaned:
        return []

    merged: list[TextRange] = []
    current = cleaned[0]
    for candidate in cleaned[1:]:
        if candidate.start <= current.end:
            current = TextRange(current.start, max(current.end, candidate.end))
        else:
            merged.append(current)
            current = candidate
    merged.append(current)
    return merged


def _clamped(item: TextRange) -> TextRange:
    start = max(0, item.start)
    return TextRange(start, max(start, item.end))


def ranges_from_positions(positions: Iterable[int], offset: int = 0) -> list[TextRange]:
    """One-character ranges for each position, shifted by ``offset`` and compressed."""
    return compress_ranges(TextRange(position + offset, position + offset + 1) for position in positions)
