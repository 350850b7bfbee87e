"""Snippet extraction and highlight rendering for content matches.

A snippet is a window of ``radius`` characters on each side of the matched
span. When the window is clipped an ellipsis is added on that side, and the
match ranges are re-expressed relative to the snippet text (including the
shift introduced by a leading ellipsis).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import html

from notebook_index.search.ranges import TextRange, compress_ranges


DEFAULT_RADIUS = 48
ELLIPSIS = "…"


@dataclass(frozen=True)
class Snippet:
    text: str
    ranges: tuple[TextRange, ...] = ()


def extract_snippet(text: str, positions: Iterable[int], radius: int = DEFAULT_RADIUS) -> Snippet:
    """Cut a window around the matched character positions.

    Args:
        text: Full note body.
        positions: Character offsets in ``text`` that matched.
        radius: Characters of context kept on each side of the matched span.

    Returns:
        Snippet text and the compressed highlight ranges inside it. Without
        positions the snippet is the first ``2 * radius`` characters.

    Examples:
        >>> extract_snippet("hello world", [6, 7], radius=2)
        Snippet(text='…o worl…', ranges=(TextRange(start=3, end=5),))
    """
    if not text:
        return Snippet("")

    ordered = sorted(positions)
    if not ordered:
        return Snippet(text[: radius * 2])

    start = max(ordered[0] - radius, 0)
    end = min(len(text), ordered[-1] + radius + 1)
    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(text) else ""

    shift = len(prefix) - start
    ranges = compress_ranges(TextRange(pos + shift, pos + shift + 1) for pos in ordered)
    return Snippet(f"{prefix}{text[start:end]}{suffix}", tuple(ranges))


def highlight_snippet(snippet: str, ranges: Sequence[TextRange], style: str = "html") -> str:
    """Render highlight ranges as markup.

    Args:
        snippet: Plain snippet text.
        ranges: Sorted, non-overlapping ranges (as produced by ``compress_ranges``).
        style: "html" wraps matches in ``<mark>`` and escapes the rest;
            "markdown" wraps matches in ``**`` and leaves text untouched.

    Returns:
        The marked-up snippet.
    """
    if not snippet:
        return ""

    if style == "html":
        escape = html.escape
        opener, closer = "<mark>", "</mark>"
    elif style == "markdown":

        def escape(value: str) -> str:
            return value

        opener, closer = "**", "**"
    else:
        raise ValueError(f"Unknown highlight style: {style}")

    parts: list[str] = []
    cursor = 0
    for item in ranges:
        start = max(item.start, cursor)
        end = min(item.end, len(snippet))
        if end <= start:
            continue
        if start > cursor:
            parts.append(escape(snippet[cursor:start]))
        parts.append(f"{opener}{escape(snippet[start:end])}{closer}")
        cursor = end
    if cursor < len(snippet):
        parts.append(escape(snippet[cursor:]))
    return "".join(parts)
