"""Tokenizers and text helpers shared by the matchers and the index builder.

Two tokenizers live here and they deliberately filter differently:

- ``similarity_tokens`` keeps only long, content-bearing words (length > 4,
  not a stopword). These feed the token-frequency and document-frequency
  tables used for "similar notes".
- ``extract_query_terms`` keeps words longer than two characters that are
  not stopwords, but falls back to the unfiltered word list when the filter
  would remove everything, so "to do" still produces terms.

Both lowercase first and split on runs of anything that is not ``[a-z0-9]``.
"""

from __future__ import annotations

from collections.abc import Iterator
import re


STOPWORDS = frozenset(
    [
        "the",
        "and",
        "for",
        "that",
        "with",
        "from",
        "this",
        "have",
        "would",
        "there",
        "their",
        "about",
        "could",
        "into",
        "such",
        "over",
        "were",
        "just",
        "your",
        "them",
        "more",
        "when",
        "like",
        "than",
        "some",
        "other",
        "what",
        "which",
        "while",
        "where",
        "been",
        "also",
        "because",
        "only",
        "every",
        "after",
        "before",
        "through",
        "though",
        "here",
        "they",
        "then",
        "much",
        "many",
        "well",
        "each",
        "most",
        "very",
        "good",
        "back",
        "even",
        "make",
        "made",
        "time",
        "same",
    ]
)

SIMILARITY_MIN_LENGTH = 5
QUERY_TERM_MIN_LENGTH = 3

_WORD_PATTERN = re.compile(r"[a-z0-9]+")
_WORD_CHAR_PATTERN = re.compile(r"[a-z0-9]")
WIKI_LINK_PATTERN = re.compile(r"\[\[([^\[\]]+)\]\]")


def split_words(text: str | None) -> list[str]:
    """Lowercase ``text`` and return its alphanumeric runs."""
    if not text:
        return []
    return _WORD_PATTERN.findall(text.lower())


def similarity_tokens(text: str | None) -> list[str]:
    """Tokens used for similarity scoring.

    Examples:
        >>> similarity_tokens("The gardening plan for spring planting")
        ['gardening', 'spring', 'planting']
    """
    return [word for word in split_words(text) if len(word) >= SIMILARITY_MIN_LENGTH and word not in STOPWORDS]


def extract_query_terms(query: str | None) -> list[str]:
    """Terms used for multi-term title matching and content token search.

    Examples:
        >>> extract_query_terms("notes on the budget")
        ['notes', 'budget']
        >>> extract_query_terms("to do")
        ['to', 'do']
    """
    raw = split_words(query)
    if not raw:
        return []
    filtered = [word for word in raw if len(word) >= QUERY_TERM_MIN_LENGTH and word not in STOPWORDS]
    return filtered or raw


def normalize_title(title: str | None) -> str:
    """Key used for every title lookup: trimmed and lowercased."""
    if not title:
        return ""
    return title.strip().lower()


def fold_case(text: str) -> str:
    """Lowercase ``text`` one character at a time without changing its length.

    Characters whose lowercase form is longer (``"İ"`` becomes two code points)
    are kept as-is, so indices found in the result are valid in ``text``.

    Examples:
        >>> fold_case("İstanbul Budget")
        'İstanbul budget'
    """
    folded = []
    for char in text:
        lowered = char.lower()
        folded.append(lowered if len(lowered) == 1 else char)
    return "".join(folded)


def iter_link_titles(text: str | None) -> Iterator[str]:
    """Yield the trimmed inner text of each ``[[...]]`` marker, skipping blanks."""
    if not text:
        return
    for match in WIKI_LINK_PATTERN.finditer(text):
        title = match.group(1).strip()
        if title:
            yield title


def parse_links(text: str | None) -> list[str]:
    """Return every wiki-link title in ``text`` in order of appearance."""
    return list(iter_link_titles(text))


def is_word_boundary(text: str, index: int) -> bool:
    """True when ``index`` is at the start of ``text`` or follows a non-alphanumeric."""
    if index <= 0:
        return True
    return _WORD_CHAR_PATTERN.match(text[index - 1]) is None


def find_word_boundary_index(text: str, needle: str) -> int:
    """Index of the first occurrence of ``needle`` that starts on a word boundary, or -1."""
    if not needle:
        return -1
    search_from = 0
    while search_from <= len(text):
        index = text.find(needle, search_from)
        if index == -1:
            return -1
        if is_word_boundary(text, index):
            return index
        search_from = index + 1
    return -1
