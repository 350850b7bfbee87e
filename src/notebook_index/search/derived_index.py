"""Derived index: every lookup structure computed from the notes in one pass.

The index is a pure function of the note collection. It is never patched
incrementally; any mutation discards it and the next read rebuilds it (see
``search.index_cache``).

Structures:
- ``title_index``: normalized title -> note. When two notes share a
  normalized title the one visited last (later in collection order) wins.
- ``backlink_map``: normalized link target -> source note id -> source entry.
  A note linking to the same target twice contributes one entry.
- ``token_frequency``: note id -> similarity token -> count. Notes without
  qualifying tokens are left out.
- ``doc_frequency``: similarity token -> number of notes containing it.
- ``link_map``: note id -> normalized link target -> link label as written.
  Notes without links are left out.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
import logging

from notebook_index.domain.model import Note
from notebook_index.search.analyzers import iter_link_titles, normalize_title, similarity_tokens


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BacklinkSource:
    source_id: str
    source_title: str


@dataclass(frozen=True)
class DerivedIndex:
    title_index: dict[str, Note] = field(default_factory=dict)
    backlink_map: dict[str, dict[str, BacklinkSource]] = field(default_factory=dict)
    token_frequency: dict[str, dict[str, int]] = field(default_factory=dict)
    doc_frequency: dict[str, int] = field(default_factory=dict)
    link_map: dict[str, dict[str, str]] = field(default_factory=dict)
    note_count: int = 0

    def tokens_for(self, note_id: str) -> dict[str, int]:
        return self.token_frequency.get(note_id, {})

    def links_for(self, note_id: str) -> dict[str, str]:
        return self.link_map.get(note_id, {})

    def document_frequency(self, token: str) -> int:
        return self.doc_frequency.get(token, 0)


def note_token_counts(note: Note) -> dict[str, int]:
    """Similarity token counts over the note's title and body."""
    return dict(Counter(similarity_tokens(f"{note.title or ''} {note.content or ''}")))


def note_link_map(note: Note) -> dict[str, str]:
    """Normalized link target -> label for every link in the note's body."""
    links: dict[str, str] = {}
    for label in iter_link_titles(note.content):
        links[label.lower()] = label
    return links


def build_derived_index(notes: Iterable[Note]) -> DerivedIndex:
    """Build every derived structure in a single pass over ``notes``."""
    title_index: dict[str, Note] = {}
    backlink_map: dict[str, dict[str, BacklinkSource]] = {}
    token_frequency: dict[str, dict[str, int]] = {}
    doc_frequency: Counter[str] = Counter()
    link_map: dict[str, dict[str, str]] = {}
    note_count = 0

    for note in notes:
        note_count += 1

        normalized_title = normalize_title(note.title)
        if normalized_title:
            title_index[normalized_title] = note

        links = note_link_map(note)
        for target in links:
            bucket = backlink_map.setdefault(target, {})
            if note.id not in bucket:
                bucket[note.id] = BacklinkSource(source_id=note.id, source_title=note.title)
        if links:
            link_map[note.id] = links

        counts = note_token_counts(note)
        if counts:
            token_frequency[note.id] = counts
            doc_frequency.update(counts.keys())

    logger.debug(
        "Built derived index: %d notes, %d titles, %d link targets, %d distinct tokens",
        note_count,
        len(title_index),
        len(backlink_map),
        len(doc_frequency),
    )

    return DerivedIndex(
        title_index=title_index,
        backlink_map=backlink_map,
        token_frequency=token_frequency,
        doc_frequency=dict(doc_frequency),
        link_map=link_map,
        note_count=note_count,
    )
