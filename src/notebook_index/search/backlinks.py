"""Backlink resolution through the cached backlink graph."""

from __future__ import annotations

from notebook_index.domain.model import Note
from notebook_index.search.analyzers import normalize_title
from notebook_index.search.derived_index import BacklinkSource, DerivedIndex


def resolve_backlinks(note: Note, index: DerivedIndex) -> list[BacklinkSource]:
    """Notes whose body links to ``note``'s title, excluding ``note`` itself."""
    target = normalize_title(note.title)
    if not target:
        return []
    bucket = index.backlink_map.get(target)
    if not bucket:
        return []
    return [source for source in bucket.values() if source.source_id != note.id]
