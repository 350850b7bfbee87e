"""Domain layer - note entity and result value objects, no infrastructure.

This layer contains:
- Entities: ``Note`` (identity is its id)
- Value Objects: search hits, link suggestions, similar notes, backlinks
"""

from notebook_index.domain.model import UNTITLED, Note, NoteMetadata
from notebook_index.domain.search import (
    Backlink,
    HighlightRange,
    LinkSuggestion,
    LinkTrigger,
    SearchHit,
    SimilarNote,
)


__all__ = [
    "UNTITLED",
    "Backlink",
    "HighlightRange",
    "LinkSuggestion",
    "LinkTrigger",
    "Note",
    "NoteMetadata",
    "SearchHit",
    "SimilarNote",
]
