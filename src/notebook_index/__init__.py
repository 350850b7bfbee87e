"""notebook-index: in-memory search, link autocomplete, backlinks and similar notes."""

from notebook_index.config import Settings
from notebook_index.domain import (
    Backlink,
    HighlightRange,
    LinkSuggestion,
    LinkTrigger,
    Note,
    NoteMetadata,
    SearchHit,
    SimilarNote,
)
from notebook_index.engine import NotebookEngine
from notebook_index.service_layer.note_store import AbstractNoteStore, InMemoryNoteStore, NoteNotFoundError


__version__ = "0.1.0"

__all__ = [
    "AbstractNoteStore",
    "Backlink",
    "HighlightRange",
    "InMemoryNoteStore",
    "LinkSuggestion",
    "LinkTrigger",
    "Note",
    "NoteMetadata",
    "NoteNotFoundError",
    "NotebookEngine",
    "SearchHit",
    "Settings",
    "SimilarNote",
    "__version__",
]
