"""Value objects returned to the editing surface.

Following the same rules as the entity model:
- Value objects are immutable (frozen=True)
- No rendering concerns: ranges are plain character offsets and snippets
  are plain text, so any surface can map them onto its own widgets
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from notebook_index.domain.model import Note


class HighlightRange(BaseModel):
    """Half-open ``[start, end)`` character range inside a title or snippet."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)


class SearchHit(BaseModel):
    """A single ranked search result."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    snippet: str
    highlight_ranges: list[HighlightRange] = Field(default_factory=list)
    updated_at: datetime | str | None = None
    score: float


class LinkSuggestion(BaseModel):
    """An autocomplete entry offered while typing a ``[[`` link.

    ``kind="create"`` marks the synthetic "create a new note with this title"
    entry; it carries no ``note_id``.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: str
    kind: Literal["note", "create"] = "note"
    note_id: str | None = None
    highlight_ranges: list[HighlightRange] = Field(default_factory=list)
    score: float = 0.0


class SimilarNote(BaseModel):
    """A note related to another by shared vocabulary and shared links."""

    model_config = ConfigDict(frozen=True)

    note: Note
    score: float
    shared_tokens: list[str] = Field(default_factory=list)
    shared_links: list[str] = Field(default_factory=list)
    summary: str = ""


class Backlink(BaseModel):
    """A note whose body links to the note being viewed."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    source_title: str


class LinkTrigger(BaseModel):
    """An open ``[[`` before the cursor, with the text typed after it."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    cursor: int = Field(ge=0)
    query: str = ""
