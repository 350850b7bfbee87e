"""Domain model - the note entity the engine reads.

Notes are owned by the note store. The indexing and ranking code only ever
reads them; edits go through the store, which swaps in a revised copy and
invalidates the derived index.

Timestamps are accepted either as datetimes or as the raw strings a
persistence layer handed over. Malformed strings are kept verbatim rather
than rejected so that the ranking code can treat them as "no recency signal".
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Self

from pydantic import Field
from pydantic.dataclasses import dataclass


UNTITLED = "Untitled"
_WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def auto_tags_for(stamp: datetime) -> list[str]:
    """Save-time tags: UTC day, time and weekday, e.g. ``["#2026-10-19", "#14:05", "#mon"]``."""
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    stamp = stamp.astimezone(timezone.utc)
    return [f"#{stamp:%Y-%m-%d}", f"#{stamp:%H:%M}", f"#{_WEEKDAYS[stamp.weekday()]}"]


@dataclass
class NoteMetadata:
    """Timestamps and flags attached to a note."""

    created_at: datetime | str | None = None
    updated_at: datetime | str | None = None
    pinned: bool = False
    auto_tags: list[str] = Field(default_factory=list)


@dataclass
class Note:
    """Aggregate root for a single note.

    Identity is the ``id``: two notes with the same id are the same note even
    if one of them is an older revision.
    """

    id: str = Field(min_length=1)
    title: str = ""
    content: str = ""
    metadata: NoteMetadata = Field(default_factory=NoteMetadata)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def display_title(self) -> str:
        """Title shown to users; blank titles read as "Untitled"."""
        return self.title.strip() or UNTITLED

    @property
    def word_count(self) -> int:
        return len(self.content.split())

    @classmethod
    def create(
        cls,
        id: str,
        title: str = "",
        content: str = "",
        *,
        pinned: bool = False,
        timestamp: datetime | None = None,
    ) -> Self:
        """Factory for a brand-new note stamped with ``timestamp`` (default: now)."""
        stamp = timestamp or utc_now()
        metadata = NoteMetadata(created_at=stamp, updated_at=stamp, pinned=pinned, auto_tags=auto_tags_for(stamp))
        return cls(id=id, title=title, content=content, metadata=metadata)

    def revised(
        self,
        *,
        title: str | None = None,
        content: str | None = None,
        pinned: bool | None = None,
        timestamp: datetime | None = None,
    ) -> Self:
        """Return a new revision of this note; the original is left untouched."""
        stamp = timestamp or utc_now()
        metadata = replace(
            self.metadata,
            updated_at=stamp,
            auto_tags=auto_tags_for(stamp),
            pinned=self.metadata.pinned if pinned is None else pinned,
        )
        return replace(
            self,
            title=self.title if title is None else title,
            content=self.content if content is None else content,
            metadata=metadata,
        )
