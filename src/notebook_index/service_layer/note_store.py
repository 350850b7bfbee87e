"""Note store abstractions and the in-memory implementation.

The store is the only place notes change. Every mutation notifies the
subscribers (the engine's ``invalidate``) before returning, so a query issued
after a mutation never sees the previous derived index.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from datetime import datetime
import logging
import threading
from uuid import uuid4

from notebook_index.domain.model import Note, utc_now


logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


class NoteNotFoundError(KeyError):
    """Raised when a note id is not present in the store."""

    def __init__(self, note_id: str) -> None:
        super().__init__(note_id)
        self.note_id = note_id

    def __str__(self) -> str:
        return f"Note not found: {self.note_id!r}"


class AbstractNoteStore(ABC):
    """Read side of a note collection plus change notification."""

    @abstractmethod
    def all(self) -> list[Note]:
        """Snapshot of every note in display order (newest first)."""
        raise NotImplementedError

    @abstractmethod
    def get(self, note_id: str) -> Note | None:
        raise NotImplementedError

    @abstractmethod
    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register ``listener`` for change notifications; returns an unsubscribe callable."""
        raise NotImplementedError

    def require(self, note_id: str) -> Note:
        note = self.get(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        return note


class InMemoryNoteStore(AbstractNoteStore):
    """Thread-safe, list-backed note store.

    New notes are prepended; updates keep the note's position and swap in a
    revised copy so snapshots handed out earlier never change underneath
    their readers.
    """

    def __init__(
        self,
        notes: Iterable[Note] = (),
        *,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._clock = clock
        self._id_factory = id_factory or (lambda: uuid4().hex)
        self._listeners: list[ChangeListener] = []
        self._notes: list[Note] = []
        self._by_id: dict[str, Note] = {}
        self._load(notes)

    def all(self) -> list[Note]:
        with self._lock:
            return list(self._notes)

    def get(self, note_id: str) -> Note | None:
        with self._lock:
            return self._by_id.get(note_id)

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note_id: object) -> bool:
        return note_id in self._by_id

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def upsert(
        self,
        note_id: str | None = None,
        *,
        title: str | None = None,
        content: str | None = None,
        pinned: bool | None = None,
    ) -> Note:
        """Create a note, or revise the note with ``note_id`` if it exists.

        Fields left as ``None`` keep their current value (or default to empty
        for a new note). Timestamps come from the store clock.
        """
        with self._lock:
            now = self._clock()
            existing = self._by_id.get(note_id) if note_id else None
            if existing is None:
                note = Note.create(
                    note_id or self._id_factory(),
                    title or "",
                    content or "",
                    pinned=bool(pinned),
                    timestamp=now,
                )
                self._notes.insert(0, note)
                logger.debug("Created note %s", note.id)
            else:
                note = existing.revised(title=title, content=content, pinned=pinned, timestamp=now)
                self._notes[self._position(note.id)] = note
                logger.debug("Updated note %s", note.id)
            self._by_id[note.id] = note
            self._notify()
            return note

    def delete(self, note_id: str) -> bool:
        """Remove a note; returns ``False`` (and notifies nobody) if it was absent."""
        with self._lock:
            if note_id not in self._by_id:
                return False
            del self._notes[self._position(note_id)]
            del self._by_id[note_id]
            logger.debug("Deleted note %s", note_id)
            self._notify()
            return True

    def replace_all(self, notes: Iterable[Note]) -> None:
        """Swap in a whole collection, e.g. after loading from persistence."""
        with self._lock:
            self._load(notes)
            logger.info("Replaced note collection (%d notes)", len(self._notes))
            self._notify()

    def _load(self, notes: Iterable[Note]) -> None:
        loaded = list(notes)
        by_id: dict[str, Note] = {}
        for note in loaded:
            if note.id in by_id:
                raise ValueError(f"Duplicate note id: {note.id!r}")
            by_id[note.id] = note
        self._notes = loaded
        self._by_id = by_id

    def _position(self, note_id: str) -> int:
        for position, note in enumerate(self._notes):
            if note.id == note_id:
                return position
        raise NoteNotFoundError(note_id)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
