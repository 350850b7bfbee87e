"""Shared test fixtures and configuration."""

from datetime import datetime, timedelta, timezone
import os

import pytest

from notebook_index.config import Settings
from notebook_index.domain.model import Note, NoteMetadata
from notebook_index.engine import NotebookEngine
from notebook_index.service_layer.note_store import InMemoryNoteStore


FIXED_NOW = datetime(2026, 10, 19, 14, 5, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Drop NOTEBOOK_* variables and any stray .env so Settings() sees defaults."""
    for key in list(os.environ):
        if key.upper().startswith("NOTEBOOK_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_note():
    """Factory for notes whose update time is ``age_days`` before FIXED_NOW."""

    def _make(
        note_id: str,
        title: str = "",
        content: str = "",
        *,
        age_days: float | None = 0,
        pinned: bool = False,
    ) -> Note:
        stamp = None if age_days is None else FIXED_NOW - timedelta(days=age_days)
        metadata = NoteMetadata(created_at=stamp, updated_at=stamp, pinned=pinned)
        return Note(id=note_id, title=title, content=content, metadata=metadata)

    return _make


@pytest.fixture
def plan_and_budget(make_note) -> list[Note]:
    return [
        make_note("plan", "Project Plan", "See [[Budget Notes]] for details."),
        make_note("budget", "Budget Notes", "Linked from [[Project Plan]]."),
    ]


@pytest.fixture
def store(plan_and_budget) -> InMemoryNoteStore:
    counter = iter(range(1, 10_000))
    return InMemoryNoteStore(
        plan_and_budget,
        clock=lambda: FIXED_NOW,
        id_factory=lambda: f"note-{next(counter)}",
    )


@pytest.fixture
def engine(store) -> NotebookEngine:
    return NotebookEngine(store, Settings(), clock=lambda: FIXED_NOW)
