"""Unit tests for the note entity and the result value objects."""

from datetime import datetime, timedelta, timezone

from pydantic import ValidationError
import pytest

from notebook_index.domain import UNTITLED, HighlightRange, LinkSuggestion, Note, NoteMetadata, SearchHit
from notebook_index.domain.model import auto_tags_for


pytestmark = pytest.mark.unit

STAMP = datetime(2026, 1, 2, 3, 4, tzinfo=timezone.utc)


class TestNote:
    def test_rejects_empty_id(self):
        with pytest.raises(ValidationError):
            Note(id="")

    def test_defaults(self):
        note = Note(id="n1")

        assert note.title == ""
        assert note.content == ""
        assert note.metadata == NoteMetadata()

    def test_display_title_falls_back_to_untitled(self):
        assert Note(id="n1", title="   ").display_title == UNTITLED
        assert Note(id="n1", title=" Garden ").display_title == "Garden"

    def test_word_count(self):
        assert Note(id="n1", content="one  two\nthree").word_count == 3
        assert Note(id="n1").word_count == 0

    def test_equality_is_by_id(self):
        first = Note(id="same", title="Old")
        second = Note(id="same", title="New")

        assert first == second
        assert hash(first) == hash(second)
        assert first != Note(id="other", title="Old")
        assert first != "same"

    def test_keeps_malformed_timestamp_string(self):
        note = Note(id="n1", metadata=NoteMetadata(updated_at="not a date"))

        assert note.metadata.updated_at == "not a date"

    def test_create_stamps_both_timestamps(self):
        note = Note.create("n1", "Title", "Body", pinned=True, timestamp=STAMP)

        assert note.metadata.created_at == STAMP
        assert note.metadata.updated_at == STAMP
        assert note.metadata.pinned is True

    def test_create_stamps_auto_tags(self):
        note = Note.create("n1", timestamp=STAMP)

        assert note.metadata.auto_tags == ["#2026-01-02", "#03:04", "#fri"]


class TestRevised:
    def test_returns_new_revision_and_leaves_original(self):
        original = Note.create("n1", "Title", "Body", timestamp=STAMP)
        later = STAMP + timedelta(hours=1)

        revised = original.revised(content="New body", timestamp=later)

        assert revised is not original
        assert revised.content == "New body"
        assert revised.title == "Title"
        assert revised.metadata.updated_at == later
        assert revised.metadata.created_at == STAMP
        assert original.content == "Body"
        assert original.metadata.updated_at == STAMP

    def test_revision_restamps_auto_tags(self):
        original = Note.create("n1", timestamp=STAMP)

        revised = original.revised(timestamp=STAMP + timedelta(days=1, hours=2))

        assert revised.metadata.auto_tags == ["#2026-01-03", "#05:04", "#sat"]
        assert original.metadata.auto_tags == ["#2026-01-02", "#03:04", "#fri"]

    def test_auto_tags_use_utc(self):
        local = datetime(2026, 1, 2, 1, 30, tzinfo=timezone(timedelta(hours=3)))

        assert auto_tags_for(local) == ["#2026-01-01", "#22:30", "#thu"]

    def test_pinned_is_kept_unless_given(self):
        original = Note.create("n1", pinned=True, timestamp=STAMP)

        assert original.revised(timestamp=STAMP).metadata.pinned is True
        assert original.revised(pinned=False, timestamp=STAMP).metadata.pinned is False


class TestValueObjects:
    def test_search_hit_is_frozen(self):
        hit = SearchHit(id="n1", title="T", snippet="T", score=1.0)

        with pytest.raises(ValidationError):
            hit.score = 2.0

    def test_highlight_range_rejects_negative_offsets(self):
        with pytest.raises(ValidationError):
            HighlightRange(start=-1, end=2)

    def test_link_suggestion_kind_is_restricted(self):
        assert LinkSuggestion(title="T", subtitle="s").kind == "note"
        with pytest.raises(ValidationError):
            LinkSuggestion(title="T", subtitle="s", kind="other")
