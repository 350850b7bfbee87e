"""Notebook engine - the query surface the editor talks to.

The engine owns the derived index cache and subscribes to the note store so
that every mutation invalidates it. All query methods read a fresh snapshot of
the store; none of them mutate notes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
import logging

from notebook_index.config import Settings
from notebook_index.domain.model import Note, utc_now
from notebook_index.domain.search import Backlink, HighlightRange, LinkSuggestion, LinkTrigger, SearchHit, SimilarNote
from notebook_index.observability.metrics import OPERATION_LATENCY, track_latency
from notebook_index.observability.tracing import create_span
from notebook_index.search.analyzers import normalize_title
from notebook_index.search.backlinks import resolve_backlinks
from notebook_index.search.derived_index import DerivedIndex
from notebook_index.search.index_cache import IndexCache
from notebook_index.search.link_suggestions import apply_link_suggestion, build_link_suggestions, compute_link_trigger
from notebook_index.search.ranges import TextRange
from notebook_index.search.ranking import rank_notes
from notebook_index.search.recency import is_weak_query, most_recent
from notebook_index.search.similarity import rank_similar
from notebook_index.service_layer.note_store import AbstractNoteStore, NoteNotFoundError
from notebook_index.utils.formatting import format_similarity_summary, format_updated


logger = logging.getLogger(__name__)

CREATE_SUBTITLE = "Create new link"


def _highlight(ranges: Sequence[TextRange]) -> list[HighlightRange]:
    return [HighlightRange(start=item.start, end=item.end) for item in ranges]


def _check_limit(name: str, value: int) -> int:
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


class NotebookEngine:
    """Search, link autocomplete, backlinks and similar notes over a note store."""

    def __init__(
        self,
        store: AbstractNoteStore,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.settings = settings or Settings()
        self._clock = clock
        self._cache = IndexCache(store.all)
        self._unsubscribe = store.subscribe(self.invalidate)

    def close(self) -> None:
        """Stop listening to store changes."""
        self._unsubscribe()

    # Index lifecycle

    def invalidate(self) -> None:
        self._cache.invalidate()

    def ensure_index(self) -> DerivedIndex:
        """Return the current derived index, rebuilding it if it was invalidated."""
        return self._cache.get()

    def cache_metrics(self) -> dict[str, float | int]:
        return self._cache.metrics()

    # Queries

    def search(self, query: str, limit: int | None = None, title_only: bool = False) -> list[SearchHit]:
        """Rank notes by title and body matches against ``query``."""
        limit = _check_limit("limit", self.settings.search_limit if limit is None else limit)
        with create_span("notebook.search", attributes={"search.title_only": title_only}) as span:
            with track_latency(OPERATION_LATENCY, operation="search"):
                ranked = rank_notes(
                    self.store.all(),
                    query,
                    limit=limit,
                    title_only=title_only,
                    snippet_radius=self.settings.snippet_radius,
                )
            span.set_attribute("search.result_count", len(ranked))

        return [
            SearchHit(
                id=item.note.id,
                title=item.note.display_title,
                snippet=item.snippet,
                highlight_ranges=_highlight(item.ranges),
                updated_at=item.note.metadata.updated_at,
                score=item.score,
            )
            for item in ranked
        ]

    def suggest_links(self, trigger: LinkTrigger | str | None) -> list[LinkSuggestion]:
        """Autocomplete entries for the text typed after ``[[``.

        Accepts a ``LinkTrigger`` from ``link_trigger()`` or the raw query.
        """
        query = trigger.query if isinstance(trigger, LinkTrigger) else (trigger or "")
        with create_span("notebook.suggest_links"):
            with track_latency(OPERATION_LATENCY, operation="suggest_links"):
                candidates = build_link_suggestions(
                    query,
                    self.store.all(),
                    now=self._clock(),
                    limit=self.settings.link_suggestion_limit,
                    recent_limit=self.settings.recent_suggestion_limit,
                    max_boost=self.settings.recency_max_boost,
                    window_days=self.settings.recency_window_days,
                )

        suggestions = []
        for candidate in candidates:
            if candidate.note is None:
                suggestions.append(LinkSuggestion(title=candidate.title, subtitle=CREATE_SUBTITLE, kind="create"))
                continue
            suggestions.append(
                LinkSuggestion(
                    title=candidate.title,
                    subtitle=format_updated(candidate.note),
                    kind="note",
                    note_id=candidate.note.id,
                    highlight_ranges=_highlight(candidate.ranges),
                    score=candidate.score,
                )
            )
        return suggestions

    def link_trigger(self, text: str, cursor: int) -> LinkTrigger | None:
        return compute_link_trigger(text, cursor)

    def apply_suggestion(self, text: str, trigger: LinkTrigger, suggestion: LinkSuggestion) -> tuple[str, int]:
        """Insert ``[[title]]`` for the chosen suggestion; returns new text and cursor."""
        return apply_link_suggestion(text, trigger, suggestion.title)

    def similar(self, note: Note, top_k: int | None = None) -> list[SimilarNote]:
        """Notes sharing the most informative words and links with ``note``."""
        top_k = _check_limit("top_k", self.settings.similar_top_k if top_k is None else top_k)
        with create_span("notebook.similar", attributes={"note.id": note.id}):
            with track_latency(OPERATION_LATENCY, operation="similar"):
                index = self.ensure_index()
                matches = rank_similar(note, self.store.all(), index, top_k)

        return [
            SimilarNote(
                note=match.note,
                score=match.score,
                shared_tokens=list(match.shared_tokens),
                shared_links=list(match.shared_links),
                summary=format_similarity_summary(match.shared_tokens, match.shared_links, match.note),
            )
            for match in matches
        ]

    def backlinks_for(self, note: Note) -> list[Backlink]:
        with track_latency(OPERATION_LATENCY, operation="backlinks"):
            sources = resolve_backlinks(note, self.ensure_index())
        return [Backlink(source_id=source.source_id, source_title=source.source_title) for source in sources]

    def note_exists_for_title(self, title: str) -> bool:
        return self.resolve_title(title) is not None

    def resolve_title(self, title: str) -> Note | None:
        """Note whose title matches ``title`` case-insensitively, if any."""
        key = normalize_title(title)
        if not key:
            return None
        return self.ensure_index().title_index.get(key)

    def recent_notes(self, limit: int | None = None) -> list[Note]:
        limit = _check_limit("limit", self.settings.recent_notes_limit if limit is None else limit)
        return most_recent(self.store.all(), limit)

    def is_weak_query(self, query: str) -> bool:
        return is_weak_query(query)

    def note(self, note_id: str) -> Note:
        note = self.store.get(note_id)
        if note is None:
            logger.debug("Lookup of unknown note %s", note_id)
            raise NoteNotFoundError(note_id)
        return note
