"""Lazily rebuilt, single-generation cache for the derived index.

``invalidate()`` discards the cached index and must follow every note
mutation. ``get()`` returns the cached index or builds a fresh one from the
current note snapshot.

Concurrency: builds are serialized by ``_build_lock``; ``invalidate()`` only
touches a generation counter under the short ``_state_lock`` so it never
waits for a build. A finished build is published only when no invalidation
happened while it ran. The caller that started it still gets its result, but
the next reader rebuilds from the newer snapshot. Readers therefore see either
a complete index for some snapshot or trigger a build; never a partial one.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import logging
import threading
import time

from notebook_index.domain.model import Note
from notebook_index.observability.metrics import INDEX_BUILD_COUNT, INDEX_SIZE, OPERATION_LATENCY, track_latency
from notebook_index.observability.tracing import create_span
from notebook_index.search.derived_index import DerivedIndex, build_derived_index


logger = logging.getLogger(__name__)


@dataclass
class IndexCacheMetrics:
    """Lightweight counters for cache instrumentation."""

    hits: int = 0
    misses: int = 0
    builds: int = 0
    discarded_builds: int = 0
    invalidations: int = 0
    last_build_seconds: float = 0.0

    def snapshot(self) -> dict[str, float | int]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "builds": self.builds,
            "discarded_builds": self.discarded_builds,
            "invalidations": self.invalidations,
            "last_build_seconds": round(self.last_build_seconds, 4),
        }


class IndexCache:
    """Holds at most one ``DerivedIndex`` generation."""

    def __init__(
        self,
        source: Callable[[], Iterable[Note]],
        builder: Callable[[Iterable[Note]], DerivedIndex] = build_derived_index,
    ) -> None:
        self._source = source
        self._builder = builder
        self._index: DerivedIndex | None = None
        self._generation = 0
        self._state_lock = threading.Lock()
        self._build_lock = threading.Lock()
        self._metrics = IndexCacheMetrics()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_cached(self) -> bool:
        return self._index is not None

    def invalidate(self) -> None:
        """Discard the cached index; the next ``get()`` rebuilds it."""
        with self._state_lock:
            self._index = None
            self._generation += 1
            self._metrics.invalidations += 1

    def get(self) -> DerivedIndex:
        """Return the cached index, building it first if absent."""
        index = self._index
        if index is not None:
            self._metrics.hits += 1
            return index

        with self._build_lock:
            # Another thread may have published while we waited.
            index = self._index
            if index is not None:
                self._metrics.hits += 1
                return index

            self._metrics.misses += 1
            with self._state_lock:
                generation = self._generation
            return self._build(generation)

    def metrics(self) -> dict[str, float | int]:
        return self._metrics.snapshot()

    def _build(self, generation: int) -> DerivedIndex:
        started = time.perf_counter()
        with create_span("notebook.index.build", attributes={"index.generation": generation}) as span:
            with track_latency(OPERATION_LATENCY, operation="rebuild"):
                snapshot = list(self._source())
                index = self._builder(snapshot)
            span.set_attribute("index.note_count", index.note_count)
            span.set_attribute("index.word_count", sum(note.word_count for note in snapshot))

        self._metrics.builds += 1
        self._metrics.last_build_seconds = time.perf_counter() - started

        with self._state_lock:
            published = generation == self._generation
            if published:
                self._index = index

        if published:
            INDEX_BUILD_COUNT.labels(outcome="published").inc()
            INDEX_SIZE.labels(kind="notes").set(index.note_count)
            INDEX_SIZE.labels(kind="tokens").set(len(index.doc_frequency))
            INDEX_SIZE.labels(kind="link_targets").set(len(index.backlink_map))
            logger.debug(
                "Published derived index generation %d (%d notes, %.4fs)",
                generation,
                index.note_count,
                self._metrics.last_build_seconds,
            )
        else:
            self._metrics.discarded_builds += 1
            INDEX_BUILD_COUNT.labels(outcome="discarded").inc()
            logger.info("Discarded derived index build for generation %d: notes changed during build", generation)
        return index
