from __future__ import annotations

import logging
import threading
from time import monotonic
from typing import Callable, Optional

from recall.content.errors import InvalidationDisabledError
from recall.content.tree import NavigationIndex

logger = logging.getLogger(__name__)

IndexLoader = Callable[[int, Optional[str]], NavigationIndex]


class IndexCache:
    """Holds one published generation of the navigation index.

    Builds are single-flight: concurrent callers of :meth:`get` during a cold
    start wait for the one in-progress build and all receive the same object.
    A published generation is never mutated; invalidation or a detected
    content change produces a brand new generation.
    """

    def __init__(
        self,
        loader: IndexLoader,
        *,
        fingerprint: Callable[[], str] | None = None,
        allow_invalidate: bool = False,
        watch: bool = False,
        watch_interval: float = 2.0,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self._loader = loader
        self._fingerprint = fingerprint
        self.allow_invalidate = allow_invalidate
        self.watch = watch and fingerprint is not None
        self.watch_interval = watch_interval
        self._clock = clock
        self._lock = threading.Lock()
        self._index: NavigationIndex | None = None
        self._generation = 0
        self._last_check = 0.0
        self.build_count = 0

    @property
    def generation(self) -> int:
        return self._generation

    def peek(self) -> NavigationIndex | None:
        """Return the published generation without triggering a build."""

        return self._index

    def get(self) -> NavigationIndex:
        index = self._index
        if index is not None and not self._is_stale(index):
            return index

        with self._lock:
            current = self._index
            if current is not None and current is not index:
                return current
            return self._rebuild()

    def invalidate(self) -> None:
        if not self.allow_invalidate:
            raise InvalidationDisabledError("Index cache is built once per process and cannot be invalidated")
        with self._lock:
            if self._index is not None:
                logger.info("Invalidating navigation index generation %d", self._index.generation)
            self._index = None

    # ------------------------------------------------------------------ helpers
    def _rebuild(self) -> NavigationIndex:
        generation = self._generation + 1
        fingerprint = self._fingerprint() if self._fingerprint is not None else None
        index = self._loader(generation, fingerprint)
        self.build_count += 1
        self._generation = generation
        self._last_check = self._clock()
        self._index = index
        return index

    def _is_stale(self, index: NavigationIndex) -> bool:
        if not self.watch or self._fingerprint is None:
            return False
        now = self._clock()
        if now - self._last_check < self.watch_interval:
            return False
        self._last_check = now
        current = self._fingerprint()
        if current == index.fingerprint:
            return False
        logger.info("Content changed since generation %d; rebuilding", index.generation)
        return True


__all__ = ["IndexCache", "IndexLoader"]
