"""
Entity store for teams and challenges

Holds the published Snapshot. Writers take the lock, mutate a private deep
copy and publish it with a single reference swap, so readers never need the
lock and never observe a half-applied change.
"""
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Tuple

from huntboard.models import Snapshot


SeedLoader = Callable[[], Snapshot]


class EntityStore:
    def __init__(self, seed_loader: SeedLoader, initial: Optional[Snapshot] = None):
        self._seed_loader = seed_loader
        self._lock = threading.RLock()
        # (version, snapshot) swapped as one reference; version counts publications
        self._published: Tuple[int, Snapshot] = (0, initial if initial is not None else seed_loader())

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def snapshot(self) -> Snapshot:
        """Currently published state. Callers must not mutate it."""
        return self._published[1]

    def versioned(self) -> Tuple[int, Snapshot]:
        """Current snapshot together with its publication number"""
        return self._published

    def _publish(self, snapshot: Snapshot) -> None:
        self._published = (self._published[0] + 1, snapshot)

    @contextmanager
    def transaction(self) -> Iterator[Snapshot]:
        """
        Yield a writable copy of the current state

        The copy is published only if the block exits normally; any
        exception discards it and propagates.
        """
        with self._lock:
            draft = self.snapshot.model_copy(deep=True)
            yield draft
            self._publish(draft)

    def reload(self) -> Snapshot:
        """Discard all mutations and reload the seed"""
        fresh = self._seed_loader()
        with self._lock:
            self._publish(fresh)
        return fresh
