"""Thread-safe caches for the message engine.

Each cache is guarded by a single lock. Entries are only removed by clear().
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LockedCache(Generic[K, V]):
    """A populate-on-miss cache with one lock for all entries."""

    def __init__(self) -> None:
        self._entries: dict[K, V] = {}
        self._lock = threading.Lock()

    def get_or_create(self, key: K, factory: Callable[[], V]) -> V:
        """Return the cached value for ``key``, creating it on a miss.

        Racing threads converge on the first value stored. If ``factory``
        raises, nothing is cached.
        """
        with self._lock:
            if key in self._entries:
                return self._entries[key]
            value = factory()
            self._entries[key] = value
            return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
