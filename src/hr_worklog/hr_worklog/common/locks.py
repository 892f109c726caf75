from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import Hashable, Iterator


class KeyedLock:
    """One mutex per key; different keys never block each other."""

    def __init__(self) -> None:
        self._registry_lock = Lock()
        # Never pruned: one entry per user id, bounded by the users table.
        self._locks: dict[Hashable, Lock] = {}

    def _lock_for(self, key: Hashable) -> Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        lock = self._lock_for(key)
        with lock:
            yield
