"""
Keyed in-process locks.

Serializes writers that share a key (e.g. one user's review state for one card)
while letting unrelated keys proceed in parallel.
"""
from contextlib import contextmanager
from threading import Lock
from typing import Dict, Hashable


class KeyedLocks:
    """A registry of reference-counted locks, one per key."""

    def __init__(self):
        self._registry_lock = Lock()
        self._locks: Dict[Hashable, Lock] = {}
        self._waiters: Dict[Hashable, int] = {}

    @contextmanager
    def hold(self, key: Hashable):
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = Lock()
                self._locks[key] = lock
            self._waiters[key] = self._waiters.get(key, 0) + 1

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._registry_lock:
                self._waiters[key] -= 1
                if self._waiters[key] == 0:
                    del self._waiters[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)
