#!/usr/bin/env python3
"""
Per-key mutual exclusion.

Session state transitions and mentor metric updates are serialized per id:
operations on the same key run one at a time, operations on different keys
proceed in parallel.

Usage:
    locks = KeyedLock()
    with locks.hold(session_id):
        session = repo.get(session_id)
        ...
        repo.save(session)
"""

import contextlib
import logging
import threading
from typing import Dict, Hashable, Iterator

logger = logging.getLogger(__name__)


class _Entry:
    __slots__ = ("lock", "waiters")

    def __init__(self):
        self.lock = threading.Lock()
        self.waiters = 0


class KeyedLock:
    """A registry of threading.Lock objects keyed by id.

    Entries are reference counted and dropped once no thread holds or waits
    on them, so the registry does not grow with the number of ids seen.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._entries: Dict[Hashable, _Entry] = {}

    @contextlib.contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = _Entry()
                self._entries[key] = entry
            entry.waiters += 1

        entry.lock.acquire()
        try:
            yield
        finally:
            entry.lock.release()
            with self._guard:
                entry.waiters -= 1
                if entry.waiters == 0:
                    del self._entries[key]

    def active_keys(self) -> int:
        """Number of keys currently held or waited on."""
        with self._guard:
            return len(self._entries)
