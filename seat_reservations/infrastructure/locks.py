"""
Per-item mutual exclusion for compound inventory operations.

Problem:
  Two callers try to book the last seat of the same course.
  Both see seats=1, both decrement, both write a ledger entry.

Solution:
  Each inventory item ("course:<id>", "study_hall") gets its own lock, held
  for the whole check-decrement-record sequence. Bookings for different items
  never wait on each other. A full-state reset holds every lock at once, and
  keeps the registry locked so no new item lock can be handed out meanwhile.
"""

import threading
from contextlib import ExitStack, contextmanager
from typing import Iterator

STUDY_HALL_KEY = "study_hall"


def course_key(course_id: int) -> str:
    return f"course:{course_id}"


class KeyedLocks:
    def __init__(self):
        self._registry = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, key: str) -> threading.Lock:
        with self._registry:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._lock_for(key):
            yield

    @contextmanager
    def hold_all(self) -> Iterator[None]:
        with self._registry, ExitStack() as stack:
            # Sorted acquisition order; single-key holders never nest
            for key in sorted(self._locks):
                stack.enter_context(self._locks[key])
            yield

    def __len__(self) -> int:
        with self._registry:
            return len(self._locks)
