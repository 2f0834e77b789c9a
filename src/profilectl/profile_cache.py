"""
In-memory profile cache.

Holds the last profile list pulled from the daemon. The list is replaced
wholesale, never merged, and readers only ever get tuple copies. The lock is
held for the copy/replace only; callers must not hold it across I/O.
"""

from __future__ import annotations

import threading
from typing import Iterable, Tuple

from .models import ProfileRecord


class ProfileCache:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: Tuple[ProfileRecord, ...] = ()

    def set(self, records: Iterable[ProfileRecord]) -> Tuple[ProfileRecord, ...]:
        new = tuple(records)
        with self._lock:
            self._records = new
        return new

    def clear(self) -> None:
        with self._lock:
            self._records = ()

    def snapshot(self) -> Tuple[ProfileRecord, ...]:
        with self._lock:
            return self._records
