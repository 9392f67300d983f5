"""Capacity-bounded LRU cache of parse results"""

import threading
from collections import OrderedDict
from typing import Optional

from notemark.core.limits import CACHE_CAPACITY
from notemark.core.models import ParseReport


class ResultCache:
    """Access-ordered LRU map from text key to ParseReport.

    Every operation runs inside a single lock, so concurrent parsers sharing
    one cache never corrupt the recency order. Two callers racing to store
    the same key write equal values; the last write wins.
    """

    def __init__(self, capacity: int = CACHE_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Cache capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._entries: OrderedDict[str, ParseReport] = OrderedDict()
        self._lock = threading.Lock()

    def lookup(self, key: str) -> Optional[ParseReport]:
        """Return the cached report and mark it most recently used, else None."""
        with self._lock:
            report = self._entries.get(key)
            if report is not None:
                self._entries.move_to_end(key)
            return report

    def store(self, key: str, report: ParseReport) -> None:
        """Insert or refresh key, evicting the least recently used overflow."""
        with self._lock:
            self._entries[key] = report
            self._entries.move_to_end(key)
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries
