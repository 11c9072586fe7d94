"""In-process LRU cache with expiry."""

import time
from collections import OrderedDict
from collections.abc import Callable
from threading import Lock
from typing import Any

from .base import CacheStrategy


class InMemoryTTLCache(CacheStrategy):
    """Bounded LRU cache; entries also expire after their TTL."""

    def __init__(self, max_size: int = 16, clock: Callable[[], float] = time.monotonic):
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self._clock = clock
        self._entries: OrderedDict[str, tuple[Any, float]] = OrderedDict()
        self._lock = Lock()

    def _live(self, key: str) -> tuple[Any, float] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry[1]:
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._live(key)
            if entry is None:
                return None
            self._entries.move_to_end(key)
            return entry[0]

    async def set(self, key: str, value: Any, ttl: int) -> None:
        expires_at = self._clock() + ttl
        with self._lock:
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_size:
                self._entries.popitem(last=False)
            self._entries[key] = (value, expires_at)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
