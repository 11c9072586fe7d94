"""Cache contract used by the proxy endpoint."""

from abc import ABC, abstractmethod
from typing import Any


class CacheStrategy(ABC):
    """Async key/value cache with per-entry expiry."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the cached value, or None when absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Store ``value`` for ``ttl`` seconds."""
