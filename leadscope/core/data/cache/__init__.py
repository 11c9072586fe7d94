"""Caching for the proxy endpoint."""

from .base import CacheStrategy
from .memory import InMemoryTTLCache

__all__ = ["CacheStrategy", "InMemoryTTLCache"]
