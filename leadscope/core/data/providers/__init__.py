"""Source adapters."""

from leadscope.core.data.providers.base import SourceAdapter
from leadscope.core.data.providers.cache_proxy import CacheProxyAdapter
from leadscope.core.data.providers.fdic import FDICAdapter
from leadscope.core.data.providers.ncua import NCUAAdapter
from leadscope.core.data.providers.sample import EmbeddedSampleAdapter

__all__ = [
    "SourceAdapter",
    "FDICAdapter",
    "NCUAAdapter",
    "CacheProxyAdapter",
    "EmbeddedSampleAdapter",
]
