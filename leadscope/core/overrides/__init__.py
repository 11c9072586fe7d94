"""Override persistence."""

from leadscope.core.overrides.base import OverrideStore
from leadscope.core.overrides.fallback import FallbackOverrideStore
from leadscope.core.overrides.local import LocalOverrideStore
from leadscope.core.overrides.remote import RemoteOverrideStore

__all__ = ["OverrideStore", "RemoteOverrideStore", "LocalOverrideStore", "FallbackOverrideStore"]
