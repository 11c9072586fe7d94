"""Collaborators for building the web app without network or disk access."""

from __future__ import annotations

from typing import Any

from leadscope.core.config import LeadscopeConfig
from leadscope.core.data.cache import InMemoryTTLCache
from leadscope.core.data.fallback import FallbackOrchestrator
from leadscope.core.data.providers import EmbeddedSampleAdapter, SourceAdapter
from leadscope.core.models.institution import SourceSystem
from leadscope.core.overrides import LocalOverrideStore

from support import StaticAdapter, build_client, fdic_record, ncua_record

BANKS = [fdic_record("628", "Harbor Bank", 1_500_000, state="MD", ROA=1.2)]
CREDIT_UNIONS = [
    ncua_record("68413", "Navy Federal Credit Union", 165_000_000, no_of_members="13000000"),
    ncua_record("60936", "Coastal Credit Union", 4_800_000, state="NC"),
]


def build_app_collaborators(
    config: LeadscopeConfig | None = None,
    *,
    proxy_tier: SourceAdapter | None = None,
) -> dict[str, Any]:
    """Keyword arguments for ``create_app`` wired to canned tiers."""

    store = LocalOverrideStore(":memory:")
    proxy_source = FallbackOrchestrator(
        SourceSystem.NCUA,
        [
            proxy_tier or StaticAdapter("ncua:9k6a-5st2", SourceSystem.NCUA, CREDIT_UNIONS),
            EmbeddedSampleAdapter(SourceSystem.NCUA),
        ],
    )
    return {
        "config": config or LeadscopeConfig(),
        "client": build_client(store, banks=BANKS, credit_unions=CREDIT_UNIONS),
        "override_store": store,
        "proxy_source": proxy_source,
        "proxy_cache": InMemoryTTLCache(max_size=4),
    }
