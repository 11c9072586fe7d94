"""Build the pipeline from configuration."""

from __future__ import annotations

from leadscope.core.config import LeadscopeConfig
from leadscope.core.data.fallback import FallbackOrchestrator
from leadscope.core.data.providers import (
    CacheProxyAdapter,
    EmbeddedSampleAdapter,
    FDICAdapter,
    NCUAAdapter,
    SourceAdapter,
)
from leadscope.core.http_adapter import HttpClient, HttpConfig
from leadscope.core.models.institution import SourceSystem
from leadscope.core.monitoring import MetricsCollector
from leadscope.core.overrides import (
    FallbackOverrideStore,
    LocalOverrideStore,
    OverrideStore,
    RemoteOverrideStore,
)
from leadscope.core.services.resolution import ResolutionCoordinator


def create_http_client(config: LeadscopeConfig) -> HttpClient:
    return HttpClient(HttpConfig(timeout=config.sources.timeout))


def create_bank_source(
    http_client: HttpClient,
    config: LeadscopeConfig,
    *,
    metrics: MetricsCollector | None = None,
) -> FallbackOrchestrator:
    """FDIC API, then the embedded snapshot."""

    tiers: list[SourceAdapter] = [
        FDICAdapter(http_client, config.sources.fdic_base_url),
        EmbeddedSampleAdapter(SourceSystem.FDIC),
    ]
    return FallbackOrchestrator(SourceSystem.FDIC, tiers, metrics=metrics)


def create_credit_union_source(
    http_client: HttpClient,
    config: LeadscopeConfig,
    *,
    include_proxy: bool = True,
    metrics: MetricsCollector | None = None,
) -> FallbackOrchestrator:
    """Cache proxy (when configured), each NCUA dataset, then the embedded snapshot.

    The proxy server itself builds this chain with ``include_proxy=False``
    so it never calls itself.
    """

    tiers: list[SourceAdapter] = []
    if include_proxy and config.sources.proxy_url:
        tiers.append(CacheProxyAdapter(http_client, config.sources.proxy_url))
    tiers.extend(NCUAAdapter(http_client, endpoint) for endpoint in config.sources.ncua_endpoints)
    tiers.append(EmbeddedSampleAdapter(SourceSystem.NCUA))
    return FallbackOrchestrator(SourceSystem.NCUA, tiers, metrics=metrics)


def create_local_override_store(config: LeadscopeConfig) -> LocalOverrideStore:
    return LocalOverrideStore(config.overrides.local_path, namespace=config.overrides.namespace)


def create_override_store(
    http_client: HttpClient,
    config: LeadscopeConfig,
    *,
    metrics: MetricsCollector | None = None,
) -> OverrideStore:
    """Remote store backed by the local one, or the local store alone."""

    local = create_local_override_store(config)
    if not config.overrides.remote_url:
        return local
    remote = RemoteOverrideStore(http_client, config.overrides.remote_url)
    return FallbackOverrideStore(remote, local, metrics=metrics)


def create_coordinator(
    http_client: HttpClient,
    config: LeadscopeConfig,
    *,
    override_store: OverrideStore | None = None,
    metrics: MetricsCollector | None = None,
) -> ResolutionCoordinator:
    if override_store is None:
        override_store = create_override_store(http_client, config, metrics=metrics)
    return ResolutionCoordinator(
        create_bank_source(http_client, config, metrics=metrics),
        create_credit_union_source(http_client, config, metrics=metrics),
        override_store,
        metrics=metrics,
    )


__all__ = [
    "create_bank_source",
    "create_coordinator",
    "create_credit_union_source",
    "create_http_client",
    "create_local_override_store",
    "create_override_store",
]
