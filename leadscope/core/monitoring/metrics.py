"""Prometheus metrics helpers for leadscope services."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


class MetricsCollector:
    """Collects and exposes pipeline metrics."""

    def __init__(self, *, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.tier_attempts_total = Counter(
            "leadscope_tier_attempts_total",
            "Retrieval tier attempts grouped by source, tier and outcome.",
            ("source", "tier", "outcome"),
            registry=self.registry,
        )
        self.tier_latency_seconds = Histogram(
            "leadscope_tier_latency_seconds",
            "Latency distribution for retrieval tier attempts.",
            ("source",),
            buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, float("inf")),
            registry=self.registry,
        )
        self.records_dropped_total = Counter(
            "leadscope_records_dropped_total",
            "Raw records dropped during normalization.",
            ("source",),
            registry=self.registry,
        )
        self.override_fallbacks_total = Counter(
            "leadscope_override_fallbacks_total",
            "Override store operations served by the secondary backend.",
            ("operation",),
            registry=self.registry,
        )
        self.resolution_latency_seconds = Histogram(
            "leadscope_resolution_latency_seconds",
            "End-to-end resolution run latency.",
            buckets=(0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, float("inf")),
            registry=self.registry,
        )

    def record_tier_attempt(self, source: str, tier: str, outcome: str, latency_seconds: float) -> None:
        """Record one tier attempt."""

        self.tier_attempts_total.labels(source=source, tier=tier, outcome=outcome).inc()
        self.tier_latency_seconds.labels(source=source).observe(latency_seconds)

    def record_dropped(self, source: str, count: int = 1) -> None:
        if count:
            self.records_dropped_total.labels(source=source).inc(count)

    def record_override_fallback(self, operation: str) -> None:
        self.override_fallbacks_total.labels(operation=operation).inc()

    def observe_resolution(self, latency_seconds: float) -> None:
        self.resolution_latency_seconds.observe(latency_seconds)

    def render(self) -> bytes:
        """Render metrics in Prometheus exposition format."""

        return generate_latest(self.registry)


_DEFAULT_COLLECTOR: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Return the global metrics collector instance."""

    global _DEFAULT_COLLECTOR
    if _DEFAULT_COLLECTOR is None:
        _DEFAULT_COLLECTOR = MetricsCollector()
    return _DEFAULT_COLLECTOR


def configure_metrics_collector(collector: MetricsCollector | None) -> None:
    """Override the global metrics collector for application wiring or tests."""

    global _DEFAULT_COLLECTOR
    _DEFAULT_COLLECTOR = collector
