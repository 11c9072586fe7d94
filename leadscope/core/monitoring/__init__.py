"""Monitoring helpers."""

from leadscope.core.monitoring.metrics import (
    MetricsCollector,
    configure_metrics_collector,
    get_metrics_collector,
)

__all__ = ["MetricsCollector", "configure_metrics_collector", "get_metrics_collector"]
