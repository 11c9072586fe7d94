"""Primary/secondary override store composition."""

from __future__ import annotations

from leadscope.core.exceptions import OverrideStoreError
from leadscope.core.logging import get_logger
from leadscope.core.models.lead import Override
from leadscope.core.monitoring import MetricsCollector, get_metrics_collector
from leadscope.core.overrides.base import OverrideStore

logger = get_logger(__name__)


class FallbackOverrideStore(OverrideStore):
    """Try ``primary`` first; on failure serve the call from ``secondary``.

    The two backends are not reconciled. A write that lands only on the
    secondary is not replayed to the primary later.
    """

    def __init__(
        self,
        primary: OverrideStore,
        secondary: OverrideStore,
        *,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.primary = primary
        self.secondary = secondary
        self._metrics = metrics
        self.name = f"{primary.name}+{secondary.name}"

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics or get_metrics_collector()

    def _fell_back(self, operation: str, error: OverrideStoreError) -> None:
        logger.bind(provider=self.primary.name, error_code=error.error_code).warning(
            f"Override {operation} via {self.primary.name} failed, using {self.secondary.name}: {error.message}"
        )
        self.metrics.record_override_fallback(operation)

    async def get_all(self) -> dict[str, Override]:
        try:
            return await self.primary.get_all()
        except OverrideStoreError as e:
            self._fell_back("read", e)
        return await self.secondary.get_all()

    async def put(self, lead_id: str, override: Override) -> None:
        try:
            await self.primary.put(lead_id, override)
            return
        except OverrideStoreError as e:
            self._fell_back("write", e)
        await self.secondary.put(lead_id, override)

    async def close(self) -> None:
        await self.primary.close()
        await self.secondary.close()


__all__ = ["FallbackOverrideStore"]
