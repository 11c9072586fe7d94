"""Server-side cache proxy tier.

The proxy returns ``{"data": [...], "source": "..."}`` with the full,
unfiltered dataset; criteria are applied after normalization.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from leadscope.core.data.providers.base import SourceAdapter
from leadscope.core.exceptions import MalformedPayloadError
from leadscope.core.http_adapter import HttpClient
from leadscope.core.logging import get_logger
from leadscope.core.models.institution import RawRecord, SourceSystem
from leadscope.core.models.query import SearchCriteria

logger = get_logger(__name__)


class CacheProxyAdapter(SourceAdapter):
    """Read a source's records from a caching intermediary."""

    def __init__(
        self,
        http_client: HttpClient,
        url: str,
        source_system: SourceSystem = SourceSystem.NCUA,
        name: str = "cache-proxy",
    ) -> None:
        super().__init__(name)
        self.http_client = http_client
        self.url = url
        self.source_system = source_system

    async def search(self, criteria: SearchCriteria) -> Sequence[RawRecord]:
        payload = await self.http_client.get_json(self.url, provider=self.name)
        if not isinstance(payload, Mapping) or not isinstance(payload.get("data"), list):
            raise MalformedPayloadError(
                "Proxy response has no 'data' list",
                provider_name=self.name,
                details={"url": self.url},
            )
        records = payload["data"]
        logger.bind(provider=self.name).info(
            f"Proxy returned {len(records)} records (upstream: {payload.get('source', 'unknown')})"
        )
        return records


__all__ = ["CacheProxyAdapter"]
