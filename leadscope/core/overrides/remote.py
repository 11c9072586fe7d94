"""Override store backed by the companion HTTP service."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import quote

from leadscope.core.exceptions import OverrideReadError, OverrideWriteError, ProviderError
from leadscope.core.http_adapter import HttpClient
from leadscope.core.models.lead import Override
from leadscope.core.overrides.base import OverrideStore, parse_override_mapping


class RemoteOverrideStore(OverrideStore):
    """``GET /overrides`` and ``PUT /overrides/{id}`` against ``base_url``."""

    name = "remote"

    def __init__(self, http_client: HttpClient, base_url: str) -> None:
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    @property
    def collection_url(self) -> str:
        return f"{self.base_url}/overrides"

    def item_url(self, lead_id: str) -> str:
        return f"{self.collection_url}/{quote(lead_id, safe='')}"

    async def get_all(self) -> dict[str, Override]:
        try:
            payload = await self.http_client.get_json(self.collection_url, provider=self.name)
        except ProviderError as e:
            raise OverrideReadError(e.message, backend=self.name, details=e.details) from e
        if not isinstance(payload, Mapping):
            raise OverrideReadError(
                "Override payload is not an object",
                backend=self.name,
                details={"url": self.collection_url},
            )
        return parse_override_mapping(payload, source=self.name)

    async def put(self, lead_id: str, override: Override) -> None:
        url = self.item_url(lead_id)
        try:
            await self.http_client.put_json(url, override.to_payload(), provider=self.name)
        except ProviderError as e:
            raise OverrideWriteError(e.message, backend=self.name, details=e.details) from e


__all__ = ["RemoteOverrideStore"]
