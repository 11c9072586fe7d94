"""FDIC BankFind adapter (community banks).

Documentation: https://banks.data.fdic.gov/docs/
Filters are a comma-joined expression list (``STALP:VA``,
``ASSET:[100000 TO *]``, ``NAME:*term*``); amounts are in thousands.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from leadscope.core.data.providers.base import SourceAdapter, dollars_to_thousands
from leadscope.core.exceptions import MalformedPayloadError
from leadscope.core.http_adapter import HttpClient
from leadscope.core.models.institution import RawRecord, SourceSystem
from leadscope.core.models.query import SearchCriteria

FDIC_FIELDS = "CERT,NAME,CITY,STALP,ASSET,DEP,ROA,OFFNUM,WEBADDR,ACTIVE"


def build_filter_expression(criteria: SearchCriteria) -> str:
    """Translate criteria into the BankFind filter syntax."""

    filters: list[str] = []
    if criteria.active_only:
        filters.append("ACTIVE:1")
    if criteria.state:
        filters.append(f"STALP:{criteria.state}")
    if criteria.min_assets is not None or criteria.max_assets is not None:
        low = dollars_to_thousands(criteria.min_assets) if criteria.min_assets is not None else "*"
        high = dollars_to_thousands(criteria.max_assets) if criteria.max_assets is not None else "*"
        filters.append(f"ASSET:[{low} TO {high}]")
    if criteria.name:
        term = "*".join(criteria.name.split())
        filters.append(f"NAME:*{term}*")
    return ",".join(filters)


class FDICAdapter(SourceAdapter):
    """Query the FDIC institutions endpoint."""

    source_system = SourceSystem.FDIC

    def __init__(
        self,
        http_client: HttpClient,
        base_url: str = "https://banks.data.fdic.gov/api",
        name: str = "fdic",
    ) -> None:
        super().__init__(name)
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    def build_params(self, criteria: SearchCriteria) -> dict[str, Any]:
        params: dict[str, Any] = {
            "fields": FDIC_FIELDS,
            "sort_by": "ASSET",
            "sort_order": "DESC",
            "limit": criteria.limit,
            "offset": criteria.offset,
            "format": "json",
        }
        expression = build_filter_expression(criteria)
        if expression:
            params["filters"] = expression
        return params

    async def search(self, criteria: SearchCriteria) -> Sequence[RawRecord]:
        payload = await self.http_client.get_json(
            f"{self.base_url}/institutions",
            provider=self.name,
            params=self.build_params(criteria),
        )
        if not isinstance(payload, Mapping) or not isinstance(payload.get("data"), list):
            raise MalformedPayloadError(
                "FDIC response has no 'data' list",
                provider_name=self.name,
            )
        # BankFind wraps each row as {"data": {...}, "score": n}
        records: list[RawRecord] = []
        for item in payload["data"]:
            if isinstance(item, Mapping) and isinstance(item.get("data"), Mapping):
                records.append(item["data"])
            else:
                records.append(item)
        return records


__all__ = ["FDICAdapter", "FDIC_FIELDS", "build_filter_expression"]
