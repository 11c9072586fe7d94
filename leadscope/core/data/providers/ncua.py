"""NCUA open-data adapter (credit unions).

The NCUA publishes several Socrata dataset versions; each endpoint gets its
own adapter instance so the orchestrator can fall back between them.
Amounts are in thousands.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from leadscope.core.data.providers.base import SourceAdapter, dollars_to_thousands
from leadscope.core.exceptions import MalformedPayloadError
from leadscope.core.http_adapter import HttpClient
from leadscope.core.models.institution import RawRecord, SourceSystem
from leadscope.core.models.query import SearchCriteria


def _quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def build_where_clause(
    criteria: SearchCriteria,
    *,
    assets_field: str = "total_assets",
    name_field: str = "cu_name",
) -> str:
    """Translate criteria into a SoQL ``$where`` conjunction."""

    conditions: list[str] = []
    if criteria.state:
        conditions.append(f"state={_quote(criteria.state)}")
    if criteria.min_assets is not None:
        conditions.append(f"{assets_field}>={dollars_to_thousands(criteria.min_assets)}")
    if criteria.max_assets is not None:
        conditions.append(f"{assets_field}<={dollars_to_thousands(criteria.max_assets)}")
    if criteria.name:
        conditions.append(f"upper({name_field}) like {_quote('%' + criteria.name.upper() + '%')}")
    return " AND ".join(conditions)


class NCUAAdapter(SourceAdapter):
    """Query one NCUA dataset endpoint."""

    source_system = SourceSystem.NCUA

    def __init__(
        self,
        http_client: HttpClient,
        endpoint: str,
        name: str | None = None,
        *,
        assets_field: str = "total_assets",
        name_field: str = "cu_name",
    ) -> None:
        super().__init__(name or f"ncua:{endpoint.rstrip('/').rsplit('/', 1)[-1].removesuffix('.json')}")
        self.http_client = http_client
        self.endpoint = endpoint
        self.assets_field = assets_field
        self.name_field = name_field

    def build_params(self, criteria: SearchCriteria) -> dict[str, Any]:
        params: dict[str, Any] = {
            "$limit": criteria.limit,
            "$order": f"{self.assets_field} DESC",
        }
        if criteria.offset:
            params["$offset"] = criteria.offset
        where = build_where_clause(criteria, assets_field=self.assets_field, name_field=self.name_field)
        if where:
            params["$where"] = where
        return params

    async def search(self, criteria: SearchCriteria) -> Sequence[RawRecord]:
        payload = await self.http_client.get_json(
            self.endpoint,
            provider=self.name,
            params=self.build_params(criteria),
        )
        if not isinstance(payload, list):
            raise MalformedPayloadError(
                "NCUA response is not a JSON array",
                provider_name=self.name,
                details={"endpoint": self.endpoint},
            )
        return payload


__all__ = ["NCUAAdapter", "build_where_clause"]
