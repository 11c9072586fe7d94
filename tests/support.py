"""Shared test doubles and record builders."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

import httpx

from leadscope.core.client import LeadscopeClient
from leadscope.core.config import LeadscopeConfig
from leadscope.core.data.fallback import FallbackOrchestrator
from leadscope.core.data.providers import EmbeddedSampleAdapter, SourceAdapter
from leadscope.core.exceptions import TransportError
from leadscope.core.http_adapter import HttpClient
from leadscope.core.models.institution import RawRecord, SourceSystem
from leadscope.core.models.lead import Lead
from leadscope.core.models.query import SearchCriteria
from leadscope.core.overrides import LocalOverrideStore, OverrideStore
from leadscope.core.services.resolution import ResolutionCoordinator


class StaticAdapter(SourceAdapter):
    """Adapter returning canned records or raising a canned error."""

    def __init__(
        self,
        name: str,
        source_system: SourceSystem,
        records: Sequence[RawRecord] = (),
        error: Exception | None = None,
    ) -> None:
        super().__init__(name)
        self.source_system = source_system
        self.records = list(records)
        self.error = error
        self.calls: list[SearchCriteria] = []

    async def search(self, criteria: SearchCriteria) -> Sequence[RawRecord]:
        self.calls.append(criteria)
        if self.error is not None:
            raise self.error
        return list(self.records)


def failing(name: str, source_system: SourceSystem, status_code: int = 503) -> StaticAdapter:
    return StaticAdapter(
        name,
        source_system,
        error=TransportError(f"{name} unavailable", provider_name=name, status_code=status_code),
    )


def ncua_record(number: str, name: str, assets_thousands: float, state: str = "VA", **extra: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "cu_number": number,
        "cu_name": name,
        "city": "Springfield",
        "state": state,
        "total_assets": str(assets_thousands),
    }
    record.update(extra)
    return record


def fdic_record(cert: str, name: str, assets_thousands: float, state: str = "VA", **extra: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "CERT": cert,
        "NAME": name,
        "CITY": "Richmond",
        "STALP": state,
        "ASSET": assets_thousands,
    }
    record.update(extra)
    return record


def mock_http_client(handler: Callable[[httpx.Request], httpx.Response]) -> HttpClient:
    """HttpClient whose requests are answered by ``handler``."""

    return HttpClient(transport=httpx.MockTransport(handler))


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


def route(routes: Mapping[str, Callable[[httpx.Request], httpx.Response]]) -> Callable[[httpx.Request], httpx.Response]:
    """Dispatch on URL path; unknown paths answer 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        for path, respond in routes.items():
            if request.url.path == path:
                return respond(request)
        return httpx.Response(404, json={"error": "not found"})

    return handler


def make_lead(lead_id: str, name: str, assets_usd: int, *, state: str = "VA", city: str = "Richmond", **extra: Any) -> Lead:
    source = SourceSystem.NCUA if lead_id.startswith("cu_") else SourceSystem.FDIC
    fields: dict[str, Any] = {
        "id": lead_id,
        "name": name,
        "kind": source.kind,
        "city": city,
        "state": state,
        "assets_usd": assets_usd,
        "source_system": source,
    }
    fields.update(extra)
    return Lead(**fields)


def build_client(
    store: OverrideStore | None = None,
    *,
    banks: Sequence[RawRecord] = (),
    credit_unions: Sequence[RawRecord] = (),
    bank_tier: SourceAdapter | None = None,
    coordinator: Any = None,
) -> LeadscopeClient:
    """Client over canned first tiers (embedded samples behind them) and no network."""

    store = store or LocalOverrideStore(":memory:")
    coordinator = coordinator or ResolutionCoordinator(
        FallbackOrchestrator(
            SourceSystem.FDIC,
            [bank_tier or StaticAdapter("fdic", SourceSystem.FDIC, banks), EmbeddedSampleAdapter(SourceSystem.FDIC)],
        ),
        FallbackOrchestrator(
            SourceSystem.NCUA,
            [StaticAdapter("ncua", SourceSystem.NCUA, credit_unions), EmbeddedSampleAdapter(SourceSystem.NCUA)],
        ),
        store,
    )
    return LeadscopeClient(
        LeadscopeConfig(),
        http_client=mock_http_client(lambda request: json_response({})),
        override_store=store,
        coordinator=coordinator,
    )
