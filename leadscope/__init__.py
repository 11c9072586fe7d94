"""leadscope - credit union and community bank lead resolution.

Fetches institutions from the FDIC and NCUA public datasets with tiered
fallback, normalizes them, scores them, and merges user-entered overrides.
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from leadscope.core.client import LeadscopeClient, create_client
from leadscope.core.models import Institution, InstitutionKind, Lead, LeadStatus, Override, SearchCriteria
from leadscope.core.services.resolution import ResolutionResult

T = TypeVar("T")

_client: LeadscopeClient | None = None


def get_client() -> LeadscopeClient:
    """Return the shared client, creating it from configuration on first use."""
    global _client
    if _client is None:
        _client = create_client()
    return _client


def _run_sync(call: Callable[[LeadscopeClient], Awaitable[T]]) -> T:
    async def runner() -> T:
        client = get_client()
        try:
            return await call(client)
        finally:
            # The HTTP pool is bound to this event loop.
            await client.http_client.close()

    return asyncio.run(runner())


async def resolve_async(criteria: SearchCriteria | None = None, **kwargs: Any) -> ResolutionResult:
    """Resolve leads.

    Args:
        criteria: Search criteria; alternatively pass its fields as keywords
        **kwargs: ``state``, ``min_assets``, ``max_assets``, ``name``, ``limit``

    Returns:
        ResolutionResult with assets-descending leads
    """
    criteria = criteria or SearchCriteria(**kwargs)
    return await get_client().refresh(criteria)


def resolve(criteria: SearchCriteria | None = None, **kwargs: Any) -> ResolutionResult:
    """Synchronous ``resolve_async``.

    Examples:
        >>> import leadscope
        >>> result = leadscope.resolve(state="CA", min_assets=1_000_000_000)
        >>> [lead.name for lead in result.leads[:3]]
    """
    criteria = criteria or SearchCriteria(**kwargs)
    return _run_sync(lambda client: client.refresh(criteria))


async def update_lead_async(lead_id: str, changes: Override | Mapping[str, Any]) -> Lead | None:
    return await get_client().update_lead(lead_id, changes)


def update_lead(lead_id: str, changes: Override | Mapping[str, Any]) -> Lead | None:
    """Persist an override for ``lead_id``; see ``LeadscopeClient.update_lead``."""
    return _run_sync(lambda client: client.update_lead(lead_id, changes))


__version__ = "0.1.0"

__all__ = [
    "LeadscopeClient",
    "Institution",
    "InstitutionKind",
    "Lead",
    "LeadStatus",
    "Override",
    "ResolutionResult",
    "SearchCriteria",
    "create_client",
    "get_client",
    "resolve",
    "resolve_async",
    "update_lead",
    "update_lead_async",
]
