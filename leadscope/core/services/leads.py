"""Filtering and pagination over a resolved lead set."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from leadscope.core.exceptions import DataValidationError
from leadscope.core.models.institution import InstitutionKind
from leadscope.core.models.lead import Lead, LeadStatus

DEFAULT_PAGE_SIZE = 25


@dataclass(frozen=True)
class AssetBucket:
    """Half-open asset range ``[minimum, maximum)`` in whole dollars."""

    value: str
    label: str
    minimum: int
    maximum: float

    def contains(self, assets_usd: int) -> bool:
        return self.minimum <= assets_usd < self.maximum


ASSET_SIZE_FILTERS: tuple[AssetBucket, ...] = (
    AssetBucket("under100m", "Under $100M", 0, 100_000_000),
    AssetBucket("100m-500m", "$100M - $500M", 100_000_000, 500_000_000),
    AssetBucket("500m-1b", "$500M - $1B", 500_000_000, 1_000_000_000),
    AssetBucket("1b-5b", "$1B - $5B", 1_000_000_000, 5_000_000_000),
    AssetBucket("5b-10b", "$5B - $10B", 5_000_000_000, 10_000_000_000),
    AssetBucket("over10b", "Over $10B", 10_000_000_000, math.inf),
)
_BUCKETS = {bucket.value: bucket for bucket in ASSET_SIZE_FILTERS}


def get_asset_bucket(value: str) -> AssetBucket:
    try:
        return _BUCKETS[value]
    except KeyError:
        raise DataValidationError(
            f"Unknown asset size filter: {value}",
            validation_errors={"asset_bucket": f"expected one of {', '.join(_BUCKETS)}"},
        ) from None


@dataclass(frozen=True)
class LeadFilter:
    """Explicit filter state; every unset field matches everything.

    ``search`` is a case-insensitive substring of name, city or state.
    """

    search: str | None = None
    status: LeadStatus | None = None
    kind: InstitutionKind | None = None
    state: str | None = None
    asset_bucket: str | None = None

    def __post_init__(self) -> None:
        if self.asset_bucket is not None:
            get_asset_bucket(self.asset_bucket)
        if self.state is not None:
            object.__setattr__(self, "state", self.state.strip().upper() or None)
        if self.search is not None:
            object.__setattr__(self, "search", self.search.strip() or None)

    def matches(self, lead: Lead) -> bool:
        if self.search:
            term = self.search.lower()
            if not any(term in value.lower() for value in (lead.name, lead.city, lead.state)):
                return False
        if self.status is not None and lead.status is not self.status:
            return False
        if self.kind is not None and lead.kind is not self.kind:
            return False
        if self.state and lead.state != self.state:
            return False
        if self.asset_bucket and not get_asset_bucket(self.asset_bucket).contains(lead.assets_usd):
            return False
        return True


def filter_leads(leads: Iterable[Lead], lead_filter: LeadFilter | None = None) -> list[Lead]:
    """Apply ``lead_filter`` keeping input order."""

    if lead_filter is None:
        return list(leads)
    return [lead for lead in leads if lead_filter.matches(lead)]


@dataclass(frozen=True)
class Page:
    items: tuple[Lead, ...]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def paginate(leads: Sequence[Lead], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """Slice one page; out-of-range page numbers are clamped."""

    if page_size <= 0:
        raise DataValidationError("page_size must be positive", validation_errors={"page_size": page_size})
    total_pages = max(1, math.ceil(len(leads) / page_size))
    page = max(1, min(page, total_pages))
    start = (page - 1) * page_size
    return Page(
        items=tuple(leads[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_items=len(leads),
        total_pages=total_pages,
    )


def available_states(leads: Iterable[Lead]) -> list[str]:
    return sorted({lead.state for lead in leads if lead.state})


__all__ = [
    "ASSET_SIZE_FILTERS",
    "DEFAULT_PAGE_SIZE",
    "AssetBucket",
    "LeadFilter",
    "Page",
    "available_states",
    "filter_leads",
    "get_asset_bucket",
    "paginate",
]
