"""Canonical institution model shared by every source."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

RawRecord = Mapping[str, Any]
"""One upstream row as returned by a retrieval tier; key casing varies by tier."""


class InstitutionKind(str, Enum):
    """Type of financial institution."""

    CREDIT_UNION = "Credit Union"
    COMMUNITY_BANK = "Community Bank"


class SourceSystem(str, Enum):
    """Upstream regulator dataset an institution was read from."""

    FDIC = "FDIC"
    NCUA = "NCUA"

    @property
    def id_prefix(self) -> str:
        return _ID_PREFIXES[self]

    @property
    def kind(self) -> InstitutionKind:
        return _KINDS[self]


_ID_PREFIXES = {SourceSystem.FDIC: "bank", SourceSystem.NCUA: "cu"}
_KINDS = {
    SourceSystem.FDIC: InstitutionKind.COMMUNITY_BANK,
    SourceSystem.NCUA: InstitutionKind.CREDIT_UNION,
}


class Institution(BaseModel):
    """Normalized credit union or bank.

    Monetary amounts are whole US dollars. ``member_count`` is always 0 for
    banks, which have no member concept.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: InstitutionKind
    city: str = ""
    state: str = ""
    assets_usd: int = Field(ge=0)
    member_count: int = Field(default=0, ge=0)
    deposits_usd: int = 0
    roa_pct: float = 0.0
    branch_count: int = 0
    regulatory_id: str = ""
    source_system: SourceSystem
    website: str = ""

    @property
    def is_credit_union(self) -> bool:
        return self.kind is InstitutionKind.CREDIT_UNION


__all__ = ["RawRecord", "InstitutionKind", "SourceSystem", "Institution"]
