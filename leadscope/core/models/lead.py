"""Score, override and lead models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from leadscope.core.models.institution import Institution, InstitutionKind, SourceSystem

MAX_RECOMMENDED_PRODUCTS = 3


class LeadStatus(str, Enum):
    """Sales pipeline stage."""

    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    DEMO_SCHEDULED = "demo_scheduled"
    PROPOSAL_SENT = "proposal_sent"
    WON = "won"
    LOST = "lost"


class ScoreResult(BaseModel):
    """Opportunity score and ordered product recommendations."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    recommended_products: tuple[str, ...] = Field(default=(), max_length=MAX_RECOMMENDED_PRODUCTS)


class Override(BaseModel):
    """User-entered fields that win over freshly computed lead data.

    Only fields explicitly set take part in a merge. Serialized with camelCase
    keys, the shape shared by the remote API and the local store.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    contact: str | None = None
    title: str | None = None
    email: str | None = None
    phone: str | None = None
    status: LeadStatus | None = None
    notes: str | None = None
    score: int | None = Field(default=None, ge=0, le=100)
    last_contact: str | None = None

    def changes(self) -> dict[str, Any]:
        """Return the set fields keyed by attribute name."""

        return self.model_dump(exclude_unset=True, exclude_none=True)

    def to_payload(self) -> dict[str, Any]:
        """Return the set fields in wire form (camelCase, JSON types)."""

        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True, mode="json")

    def merged(self, other: Override) -> Override:
        """Shallow merge where ``other`` wins field by field."""

        return Override.model_validate({**self.to_payload(), **other.to_payload()})

    def is_empty(self) -> bool:
        return not self.changes()


class Lead(BaseModel):
    """Institution combined with its score and any override."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    kind: InstitutionKind
    city: str = ""
    state: str = ""
    assets_usd: int = 0
    member_count: int = 0
    deposits_usd: int = 0
    roa_pct: float = 0.0
    branch_count: int = 0
    regulatory_id: str = ""
    source_system: SourceSystem
    website: str = ""
    contact: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    status: LeadStatus = LeadStatus.NEW
    score: int = 0
    recommended_products: tuple[str, ...] = ()
    last_contact: str = "Never"
    notes: str = ""

    @classmethod
    def from_institution(cls, institution: Institution, result: ScoreResult) -> Lead:
        return cls(
            **institution.model_dump(),
            score=result.score,
            recommended_products=result.recommended_products,
        )

    def apply_override(self, override: Override | None) -> Lead:
        """Return a copy with every set override field applied."""

        if override is None:
            return self
        changes = override.changes()
        if not changes:
            return self
        return self.model_copy(update=changes)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


__all__ = [
    "MAX_RECOMMENDED_PRODUCTS",
    "LeadStatus",
    "ScoreResult",
    "Override",
    "Lead",
]
