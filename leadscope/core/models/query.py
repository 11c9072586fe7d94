"""Search criteria handed to source adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

if TYPE_CHECKING:
    from leadscope.core.models.institution import Institution

DEFAULT_RESULT_LIMIT = 10000


class SearchCriteria(BaseModel):
    """Source-independent search criteria.

    Asset bounds are whole dollars; each adapter converts them to the unit
    its upstream uses.
    """

    model_config = ConfigDict(frozen=True)

    state: str | None = None
    min_assets: int | None = Field(default=None, ge=0)
    max_assets: int | None = Field(default=None, ge=0)
    name: str | None = None
    limit: int = Field(default=DEFAULT_RESULT_LIMIT, gt=0)
    offset: int = Field(default=0, ge=0)
    active_only: bool = True

    @field_validator("state")
    @classmethod
    def _normalize_state(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().upper()
        if not value:
            return None
        if len(value) != 2 or not value.isalpha():
            raise ValueError("state must be a two-letter code")
        return value

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @model_validator(mode="after")
    def _check_asset_range(self) -> "SearchCriteria":
        if self.min_assets is not None and self.max_assets is not None and self.min_assets > self.max_assets:
            raise ValueError("min_assets must not exceed max_assets")
        return self

    def matches(self, institution: Institution) -> bool:
        """Return True when ``institution`` satisfies every criterion."""

        if self.state and institution.state != self.state:
            return False
        if self.min_assets is not None and institution.assets_usd < self.min_assets:
            return False
        if self.max_assets is not None and institution.assets_usd > self.max_assets:
            return False
        if self.name and self.name.lower() not in institution.name.lower():
            return False
        return True


__all__ = ["DEFAULT_RESULT_LIMIT", "SearchCriteria"]
