"""Override store contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from leadscope.core.logging import get_logger
from leadscope.core.models.lead import Override

logger = get_logger(__name__)


class OverrideStore(ABC):
    """Persist user-entered lead fields keyed by institution id.

    ``put`` is a shallow merge: fields present in the new override replace
    stored ones, everything else is kept.
    """

    name: str = "override-store"

    @abstractmethod
    async def get_all(self) -> dict[str, Override]:
        """Return every stored override."""

    @abstractmethod
    async def put(self, lead_id: str, override: Override) -> None:
        """Merge ``override`` into the entry for ``lead_id``."""

    async def get(self, lead_id: str) -> Override | None:
        return (await self.get_all()).get(lead_id)

    async def close(self) -> None:
        """Release backend resources."""


def parse_override_mapping(payload: Mapping[str, Any], *, source: str) -> dict[str, Override]:
    """Validate a wire mapping ``id -> override fields``.

    Entries that fail validation are skipped; one bad entry never hides the
    rest of the mapping.
    """

    overrides: dict[str, Override] = {}
    for lead_id, fields in payload.items():
        if not isinstance(fields, Mapping):
            logger.bind(provider=source).warning(f"Skipping override for {lead_id}: not an object")
            continue
        try:
            overrides[str(lead_id)] = Override.model_validate(fields)
        except ValidationError as e:
            logger.bind(provider=source).warning(
                f"Skipping override for {lead_id}: {e.error_count()} invalid field(s)"
            )
    return overrides


def dump_override_mapping(overrides: Mapping[str, Override]) -> dict[str, dict[str, Any]]:
    return {lead_id: override.to_payload() for lead_id, override in overrides.items()}


__all__ = ["OverrideStore", "parse_override_mapping", "dump_override_mapping"]
