"""Session-level client: holds the latest lead set and routes override writes."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from leadscope.core.config import ConfigManager, LeadscopeConfig
from leadscope.core.exceptions import DataValidationError, LeadNotFoundError, OverrideStoreError
from leadscope.core.factory import create_coordinator, create_http_client, create_override_store
from leadscope.core.http_adapter import HttpClient
from leadscope.core.logging import configure_logging, get_logger
from leadscope.core.models.lead import Lead, Override
from leadscope.core.models.query import SearchCriteria
from leadscope.core.monitoring import MetricsCollector
from leadscope.core.overrides import OverrideStore
from leadscope.core.services.leads import LeadFilter, filter_leads
from leadscope.core.services.resolution import ResolutionCoordinator, ResolutionResult

logger = get_logger(__name__)


class LeadscopeClient:
    """Resolve leads and record user edits.

    ``refresh`` may be called again while an earlier call is still running;
    only the most recently started run updates the held lead set.
    """

    def __init__(
        self,
        config: LeadscopeConfig | None = None,
        *,
        http_client: HttpClient | None = None,
        override_store: OverrideStore | None = None,
        coordinator: ResolutionCoordinator | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.config = config or ConfigManager().get_config()
        self.http_client = http_client or create_http_client(self.config)
        if override_store is None:
            override_store = (
                coordinator.override_store
                if coordinator is not None and coordinator.override_store is not None
                else create_override_store(self.http_client, self.config, metrics=metrics)
            )
        self.override_store = override_store
        self.coordinator = coordinator or create_coordinator(
            self.http_client, self.config, override_store=override_store, metrics=metrics
        )
        self._generation = 0
        self._leads: dict[str, Lead] = {}
        self._last_result: ResolutionResult | None = None

    async def __aenter__(self) -> LeadscopeClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def last_result(self) -> ResolutionResult | None:
        return self._last_result

    @property
    def loaded(self) -> bool:
        return self._last_result is not None

    async def refresh(self, criteria: SearchCriteria | None = None) -> ResolutionResult:
        """Run a resolution and, unless a newer run started meanwhile, keep its leads."""

        self._generation += 1
        generation = self._generation
        result = await self.coordinator.resolve(criteria)
        if generation != self._generation:
            logger.info(f"Discarding superseded resolution run {result.run_id}")
            return dataclasses.replace(result, superseded=True)
        self._leads = {lead.id: lead for lead in result.leads}
        self._last_result = result
        return result

    def leads(self, lead_filter: LeadFilter | None = None) -> list[Lead]:
        """Held leads in assets-descending order, optionally filtered."""
        return filter_leads(self._leads.values(), lead_filter)

    def get_lead(self, lead_id: str) -> Lead:
        try:
            return self._leads[lead_id]
        except KeyError:
            raise LeadNotFoundError(lead_id) from None

    async def update_lead(self, lead_id: str, changes: Override | Mapping[str, Any]) -> Lead | None:
        """Apply ``changes`` to the held lead, then persist them.

        The in-memory update stays even if persistence fails; the failure is
        still raised. Returns the updated lead, or None when ``lead_id`` is not
        in the held set (the override is persisted regardless).
        """

        if isinstance(changes, Override):
            override = changes
        else:
            try:
                override = Override.model_validate(dict(changes))
            except ValidationError as e:
                raise DataValidationError(
                    f"Invalid override for {lead_id}",
                    validation_errors={".".join(map(str, err["loc"])): err["msg"] for err in e.errors()},
                ) from e
        if override.is_empty():
            raise DataValidationError(f"No fields to update for {lead_id}")

        updated = None
        if lead_id in self._leads:
            updated = self._leads[lead_id].apply_override(override)
            self._leads[lead_id] = updated

        try:
            await self.override_store.put(lead_id, override)
        except OverrideStoreError as e:
            logger.bind(provider=e.backend, error_code=e.error_code).error(
                f"Override for {lead_id} kept in memory only: {e.message}"
            )
            raise
        return updated

    async def close(self) -> None:
        await self.override_store.close()
        await self.http_client.close()


def create_client(config: LeadscopeConfig | None = None, **kwargs: Any) -> LeadscopeClient:
    """Build a client and apply the configured logging settings."""

    config = config or ConfigManager().get_config()
    configure_logging(level=config.logging.level, file_path=config.logging.file or None)
    return LeadscopeClient(config, **kwargs)


__all__ = ["LeadscopeClient", "create_client"]
