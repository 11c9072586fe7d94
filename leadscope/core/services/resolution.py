"""Resolution coordinator: fetch both sources, normalize, score, merge."""

from __future__ import annotations

import asyncio
import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone

from leadscope.core.data.fallback import FallbackOrchestrator, FallbackResult, OrchestratorState, TierAttempt
from leadscope.core.data.normalizer import normalize_batch
from leadscope.core.exceptions import OverrideStoreError, ResolutionError
from leadscope.core.logging import get_logger, log_context
from leadscope.core.models.institution import Institution, SourceSystem
from leadscope.core.models.lead import Lead, Override
from leadscope.core.models.query import SearchCriteria
from leadscope.core.monitoring import MetricsCollector, get_metrics_collector
from leadscope.core.overrides.base import OverrideStore
from leadscope.core.services.scoring import score_institution

logger = get_logger(__name__)


@dataclass(frozen=True)
class SourceReport:
    """How one source contributed to a run."""

    source_system: SourceSystem
    tier: str
    state: OrchestratorState
    attempts: tuple[TierAttempt, ...]
    fetched: int
    dropped: int
    matched: int
    kept: int

    @property
    def degraded(self) -> bool:
        return self.state is OrchestratorState.EXHAUSTED or len(self.attempts) > 1

    def as_dict(self) -> dict[str, object]:
        return {
            "source": self.source_system.value,
            "tier": self.tier,
            "state": self.state.value,
            "degraded": self.degraded,
            "fetched": self.fetched,
            "dropped": self.dropped,
            "matched": self.matched,
            "kept": self.kept,
            "attempts": [attempt.as_dict() for attempt in self.attempts],
        }


@dataclass(frozen=True)
class ResolutionResult:
    """Merged, assets-descending leads plus provenance for the run."""

    leads: tuple[Lead, ...]
    sources: tuple[SourceReport, ...]
    overrides_applied: int
    run_id: str
    started_at: datetime
    overrides_available: bool = True
    superseded: bool = False
    elapsed_ms: float = 0.0
    criteria: SearchCriteria = field(default_factory=SearchCriteria)

    @property
    def degraded(self) -> bool:
        """True when any source was served by a fallback tier."""
        return any(report.degraded for report in self.sources)

    def source(self, source_system: SourceSystem) -> SourceReport | None:
        for report in self.sources:
            if report.source_system is source_system:
                return report
        return None


class ResolutionCoordinator:
    """Run both source pipelines and the override read concurrently, then merge.

    Degraded or partial data is never an error here. Only an unexpected
    failure escapes, wrapped as ``ResolutionError``.
    """

    def __init__(
        self,
        bank_source: FallbackOrchestrator,
        credit_union_source: FallbackOrchestrator,
        override_store: OverrideStore | None = None,
        *,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.bank_source = bank_source
        self.credit_union_source = credit_union_source
        self.override_store = override_store
        self._metrics = metrics

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics or get_metrics_collector()

    async def resolve(self, criteria: SearchCriteria | None = None) -> ResolutionResult:
        criteria = criteria or SearchCriteria()
        run_id = uuid.uuid4().hex
        started_at = datetime.now(timezone.utc)
        started = time.perf_counter()

        with log_context(trace_id=run_id):
            try:
                bank_result, credit_union_result, overrides = await asyncio.gather(
                    self.bank_source.fetch(criteria),
                    self.credit_union_source.fetch(criteria),
                    self._load_overrides(),
                )
                result = self._merge(
                    (bank_result, credit_union_result),
                    overrides,
                    criteria,
                    run_id=run_id,
                    started_at=started_at,
                    started=started,
                )
            except Exception as e:
                logger.bind(error_code="RESOLUTION_FAILED").error(
                    f"Resolution run failed: {type(e).__name__}: {e}"
                )
                raise ResolutionError(details={"run_id": run_id, "error_type": type(e).__name__}) from e

            self.metrics.observe_resolution(time.perf_counter() - started)
            logger.info(
                f"Resolved {len(result.leads)} leads "
                f"({result.overrides_applied} with overrides, degraded={result.degraded})"
            )
            return result

    async def _load_overrides(self) -> dict[str, Override] | None:
        if self.override_store is None:
            return {}
        try:
            return await self.override_store.get_all()
        except OverrideStoreError as e:
            # No overrides is a valid state, not a failed run.
            logger.bind(provider=e.backend, error_code=e.error_code).warning(
                f"Overrides unavailable, continuing without them: {e.message}"
            )
            return None

    def _collect(self, result: FallbackResult, criteria: SearchCriteria) -> tuple[list[Institution], SourceReport]:
        source = result.source_system
        batch = normalize_batch(result.records, source)
        self.metrics.record_dropped(source.value, batch.dropped)

        # Same id twice within a source: the later record wins.
        unique = {institution.id: institution for institution in batch.institutions}
        matched = [institution for institution in unique.values() if criteria.matches(institution)]
        matched.sort(key=lambda institution: institution.assets_usd, reverse=True)
        kept = matched[: criteria.limit]

        report = SourceReport(
            source_system=source,
            tier=result.tier,
            state=result.state,
            attempts=result.attempts,
            fetched=len(result.records),
            dropped=batch.dropped,
            matched=len(matched),
            kept=len(kept),
        )
        return kept, report

    def _merge(
        self,
        results: tuple[FallbackResult, ...],
        overrides: Mapping[str, Override] | None,
        criteria: SearchCriteria,
        *,
        run_id: str,
        started_at: datetime,
        started: float,
    ) -> ResolutionResult:
        institutions: dict[str, Institution] = {}
        reports = []
        for result in results:
            kept, report = self._collect(result, criteria)
            reports.append(report)
            for institution in kept:
                institutions[institution.id] = institution

        applied = 0
        leads = []
        for institution in institutions.values():
            lead = Lead.from_institution(institution, score_institution(institution))
            override = overrides.get(institution.id) if overrides else None
            if override is not None and not override.is_empty():
                lead = lead.apply_override(override)
                applied += 1
            leads.append(lead)

        # Stable, so ties keep bank-then-credit-union source order.
        leads.sort(key=lambda lead: lead.assets_usd, reverse=True)

        return ResolutionResult(
            leads=tuple(leads),
            sources=tuple(reports),
            overrides_applied=applied,
            run_id=run_id,
            started_at=started_at,
            overrides_available=overrides is not None,
            elapsed_ms=(time.perf_counter() - started) * 1000,
            criteria=criteria,
        )


__all__ = ["ResolutionCoordinator", "ResolutionResult", "SourceReport"]
