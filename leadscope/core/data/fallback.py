"""Ordered tier fallback for one logical source.

The orchestrator walks its tiers as a small state machine::

    TRY_TIER(i) --ok--> SUCCESS
    TRY_TIER(i) --error/empty, i < last--> TRY_TIER(i + 1)
    TRY_TIER(last) --error/empty--> EXHAUSTED

Each tier is attempted at most once per ``fetch``. A failing tier never
raises out of ``fetch``; when every tier fails the final tier's records
(the embedded snapshot) are returned.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from leadscope.core.data.providers.base import SourceAdapter
from leadscope.core.exceptions import ProviderError, TotalSourceFailure
from leadscope.core.logging import get_logger
from leadscope.core.models.institution import RawRecord, SourceSystem
from leadscope.core.models.query import SearchCriteria
from leadscope.core.monitoring import MetricsCollector, get_metrics_collector

logger = get_logger(__name__)


class OrchestratorState(str, Enum):
    TRY_TIER = "try_tier"
    SUCCESS = "success"
    EXHAUSTED = "exhausted_fallback"


class TierOutcome(str, Enum):
    """Result of a single tier attempt."""

    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class TierAttempt:
    """Ledger entry for one tier attempt."""

    tier: str
    outcome: TierOutcome
    record_count: int = 0
    error: str | None = None
    error_code: str | None = None
    latency_ms: float = 0.0

    def as_dict(self) -> dict[str, object]:
        return {
            "tier": self.tier,
            "outcome": self.outcome.value,
            "record_count": self.record_count,
            "error": self.error,
            "error_code": self.error_code,
            "latency_ms": round(self.latency_ms, 1),
        }


@dataclass(frozen=True)
class FallbackResult:
    """Records produced by one ``fetch`` plus how they were obtained."""

    source_system: SourceSystem
    records: tuple[RawRecord, ...]
    tier: str
    state: OrchestratorState
    attempts: tuple[TierAttempt, ...] = field(default_factory=tuple)
    failure: TotalSourceFailure | None = None

    @property
    def degraded(self) -> bool:
        """True when the records did not come from the preferred tier."""
        return self.state is OrchestratorState.EXHAUSTED or len(self.attempts) > 1


class FallbackOrchestrator:
    """Try an ordered list of tiers until one yields records."""

    def __init__(
        self,
        source_system: SourceSystem,
        tiers: Sequence[SourceAdapter],
        *,
        metrics: MetricsCollector | None = None,
    ) -> None:
        if not tiers:
            raise ValueError("at least one tier is required")
        mismatched = [tier.name for tier in tiers if tier.source_system is not source_system]
        if mismatched:
            raise ValueError(f"tiers {mismatched} do not serve {source_system.value}")
        self.source_system = source_system
        self.tiers = tuple(tiers)
        self._metrics = metrics

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics or get_metrics_collector()

    @property
    def tier_names(self) -> list[str]:
        return [tier.name for tier in self.tiers]

    async def _attempt(
        self, tier: SourceAdapter, criteria: SearchCriteria
    ) -> tuple[TierAttempt, Sequence[RawRecord]]:
        log = logger.bind(provider=tier.name)
        started = time.perf_counter()
        try:
            records = list(await tier.search(criteria))
        except ProviderError as e:
            elapsed = time.perf_counter() - started
            attempt = TierAttempt(
                tier=tier.name,
                outcome=TierOutcome.ERROR,
                error=e.message,
                error_code=e.error_code,
                latency_ms=elapsed * 1000,
            )
            log.bind(error_code=e.error_code).warning(f"Tier {tier.name} failed: {e.message}")
            self.metrics.record_tier_attempt(self.source_system.value, tier.name, attempt.outcome.value, elapsed)
            return attempt, []

        elapsed = time.perf_counter() - started
        outcome = TierOutcome.OK if records else TierOutcome.EMPTY
        attempt = TierAttempt(
            tier=tier.name,
            outcome=outcome,
            record_count=len(records),
            latency_ms=elapsed * 1000,
        )
        if records:
            log.info(f"Tier {tier.name} returned {len(records)} records")
        else:
            log.warning(f"Tier {tier.name} returned no records")
        self.metrics.record_tier_attempt(self.source_system.value, tier.name, outcome.value, elapsed)
        return attempt, records

    async def fetch(self, criteria: SearchCriteria) -> FallbackResult:
        """Run the tier state machine once."""

        state = OrchestratorState.TRY_TIER
        index = 0
        attempts: list[TierAttempt] = []
        records: Sequence[RawRecord] = []
        last = len(self.tiers) - 1

        while state is OrchestratorState.TRY_TIER:
            attempt, records = await self._attempt(self.tiers[index], criteria)
            attempts.append(attempt)
            if attempt.outcome is TierOutcome.OK:
                state = OrchestratorState.SUCCESS
            elif index == last:
                state = OrchestratorState.EXHAUSTED
            else:
                index += 1

        failure = None
        if state is OrchestratorState.EXHAUSTED:
            failure = TotalSourceFailure(
                f"All {len(self.tiers)} tiers for {self.source_system.value} failed",
                provider_name=self.source_system.value,
                failed_tiers=[a.as_dict() for a in attempts],
            )
            logger.bind(provider=self.source_system.value, error_code=failure.error_code).warning(
                f"{failure.message}; serving {len(records)} records from {self.tiers[last].name}"
            )

        return FallbackResult(
            source_system=self.source_system,
            records=tuple(records),
            tier=self.tiers[index].name,
            state=state,
            attempts=tuple(attempts),
            failure=failure,
        )


__all__ = [
    "FallbackOrchestrator",
    "FallbackResult",
    "OrchestratorState",
    "TierAttempt",
    "TierOutcome",
]
