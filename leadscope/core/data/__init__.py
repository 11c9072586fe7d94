"""Retrieval, fallback and normalization."""

from leadscope.core.data.fallback import (
    FallbackOrchestrator,
    FallbackResult,
    OrchestratorState,
    TierAttempt,
    TierOutcome,
)
from leadscope.core.data.normalizer import NormalizationReport, normalize, normalize_batch, normalize_record

__all__ = [
    "FallbackOrchestrator",
    "FallbackResult",
    "OrchestratorState",
    "TierAttempt",
    "TierOutcome",
    "NormalizationReport",
    "normalize",
    "normalize_batch",
    "normalize_record",
]
