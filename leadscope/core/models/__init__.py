"""Data models module."""

from leadscope.core.models.institution import Institution, InstitutionKind, RawRecord, SourceSystem
from leadscope.core.models.lead import Lead, LeadStatus, Override, ScoreResult
from leadscope.core.models.query import DEFAULT_RESULT_LIMIT, SearchCriteria

__all__ = [
    "RawRecord",
    "Institution",
    "InstitutionKind",
    "SourceSystem",
    "SearchCriteria",
    "DEFAULT_RESULT_LIMIT",
    "ScoreResult",
    "Override",
    "Lead",
    "LeadStatus",
]
