"""Pipeline services: scoring, resolution, querying."""

from leadscope.core.services.context import ChatMessage, build_chat_request, build_lead_context
from leadscope.core.services.leads import (
    ASSET_SIZE_FILTERS,
    DEFAULT_PAGE_SIZE,
    LeadFilter,
    Page,
    available_states,
    filter_leads,
    paginate,
)
from leadscope.core.services.resolution import ResolutionCoordinator, ResolutionResult, SourceReport
from leadscope.core.services.scoring import recommend_products, score, score_institution

__all__ = [
    "ASSET_SIZE_FILTERS",
    "DEFAULT_PAGE_SIZE",
    "ChatMessage",
    "LeadFilter",
    "Page",
    "ResolutionCoordinator",
    "ResolutionResult",
    "SourceReport",
    "available_states",
    "build_chat_request",
    "build_lead_context",
    "filter_leads",
    "paginate",
    "recommend_products",
    "score",
    "score_institution",
]
