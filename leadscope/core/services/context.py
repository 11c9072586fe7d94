"""Payloads for the external assistant endpoint."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from leadscope.core.models.lead import Lead


class ChatMessage(BaseModel):
    """One prior conversation turn."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


def build_lead_context(lead: Lead) -> dict[str, Any]:
    """Serialize ``lead`` into the assistant's ``leadContext`` shape."""

    return {
        "name": lead.name,
        "type": lead.kind.value,
        "city": lead.city,
        "state": lead.state,
        "assets": lead.assets_usd,
        "members": lead.member_count,
        "score": lead.score,
        "status": lead.status.value,
        "recommendedProducts": list(lead.recommended_products),
    }


def build_chat_request(
    message: str,
    lead: Lead | None = None,
    history: Iterable[ChatMessage | dict[str, Any]] = (),
) -> dict[str, Any]:
    turns = [ChatMessage.model_validate(turn) if isinstance(turn, dict) else turn for turn in history]
    return {
        "message": message,
        "leadContext": build_lead_context(lead) if lead is not None else None,
        "conversationHistory": [turn.model_dump() for turn in turns],
    }


__all__ = ["ChatMessage", "build_chat_request", "build_lead_context"]
