"""Request and response models for the web API."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class APIResponse(BaseModel):
    """Envelope for successful responses."""

    success: bool = Field(True, description="Whether the request succeeded")
    data: Any | None = Field(None, description="Response payload")
    message: str | None = Field(None, description="Human readable message")
    timestamp: datetime = Field(default_factory=_utcnow)
    request_id: str | None = Field(None, description="Trace id for the request")


class ErrorResponse(BaseModel):
    """Envelope for failures."""

    success: bool = False
    error: str = Field(..., description="Error class")
    message: str
    details: dict[str, Any] | None = None
    timestamp: datetime = Field(default_factory=_utcnow)
    request_id: str | None = None


class HealthStatus(BaseModel):
    status: str
    version: str
    uptime: float = Field(..., description="Seconds since startup")
    timestamp: datetime = Field(default_factory=_utcnow)
    components: dict[str, str]


class LeadPage(BaseModel):
    """One page of leads plus provenance of the run that produced them."""

    items: list[dict[str, Any]]
    page: int
    page_size: int
    total_items: int
    total_pages: int
    degraded: bool = False
    run_id: str | None = None
    sources: list[dict[str, Any]] = Field(default_factory=list)


class ProxyResponse(BaseModel):
    """Cache proxy payload: raw credit union records and where they came from."""

    data: list[dict[str, Any]]
    source: str
