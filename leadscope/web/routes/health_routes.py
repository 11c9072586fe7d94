"""Health check routes."""

import time

from fastapi import APIRouter, Request

from leadscope import __version__
from leadscope.web.models import APIResponse, HealthStatus

router = APIRouter()


@router.get("/health", response_model=APIResponse)
async def health_check(request: Request) -> APIResponse:
    """Liveness plus a summary of the last resolution run."""

    state = request.app.state
    client = state.client
    result = client.last_result
    if result is None:
        leads_status = "not_loaded"
    elif result.degraded:
        leads_status = "degraded"
    else:
        leads_status = "healthy"

    health = HealthStatus(
        status="healthy",
        version=__version__,
        uptime=time.time() - state.start_time,
        components={
            "leads": leads_status,
            "proxy_cache": f"{len(state.proxy_cache)} entries",
        },
    )
    return APIResponse(data=health.model_dump(mode="json"), message="ok")
