"""Cache proxy for the NCUA credit union datasets."""

from fastapi import APIRouter, Request

from leadscope.core.data.fallback import OrchestratorState
from leadscope.core.logging import get_logger
from leadscope.core.models.query import SearchCriteria
from leadscope.web.models import ProxyResponse

logger = get_logger(__name__)

router = APIRouter()

CACHE_KEY = "ncua:credit-unions"


@router.get("/credit-unions", response_model=ProxyResponse)
async def credit_unions(request: Request) -> ProxyResponse:
    """Full credit union dataset, served from cache while fresh."""

    state = request.app.state
    cached = await state.proxy_cache.get(CACHE_KEY)
    if cached is not None:
        return ProxyResponse(data=cached, source="cache")

    result = await state.proxy_source.fetch(SearchCriteria())
    records = [dict(record) for record in result.records]
    # The embedded snapshot is never cached so live data is retried next call.
    live = result.state is OrchestratorState.SUCCESS and result.tier != state.proxy_source.tier_names[-1]
    if not live:
        logger.bind(provider=result.tier).warning("Serving credit unions from fallback data without caching")
    elif state.config.cache.enabled:
        await state.proxy_cache.set(CACHE_KEY, records, state.config.cache.ttl)
    return ProxyResponse(data=records, source=result.tier)
