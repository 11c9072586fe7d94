"""Lead API routes."""

from typing import Any

from fastapi import APIRouter, Body, Query, Request
from pydantic import ValidationError

from leadscope.core.client import LeadscopeClient
from leadscope.core.exceptions import DataValidationError
from leadscope.core.models.institution import InstitutionKind
from leadscope.core.models.lead import LeadStatus
from leadscope.core.models.query import DEFAULT_RESULT_LIMIT, SearchCriteria
from leadscope.core.services.context import build_chat_request, build_lead_context
from leadscope.core.services.leads import DEFAULT_PAGE_SIZE, LeadFilter, available_states, paginate
from leadscope.web.models import APIResponse, LeadPage

router = APIRouter()


def _client(request: Request) -> LeadscopeClient:
    return request.app.state.client


async def _ensure_loaded(client: LeadscopeClient, criteria: SearchCriteria | None = None, refresh: bool = False) -> None:
    criteria = criteria or SearchCriteria()
    last = client.last_result
    if refresh or last is None or last.criteria != criteria:
        await client.refresh(criteria)


def _criteria(**fields: Any) -> SearchCriteria:
    try:
        return SearchCriteria(**{key: value for key, value in fields.items() if value is not None})
    except ValidationError as e:
        raise DataValidationError(
            "Invalid search criteria",
            validation_errors={".".join(map(str, err["loc"])) or "criteria": err["msg"] for err in e.errors()},
        ) from e


@router.get("", response_model=APIResponse)
async def list_leads(
    request: Request,
    state: str | None = Query(None, description="Two-letter state code"),
    min_assets: int | None = Query(None, ge=0),
    max_assets: int | None = Query(None, ge=0),
    name: str | None = Query(None),
    limit: int = Query(DEFAULT_RESULT_LIMIT, gt=0),
    search: str | None = Query(None, description="Name, city or state substring"),
    status: LeadStatus | None = Query(None),
    kind: InstitutionKind | None = Query(None, alias="type"),
    asset_size: str | None = Query(None),
    page: int = Query(1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, gt=0),
    refresh: bool = Query(False, description="Force a new resolution run"),
) -> APIResponse:
    client = _client(request)
    criteria = _criteria(state=state, min_assets=min_assets, max_assets=max_assets, name=name, limit=limit)
    lead_filter = LeadFilter(search=search, status=status, kind=kind, asset_bucket=asset_size)
    await _ensure_loaded(client, criteria, refresh)

    result = client.last_result
    current = paginate(client.leads(lead_filter), page, page_size)
    body = LeadPage(
        items=[lead.to_payload() for lead in current.items],
        page=current.page,
        page_size=current.page_size,
        total_items=current.total_items,
        total_pages=current.total_pages,
        degraded=result.degraded if result else False,
        run_id=result.run_id if result else None,
        sources=[report.as_dict() for report in result.sources] if result else [],
    )
    return APIResponse(data=body.model_dump(), request_id=body.run_id)


@router.get("/states", response_model=APIResponse)
async def list_states(request: Request) -> APIResponse:
    client = _client(request)
    await _ensure_loaded(client)
    return APIResponse(data=available_states(client.leads()))


@router.get("/{lead_id}", response_model=APIResponse)
async def get_lead(request: Request, lead_id: str) -> APIResponse:
    client = _client(request)
    await _ensure_loaded(client)
    return APIResponse(data=client.get_lead(lead_id).to_payload())


@router.put("/{lead_id}", response_model=APIResponse)
async def update_lead(request: Request, lead_id: str, changes: dict[str, Any] = Body(...)) -> APIResponse:
    client = _client(request)
    updated = await client.update_lead(lead_id, changes)
    return APIResponse(
        data=updated.to_payload() if updated else None,
        message="updated" if updated else "override stored",
    )


@router.get("/{lead_id}/context", response_model=APIResponse)
async def lead_context(request: Request, lead_id: str, message: str | None = Query(None)) -> APIResponse:
    client = _client(request)
    await _ensure_loaded(client)
    lead = client.get_lead(lead_id)
    payload = build_chat_request(message, lead) if message else build_lead_context(lead)
    return APIResponse(data=payload)
