"""Override store server: the remote API that ``RemoteOverrideStore`` talks to."""

from typing import Any

from fastapi import APIRouter, Body, Request, Response, status
from pydantic import ValidationError

from leadscope.core.exceptions import DataValidationError
from leadscope.core.models.lead import Override
from leadscope.core.overrides.base import OverrideStore, dump_override_mapping

router = APIRouter()


def _store(request: Request) -> OverrideStore:
    return request.app.state.override_server_store


@router.get("")
async def list_overrides(request: Request) -> dict[str, dict[str, Any]]:
    """Every stored override, keyed by lead id."""

    return dump_override_mapping(await _store(request).get_all())


@router.put("/{lead_id}", status_code=status.HTTP_204_NO_CONTENT)
async def put_override(request: Request, lead_id: str, fields: dict[str, Any] = Body(...)) -> Response:
    try:
        override = Override.model_validate(fields)
    except ValidationError as e:
        raise DataValidationError(
            f"Invalid override for {lead_id}",
            validation_errors={".".join(map(str, err["loc"])): err["msg"] for err in e.errors()},
        ) from e
    await _store(request).put(lead_id, override)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
