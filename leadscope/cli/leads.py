"""Lead commands for the leadscope CLI."""

from __future__ import annotations

import asyncio
import json
from collections import Counter
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Coroutine, TypeVar

import typer
from pydantic import ValidationError

from leadscope.core.client import LeadscopeClient, create_client
from leadscope.core.config import ConfigManager
from leadscope.core.exceptions import DataValidationError, LeadscopeError
from leadscope.core.models.institution import InstitutionKind
from leadscope.core.models.lead import Lead, LeadStatus
from leadscope.core.models.query import DEFAULT_RESULT_LIMIT, SearchCriteria
from leadscope.core.services.context import build_chat_request, build_lead_context
from leadscope.core.services.leads import DEFAULT_PAGE_SIZE, LeadFilter, available_states, paginate

from .utils import exit_with_error, prepare_output

T = TypeVar("T")

leads_app = typer.Typer(help="Lead operations.")

LIST_COLUMNS = [
    "id",
    "name",
    "type",
    "city",
    "state",
    "assets",
    "members",
    "roa",
    "score",
    "status",
    "products",
]

KIND_CHOICES = {
    "credit-union": InstitutionKind.CREDIT_UNION,
    "community-bank": InstitutionKind.COMMUNITY_BANK,
}


def register(app: typer.Typer) -> None:
    """Register the leads command group on the provided application."""

    app.add_typer(leads_app, name="leads", help="Resolve, inspect and update leads")


def get_client(config_path: Path | None = None) -> LeadscopeClient:
    """Factory hook for obtaining a :class:`LeadscopeClient`."""

    config = ConfigManager(config_path).get_config() if config_path else None
    return create_client(config)


def lead_row(lead: Lead) -> dict[str, Any]:
    return {
        "id": lead.id,
        "name": lead.name,
        "type": lead.kind.value,
        "city": lead.city,
        "state": lead.state,
        "assets": lead.assets_usd,
        "members": lead.member_count,
        "roa": lead.roa_pct,
        "score": lead.score,
        "status": lead.status.value,
        "products": list(lead.recommended_products),
    }


def _run(coro: Coroutine[Any, Any, T], stack: ExitStack) -> T:
    try:
        return asyncio.run(coro)
    except LeadscopeError as error:
        stack.close()
        exit_with_error(error)


def _build_criteria(**fields: Any) -> SearchCriteria:
    try:
        return SearchCriteria(**{key: value for key, value in fields.items() if value is not None})
    except ValidationError as e:
        raise DataValidationError(
            "Invalid search criteria",
            validation_errors={".".join(map(str, err["loc"])) or "criteria": err["msg"] for err in e.errors()},
        ) from e


def _parse_status(value: str | None) -> LeadStatus | None:
    if value is None:
        return None
    try:
        return LeadStatus(value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(status.value for status in LeadStatus)
        raise typer.BadParameter(f"Unsupported status '{value}'. Allowed values: {allowed}", param_hint="--status") from exc


def _parse_kind(value: str | None) -> InstitutionKind | None:
    if value is None:
        return None
    try:
        return KIND_CHOICES[value.strip().lower()]
    except KeyError as exc:
        allowed = ", ".join(KIND_CHOICES)
        raise typer.BadParameter(f"Unsupported type '{value}'. Allowed values: {allowed}", param_hint="--type") from exc


async def _resolve(client: LeadscopeClient, criteria: SearchCriteria | None = None) -> LeadscopeClient:
    await client.refresh(criteria)
    return client


@leads_app.command("list")
def list_command(
    ctx: typer.Context,
    state: str | None = typer.Option(None, "--state", help="Two-letter state code sent upstream."),
    min_assets: int | None = typer.Option(None, "--min-assets", help="Minimum assets in dollars."),
    max_assets: int | None = typer.Option(None, "--max-assets", help="Maximum assets in dollars."),
    name: str | None = typer.Option(None, "--name", help="Institution name substring."),
    limit: int = typer.Option(DEFAULT_RESULT_LIMIT, "--limit", help="Result cap per source."),
    search: str | None = typer.Option(None, "--search", help="Filter by name, city or state."),
    status: str | None = typer.Option(None, "--status", help="Filter by pipeline status."),
    kind: str | None = typer.Option(None, "--type", help="credit-union or community-bank."),
    asset_size: str | None = typer.Option(None, "--asset-size", help="Asset bucket, e.g. 1b-5b."),
    page: int = typer.Option(1, "--page", help="Page number."),
    page_size: int = typer.Option(DEFAULT_PAGE_SIZE, "--page-size", help="Leads per page."),
) -> None:
    """Resolve leads and render one page."""

    formatter, stream, stack, options = prepare_output(ctx)
    try:
        criteria = _build_criteria(
            state=state, min_assets=min_assets, max_assets=max_assets, name=name, limit=limit
        )
        lead_filter = LeadFilter(
            search=search,
            status=_parse_status(status),
            kind=_parse_kind(kind),
            asset_bucket=asset_size,
        )
        if page_size <= 0:
            raise DataValidationError("--page-size must be positive", validation_errors={"page_size": page_size})
    except LeadscopeError as error:
        stack.close()
        exit_with_error(error)

    client = get_client(options.config_path)

    async def run() -> tuple[list[Lead], bool]:
        async with client:
            result = await client.refresh(criteria)
            return client.leads(lead_filter), result.degraded

    leads, degraded = _run(run(), stack)
    current = paginate(leads, page, page_size)
    try:
        formatter.render([lead_row(lead) for lead in current.items], stream=stream, columns=LIST_COLUMNS)
    finally:
        stack.close()

    if formatter.name == "table":
        typer.echo(f"Page {current.page}/{current.total_pages} ({current.total_items} leads)", err=True)
    if degraded:
        typer.echo("Warning: some sources were served from fallback data.", err=True)


@leads_app.command("show")
def show_command(ctx: typer.Context, lead_id: str = typer.Argument(..., help="Lead id, e.g. cu_68413.")) -> None:
    """Show every field of one lead."""

    formatter, stream, stack, options = prepare_output(ctx)
    client = get_client(options.config_path)

    async def run() -> Lead:
        async with client:
            await _resolve(client)
            return client.get_lead(lead_id)

    lead = _run(run(), stack)
    payload = lead.to_payload()
    if formatter.name == "table":
        rows = [{"field": key, "value": value} for key, value in payload.items()]
        columns = ["field", "value"]
    else:
        rows = [payload]
        columns = None
    try:
        formatter.render(rows, stream=stream, columns=columns)
    finally:
        stack.close()


@leads_app.command("update")
def update_command(
    ctx: typer.Context,
    lead_id: str = typer.Argument(..., help="Lead id, e.g. bank_628."),
    status: str | None = typer.Option(None, "--status", help="Pipeline status."),
    contact: str | None = typer.Option(None, "--contact", help="Contact name."),
    title: str | None = typer.Option(None, "--title", help="Contact title."),
    email: str | None = typer.Option(None, "--email", help="Contact email."),
    phone: str | None = typer.Option(None, "--phone", help="Contact phone."),
    notes: str | None = typer.Option(None, "--notes", help="Free-form notes."),
    score: int | None = typer.Option(None, "--score", help="Score override (0-100)."),
    last_contact: str | None = typer.Option(None, "--last-contact", help="Last contact date."),
) -> None:
    """Record user-entered fields for a lead."""

    formatter, stream, stack, options = prepare_output(ctx)
    changes = {
        "status": _parse_status(status),
        "contact": contact,
        "title": title,
        "email": email,
        "phone": phone,
        "notes": notes,
        "score": score,
        "last_contact": last_contact,
    }
    changes = {key: value for key, value in changes.items() if value is not None}
    client = get_client(options.config_path)

    async def run() -> None:
        async with client:
            await client.update_lead(lead_id, changes)

    _run(run(), stack)
    row = {"id": lead_id, **{key: getattr(value, "value", value) for key, value in changes.items()}}
    try:
        formatter.render([row], stream=stream)
    finally:
        stack.close()


@leads_app.command("context")
def context_command(
    ctx: typer.Context,
    lead_id: str = typer.Argument(..., help="Lead id."),
    message: str | None = typer.Option(None, "--message", "-m", help="Wrap the context in a chat request."),
) -> None:
    """Print the assistant context payload for a lead."""

    _, stream, stack, options = prepare_output(ctx)
    client = get_client(options.config_path)

    async def run() -> Lead:
        async with client:
            await _resolve(client)
            return client.get_lead(lead_id)

    lead = _run(run(), stack)
    payload = build_chat_request(message, lead) if message else build_lead_context(lead)
    try:
        json.dump(payload, stream, ensure_ascii=False, indent=2)
        stream.write("\n")
    finally:
        stack.close()


@leads_app.command("states")
def states_command(ctx: typer.Context) -> None:
    """List states present in the resolved lead set."""

    formatter, stream, stack, options = prepare_output(ctx)
    client = get_client(options.config_path)

    async def run() -> list[Lead]:
        async with client:
            await _resolve(client)
            return client.leads()

    leads = _run(run(), stack)
    counts = Counter(lead.state for lead in leads)
    rows = [{"state": state, "leads": counts[state]} for state in available_states(leads)]
    try:
        formatter.render(rows, stream=stream, columns=["state", "leads"])
    finally:
        stack.close()
