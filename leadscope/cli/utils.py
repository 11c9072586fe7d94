"""Helpers shared across CLI commands."""

from __future__ import annotations

import json
import sys
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, NoReturn, Sequence, TextIO

import typer

from leadscope.core.exceptions import (
    DataValidationError,
    LeadNotFoundError,
    LeadscopeError,
    OverrideStoreError,
    ResolutionError,
)

from .constants import NOT_FOUND_EXIT_CODE, PROVIDER_EXIT_CODE, SYSTEM_EXIT_CODE, VALIDATION_EXIT_CODE
from .formatters import OutputFormatter, create_formatter


@dataclass(slots=True)
class CLIOptions:
    """Options resolved by the root callback."""

    format: str = "table"
    output_path: Path | None = None
    no_color: bool = False
    config_path: Path | None = None


def get_cli_options(ctx: typer.Context) -> CLIOptions:
    ctx.ensure_object(dict)
    data = ctx.obj or {}
    return CLIOptions(
        format=str(data.get("format", "table")),
        output_path=data.get("output_path"),
        no_color=bool(data.get("no_color", False)),
        config_path=data.get("config_path"),
    )


def prepare_output(ctx: typer.Context) -> tuple[OutputFormatter, TextIO, ExitStack, CLIOptions]:
    """Resolve formatter and writable stream for the current command."""

    options = get_cli_options(ctx)
    formatter = create_formatter(options.format, no_color=options.no_color)

    stack = ExitStack()
    stream: TextIO
    if options.output_path is not None:
        try:
            stream = stack.enter_context(open(options.output_path, "w", encoding="utf-8"))
        except OSError as exc:
            stack.close()
            emit_error(f"Unable to open '{options.output_path}': {exc}", "OUTPUT_WRITE_ERROR")
            raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc
    else:
        stream = sys.stdout

    return formatter, stream, stack, options


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a structured error payload to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = _sanitize_details(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


def exit_with_error(error: LeadscopeError) -> NoReturn:
    """Report ``error`` and exit with the code for its class."""

    emit_error(error.message, error.error_code, details=error.details)
    if isinstance(error, DataValidationError):
        code = VALIDATION_EXIT_CODE
    elif isinstance(error, LeadNotFoundError):
        code = NOT_FOUND_EXIT_CODE
    elif isinstance(error, (OverrideStoreError, ResolutionError)):
        code = PROVIDER_EXIT_CODE
    else:
        code = SYSTEM_EXIT_CODE
    raise typer.Exit(code=code) from error


def _sanitize_details(details: Mapping[str, object]) -> Mapping[str, object]:
    sanitized: dict[str, object] = {}
    for key, value in details.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            sanitized[key] = value
        elif isinstance(value, Mapping):
            sanitized[key] = {str(k): str(v) for k, v in value.items()}
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            sanitized[key] = [str(item) for item in value]
        else:
            sanitized[key] = str(value)
    return sanitized


__all__ = ["CLIOptions", "get_cli_options", "prepare_output", "emit_error", "exit_with_error"]
