"""Output formatters for CLI commands."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, MutableSequence, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table


class OutputFormatter:
    """Base class for CLI output formatters."""

    name: str

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
    ) -> None:
        raise NotImplementedError


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Render rows as a Rich table with human friendly cells."""

    name: str = "table"
    no_color: bool = False

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
    ) -> None:
        console = Console(file=stream, color_system=None if self.no_color else "auto", no_color=self.no_color)

        resolved_columns: MutableSequence[str] = list(columns or (rows[0].keys() if rows else ()))
        table = Table(box=SIMPLE, show_lines=False)
        header_style = "" if self.no_color else "bold"
        for column in resolved_columns:
            table.add_column(column, header_style=header_style, overflow="fold")

        for row in rows:
            table.add_row(*(format_cell(row.get(column)) for column in resolved_columns))
        if resolved_columns:
            console.print(table)
        if not rows:
            console.print("No leads found.")


def format_cell(value: object) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:.2f}"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value) or "-"
    return str(value)


@dataclass(slots=True)
class JSONLFormatter(OutputFormatter):
    """Render rows as JSON Lines."""

    name: str = "jsonl"

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
    ) -> None:
        for row in rows:
            payload = {column: row.get(column) for column in columns} if columns else dict(row)
            json.dump(payload, stream, ensure_ascii=False, default=str)
            stream.write("\n")
        stream.flush()


FORMATTERS = ("table", "jsonl")


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    """Instantiate a formatter by name."""

    normalized = name.strip().lower()
    if normalized == "table":
        return TableFormatter(no_color=no_color)
    if normalized == "jsonl":
        return JSONLFormatter()
    raise ValueError(f"Unsupported format '{name}'. Available formats: {', '.join(FORMATTERS)}.")


__all__ = ["OutputFormatter", "TableFormatter", "JSONLFormatter", "create_formatter", "format_cell"]
