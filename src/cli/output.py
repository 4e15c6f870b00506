"""Rendering of results and errors (Rich).

Commands never print directly: they hand a payload to ``emit`` and run
inside ``handle_errors`` so every subcommand has the same stdout/stderr
contract and the same exit codes.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from core.config import AppSettings
from core.errors import ErrorCategory, PocketError

LOGGER = logging.getLogger(__name__)

EXIT_CODES: dict[ErrorCategory, int] = {
    ErrorCategory.INVALID_INPUT: 2,
    ErrorCategory.UNREACHABLE: 3,
    ErrorCategory.REJECTED: 4,
    ErrorCategory.PARSE: 5,
}

_stdout = Console()
_stderr = Console(stderr=True)


class OutputFormat(str, Enum):
    JSON = "json"
    TABLE = "table"


@dataclass
class CliState:
    """Per-invocation state stored on ``ctx.obj`` by the root callback."""

    settings: AppSettings
    output_format: OutputFormat = OutputFormat.JSON


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.obj
    if isinstance(state, CliState):
        return state
    state = CliState(settings=AppSettings())
    ctx.obj = state
    return state


def to_jsonable(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json")
    if isinstance(payload, dict):
        return {key: to_jsonable(value) for key, value in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [to_jsonable(item) for item in payload]
    return payload


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False) if value else ""
    if value is None:
        return ""
    return str(value)


def build_records_table(data: dict[str, Any], *, title: str | None = None) -> Table:
    """Render the first list of records in ``data``; scalars go to the caption."""

    records_key = next(
        (key for key, value in data.items() if isinstance(value, list) and all(isinstance(i, dict) for i in value)),
        None,
    )
    if records_key is None:
        table = Table(title=title, show_header=True)
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Value", style="white")
        for key, value in data.items():
            table.add_row(key, _cell(value))
        return table

    records: list[dict[str, Any]] = data[records_key]
    columns: list[str] = []
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)

    caption = "  ".join(f"{key}: {_cell(value)}" for key, value in data.items() if key != records_key)
    table = Table(title=title or records_key, caption=caption or None)
    for index, column in enumerate(columns):
        table.add_column(column, style="cyan" if index == 0 else "white", no_wrap=index == 0)
    for record in records:
        table.add_row(*(_cell(record.get(column)) for column in columns))
    return table


def emit(ctx: typer.Context, payload: Any) -> None:
    data = to_jsonable(payload)
    state = get_state(ctx)
    if state.output_format is OutputFormat.TABLE and isinstance(data, (dict, list)):
        _stdout.print(build_records_table(data if isinstance(data, dict) else {"items": data}))
        return
    _stdout.print_json(data=data)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print ``PocketError`` as the JSON error envelope on stderr and exit."""

    try:
        yield
    except PocketError as exc:
        LOGGER.debug("command_failed kind=%s category=%s", exc.kind, exc.category.value)
        _stderr.print_json(data=exc.to_payload())
        raise typer.Exit(code=EXIT_CODES[exc.category]) from exc
