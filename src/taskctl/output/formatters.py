"""Rich/JSON output for ServiceResult.

The CLI renders a ServiceResult for humans (Rich tables and key-value
blocks), for scripts (``--quiet``: ids only), or for machines (``--json``:
the public result envelope).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from taskctl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from taskctl.services.result import ServiceResult

_TASK_COLUMNS = ("id", "title", "status", "priority", "due_date", "assignee_id")


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags resolved from the CLI."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display according to *settings*."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return format_json(result, verbose=settings.verbose)
    if settings.quiet:
        return format_quiet(result)
    return format_human(result, verbose=settings.verbose)


def format_json(result: ServiceResult, *, verbose: bool = False) -> str:
    """Serialize the public envelope, plus warnings and meta when present."""
    payload = result.to_envelope()
    if result.error is not None:
        payload["code"] = result.error.code
    if result.warnings:
        payload["warnings"] = list(result.warnings)
    if verbose and result.meta:
        payload["meta"] = result.meta
    return json.dumps(payload, indent=2, default=str)


def format_quiet(result: ServiceResult) -> str:
    """Minimal output: task ids for lists, a status line otherwise."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    if isinstance(result.data, list):
        return "\n".join(str(item.get("id", "")) for item in result.data if isinstance(item, dict))
    return f"OK: {result.op}"


def format_human(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a styled string via Rich (plain text when not a terminal)."""
    console = create_console()
    if not result.ok:
        _render_error(console, result)
    elif isinstance(result.data, list):
        _render_table(console, result)
    else:
        _render_record(console, result)
    if verbose and result.meta:
        _render_meta(console, result.meta)
    return get_output(console).rstrip("\n")


def _render_error(console: Console, result: ServiceResult) -> None:
    assert result.error is not None
    console.print(Text("ERROR", style="task.error"), Text(f"  {result.op}", style="task.op"))
    console.print(f"  {result.error.message}", markup=False)
    console.print(Text(f"  code: {result.error.code}", style="task.key"))


def _status_line(console: Console, result: ServiceResult) -> None:
    line = Text("OK", style="task.ok")
    line.append(f"  {result.op}", style="task.op")
    if result.message:
        line.append(f"  {result.message}")
    console.print(line)


def _render_table(console: Console, result: ServiceResult) -> None:
    _status_line(console, result)
    rows: list[dict[str, Any]] = [r for r in result.data if isinstance(r, dict)]
    columns: tuple[str, ...] = ()
    if rows:
        columns = _TASK_COLUMNS if "title" in rows[0] else tuple(rows[0])

    if result.query is not None:
        console.print(Text(f"  query: {result.query}", style="task.key"))
    console.print(Text(f"  count: {result.count if result.count is not None else len(rows)}"))
    if not rows:
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    for column in columns:
        table.add_column(column)
    for row in rows:
        cells: list[Text] = []
        for column in columns:
            value = row.get(column)
            text = Text("" if value is None else str(value))
            if column == "id":
                text.stylize("task.id")
            elif column == "status" and (style := style_for_status(value)):
                text.stylize(style)
            cells.append(text)
        table.add_row(*cells)
    console.print(table)


def _render_record(console: Console, result: ServiceResult) -> None:
    _status_line(console, result)
    data = result.data if isinstance(result.data, dict) else {}
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        label = Text(f"  {key}: ", style="task.key")
        style = "task.id" if key == "id" or key.endswith("_id") else ""
        if key == "title":
            style = "task.title"
        label.append(Text("" if value is None else str(value), style=style))
        console.print(label)


def _render_meta(console: Console, meta: dict[str, Any]) -> None:
    console.print(Text("  meta:", style="dim"))
    for key, value in meta.items():
        console.print(f"    {key}: {json.dumps(value, default=str)}", markup=False)
