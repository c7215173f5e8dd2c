"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from mongoseed.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from mongoseed.services.result import ServiceResult


def render_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    verbose: bool = False,
) -> str:
    """Render a ServiceResult as JSON or as styled text via Rich."""
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="seed.ok")
    op = Text(f"  {result.op}", style="seed.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="seed.key")
    console.print(k, Text(str(value)), end="")
    console.print()


def _table() -> Table:
    return Table(show_header=True, show_lines=False, pad_edge=False, expand=False)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="seed.error")
    op = Text(f"  {result.op}", style="seed.op")
    console.print(label, op, Text(" — "), msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "resource_path", result.data.get("resource_path", ""))
    _field(console, "count", result.data.get("count", 0))
    items = result.data.get("items", [])
    if not items:
        return
    table = _table()
    table.add_column("Database", style="seed.db", no_wrap=True)
    table.add_column("Collection", style="seed.collection")
    table.add_column("Path", style="seed.path")
    for item in items:
        table.add_row(str(item["database"]), str(item["collection"]), str(item["path"]))
    console.print(table)


def _render_plan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "drop", result.data.get("drop"))
    _field(console, "count", result.data.get("count", 0))
    for command in result.data.get("commands", []):
        console.print(Text(f"  {command}"))


def _render_load(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.get("summary", {}).items():
        _field(console, key, value)
    if not verbose:
        return
    table = _table()
    table.add_column("Status")
    table.add_column("Exit", justify="right")
    table.add_column("Command", style="seed.path")
    for outcome in result.data.get("outcomes", []):
        if outcome["ok"]:
            status = Text("ok", style="seed.ok")
        else:
            status = Text("failed", style="seed.error")
        exit_code = "" if outcome["exit_code"] is None else str(outcome["exit_code"])
        table.add_row(status, exit_code, Text(str(outcome["command"])))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "list": _render_list,
    "plan": _render_plan,
    "load": _render_load,
}
