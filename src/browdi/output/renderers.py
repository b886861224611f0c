"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from browdi.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from browdi.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="browdi.ok"), Text(f"  {result.op}", style="browdi.op"))


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="browdi.key"), Text(str(value)))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_open(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    launched = result.data.get("launched", [])
    if launched:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Handler", style="browdi.handler")
        table.add_column("Target", style="browdi.target")
        table.add_column("OK", justify="center")
        for entry in launched:
            uris = entry.get("uris") or ["(none)"]
            ok = "yes" if entry.get("ok") else "no"
            table.add_row(entry.get("handler", ""), "\n".join(uris), ok)
        console.print(table)
    if result.data.get("discarded"):
        _field(console, "discarded", result.data["discarded"])
    if verbose:
        _field(console, "reason", result.data.get("reason", ""))


def _render_handlers(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text("No handlers configured.", style="browdi.warning"))
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Key", style="browdi.hotkey")
    table.add_column("Name", style="browdi.handler")
    table.add_column("ID", style="browdi.key")
    for item in items:
        table.add_row(str(item["index"]), item.get("hotkey") or "", item["name"], item["id"])
    console.print(table)


def _render_defaults(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text("No remembered defaults.", style="browdi.key"))
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Domain", style="browdi.target")
    table.add_column("Handler", style="browdi.handler")
    if verbose:
        table.add_column("Entries", justify="right")
    for item in items:
        row = [item["domain_key"], item["handler"]]
        if verbose:
            row.append(str(item["count"]))
        table.add_row(*row)
    console.print(table)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="browdi.error"),
        Text(f"  {result.op}", style="browdi.op"),
        Text(" — "),
        msg,
    )
    if verbose and err is not None:
        for key, value in err.detail.items():
            _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "open": _render_open,
    "list_handlers": _render_handlers,
    "list_defaults": _render_defaults,
}
