"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from taskrank.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from taskrank.services.result import ServiceResult

    Renderer = Callable[..., None]


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.op == "check":
        _render_check(result, console, verbose=verbose)
    elif result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: ids for listings, a status line otherwise."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if "id" in item)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="tr.ok"), Text(f"  {result.op}", style="tr.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}:", style="tr.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="tr.id")
    elif key == "title":
        v = Text(str(value), style="tr.title")
    elif key.endswith("rank"):
        v = Text(str(value), style="tr.rank")
    else:
        v = Text(str(value))
    console.print(k, v)


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = f"{' ' * indent}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}"
    extras = [f"{k}={v}" for k, v in span.get("annotations", {}).items()]
    if extras:
        line += f"  ({', '.join(extras)})"
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(
        Text("ERROR", style="tr.error"),
        Text(f"  {result.op}{code}", style="tr.op"),
        Text(f" — {msg}"),
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_task(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """create_task / get_task / move_task."""
    _status_line(console, result)
    keys = ["id", "story_id", "title", "rank", "index"]
    if result.op == "move_task":
        keys += ["previous_story_id", "previous_rank"]
        if verbose:
            keys.append("attempts")
    if verbose and result.op != "move_task":
        keys += ["description", "version", "modified"]
    for key in keys:
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_task_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    story = result.data.get("story", {})
    items = result.data.get("items", [])
    heading = f"{story.get('title', '')} (story {story.get('id', '?')})"
    console.print(Text(heading, style="tr.title"))
    if not items:
        console.print("  No tasks.")
        return

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("ID", style="tr.id", no_wrap=True)
    table.add_column("Title", style="tr.title")
    table.add_column("Rank", style="tr.rank")
    if verbose:
        table.add_column("Version", justify="right")
        table.add_column("Modified", style="dim")
    for item in items:
        row = [str(item["index"]), str(item["id"]), str(item["title"]), str(item["rank"])]
        if verbose:
            row += [str(item.get("version", "")), str(item.get("modified", ""))]
        table.add_row(*row)
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_story_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No stories.")
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="tr.id", no_wrap=True)
    table.add_column("Title", style="tr.title")
    table.add_column("Tasks", justify="right")
    for item in items:
        table.add_row(str(item["id"]), str(item["title"]), str(item.get("task_count", 0)))
    console.print(table)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    issues = result.data.get("issues", [])
    if not issues:
        if result.ok:
            console.print("[tr.ok]OK[/tr.ok]  No issues found.")
        else:
            _render_error(result, console, verbose=verbose)
        return
    for issue in issues:
        sev = str(issue.get("severity", "warning"))
        style = "tr.error" if sev == "error" else "tr.warning"
        console.print(
            Text(f"  {sev}", style=style),
            Text(f"[story {issue.get('story_id')}] {issue['kind']}: {issue['message']}"),
        )
    console.print(f"\n{len(issues)} issue(s)")


_OP_RENDERERS: dict[str, Renderer] = {
    "create_task": _render_task,
    "get_task": _render_task,
    "move_task": _render_task,
    "list_tasks": _render_task_table,
    "list_stories": _render_story_table,
}
