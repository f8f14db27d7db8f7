"""Human and machine renderings of subcommand payloads.

Machine mode is uniform: the `ResultEnvelope` as pretty JSON. Human mode has
one renderer per subcommand, resolved from a static table; every renderer
returns the lines to print and falls back to the generic view when the
payload does not have the expected shape.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from core.domain.commands import Subcommand
from core.domain.models import (
    DomResponse,
    EvalResponse,
    QueryResponse,
    ResultEnvelope,
    ScreenshotResponse,
    SnapshotResponse,
    StatusResponse,
    TabsResponse,
)

MAX_SNAPSHOT_INDENT = 20

Renderer = Callable[[dict[str, Any]], list[str]]


def to_pretty_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, indent=2)


def render_envelope(envelope: ResultEnvelope) -> str:
    return to_pretty_json(envelope.model_dump(mode="json"))


def _parse(model: type[BaseModel], payload: dict[str, Any]) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError:
        return None


def render_generic(payload: dict[str, Any]) -> list[str]:
    return [to_pretty_json(payload)]


def render_status(payload: dict[str, Any]) -> list[str]:
    status = _parse(StatusResponse, payload)
    if status is not None and status.message:
        return [status.message]
    return render_generic(payload)


def format_tabs(payload: dict[str, Any]) -> list[str]:
    """Tab lines without the `Running:` header."""

    tabs = _parse(TabsResponse, payload)
    if tabs is None:
        return []
    lines: list[str] = []
    for tab in tabs.tabs:
        lines.append(f"- {tab.target_id[:8]}  {tab.title}  {tab.url}")
        if tab.target_id:
            lines.append(f"  id: {tab.target_id}")
    return lines


def render_tabs(payload: dict[str, Any]) -> list[str]:
    tabs = _parse(TabsResponse, payload)
    running = bool(tabs and tabs.running)
    return [f"Running: {'true' if running else 'false'}", *format_tabs(payload)]


def render_screenshot(payload: dict[str, Any]) -> list[str]:
    shot = _parse(ScreenshotResponse, payload)
    if shot is not None and shot.path:
        return [f"MEDIA:{shot.path}"]
    return render_generic(payload)


def _eval_value_text(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return to_pretty_json(value)
    if isinstance(value, str):
        return value
    return json.dumps(value)


def render_eval(payload: dict[str, Any]) -> list[str]:
    response = _parse(EvalResponse, payload)
    if response is None or response.result is None:
        return render_generic(payload)

    result = response.result
    if result.has_value:
        return [_eval_value_text(result.value)]
    if result.description:
        return [result.description]
    return render_generic(payload["result"])


def render_query(payload: dict[str, Any]) -> list[str]:
    response = _parse(QueryResponse, payload)
    if response is None or response.matches is None:
        return render_generic(payload)
    if not response.matches:
        return ["No matches."]

    lines: list[str] = []
    for match in response.matches:
        ident = f"#{match.id}" if match.id else ""
        classes = match.class_name.split()[:3]
        cls = "." + ".".join(classes) if classes else ""
        lines.append(f"{match.index}. <{match.tag}{ident}{cls}>")
        if match.text:
            lines.append(f"   {match.text}")
    return lines


def dom_text(payload: dict[str, Any]) -> str:
    response = _parse(DomResponse, payload)
    return response.text if response is not None else ""


def render_dom(payload: dict[str, Any]) -> list[str]:
    return [dom_text(payload)]


def render_snapshot(payload: dict[str, Any]) -> list[str]:
    response = _parse(SnapshotResponse, payload)
    if response is None or response.nodes is None:
        return render_generic(payload)

    lines: list[str] = []
    for node in response.nodes:
        indent = "  " * max(0, min(node.depth, MAX_SNAPSHOT_INDENT))
        line = f"{indent}- {node.role}"
        if node.name:
            line += f' "{node.name}"'
        if node.value:
            line += f' = "{node.value}"'
        lines.append(line)
    return lines


_RENDERERS: dict[Subcommand, Renderer] = {
    Subcommand.STATUS: render_status,
    Subcommand.START: render_status,
    Subcommand.STOP: render_status,
    Subcommand.OPEN: render_status,
    Subcommand.FOCUS: render_status,
    Subcommand.CLOSE: render_status,
    Subcommand.TABS: render_tabs,
    Subcommand.SCREENSHOT: render_screenshot,
    Subcommand.EVAL: render_eval,
    Subcommand.QUERY: render_query,
    Subcommand.DOM: render_dom,
    Subcommand.SNAPSHOT: render_snapshot,
}


def render_human(subcommand: Subcommand, payload: dict[str, Any]) -> list[str]:
    return _RENDERERS.get(subcommand, render_generic)(payload)
