"""Map a parsed `CommandRequest` to exactly one HTTP exchange.

The mapping is deterministic: given the same request, base URL and script
text, the same method, URL, body and timeout come out. Usage problems
(missing positional, blank selector, empty script) are raised here as
`UsageError`, before anything touches the network.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import quote

import httpx

from core.domain.commands import CommandRequest, ScriptSource, Subcommand
from core.errors import InvalidControlUrlError, UsageError

STATUS_TIMEOUT = 2.0
LIFECYCLE_TIMEOUT = 15.0
TABS_TIMEOUT = 3.0
TAB_OPEN_TIMEOUT = 15.0
TAB_MUTATION_TIMEOUT = 5.0
CAPTURE_TIMEOUT = 20.0
EVAL_TIMEOUT = 15.0
QUERY_TIMEOUT = 15.0

DOM_FORMATS = ("html", "text")
SNAPSHOT_FORMATS = ("aria", "domSnapshot")


@dataclass(frozen=True)
class HttpExchange:
    """One request against the control server. Lives for a single call."""

    method: str
    url: str
    timeout: float
    body: dict[str, Any] | None = None


def select_base_url(override: str | None, configured: str) -> str:
    return (override if override is not None else configured).strip()


def check_base_url(base: str) -> str:
    """Reject anything that is not an absolute http(s) URL with a host."""

    try:
        parsed = httpx.URL(base)
    except httpx.InvalidURL as exc:
        raise InvalidControlUrlError(f"Invalid browser control URL: {base}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidControlUrlError(f"Invalid browser control URL: {base}")
    return base


def resolve_base_url(override: str | None, configured: str) -> str:
    """Pick `--url` over the configured URL and check it is usable."""

    return check_base_url(select_base_url(override, configured))


def _endpoint(base_url: str, path: str, params: list[tuple[str, str]] | None = None) -> str:
    url = base_url.rstrip("/") + path
    if params:
        return str(httpx.URL(url, params=params))
    return url


def _non_blank(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _required_positional(request: CommandRequest, what: str) -> str:
    value = request.first_positional()
    if not value:
        raise UsageError(f"{request.subcommand.value}: missing <{what}>")
    return value


def _target_param(request: CommandRequest) -> list[tuple[str, str]]:
    target_id = request.flags.target_id
    return [("targetId", target_id)] if target_id else []


def _positive(name: str, value: int | None) -> list[tuple[str, str]]:
    return [(name, str(value))] if value is not None and value > 0 else []


def dom_format(request: CommandRequest) -> str:
    return "text" if request.flags.format == "text" else "html"


def snapshot_format(request: CommandRequest) -> str:
    return "domSnapshot" if request.flags.format == "domSnapshot" else "aria"


def resolve_script(request: CommandRequest, read_stdin: Callable[[], str]) -> str:
    """Resolve the `eval` script text; blank scripts are a usage error."""

    code = ScriptSource.from_request(request).read(read_stdin)
    if not code.strip():
        raise UsageError("eval: no script given (use <js>, --js, --js-file or --js-stdin)")
    return code


def build_exchange(
    request: CommandRequest,
    base_url: str,
    *,
    read_stdin: Callable[[], str],
) -> HttpExchange:
    sub = request.subcommand
    flags = request.flags

    if sub is Subcommand.STATUS:
        return HttpExchange("GET", _endpoint(base_url, "/"), STATUS_TIMEOUT)
    if sub is Subcommand.START:
        return HttpExchange("POST", _endpoint(base_url, "/start"), LIFECYCLE_TIMEOUT)
    if sub is Subcommand.STOP:
        return HttpExchange("POST", _endpoint(base_url, "/stop"), LIFECYCLE_TIMEOUT)
    if sub is Subcommand.TABS:
        return HttpExchange("GET", _endpoint(base_url, "/tabs"), TABS_TIMEOUT)

    if sub is Subcommand.OPEN:
        url = _required_positional(request, "url")
        return HttpExchange("POST", _endpoint(base_url, "/tabs/open"), TAB_OPEN_TIMEOUT, {"url": url})
    if sub is Subcommand.FOCUS:
        target_id = _required_positional(request, "targetId")
        return HttpExchange(
            "POST", _endpoint(base_url, "/tabs/focus"), TAB_MUTATION_TIMEOUT, {"targetId": target_id}
        )
    if sub is Subcommand.CLOSE:
        target_id = _required_positional(request, "targetId")
        path = "/tabs/" + quote(target_id, safe="")
        return HttpExchange("DELETE", _endpoint(base_url, path), TAB_MUTATION_TIMEOUT)

    if sub is Subcommand.SCREENSHOT:
        params = _target_param(request)
        if flags.full_page:
            params.append(("fullPage", "1"))
        return HttpExchange("GET", _endpoint(base_url, "/screenshot", params), CAPTURE_TIMEOUT)

    if sub is Subcommand.EVAL:
        body = {
            "js": resolve_script(request, read_stdin),
            "targetId": flags.target_id or "",
            "await": flags.await_promise,
        }
        return HttpExchange("POST", _endpoint(base_url, "/eval"), EVAL_TIMEOUT, body)

    if sub is Subcommand.QUERY:
        selector = _non_blank(flags.selector) or _non_blank(request.first_positional())
        if selector is None:
            raise UsageError("query: missing <selector>")
        params = [("selector", selector)]
        params += _target_param(request)
        params += _positive("limit", flags.limit)
        return HttpExchange("GET", _endpoint(base_url, "/query", params), QUERY_TIMEOUT)

    if sub is Subcommand.DOM:
        params = [("format", dom_format(request))]
        params += _target_param(request)
        selector = _non_blank(flags.selector)
        if selector:
            params.append(("selector", selector))
        params += _positive("maxChars", flags.max_chars)
        return HttpExchange("GET", _endpoint(base_url, "/dom", params), CAPTURE_TIMEOUT)

    if sub is Subcommand.SNAPSHOT:
        params = [("format", snapshot_format(request))]
        params += _target_param(request)
        params += _positive("limit", flags.limit)
        return HttpExchange("GET", _endpoint(base_url, "/snapshot", params), CAPTURE_TIMEOUT)

    raise UsageError(f"unknown subcommand: {sub.value}")
