"""Tests for request shaping (core/services/request_builder.py).

Pure: no transport involved, stdin is a lambda.
"""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from cli.arguments import parse_browser_args
from core.domain.commands import ScriptSource, ScriptSourceKind
from core.errors import InvalidControlUrlError, ScriptReadError, UsageError
from core.services.request_builder import (
    HttpExchange,
    build_exchange,
    check_base_url,
    resolve_base_url,
    select_base_url,
)

BASE = "http://127.0.0.1:18791"


def _build(*tokens: str, stdin: str = "") -> HttpExchange:
    return build_exchange(parse_browser_args(tokens), BASE, read_stdin=lambda: stdin)


def _params(exchange: HttpExchange) -> dict[str, str]:
    return dict(httpx.URL(exchange.url).params)


def _path(exchange: HttpExchange) -> str:
    return httpx.URL(exchange.url).path


# ---------------------------------------------------------------------------
# Lifecycle and tabs
# ---------------------------------------------------------------------------

class TestLifecycle:
    def test_status(self) -> None:
        exchange = _build("status")
        assert (exchange.method, exchange.url, exchange.timeout, exchange.body) == (
            "GET", f"{BASE}/", 2.0, None
        )

    @pytest.mark.parametrize("name", ["start", "stop"])
    def test_start_stop_use_long_timeout(self, name: str) -> None:
        exchange = _build(name)
        assert exchange.method == "POST"
        assert exchange.url == f"{BASE}/{name}"
        assert exchange.timeout == 15.0
        assert exchange.body is None

    def test_tabs(self) -> None:
        exchange = _build("tabs")
        assert (exchange.method, exchange.url, exchange.timeout) == ("GET", f"{BASE}/tabs", 3.0)

    def test_trailing_slash_in_base(self) -> None:
        exchange = build_exchange(parse_browser_args(["tabs"]), BASE + "/", read_stdin=str)
        assert exchange.url == f"{BASE}/tabs"


class TestTabMutation:
    def test_open(self) -> None:
        exchange = _build("open", "https://example.com")
        assert exchange.method == "POST"
        assert exchange.url == f"{BASE}/tabs/open"
        assert exchange.body == {"url": "https://example.com"}

    def test_focus(self) -> None:
        exchange = _build("focus", "ABC")
        assert exchange.url == f"{BASE}/tabs/focus"
        assert exchange.body == {"targetId": "ABC"}
        assert exchange.timeout == 5.0

    def test_close_puts_id_in_path(self) -> None:
        exchange = _build("close", "ABC123")
        assert exchange.method == "DELETE"
        assert exchange.url == f"{BASE}/tabs/ABC123"
        assert exchange.body is None

    def test_close_escapes_id(self) -> None:
        exchange = _build("close", "a/b c")
        assert exchange.url == f"{BASE}/tabs/a%2Fb%20c"

    @pytest.mark.parametrize("name", ["open", "focus", "close"])
    def test_missing_positional_is_usage_error(self, name: str) -> None:
        with pytest.raises(UsageError):
            _build(name)

    def test_empty_positional_is_usage_error(self) -> None:
        with pytest.raises(UsageError):
            _build("open", "")


# ---------------------------------------------------------------------------
# Screenshot / query / dom / snapshot
# ---------------------------------------------------------------------------

class TestScreenshot:
    def test_no_params(self) -> None:
        exchange = _build("screenshot")
        assert exchange.url == f"{BASE}/screenshot"
        assert exchange.timeout == 20.0

    def test_full_page_and_target(self) -> None:
        exchange = _build("screenshot", "--full-page", "--target-id", "T1")
        assert _params(exchange) == {"targetId": "T1", "fullPage": "1"}

    def test_empty_target_is_omitted(self) -> None:
        exchange = _build("screenshot", "--target-id", "")
        assert _params(exchange) == {}


class TestQuery:
    def test_selector_from_positional(self) -> None:
        exchange = _build("query", "div.item")
        assert _path(exchange) == "/query"
        assert _params(exchange) == {"selector": "div.item"}

    def test_selector_flag_wins(self) -> None:
        exchange = _build("query", "ignored", "--selector", "a[href]")
        assert _params(exchange)["selector"] == "a[href]"

    def test_limit_and_target(self) -> None:
        exchange = _build("query", "p", "--limit", "2", "--target-id", "T")
        assert _params(exchange) == {"selector": "p", "targetId": "T", "limit": "2"}

    @pytest.mark.parametrize("limit", ["0", "-1", "x"])
    def test_non_positive_or_bad_limit_omitted(self, limit: str) -> None:
        exchange = _build("query", "p", "--limit", limit)
        assert "limit" not in _params(exchange)

    def test_missing_selector(self) -> None:
        with pytest.raises(UsageError):
            _build("query")

    def test_blank_selector(self) -> None:
        with pytest.raises(UsageError):
            _build("query", "--selector", "   ")


class TestDom:
    def test_defaults_to_html(self) -> None:
        exchange = _build("dom")
        assert _params(exchange) == {"format": "html"}
        assert exchange.timeout == 20.0

    @pytest.mark.parametrize("fmt,expected", [("text", "text"), ("TEXT", "html"), ("markdown", "html")])
    def test_format_constrained(self, fmt: str, expected: str) -> None:
        assert _params(_build("dom", "--format", fmt))["format"] == expected

    def test_optional_params(self) -> None:
        exchange = _build("dom", "--selector", " main ", "--max-chars", "500", "--target-id", "T")
        assert _params(exchange) == {
            "format": "html",
            "targetId": "T",
            "selector": "main",
            "maxChars": "500",
        }

    def test_blank_selector_omitted(self) -> None:
        assert "selector" not in _params(_build("dom", "--selector", "  "))


class TestSnapshot:
    def test_defaults_to_aria(self) -> None:
        assert _params(_build("snapshot")) == {"format": "aria"}

    def test_dom_snapshot_and_limit(self) -> None:
        exchange = _build("snapshot", "--format", "domSnapshot", "--limit", "50")
        assert _params(exchange) == {"format": "domSnapshot", "limit": "50"}


# ---------------------------------------------------------------------------
# Eval script resolution
# ---------------------------------------------------------------------------

class TestEval:
    def test_body_shape(self) -> None:
        exchange = _build("eval", "--js", "document.title")
        assert exchange.method == "POST"
        assert exchange.url == f"{BASE}/eval"
        assert exchange.body == {"js": "document.title", "targetId": "", "await": False}

    def test_await_and_target(self) -> None:
        exchange = _build("eval", "--js", "x", "--await", "--target-id", "T")
        assert exchange.body == {"js": "x", "targetId": "T", "await": True}

    def test_positionals_joined(self) -> None:
        assert _build("eval", "1", "+", "2").body["js"] == "1 + 2"

    def test_inline_beats_positionals(self) -> None:
        assert _build("eval", "ignored", "--js", "used").body["js"] == "used"

    def test_stdin_beats_inline(self) -> None:
        exchange = _build("eval", "--js", "inline", "--js-stdin", stdin="from stdin")
        assert exchange.body["js"] == "from stdin"

    def test_file_beats_inline(self, tmp_path: Path) -> None:
        script = tmp_path / "s.js"
        script.write_text("return 42;", encoding="utf-8")
        exchange = _build("eval", "--js", "inline", "--js-file", str(script))
        assert exchange.body["js"] == "return 42;"

    def test_file_and_stdin_conflict(self, tmp_path: Path) -> None:
        with pytest.raises(UsageError):
            _build("eval", "--js-file", str(tmp_path / "s.js"), "--js-stdin", stdin="x")

    def test_empty_file_flag_and_stdin_still_conflict(self) -> None:
        with pytest.raises(UsageError):
            _build("eval", "--js-file", "", "--js-stdin", stdin="x")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ScriptReadError):
            _build("eval", "--js-file", str(tmp_path / "missing.js"))

    @pytest.mark.parametrize("tokens", [(), ("--js", "   "), ("--js-stdin",)])
    def test_blank_script_is_usage_error(self, tokens: tuple[str, ...]) -> None:
        with pytest.raises(UsageError):
            _build("eval", *tokens, stdin=" \n\t")

    def test_script_source_selection(self) -> None:
        request = parse_browser_args(["eval", "a", "b"])
        assert ScriptSource.from_request(request) == ScriptSource(ScriptSourceKind.POSITIONAL, "a b")
        empty = parse_browser_args(["eval"])
        assert ScriptSource.from_request(empty).kind is ScriptSourceKind.EMPTY


# ---------------------------------------------------------------------------
# Base URL
# ---------------------------------------------------------------------------

class TestBaseUrl:
    def test_override_wins_and_is_trimmed(self) -> None:
        assert resolve_base_url("  http://localhost:1234  ", BASE) == "http://localhost:1234"

    def test_configured_used_without_override(self) -> None:
        assert resolve_base_url(None, BASE) == BASE

    @pytest.mark.parametrize("url", ["", "not a url", "ftp://127.0.0.1", "127.0.0.1:18791"])
    def test_invalid(self, url: str) -> None:
        with pytest.raises(InvalidControlUrlError, match="Invalid browser control URL"):
            resolve_base_url(url, BASE)

    def test_select_does_not_validate(self) -> None:
        assert select_base_url(" nope ", BASE) == "nope"

    def test_check_returns_base_unchanged(self) -> None:
        assert check_base_url("http://127.0.0.1:9/") == "http://127.0.0.1:9/"
