"""Tokenizer for `browserctl browser <subcommand> [tokens...]`.

Deliberately lenient, matching the long-standing behaviour of the tool:

* a value flag consumes exactly the next token; if there is none, the flag
  is simply absent;
* `--limit` / `--max-chars` values that are not integers are dropped;
* anything that is not a known flag becomes a positional, in order.

Flags are order-independent. Only positionals keep their relative order.
"""

from __future__ import annotations

import re
from collections import deque
from dataclasses import replace
from typing import Iterable

from core.domain.commands import CommandFlags, CommandRequest, Subcommand
from core.errors import HelpRequested

HELP_ALIASES = frozenset({"--help", "-h", "help"})

_INTEGER = re.compile(r"^[+-]?\d+$")

# flag -> CommandFlags field, for flags that take the next token as value
_VALUE_FLAGS = {
    "--url": "url",
    "--target-id": "target_id",
    "--js": "js",
    "--js-file": "js_file",
    "--selector": "selector",
    "--format": "format",
    "--out": "out",
}
_INT_FLAGS = {
    "--limit": "limit",
    "--max-chars": "max_chars",
}
_BOOL_FLAGS = {
    "--full-page": "full_page",
    "--await": "await_promise",
    "--js-stdin": "js_stdin",
}

USAGE = """\
Browser - control the dedicated Chrome/Chromium through the gateway's loopback server.

Usage:
  browserctl browser status [--url <http://127.0.0.1:18791>]
  browserctl browser start [--url <...>]
  browserctl browser stop [--url <...>]
  browserctl browser tabs [--url <...>]
  browserctl browser open <url> [--url <...>]
  browserctl browser focus <targetId> [--url <...>]
  browserctl browser close <targetId> [--url <...>]
  browserctl browser screenshot [--target-id <id>] [--full-page] [--url <...>]
  browserctl browser eval [<js>] [--js <js>] [--js-file <path>] [--js-stdin]
    [--target-id <id>] [--await] [--url <...>]
  browserctl browser query <selector> [--limit <n>] [--format <text|json>]
    [--target-id <id>] [--url <...>]
  browserctl browser dom [--format <html|text>] [--selector <css>] [--max-chars <n>]
    [--out <path>] [--target-id <id>] [--url <...>]
  browserctl browser snapshot [--format <aria|domSnapshot>] [--limit <n>] [--out <path>]
    [--target-id <id>] [--url <...>]

Notes:
  - Config defaults come from the browserctl config.json (browser.enabled, browser.controlUrl);
    set BROWSERCTL_CONFIG_PATH to use another file.
  - `browser screenshot` prints MEDIA:<path> in text mode.
  - Pass --json before `browser` for machine-readable {"ok", "result"} output.
"""


def _parse_int(token: str | None) -> int | None:
    if token is None or not _INTEGER.match(token):
        return None
    return int(token)


def parse_flags(tokens: Iterable[str]) -> tuple[CommandFlags, tuple[str, ...]]:
    """Split tokens into typed flags and ordered positionals."""

    pending = deque(tokens)
    values: dict[str, object] = {}
    rest: list[str] = []

    while pending:
        token = pending.popleft()
        if token in _VALUE_FLAGS:
            values[_VALUE_FLAGS[token]] = pending.popleft() if pending else None
        elif token in _INT_FLAGS:
            values[_INT_FLAGS[token]] = _parse_int(pending.popleft() if pending else None)
        elif token in _BOOL_FLAGS:
            values[_BOOL_FLAGS[token]] = True
        else:
            rest.append(token)

    return replace(CommandFlags(), **values), tuple(rest)


def parse_browser_args(tokens: Iterable[str]) -> CommandRequest:
    """Build a `CommandRequest` from the raw tokens after `browser`.

    Raises `HelpRequested` when no subcommand is given, when it is a help
    alias, or when it is not a known subcommand.
    """

    tokens = list(tokens)
    if not tokens or tokens[0] in HELP_ALIASES:
        raise HelpRequested()

    subcommand = Subcommand.lookup(tokens[0])
    if subcommand is None:
        raise HelpRequested()

    flags, positionals = parse_flags(tokens[1:])
    return CommandRequest(subcommand=subcommand, flags=flags, positionals=positionals)
