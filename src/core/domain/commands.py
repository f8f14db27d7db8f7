"""Browser subcommands and the parsed request descriptor.

The fixed subcommand set is a closed enum; every invocation is reduced to a
single immutable `CommandRequest` before any config or network access.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable

from core.errors import ScriptReadError, UsageError


class Subcommand(str, Enum):
    """Subcommands understood by `browserctl browser`."""

    STATUS = "status"
    START = "start"
    STOP = "stop"
    TABS = "tabs"
    OPEN = "open"
    FOCUS = "focus"
    CLOSE = "close"
    SCREENSHOT = "screenshot"
    EVAL = "eval"
    QUERY = "query"
    DOM = "dom"
    SNAPSHOT = "snapshot"

    @classmethod
    def lookup(cls, name: str) -> "Subcommand | None":
        """Return the matching subcommand, or None for unknown names."""

        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class CommandFlags:
    """Typed values for the recognized long-form flags."""

    url: str | None = None
    full_page: bool = False
    target_id: str | None = None
    await_promise: bool = False
    js: str | None = None
    js_file: str | None = None
    js_stdin: bool = False
    selector: str | None = None
    format: str | None = None
    limit: int | None = None
    max_chars: int | None = None
    out: str | None = None


@dataclass(frozen=True)
class CommandRequest:
    """One invocation: subcommand, flags and ordered positionals."""

    subcommand: Subcommand
    flags: CommandFlags = field(default_factory=CommandFlags)
    positionals: tuple[str, ...] = ()

    def first_positional(self) -> str:
        return self.positionals[0] if self.positionals else ""


class ScriptSourceKind(str, Enum):
    FILE = "file"
    STDIN = "stdin"
    INLINE = "inline"
    POSITIONAL = "positional"
    EMPTY = "empty"


@dataclass(frozen=True)
class ScriptSource:
    """Where the `eval` script comes from.

    Selected once per request, in precedence order: file, stdin, inline flag,
    joined positionals, nothing. `--js-file` together with `--js-stdin` is
    rejected here instead of silently picking one.
    """

    kind: ScriptSourceKind
    value: str = ""

    @classmethod
    def from_request(cls, request: CommandRequest) -> "ScriptSource":
        flags = request.flags
        if flags.js_stdin and flags.js_file is not None:
            raise UsageError("eval: --js-file and --js-stdin are mutually exclusive")
        if flags.js_file:
            return cls(ScriptSourceKind.FILE, flags.js_file)
        if flags.js_stdin:
            return cls(ScriptSourceKind.STDIN)
        if flags.js:
            return cls(ScriptSourceKind.INLINE, flags.js)
        if request.positionals:
            return cls(ScriptSourceKind.POSITIONAL, " ".join(request.positionals))
        return cls(ScriptSourceKind.EMPTY)

    def read(self, read_stdin: Callable[[], str]) -> str:
        if self.kind is ScriptSourceKind.FILE:
            try:
                return Path(self.value).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ScriptReadError(f"Could not read script file {self.value}: {exc}") from exc
        if self.kind is ScriptSourceKind.STDIN:
            return read_stdin()
        return self.value
