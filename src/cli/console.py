"""Rich consoles and logging setup shared by every command.

Payload text is written straight to the console's file: Rich rendering
would expand tabs and strip carriage returns from `dom` output. Tables,
notes and logs go through Rich as usual; diagnostics use `err_console`.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(soft_wrap=True, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, emoji=False)


def _write_line(target: Console, text: str) -> None:
    stream = target.file
    stream.write(text + "\n")
    stream.flush()


def emit(text: str) -> None:
    """Write one block of payload text to stdout, verbatim."""

    _write_line(console, text)


def emit_error(text: str) -> None:
    _write_line(err_console, text)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # The transport logs each exchange itself.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
