"""Typer entry point for browserctl.

`browser` forwards its raw tokens untouched to the browser argument parser:
Typer never validates them (unknown options, `--help` and `-h` included), so
the lenient token rules of `cli.arguments` apply verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass

import typer

from cli import doctor, exit_codes
from cli.browser import run_browser
from cli.console import configure_logging, emit_error

app = typer.Typer(
    no_args_is_help=True,
    help="Command-line client for the loopback browser control server.",
)
app.add_typer(doctor.app, name="doctor")


@dataclass
class CliState:
    json_output: bool = False


@app.callback()
def main(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Machine mode: print every result as a {\"ok\", \"result\"} JSON envelope.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging (DEBUG level)."),
) -> None:
    configure_logging(verbose)
    ctx.obj = CliState(json_output=json_output)


@app.command(
    add_help_option=False,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def browser(
    ctx: typer.Context,
    tokens: list[str] | None = typer.Argument(None, help="Subcommand and its flags (see `browser help`)."),
) -> None:
    """Control the dedicated browser (status, tabs, eval, dom, snapshot, ...)."""

    state = ctx.obj if isinstance(ctx.obj, CliState) else CliState()
    try:
        code = run_browser([*(tokens or []), *ctx.args], json_output=state.json_output)
    except KeyboardInterrupt:
        emit_error("Interrupted.")
        code = exit_codes.KEYBOARD_INTERRUPT
    raise typer.Exit(code)


def run() -> None:
    app()
