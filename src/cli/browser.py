"""`browserctl browser ...`: one request/response exchange per run.

This module is the error boundary of the browser subsystem. It turns the
service `Outcome` into output and an exit code:

* machine mode always prints a well-formed envelope, even on failure;
* human mode keeps stdout for payload data and writes diagnostics to stderr.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Sequence

from adapters.file_sink import export_json, export_text
from adapters.http_client import HttpControlTransport
from cli import exit_codes
from cli.arguments import USAGE, parse_browser_args
from cli.console import emit, emit_error
from cli.formatters import dom_text, render_envelope, render_human
from core.config import AppSettings, load_control_config
from core.domain.commands import CommandRequest, Subcommand
from core.domain.models import ResultEnvelope
from core.errors import (
    BrowserCtlError,
    FeatureDisabledError,
    HelpRequested,
    OutputWriteError,
    UsageError,
)
from core.interfaces.transport import ControlTransport
from core.services.browser_service import (
    BrowserControlService,
    Failure,
    disabled_message,
)
from core.services.request_builder import snapshot_format

_logger = logging.getLogger(__name__)


def exit_code_for(error: BrowserCtlError) -> int:
    if isinstance(error, UsageError):
        return exit_codes.USAGE_ERROR
    return exit_codes.GENERAL_ERROR


def print_usage() -> None:
    emit(USAGE.rstrip("\n"))


def _report_failure(failure: Failure, *, json_output: bool, config_path: Path) -> int:
    if json_output:
        emit(render_envelope(ResultEnvelope.failure(failure.message)))
    elif isinstance(failure.error, FeatureDisabledError):
        emit_error(disabled_message(config_path))
    elif isinstance(failure.error, UsageError):
        emit_error(failure.message)
        emit_error(USAGE.rstrip("\n"))
    else:
        emit_error(failure.message)
    return exit_code_for(failure.error)


def _persist_out(request: CommandRequest, payload: dict[str, Any], out: str, *, json_output: bool) -> None:
    if request.subcommand is Subcommand.DOM:
        export_text(text=dom_text(payload), output_path=Path(out))
    else:
        export_json(payload=payload, output_path=Path(out))

    if json_output:
        emit(render_envelope(ResultEnvelope.success({"ok": True, "out": out})))
    else:
        emit(out)


def _prints_envelope(request: CommandRequest, json_output: bool) -> bool:
    if json_output:
        return True
    if request.subcommand is Subcommand.QUERY and request.flags.format == "json":
        return True
    return request.subcommand is Subcommand.SNAPSHOT and snapshot_format(request) == "domSnapshot"


def render_success(request: CommandRequest, payload: dict[str, Any], *, json_output: bool) -> None:
    out = request.flags.out
    if out and request.subcommand in (Subcommand.DOM, Subcommand.SNAPSHOT):
        _persist_out(request, payload, out, json_output=json_output)
        return

    if _prints_envelope(request, json_output):
        emit(render_envelope(ResultEnvelope.success(payload)))
        return

    for line in render_human(request.subcommand, payload):
        emit(line)


def run_browser(
    tokens: Sequence[str],
    *,
    json_output: bool = False,
    settings: AppSettings | None = None,
    transport: ControlTransport | None = None,
    read_stdin: Callable[[], str] | None = None,
) -> int:
    """Run one browser subcommand and return the process exit code."""

    try:
        request = parse_browser_args(tokens)
    except HelpRequested:
        print_usage()
        return exit_codes.SUCCESS

    settings = settings or AppSettings()
    config_path = settings.resolved_config_path()
    config = load_control_config(settings)
    _logger.debug("Config %s: enabled=%s url=%s", config_path, config.enabled, config.control_url)

    service_kwargs: dict[str, Any] = {}
    if read_stdin is not None:
        service_kwargs["read_stdin"] = read_stdin
    service = BrowserControlService(
        transport or HttpControlTransport(settings),
        config,
        **service_kwargs,
    )

    outcome = asyncio.run(service.execute(request))
    if isinstance(outcome, Failure):
        return _report_failure(outcome, json_output=json_output, config_path=config_path)
    else:
        try:
            render_success(request, outcome.payload, json_output=json_output)
        except OutputWriteError as exc:
            return _report_failure(Failure(exc, str(exc)), json_output=json_output, config_path=config_path)
    return exit_codes.SUCCESS
