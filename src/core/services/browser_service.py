"""Browser command orchestration.

Runs one invocation end to end (config gate, base URL, request building,
transport) and returns a closed `Outcome` instead of letting exceptions
escape. The CLI branches on `Success` / `Failure` and never needs to know
which layer failed, only the error type.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Union

from core.config import ControlConfig
from core.domain.commands import CommandRequest
from core.errors import BrowserCtlError, FeatureDisabledError
from core.interfaces.transport import ControlTransport
from core.services.error_classifier import describe_error
from core.services.request_builder import (
    HttpExchange,
    build_exchange,
    check_base_url,
    select_base_url,
)


@dataclass(frozen=True)
class Success:
    payload: dict[str, Any]
    exchange: HttpExchange


@dataclass(frozen=True)
class Failure:
    error: BrowserCtlError
    message: str


Outcome = Union[Success, Failure]


def decode_script_bytes(data: bytes) -> str:
    """UTF-8 text of a piped script; undecodable input counts as no script."""

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return ""


def _read_all_stdin() -> str:
    return decode_script_bytes(sys.stdin.buffer.read())


def disabled_message(config_path: Path | None) -> str:
    where = str(config_path) if config_path else "the browserctl config"
    return f"Browser control is disabled in {where} (browser.enabled=false)."


class BrowserControlService:
    """Executes a `CommandRequest` against the control server."""

    def __init__(
        self,
        transport: ControlTransport,
        config: ControlConfig,
        *,
        read_stdin: Callable[[], str] = _read_all_stdin,
    ) -> None:
        self._transport = transport
        self._config = config
        self._read_stdin = read_stdin

    async def execute(self, request: CommandRequest) -> Outcome:
        if not self._config.enabled:
            error = FeatureDisabledError("browser control disabled")
            return Failure(error, str(error))

        base_url = select_base_url(request.flags.url, self._config.control_url)
        try:
            check_base_url(base_url)
            exchange = build_exchange(request, base_url, read_stdin=self._read_stdin)
            payload = await self._transport.execute(exchange)
        except BrowserCtlError as exc:
            return Failure(exc, describe_error(exc, base_url))
        return Success(payload, exchange)
