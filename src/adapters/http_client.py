"""Wrapper de httpx para el servidor de control.

Por qué un wrapper:
- Estandariza timeouts, headers y el mapeo de errores de red.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.

Ninguna excepción de httpx sale de este módulo: todo se convierte en
`TransportError` o `ApiError`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import AppSettings
from core.errors import ApiError
from core.interfaces.transport import ControlTransport
from core.services.error_classifier import wrap_network_error
from core.services.request_builder import STATUS_TIMEOUT, HttpExchange

_logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` para el servidor en loopback.

    Por qué un builder:
    - Centraliza headers/timeouts para todos los subcomandos.
    - `trust_env=False`: un proxy del entorno no debe interceptar 127.0.0.1.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(STATUS_TIMEOUT),
        follow_redirects=False,
        headers=headers,
        trust_env=False,
        transport=transport,
    )


def _decode_object(response: httpx.Response) -> dict[str, Any] | None:
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


class HttpControlTransport(ControlTransport):
    """Transporte real: un `AsyncClient` por intercambio."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def execute(self, exchange: HttpExchange) -> dict[str, Any]:
        _logger.debug("%s %s (timeout %ss)", exchange.method, exchange.url, exchange.timeout)
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.request(
                    exchange.method,
                    exchange.url,
                    json=exchange.body,
                    timeout=exchange.timeout,
                )
        except httpx.HTTPError as exc:
            _logger.debug("Request failed: %r", exc)
            raise wrap_network_error(exc, url=exchange.url, timeout=exchange.timeout) from exc

        status = response.status_code
        _logger.debug("HTTP %s from %s", status, exchange.url)

        payload = _decode_object(response)
        if payload is None:
            raise ApiError(
                f"HTTP {status} {exchange.method} {exchange.url}: {response.text}",
                status_code=status,
            )
        if 200 <= status < 300:
            return payload

        error = payload.get("error")
        message = error if isinstance(error, str) else f"HTTP {status}"
        raise ApiError(message, status_code=status)
