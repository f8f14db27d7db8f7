"""Turn transport and API failures into one diagnostic string.

The classifier only shapes messages; it never retries. Its output is the
whole of `result.error` in machine mode and the single stderr line (or two,
for the connectivity hint) in human mode.
"""

from __future__ import annotations

import httpx

from core.errors import TransportError

# Refused, lost, timed out, unresolved host / DNS, no route: the server is
# simply not there. httpx reports DNS and "no network" as ConnectError.
_CONNECTIVITY_ERRORS: tuple[type[Exception], ...] = (
    httpx.ConnectError,
    httpx.TimeoutException,
    httpx.RemoteProtocolError,
    httpx.ReadError,
    httpx.WriteError,
    httpx.CloseError,
)


def is_connectivity_failure(exc: BaseException) -> bool:
    return isinstance(exc, _CONNECTIVITY_ERRORS)


def connectivity_hint(url: str) -> str:
    return (
        f"Can't reach the browser control server at {url}.\n"
        "Start (or restart) the browser control gateway (desktop app, or the gateway daemon) "
        "and try again."
    )


def generic_transport_message(url: str, timeout: float) -> str:
    return f"Failed to reach {url} (timeout {int(timeout)}s)."


def wrap_network_error(exc: httpx.HTTPError, *, url: str, timeout: float) -> TransportError:
    """Wrap an httpx failure into a `TransportError` with a human hint."""

    if is_connectivity_failure(exc):
        return TransportError(connectivity_hint(url), connectivity=True)
    return TransportError(generic_transport_message(url, timeout))


def describe_error(error: BaseException, base_url: str) -> str:
    """Final message for any error surfaced at the top level."""

    message = str(error).strip()
    if message:
        return message
    return f"Browser request failed ({base_url})"
