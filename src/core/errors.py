"""Jerarquía de errores de browserctl.

Por qué un módulo propio:
- Cada capa (parser, builder, transporte) lanza un error tipado y la CLI
  decide el código de salida sin inspeccionar mensajes.
- Las excepciones de httpx nunca cruzan el adaptador HTTP: se re-lanzan como
  `TransportError` o `ApiError`.

Jerarquía
---------
BrowserCtlError
├── UsageError
├── FeatureDisabledError
├── InvalidControlUrlError
├── ScriptReadError
├── OutputWriteError
├── TransportError
└── ApiError
"""

from __future__ import annotations


class HelpRequested(Exception):
    """Signal raised by the argument parser when usage should be displayed.

    Not an error: the CLI prints the usage text and exits successfully.
    """


class BrowserCtlError(Exception):
    """Base exception for every user-visible failure."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint


class UsageError(BrowserCtlError):
    """Malformed or missing arguments. Never contacts the network."""


class FeatureDisabledError(BrowserCtlError):
    """Browser control is turned off in the config store."""


class InvalidControlUrlError(BrowserCtlError):
    """The resolved control URL is not an absolute http(s) URL."""


class ScriptReadError(BrowserCtlError):
    """The `--js-file` script could not be read."""


class OutputWriteError(BrowserCtlError):
    """Persisting a payload to `--out` failed."""


class TransportError(BrowserCtlError):
    """The control server could not be reached."""

    def __init__(self, message: str, *, connectivity: bool = False, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.connectivity = connectivity


class ApiError(BrowserCtlError):
    """The server answered with a non-2xx status or an undecodable body."""

    def __init__(self, message: str, *, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code
