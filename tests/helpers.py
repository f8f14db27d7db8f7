"""Test doubles for the control server."""

from __future__ import annotations

import json
from typing import Any

import httpx

from adapters.http_client import HttpControlTransport
from core.config import AppSettings


class RecordingHandler:
    """MockTransport handler that replies with a fixed response and records requests."""

    def __init__(self, payload: Any = None, *, status_code: int = 200, exc: Exception | None = None) -> None:
        self.payload = {"ok": True} if payload is None else payload
        self.status_code = status_code
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if isinstance(self.payload, (bytes, str)):
            return httpx.Response(self.status_code, content=self.payload)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self) -> dict[str, Any]:
        return json.loads(self.last.content)


def make_transport(handler: RecordingHandler, settings: AppSettings | None = None) -> HttpControlTransport:
    return HttpControlTransport(settings, transport=httpx.MockTransport(handler))
