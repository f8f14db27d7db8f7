"""Shared pytest fixtures for the browserctl test suite.

Guidelines
----------
* No network: the control server is an `httpx.MockTransport`
  (see `tests/helpers.py`).
* Config stores live under `tmp_path`; nothing reads the real user config.
* Core tests are pure; CLI tests go through `run_browser` or `CliRunner`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from core.config import AppSettings


@pytest.fixture()
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "config.json"
    monkeypatch.setenv("BROWSERCTL_CONFIG_PATH", str(path))
    return path


@pytest.fixture()
def settings(config_path: Path) -> AppSettings:
    return AppSettings(config_path=config_path)


@pytest.fixture()
def write_config(config_path: Path) -> Callable[[Any], Path]:
    def _write(data: Any) -> Path:
        text = data if isinstance(data, str) else json.dumps(data)
        config_path.write_text(text, encoding="utf-8")
        return config_path

    return _write
