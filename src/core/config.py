"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Expone el único contrato que la CLI necesita del almacén de configuración:
  `ControlConfig(enabled, control_url)`.

El almacén es un JSON con forma `{"browser": {"enabled": ..., "controlUrl": ...}}`.
Un fichero ausente o mal formado nunca es un error: se aplican los defaults.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONTROL_URL = "http://127.0.0.1:18791"

_logger = logging.getLogger(__name__)


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "browserctl"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "browserctl"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "browserctl"
    return Path.home() / ".config" / "browserctl"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def get_default_config_path() -> Path:
    return get_user_config_dir() / "config.json"


class AppSettings(BaseSettings):
    """Configuración de proceso leída de variables de entorno / `.env`.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core.
    - Permite apuntar a otro almacén JSON (tests, perfiles) sin flags nuevos.
    """

    model_config = SettingsConfigDict(
        env_prefix="BROWSERCTL_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    config_path: Path | None = Field(
        default=None,
        description="Ruta explícita al JSON de configuración (browser.enabled, browser.controlUrl).",
    )
    user_agent: str = Field(
        default="browserctl/0.1",
        min_length=1,
        description="User-Agent enviado al servidor de control.",
    )

    def resolved_config_path(self) -> Path:
        return self.config_path or get_default_config_path()


class ControlConfig(BaseModel):
    """Las dos únicas claves del almacén que la CLI consume."""

    enabled: bool = Field(
        default=True,
        description="Si es False, ningún subcomando llega a contactar el servidor.",
    )
    control_url: str = Field(
        default=DEFAULT_CONTROL_URL,
        description="URL base del servidor de control en loopback.",
    )


def _read_store(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError) as exc:
        _logger.debug("Ignoring unreadable config store %s: %s", path, exc)
        return {}
    try:
        data = json.loads(raw)
    except ValueError as exc:
        _logger.debug("Ignoring malformed config store %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_control_config(settings: AppSettings | None = None) -> ControlConfig:
    """Carga `ControlConfig` desde el almacén JSON; nunca lanza.

    Cada campo ausente o con tipo incorrecto cae a su default de forma
    independiente.
    """

    settings = settings or AppSettings()
    root = _read_store(settings.resolved_config_path())
    browser = root.get("browser")
    if not isinstance(browser, dict):
        browser = {}

    values: dict[str, Any] = {}
    enabled = browser.get("enabled")
    if isinstance(enabled, bool):
        values["enabled"] = enabled
    control_url = browser.get("controlUrl")
    if isinstance(control_url, str):
        values["control_url"] = control_url
    return ControlConfig(**values)
