"""Modelos de respuesta del servidor de control (Pydantic v2).

Por qué Pydantic en el dominio:
- Cada endpoint tiene un esquema tipado en lugar de acceder a dicts por
  clave suelta.
- Todos los campos son opcionales y `extra="allow"`: el servidor puede añadir
  o quitar campos sin romper la CLI.

Nota:
- Estos modelos solo alimentan el render humano. El modo máquina imprime
  siempre el payload crudo dentro de `ResultEnvelope`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


def _text_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class StatusResponse(_Lenient):
    """Respuesta de `/`, `/start`, `/stop` y de las mutaciones de pestañas."""

    message: str = Field(
        default="",
        description="Mensaje legible devuelto por el servidor (si existe).",
    )

    @field_validator("message", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _text_or_empty(value)


class TabInfo(_Lenient):
    target_id: str = Field(
        default="",
        alias="targetId",
        description="Identificador opaco de la pestaña.",
    )
    title: str = Field(default="", description="Título de la página.")
    url: str = Field(default="", description="URL actual de la pestaña.")

    @field_validator("target_id", "title", "url", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _text_or_empty(value)


class TabsResponse(_Lenient):
    running: bool = Field(
        default=False,
        description="Indica si el navegador controlado está en marcha.",
    )
    tabs: list[TabInfo] = Field(
        default_factory=list,
        description="Pestañas abiertas en el navegador controlado.",
    )

    @field_validator("running", mode="before")
    @classmethod
    def running_bool(cls, value: Any) -> bool:
        return value if isinstance(value, bool) else False

    @field_validator("tabs", mode="before")
    @classmethod
    def tabs_list(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]


class ScreenshotResponse(_Lenient):
    path: str = Field(
        default="",
        description="Ruta local del PNG capturado por el servidor.",
    )

    @field_validator("path", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _text_or_empty(value)


class EvalResult(_Lenient):
    """Resultado de `Runtime.evaluate`.

    `value` puede ser cualquier valor JSON (incluido `null`); para saber si
    vino en la respuesta se consulta `has_value`, no `value is None`.
    """

    value: Any = None
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _text_or_empty(value)

    @property
    def has_value(self) -> bool:
        return "value" in self.model_fields_set


class EvalResponse(_Lenient):
    result: EvalResult | None = None

    @field_validator("result", mode="before")
    @classmethod
    def result_object(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None


class QueryMatch(_Lenient):
    index: int = 0
    tag: str = ""
    id: str = ""
    class_name: str = Field(default="", alias="className")
    text: str = ""

    @field_validator("tag", "id", "class_name", "text", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _text_or_empty(value)

    @field_validator("index", mode="before")
    @classmethod
    def index_int(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            return 0
        return value


class QueryResponse(_Lenient):
    matches: list[QueryMatch] | None = Field(
        default=None,
        description="Coincidencias del selector; None si el servidor no las envió.",
    )

    @field_validator("matches", mode="before")
    @classmethod
    def matches_list(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return None
        return [item for item in value if isinstance(item, dict)]


class DomResponse(_Lenient):
    text: str = Field(
        default="",
        description="HTML o texto extraído del documento.",
    )

    @field_validator("text", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _text_or_empty(value)


class SnapshotNode(_Lenient):
    depth: int = 0
    role: str = "unknown"
    name: str = ""
    value: str = ""

    @field_validator("name", "value", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _text_or_empty(value)

    @field_validator("role", mode="before")
    @classmethod
    def role_text(cls, value: Any) -> str:
        return value if isinstance(value, str) else "unknown"

    @field_validator("depth", mode="before")
    @classmethod
    def depth_int(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            return 0
        return value


class SnapshotResponse(_Lenient):
    nodes: list[SnapshotNode] | None = None

    @field_validator("nodes", mode="before")
    @classmethod
    def nodes_list(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return None
        return [item for item in value if isinstance(item, dict)]


class ResultEnvelope(BaseModel):
    """Única forma impresa en modo máquina.

    `ok=False` siempre va acompañado de `result.error`.
    """

    ok: bool
    result: Any = None

    @classmethod
    def success(cls, payload: Any) -> "ResultEnvelope":
        return cls(ok=True, result=payload)

    @classmethod
    def failure(cls, message: str) -> "ResultEnvelope":
        return cls(ok=False, result={"error": message})
