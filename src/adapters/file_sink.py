"""Persistencia de payloads en `--out`.

Por qué un adaptador:
- `dom --out` y `snapshot --out` son los únicos efectos en disco de la CLI.
- Mantiene el formato JSON estable (indentado, UTF-8) en un único sitio.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.errors import OutputWriteError


def _write(output_path: Path, text: str) -> Path:
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(f"Could not write {output_path}: {exc}") from exc
    return output_path


def export_text(*, text: str, output_path: Path) -> Path:
    """Escribe texto tal cual (sin newline final añadido)."""

    return _write(output_path, text)


def export_json(*, payload: dict[str, Any], output_path: Path) -> Path:
    """Exporta el payload completo a JSON UTF-8 con formato estable."""

    return _write(output_path, json.dumps(payload, ensure_ascii=False, indent=2) + "\n")
