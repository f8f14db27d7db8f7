"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El modo humano de `browser` escribe texto plano; las tablas son solo para
  comandos interactivos como `doctor`.
"""

from __future__ import annotations

from rich.table import Table


def build_checks_table(title: str = "browserctl doctor") -> Table:
    """Crea una tabla Rich para el resultado de chequeos."""

    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
