"""Contrato del transporte hacia el servidor de control.

Por qué Protocol:
- El servicio de comandos depende de una abstracción, no de httpx.
- Los tests pueden inyectar un transporte falso sin red.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.services.request_builder import HttpExchange


@runtime_checkable
class ControlTransport(Protocol):
    """Ejecuta un único intercambio HTTP y devuelve el objeto JSON decodificado.

    Reglas de diseño:
    - `execute` es asíncrono: es el único punto de espera de una invocación.
    - Falla solo con `TransportError` o `ApiError`.
    """

    async def execute(self, exchange: HttpExchange) -> dict[str, Any]:
        ...
