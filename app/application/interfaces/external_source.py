"""
Interfaz del cliente de la fuente externa de datos (Cupid content API).

Este contrato existe para:
- Mantener Clean Architecture: el orquestador de sync no depende de httpx.
- Facilitar tests unitarios sin red.
"""

from __future__ import annotations

from typing import Mapping, Optional, Protocol


class ExternalSourceClient(Protocol):
    """
    Cliente minimo: (method, path, headers) -> body.

    Reglas:
    - 2xx: devuelve el body crudo (bytes).
    - 4xx/5xx: lanza ExternalSourceClientError / ExternalSourceServerError
      con el status y el correlation id.
    - Otro codigo: lanza UnexpectedStatusError.
    - Error de red/timeout: lanza ExternalSourceTransportError.
    """

    async def fetch(
        self,
        method: str,
        path: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> bytes:
        """Ejecuta la peticion y devuelve el body clasificado."""
