"""
Clasificador de respuestas de la fuente externa.

Funcion pura: no hace I/O, no loguea.
"""
from typing import Mapping, Optional

from app.shared.constants.hotel_constants import CORRELATION_ID_HEADER
from app.shared.exceptions.infrastructure import (
    ExternalSourceClientError,
    ExternalSourceServerError,
    UnexpectedStatusError,
)


def _correlation_id(headers: Optional[Mapping[str, str]]) -> str:
    if not headers:
        return ""
    value = headers.get(CORRELATION_ID_HEADER)
    if value is None:
        # Mapping plano: busqueda sin distinguir mayusculas
        lowered = CORRELATION_ID_HEADER.lower()
        for key, v in headers.items():
            if key.lower() == lowered:
                return v
        return ""
    return value


def classify_response(
    status_code: int,
    body: bytes,
    headers: Optional[Mapping[str, str]] = None,
) -> bytes:
    """
    Convierte (status, body, headers) en el body o en un error tipado.

    - [200, 300): devuelve el body tal cual
    - [400, 500): ExternalSourceClientError
    - [500, 600): ExternalSourceServerError
    - cualquier otro: UnexpectedStatusError

    Los errores 4xx/5xx llevan el status y el correlation id (header
    X-Request-Id, vacio si falta).
    """
    if 200 <= status_code < 300:
        return body
    if 400 <= status_code < 500:
        raise ExternalSourceClientError(status_code, _correlation_id(headers))
    if 500 <= status_code < 600:
        raise ExternalSourceServerError(status_code, _correlation_id(headers))
    raise UnexpectedStatusError(status_code)
