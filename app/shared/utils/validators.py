"""
Validaciones de entrada compartidas por los casos de uso de lectura.
"""
from typing import Any, Tuple

from app.shared.constants.hotel_constants import DEFAULT_HOTELS_LIMIT, MAX_HOTELS_LIMIT
from app.shared.exceptions.domain import ValidationException


def validate_hotel_id(raw: Any) -> int:
    """
    Convierte un ID de hotel crudo (path param, CLI) en entero positivo.

    Raises:
        ValidationException: si no es un entero positivo
    """
    if isinstance(raw, bool):
        raise ValidationException("ID de hotel invalido", field="hotel_id")
    try:
        hotel_id = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationException(f"ID de hotel invalido: {raw!r}", field="hotel_id")
    if hotel_id <= 0:
        raise ValidationException("El ID de hotel debe ser positivo", field="hotel_id")
    return hotel_id


def normalize_pagination(limit: Any, offset: Any) -> Tuple[int, int]:
    """
    Normaliza limit/offset del listado de hoteles.
    Valores fuera de rango vuelven al valor por defecto (limit 50, offset 0).
    """
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        limit = DEFAULT_HOTELS_LIMIT
    if limit <= 0 or limit > MAX_HOTELS_LIMIT:
        limit = DEFAULT_HOTELS_LIMIT

    try:
        offset = int(offset)
    except (TypeError, ValueError):
        offset = 0
    if offset < 0:
        offset = 0

    return limit, offset
