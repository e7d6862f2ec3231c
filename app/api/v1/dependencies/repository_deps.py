"""
Dependencias para inyeccion de repositorios y cache.
"""
from typing import Optional

from fastapi import Request

from app.core.config import settings
from app.domain.repositories.review_cache import IReviewCache
from app.infrastructure.database.session import AsyncSessionLocal
from app.infrastructure.repositories.hotel_repository import HotelRepository


def get_hotel_repository() -> HotelRepository:
    """
    Dependencia para obtener el repositorio de hoteles.

    El repositorio abre una sesion por operacion a partir de la session
    factory, por eso no recibe la sesion del request.
    """
    return HotelRepository(
        AsyncSessionLocal,
        operation_timeout_s=settings.DB_OPERATION_TIMEOUT_S,
    )


def get_review_cache(request: Request) -> Optional[IReviewCache]:
    """
    Dependencia para obtener la cache de reviews.

    Returns:
        La cache conectada en startup, o None en modo degradado
    """
    return getattr(request.app.state, "review_cache", None)
