"""
Dependencias para inyeccion de casos de uso.
"""
from typing import Optional

from fastapi import Depends

from app.application.use_cases.hotel_query_use_cases import HotelQueryUseCases
from app.application.use_cases.review_use_cases import ReviewUseCases
from app.domain.repositories.hotel_repository import IHotelRepository
from app.domain.repositories.review_cache import IReviewCache
from app.api.v1.dependencies.repository_deps import get_hotel_repository, get_review_cache


def get_hotel_query_use_cases(
    hotel_repository: IHotelRepository = Depends(get_hotel_repository)
) -> HotelQueryUseCases:
    """
    Dependencia para obtener los casos de uso de consulta de hoteles.

    Args:
        hotel_repository: Repositorio de hoteles

    Returns:
        HotelQueryUseCases: Instancia de casos de uso
    """
    return HotelQueryUseCases(hotel_repository)


def get_review_use_cases(
    hotel_repository: IHotelRepository = Depends(get_hotel_repository),
    review_cache: Optional[IReviewCache] = Depends(get_review_cache),
) -> ReviewUseCases:
    """
    Dependencia para obtener los casos de uso de reviews (cache-aside).
    """
    return ReviewUseCases(hotel_repository, review_cache)
