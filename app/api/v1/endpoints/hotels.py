"""
Endpoints de lectura de hoteles, reviews y traducciones.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from app.application.use_cases.hotel_query_use_cases import HotelQueryUseCases
from app.application.use_cases.review_use_cases import ReviewUseCases
from app.application.dto.hotel_dto import (
    HotelListResponseDTO,
    HotelResponseDTO,
    HotelReviewsResponseDTO,
    HotelTranslationsResponseDTO,
)
from app.api.v1.dependencies.use_case_deps import get_hotel_query_use_cases, get_review_use_cases


router = APIRouter(prefix="/hotels", tags=["Hotels"])


@router.get(
    "",
    response_model=HotelListResponseDTO,
    summary="Listar hoteles"
)
async def list_hotels(
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    use_cases: HotelQueryUseCases = Depends(get_hotel_query_use_cases)
) -> HotelListResponseDTO:
    """
    Lista hoteles ordenados por hotel_id.

    limit admite 1-100 (por defecto 50); valores fuera de rango o no
    numericos vuelven al valor por defecto.
    """
    return await use_cases.list_hotels(limit, offset)


@router.get(
    "/{hotel_id}",
    response_model=HotelResponseDTO,
    summary="Obtener un hotel por ID"
)
async def get_hotel(
    hotel_id: str,
    use_cases: HotelQueryUseCases = Depends(get_hotel_query_use_cases)
) -> HotelResponseDTO:
    """
    Obtiene un hotel por su ID externo.

    Args:
        hotel_id: ID externo del hotel
        use_cases: Casos de uso de hoteles (inyectado)
    """
    return await use_cases.get_hotel(hotel_id)


@router.get(
    "/{hotel_id}/reviews",
    response_model=HotelReviewsResponseDTO,
    summary="Obtener las reviews de un hotel"
)
async def get_hotel_reviews(
    hotel_id: str,
    use_cases: ReviewUseCases = Depends(get_review_use_cases)
) -> HotelReviewsResponseDTO:
    """Reviews del hotel; se sirven desde cache cuando es posible."""
    return await use_cases.get_hotel_reviews(hotel_id)


@router.get(
    "/{hotel_id}/translations/{language}",
    response_model=HotelTranslationsResponseDTO,
    summary="Obtener las traducciones de un hotel"
)
async def get_hotel_translations(
    hotel_id: str,
    language: str,
    use_cases: HotelQueryUseCases = Depends(get_hotel_query_use_cases)
) -> HotelTranslationsResponseDTO:
    return await use_cases.get_translations(hotel_id, language)
