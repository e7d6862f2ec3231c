"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .hotel_dto import (
    HotelResponseDTO,
    HotelListResponseDTO,
    ReviewResponseDTO,
    HotelReviewsResponseDTO,
    TranslationResponseDTO,
    HotelTranslationsResponseDTO,
)

__all__ = [
    "HotelResponseDTO",
    "HotelListResponseDTO",
    "ReviewResponseDTO",
    "HotelReviewsResponseDTO",
    "TranslationResponseDTO",
    "HotelTranslationsResponseDTO",
]
