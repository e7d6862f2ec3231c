"""
DTOs de respuesta para hoteles, reviews y traducciones.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HotelResponseDTO(BaseModel):
    """Datos raiz de un hotel."""

    model_config = ConfigDict(from_attributes=True)

    hotel_id: int
    cupid_id: int
    hotel_name: str
    rating: float = 0.0
    review_count: int = 0
    hotel_type: str = ""
    chain: str = ""
    stars: int = 0
    latitude: float = 0.0
    longitude: float = 0.0
    phone: str = ""
    email: str = ""
    main_image_th: str = ""
    child_allowed: bool = False
    pets_allowed: bool = False
    description: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class HotelListResponseDTO(BaseModel):
    """Listado paginado de hoteles."""

    hotels: List[HotelResponseDTO]
    count: int
    limit: int
    offset: int


class ReviewResponseDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    hotel_id: int
    rating: int = Field(..., ge=1, le=5)
    reviewer_name: str = ""
    title: str = ""
    content: str = ""
    language_code: str = "en"
    review_date: Optional[date] = None
    helpful_votes: int = 0


class HotelReviewsResponseDTO(BaseModel):
    """
    `from_cache` indica si se sirvieron desde la cache; `retrieved_at` es la
    hora de la lectura, venga de cache o del store.
    hora de la respuesta.
    """

    hotel_id: int
    reviews: List[ReviewResponseDTO]
    count: int
    from_cache: bool
    retrieved_at: datetime


class TranslationResponseDTO(BaseModel):
    entity_type: str
    entity_id: int
    field_name: str
    translated_text: str


class HotelTranslationsResponseDTO(BaseModel):
    hotel_id: int
    language: str
    translations: List[TranslationResponseDTO]
    count: int
