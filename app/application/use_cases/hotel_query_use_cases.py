"""
Casos de uso de lectura de hoteles y traducciones.
"""
from typing import List, Optional, Sequence

from app.application.dto.hotel_dto import (
    HotelListResponseDTO,
    HotelResponseDTO,
    HotelTranslationsResponseDTO,
    TranslationResponseDTO,
)
from app.core.config import settings
from app.domain.entities.hotel import Property
from app.domain.repositories.hotel_repository import IHotelRepository
from app.shared.exceptions.domain import UnsupportedLanguageException
from app.shared.utils.validators import normalize_pagination, validate_hotel_id


class HotelQueryUseCases:
    """
    Casos de uso para consultar hoteles.
    """

    def __init__(self, hotel_repository: IHotelRepository, supported_languages: Optional[Sequence[str]] = None):
        """
        Args:
            hotel_repository: Repositorio de hoteles
            supported_languages: Idiomas aceptados en traducciones (por defecto SYNC_LANGUAGES)
        """
        self.hotel_repository = hotel_repository
        self.supported_languages: List[str] = list(
            supported_languages if supported_languages is not None else settings.SYNC_LANGUAGES
        )

    async def get_hotel(self, raw_hotel_id) -> HotelResponseDTO:
        """
        Obtiene un hotel por su ID externo.

        Raises:
            ValidationException: ID invalido
            HotelNotFoundException: si no existe
        """
        hotel_id = validate_hotel_id(raw_hotel_id)
        hotel = await self.hotel_repository.get_hotel_by_id(hotel_id)
        return self._to_response_dto(hotel)

    async def list_hotels(self, limit=None, offset=None) -> HotelListResponseDTO:
        limit, offset = normalize_pagination(limit, offset)
        hotels = await self.hotel_repository.get_hotels(limit=limit, offset=offset)
        return HotelListResponseDTO(
            hotels=[self._to_response_dto(h) for h in hotels],
            count=len(hotels),
            limit=limit,
            offset=offset,
        )

    async def get_translations(self, raw_hotel_id, language: str) -> HotelTranslationsResponseDTO:
        """
        Obtiene las traducciones de un hotel en un idioma soportado.

        Raises:
            ValidationException: ID invalido
            UnsupportedLanguageException: idioma fuera de la lista soportada
        """
        hotel_id = validate_hotel_id(raw_hotel_id)
        language = (language or "").strip().lower()
        if language not in self.supported_languages:
            raise UnsupportedLanguageException(language, self.supported_languages)

        translations = await self.hotel_repository.get_hotel_translations(hotel_id, language)
        return HotelTranslationsResponseDTO(
            hotel_id=hotel_id,
            language=language,
            translations=[
                TranslationResponseDTO(
                    entity_type=t.entity_type.value,
                    entity_id=t.entity_id,
                    field_name=t.field_name,
                    translated_text=t.translated_text,
                )
                for t in translations
            ],
            count=len(translations),
        )

    def _to_response_dto(self, hotel: Property) -> HotelResponseDTO:
        return HotelResponseDTO.model_validate(hotel)
