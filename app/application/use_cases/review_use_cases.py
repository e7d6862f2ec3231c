"""
Casos de uso de lectura de reviews (cache-aside).
"""
from datetime import datetime, timezone
from typing import List, Optional

from loguru import logger

from app.application.dto.hotel_dto import HotelReviewsResponseDTO, ReviewResponseDTO
from app.core.config import settings
from app.domain.entities.review import Review
from app.domain.repositories.hotel_repository import IHotelRepository
from app.domain.repositories.review_cache import IReviewCache
from app.shared.exceptions.infrastructure import CacheException
from app.shared.utils.validators import validate_hotel_id


class ReviewUseCases:
    """
    Lectura de reviews con cache-aside.

    1. Se valida el ID antes de tocar cache o store.
    2. Hit de cache -> se sirve desde cache.
    3. Miss o error de cache -> se lee del store y se repuebla la cache
       con TTL. Un fallo al escribir en cache solo se loguea.

    Sin cache configurada (modo degradado) todas las lecturas van al store.
    """

    def __init__(
        self,
        hotel_repository: IHotelRepository,
        review_cache: Optional[IReviewCache] = None,
        ttl_s: Optional[float] = None,
    ):
        self.hotel_repository = hotel_repository
        self.review_cache = review_cache
        self.ttl_s = ttl_s if ttl_s is not None else settings.REVIEWS_CACHE_TTL_S

    async def get_hotel_reviews(self, raw_hotel_id) -> HotelReviewsResponseDTO:
        """
        Obtiene las reviews de un hotel.

        Raises:
            ValidationException: ID invalido
            PersistenceException: fallo del store
        """
        hotel_id = validate_hotel_id(raw_hotel_id)

        reviews = await self._get_cached(hotel_id)
        from_cache = reviews is not None

        if reviews is None:
            reviews = await self.hotel_repository.get_hotel_reviews(hotel_id)
            await self._set_cached(hotel_id, reviews)

        return HotelReviewsResponseDTO(
            hotel_id=hotel_id,
            reviews=[self._to_response_dto(r) for r in reviews],
            count=len(reviews),
            from_cache=from_cache,
            retrieved_at=datetime.now(timezone.utc),
        )

    async def _get_cached(self, hotel_id: int) -> Optional[List[Review]]:
        if self.review_cache is None:
            return None
        try:
            return await self.review_cache.get_reviews(hotel_id)
        except CacheException as e:
            logger.warning(f"Cache no disponible al leer reviews del hotel {hotel_id}: {e.message}")
            return None

    async def _set_cached(self, hotel_id: int, reviews: List[Review]) -> None:
        if self.review_cache is None:
            return
        try:
            await self.review_cache.set_reviews(hotel_id, reviews, self.ttl_s)
        except CacheException as e:
            logger.warning(f"No se pudieron cachear las reviews del hotel {hotel_id}: {e.message}")

    def _to_response_dto(self, review: Review) -> ReviewResponseDTO:
        return ReviewResponseDTO(
            id=review.id,
            hotel_id=review.hotel_id,
            rating=review.rating,
            reviewer_name=review.reviewer_name,
            title=review.title,
            content=review.content,
            language_code=review.language_code,
            review_date=review.review_date,
            helpful_votes=review.helpful_votes,
        )
