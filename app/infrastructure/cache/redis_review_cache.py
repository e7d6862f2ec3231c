"""
Cache de reviews sobre Redis (redis.asyncio).

Clave: reviews:hotel:{hotel_id}
Valor: lista JSON de reviews serializadas con Review.to_dict.
"""
import asyncio
import json
from typing import List, Optional

import redis.asyncio as redis
from loguru import logger
from redis.exceptions import RedisError

from app.core.config import settings
from app.domain.entities.review import Review
from app.domain.repositories.review_cache import IReviewCache
from app.shared.constants.hotel_constants import REVIEWS_CACHE_KEY
from app.shared.exceptions.infrastructure import CacheException


def reviews_cache_key(hotel_id: int) -> str:
    return REVIEWS_CACHE_KEY.format(hotel_id=hotel_id)


class RedisReviewCache(IReviewCache):
    """
    Implementacion de IReviewCache.

    Un miss o una clave expirada devuelve None. Los fallos del backend
    (conexion, timeout, JSON corrupto) se propagan como CacheException;
    el caller decide si degradar.
    """

    def __init__(self, client: redis.Redis, operation_timeout_s: Optional[float] = None):
        self._client = client
        self._timeout_s = operation_timeout_s

    @classmethod
    def from_url(cls, url: str, operation_timeout_s: Optional[float] = None) -> "RedisReviewCache":
        client = redis.from_url(url, decode_responses=True)
        return cls(client, operation_timeout_s=operation_timeout_s)

    async def _call(self, operation: str, awaitable):
        try:
            if self._timeout_s:
                return await asyncio.wait_for(awaitable, timeout=self._timeout_s)
            return await awaitable
        except asyncio.TimeoutError as e:
            raise CacheException(f"Timeout de cache en {operation}") from e
        except RedisError as e:
            raise CacheException(f"Error de cache en {operation}: {e}") from e

    async def get_reviews(self, hotel_id: int) -> Optional[List[Review]]:
        raw = await self._call("get_reviews", self._client.get(reviews_cache_key(hotel_id)))
        if raw is None:
            return None
        try:
            return [Review.from_dict(item) for item in json.loads(raw)]
        except (ValueError, KeyError, TypeError) as e:
            raise CacheException(f"Entrada de cache corrupta para hotel {hotel_id}: {e}") from e

    async def set_reviews(self, hotel_id: int, reviews: List[Review], ttl_s: float) -> None:
        if ttl_s <= 0:
            raise CacheException(f"TTL invalido: {ttl_s}")
        payload = json.dumps([r.to_dict() for r in reviews])
        # px en milisegundos: admite TTL fraccionarios
        await self._call(
            "set_reviews",
            self._client.set(reviews_cache_key(hotel_id), payload, px=max(1, int(ttl_s * 1000))),
        )

    async def delete_reviews(self, hotel_id: int) -> None:
        await self._call("delete_reviews", self._client.delete(reviews_cache_key(hotel_id)))

    async def ping(self) -> None:
        await self._call("ping", self._client.ping())

    async def close(self) -> None:
        await self._client.aclose()


async def connect_review_cache() -> Optional[RedisReviewCache]:
    """
    Crea la cache y verifica la conexion.

    Si la cache esta deshabilitada o Redis no responde, devuelve None y el
    servicio arranca en modo degradado (todas las lecturas van al store).
    """
    if not settings.CACHE_ENABLED:
        logger.info("Cache de reviews deshabilitada por configuracion")
        return None

    cache = RedisReviewCache.from_url(
        settings.effective_redis_url,
        operation_timeout_s=settings.CACHE_OPERATION_TIMEOUT_S,
    )
    try:
        await cache.ping()
    except CacheException as e:
        logger.warning(f"Redis no disponible, se continua sin cache: {e}")
        await cache.close()
        return None

    logger.info("Cache de reviews conectada")
    return cache
