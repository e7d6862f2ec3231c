"""
Interfaz de la cache de reviews (cache-aside).
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.entities.review import Review


class IReviewCache(ABC):
    """
    Cache de reviews por hotel.

    Contrato de get_reviews:
    - hit: devuelve la lista (puede estar vacia)
    - miss o TTL expirado: devuelve None (no es error)
    - fallo del backend: lanza CacheException para que el caller decida
    """
    
    @abstractmethod
    async def get_reviews(self, hotel_id: int) -> Optional[List[Review]]:
        pass
    
    @abstractmethod
    async def set_reviews(self, hotel_id: int, reviews: List[Review], ttl_s: float) -> None:
        """Guarda las reviews con un TTL en segundos (admite fracciones)."""
        pass
    
    @abstractmethod
    async def delete_reviews(self, hotel_id: int) -> None:
        pass
    
    @abstractmethod
    async def ping(self) -> None:
        pass
    
    @abstractmethod
    async def close(self) -> None:
        pass
