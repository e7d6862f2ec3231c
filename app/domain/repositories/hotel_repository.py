"""
Interfaz del repositorio de hoteles (motor de persistencia).
Define el contrato que debe cumplir cualquier implementación.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from app.domain.entities.hotel import Property
from app.domain.entities.review import Review, Translation


class IHotelRepository(ABC):
    """
    Interfaz del repositorio de hoteles.

    Cada operacion de escritura se ejecuta en su propia transaccion:
    o se aplica completa o no se aplica nada. Los fallos se propagan como
    PersistenceException; las busquedas puntuales sin resultado como
    HotelNotFoundException.
    """
    
    @abstractmethod
    async def store_property(self, property: Property) -> int:
        """
        Escribe atomicamente el grafo completo de un hotel.
        
        Args:
            property: Hotel con todas sus sub-estructuras
            
        Returns:
            int: ID canonico del hotel (hotel_id)
        """
        pass
    
    @abstractmethod
    async def store_reviews(self, hotel_id: int, reviews: List[Review]) -> int:
        """
        Reemplaza todas las reviews del hotel por las recibidas.
        Una lista vacia es un "clear" valido.
        
        Returns:
            int: Cantidad de reviews insertadas
        """
        pass
    
    @abstractmethod
    async def store_translations(
        self,
        hotel_id: int,
        translations: List[Translation],
        languages: Optional[Sequence[str]] = None,
    ) -> int:
        """
        Reemplaza las traducciones del hotel para cada idioma presente
        en la lista recibida o indicado en `languages`.
        Un idioma en `languages` sin traducciones queda vacio.

        Returns:
            int: Cantidad de traducciones insertadas
        """
        pass
    
    @abstractmethod
    async def get_hotel_by_id(self, hotel_id: int) -> Property:
        """
        Obtiene un hotel por su ID externo.
        
        Raises:
            HotelNotFoundException: si el hotel no existe
        """
        pass
    
    @abstractmethod
    async def get_hotels(self, limit: int = 50, offset: int = 0) -> List[Property]:
        """Lista hoteles paginados, ordenados por hotel_id."""
        pass
    
    @abstractmethod
    async def get_hotel_reviews(self, hotel_id: int) -> List[Review]:
        """Obtiene las reviews de un hotel (lista vacia si no hay)."""
        pass
    
    @abstractmethod
    async def get_hotel_translations(self, hotel_id: int, language_code: str) -> List[Translation]:
        """Obtiene las traducciones de un hotel para un idioma."""
        pass
    
    @abstractmethod
    async def ping(self) -> None:
        """
        Verifica que el store responde.
        
        Raises:
            PersistenceException: si el store no esta disponible
        """
        pass
