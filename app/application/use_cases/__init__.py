"""
Casos de uso de la aplicacion.
"""
from .hotel_query_use_cases import HotelQueryUseCases
from .hotel_sync_use_cases import BatchSyncResult, HotelSyncUseCases, SyncUnitResult
from .review_use_cases import ReviewUseCases

__all__ = [
    "HotelQueryUseCases",
    "HotelSyncUseCases",
    "SyncUnitResult",
    "BatchSyncResult",
    "ReviewUseCases",
]
