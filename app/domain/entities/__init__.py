"""
Entidades del dominio.
"""
from app.domain.entities.hotel import (
    Address,
    BedType,
    Checkin,
    Facility,
    Photo,
    Policy,
    Property,
    Room,
    RoomAmenity,
)
from app.domain.entities.review import Review, Translation

__all__ = [
    "Address",
    "BedType",
    "Checkin",
    "Facility",
    "Photo",
    "Policy",
    "Property",
    "Room",
    "RoomAmenity",
    "Review",
    "Translation",
]
