"""
Entidad de dominio: Property (hotel) y su grafo de sub-estructuras.

El grafo completo (direccion, check-in, fotos, facilities, politicas,
habitaciones y sus hijos) se escribe de forma atomica por el motor de
persistencia. Las colecciones hijas se reemplazan completas en cada sync.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Address:
    """Direccion del hotel (1:1 con Property)."""

    address: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    postal_code: str = ""


@dataclass
class Checkin:
    """
    Informacion de check-in/check-out (1:1 con Property).
    Las instrucciones son una lista ordenada de texto libre.
    """

    checkin_start: str = ""
    checkin_end: str = ""
    checkout: str = ""
    instructions: List[str] = field(default_factory=list)
    special_instructions: str = ""


@dataclass
class Photo:
    """Foto de un hotel o de una habitacion."""

    url: str
    hd_url: str = ""
    image_description: str = ""
    image_class1: str = ""
    image_class2: str = ""
    main_photo: bool = False
    score: float = 0.0
    class_id: int = 0
    class_order: int = 0


@dataclass
class Facility:
    facility_id: int
    name: str


@dataclass
class Policy:
    policy_type: str
    name: str
    description: str = ""
    child_allowed: str = ""
    pets_allowed: str = ""
    parking: str = ""
    id: int = 0


@dataclass
class BedType:
    bed_type: str
    quantity: int = 1
    bed_size: str = ""
    id: int = 0


@dataclass
class RoomAmenity:
    amenities_id: int
    name: str
    sort: int = 0


@dataclass
class Room:
    """
    Habitacion de un hotel.
    `id` es el identificador externo, unico dentro del hotel.
    """

    id: int
    room_name: str
    description: str = ""
    room_size_square: int = 0
    room_size_unit: str = ""
    max_adults: int = 1
    max_children: int = 0
    max_occupancy: int = 1
    bed_relation: str = ""
    bed_types: List[BedType] = field(default_factory=list)
    room_amenities: List[RoomAmenity] = field(default_factory=list)
    photos: List[Photo] = field(default_factory=list)


@dataclass
class Property:
    """
    Entidad raiz del grafo de un hotel.
    `hotel_id` es el identificador externo, globalmente unico.
    """

    hotel_id: int
    hotel_name: str
    cupid_id: int = 0
    main_image_th: str = ""
    hotel_type: str = ""
    hotel_type_id: int = 0
    chain: str = ""
    chain_id: int = 0
    latitude: float = 0.0
    longitude: float = 0.0
    phone: str = ""
    fax: str = ""
    email: str = ""
    stars: int = 0
    airport_code: str = ""
    rating: float = 0.0
    review_count: int = 0
    parking: str = ""
    group_room_min: Optional[int] = None
    child_allowed: bool = False
    pets_allowed: bool = False
    description: str = ""
    markdown_description: str = ""
    important_info: str = ""
    address: Address = field(default_factory=Address)
    checkin: Checkin = field(default_factory=Checkin)
    photos: List[Photo] = field(default_factory=list)
    facilities: List[Facility] = field(default_factory=list)
    policies: List[Policy] = field(default_factory=list)
    rooms: List[Room] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validaciones después de la inicialización."""
        if self.hotel_id is None or int(self.hotel_id) <= 0:
            raise ValueError("El hotel_id debe ser un entero positivo")

    def room_ids(self) -> List[int]:
        """IDs externos de las habitaciones, en orden."""
        return [room.id for room in self.rooms]
