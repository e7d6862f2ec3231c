"""
Modelos de base de datos (ORM).

Esquema fijo del grafo de un hotel. Todas las tablas hijas referencian a
su padre con ON DELETE CASCADE: borrar un hotel borra todo su grafo, sus
reviews y sus traducciones.
"""
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from app.infrastructure.database.session import Base
from app.shared.constants.hotel_constants import EmbeddingStatus


class HotelModel(Base):
    """
    Modelo de base de datos para hoteles (entidad raiz).
    hotel_id es el ID externo y la clave de upsert.
    """

    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hotel_id = Column(Integer, nullable=False, unique=True, index=True)
    cupid_id = Column(Integer, nullable=False)
    main_image_th = Column(Text, nullable=True)
    hotel_type = Column(String(100), nullable=True)
    hotel_type_id = Column(Integer, nullable=True)
    chain = Column(String(255), nullable=True)
    chain_id = Column(Integer, nullable=True, index=True)
    latitude = Column(Numeric(10, 8, asdecimal=False), nullable=True)
    longitude = Column(Numeric(11, 8, asdecimal=False), nullable=True)
    hotel_name = Column(String(500), nullable=False)
    phone = Column(String(50), nullable=True)
    fax = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    stars = Column(Integer, nullable=True)
    airport_code = Column(String(10), nullable=True)
    rating = Column(Numeric(3, 2, asdecimal=False), nullable=True)
    review_count = Column(Integer, default=0)
    parking = Column(String(50), nullable=True)
    group_room_min = Column(Integer, nullable=True)
    child_allowed = Column(Boolean, default=False)
    pets_allowed = Column(Boolean, default=False)
    description = Column(Text, nullable=True)
    markdown_description = Column(Text, nullable=True)
    important_info = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_hotels_location", "latitude", "longitude"),
    )

    def __repr__(self):
        return f"<Hotel(hotel_id={self.hotel_id}, name={self.hotel_name}, rating={self.rating})>"


class HotelAddressModel(Base):
    """Direccion del hotel (1:1)."""

    __tablename__ = "hotel_addresses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hotel_id = Column(Integer, ForeignKey("hotels.hotel_id", ondelete="CASCADE"), unique=True)
    address = Column(Text, nullable=True)
    city = Column(String(255), nullable=True)
    state = Column(String(255), nullable=True)
    country = Column(String(10), nullable=True)
    postal_code = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class HotelCheckinModel(Base):
    """Informacion de check-in (1:1)."""

    __tablename__ = "hotel_checkins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hotel_id = Column(Integer, ForeignKey("hotels.hotel_id", ondelete="CASCADE"), unique=True)
    checkin_start = Column(String(10), nullable=True)
    checkin_end = Column(String(10), nullable=True)
    checkout = Column(String(10), nullable=True)
    special_instructions = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class HotelCheckinInstructionModel(Base):
    """Instrucciones de check-in, ordenadas por sort_order."""

    __tablename__ = "hotel_checkin_instructions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hotel_checkin_id = Column(Integer, ForeignKey("hotel_checkins.id", ondelete="CASCADE"), index=True)
    instruction = Column(Text, nullable=False)
    sort_order = Column(Integer, default=0)


class HotelPhotoModel(Base):
    """Fotos del hotel."""

    __tablename__ = "hotel_photos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hotel_id = Column(Integer, ForeignKey("hotels.hotel_id", ondelete="CASCADE"), index=True)
    url = Column(Text, nullable=False)
    hd_url = Column(Text, nullable=True)
    image_description = Column(Text, nullable=True)
    image_class1 = Column(String(100), nullable=True)
    image_class2 = Column(String(100), nullable=True)
    main_photo = Column(Boolean, default=False)
    score = Column(Numeric(5, 2, asdecimal=False), nullable=True)
    class_id = Column(Integer, nullable=True)
    class_order = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (UniqueConstraint("hotel_id", "url"),)


class HotelFacilityModel(Base):
    """Facilities del hotel."""

    __tablename__ = "hotel_facilities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hotel_id = Column(Integer, ForeignKey("hotels.hotel_id", ondelete="CASCADE"), index=True)
    facility_id = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (UniqueConstraint("hotel_id", "facility_id"),)


class HotelPolicyModel(Base):
    """Politicas del hotel."""

    __tablename__ = "hotel_policies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hotel_id = Column(Integer, ForeignKey("hotels.hotel_id", ondelete="CASCADE"), index=True)
    policy_type = Column(String(100), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    child_allowed = Column(String(50), nullable=True)
    pets_allowed = Column(String(50), nullable=True)
    parking = Column(String(50), nullable=True)
    cupid_policy_id = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (UniqueConstraint("hotel_id", "cupid_policy_id"),)


class HotelRoomModel(Base):
    """
    Habitaciones del hotel.
    cupid_room_id es el ID externo, unico dentro del hotel; id es el ID
    interno que referencian camas, amenities y fotos.
    """

    __tablename__ = "hotel_rooms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hotel_id = Column(Integer, ForeignKey("hotels.hotel_id", ondelete="CASCADE"), index=True)
    cupid_room_id = Column(Integer, nullable=False)
    room_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    room_size_square = Column(Integer, nullable=True)
    room_size_unit = Column(String(10), nullable=True)
    max_adults = Column(Integer, default=1)
    max_children = Column(Integer, default=0)
    max_occupancy = Column(Integer, default=1)
    bed_relation = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (UniqueConstraint("hotel_id", "cupid_room_id"),)


class RoomBedTypeModel(Base):
    """Tipos de cama de una habitacion."""

    __tablename__ = "room_bed_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    room_id = Column(Integer, ForeignKey("hotel_rooms.id", ondelete="CASCADE"), index=True)
    quantity = Column(Integer, default=1)
    bed_type = Column(String(100), nullable=False)
    bed_size = Column(String(100), nullable=True)
    cupid_bed_id = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (UniqueConstraint("room_id", "cupid_bed_id"),)


class RoomAmenityModel(Base):
    """Amenities de una habitacion."""

    __tablename__ = "room_amenities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    room_id = Column(Integer, ForeignKey("hotel_rooms.id", ondelete="CASCADE"), index=True)
    amenities_id = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    sort_order = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (UniqueConstraint("room_id", "amenities_id"),)


class RoomPhotoModel(Base):
    """Fotos de una habitacion."""

    __tablename__ = "room_photos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    room_id = Column(Integer, ForeignKey("hotel_rooms.id", ondelete="CASCADE"), index=True)
    url = Column(Text, nullable=False)
    hd_url = Column(Text, nullable=True)
    image_description = Column(Text, nullable=True)
    image_class1 = Column(String(100), nullable=True)
    image_class2 = Column(String(100), nullable=True)
    main_photo = Column(Boolean, default=False)
    score = Column(Numeric(5, 2, asdecimal=False), nullable=True)
    class_id = Column(Integer, nullable=True)
    class_order = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (UniqueConstraint("room_id", "url"),)


class ReviewModel(Base):
    """
    Reviews de un hotel.
    embedding_status lo muta el pipeline de embeddings, no el sync.
    """

    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hotel_id = Column(Integer, ForeignKey("hotels.hotel_id", ondelete="CASCADE"), nullable=False, index=True)
    reviewer_name = Column(String(255), nullable=True)
    rating = Column(Integer, nullable=False, index=True)
    title = Column(String(500), nullable=True)
    content = Column(Text, nullable=True)
    language_code = Column(String(10), default="en")
    review_date = Column(Date, nullable=True)
    helpful_votes = Column(Integer, default=0)
    embedding_status = Column(String(20), default=EmbeddingStatus.PENDING.value, nullable=False)
    embedding_updated_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )

    def __repr__(self):
        return f"<Review(id={self.id}, hotel_id={self.hotel_id}, rating={self.rating})>"


class TranslationModel(Base):
    """
    Traducciones genericas: (entity_type, entity_id, language_code, field_name) -> texto.
    La clave es unica por hotel: los ids de facility son de catalogo y se
    comparten entre hoteles, asi que cada hotel tiene sus propias filas.
    """

    __tablename__ = "translations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hotel_id = Column(Integer, ForeignKey("hotels.hotel_id", ondelete="CASCADE"), nullable=False, index=True)
    entity_type = Column(String(50), nullable=False)
    entity_id = Column(Integer, nullable=False)
    language_code = Column(String(10), nullable=False)
    field_name = Column(String(100), nullable=False)
    translated_text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("hotel_id", "entity_type", "entity_id", "language_code", "field_name"),
        Index("idx_translations_entity", "entity_type", "entity_id", "language_code"),
        Index("idx_translations_hotel_language", "hotel_id", "language_code"),
    )
