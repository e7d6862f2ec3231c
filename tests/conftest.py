"""
Configuración de fixtures para pytest.
"""
from typing import AsyncGenerator, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

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
from app.infrastructure.database.session import Base, build_engine, build_session_factory
from app.infrastructure.repositories.hotel_repository import HotelRepository


@pytest.fixture(scope="function")
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """
    Session factory sobre una base SQLite en fichero temporal.

    Se usa fichero (no :memory:) porque el repositorio abre una conexion por
    operacion y todas deben ver los mismos datos. build_engine activa
    PRAGMA foreign_keys para que FKs y cascades se apliquen.
    """
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    # Registrar modelos y crear tablas
    import app.infrastructure.database.models  # noqa: F401
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield build_session_factory(engine)

    await engine.dispose()


@pytest.fixture
def hotel_repository(session_factory) -> HotelRepository:
    return HotelRepository(session_factory, operation_timeout_s=10)


def make_property(hotel_id: int = 1641879, hotel_name: str = "The Z Hotel Covent Garden", **overrides) -> Property:
    """Property completa con todas las colecciones pobladas."""
    data = dict(
        hotel_id=hotel_id,
        cupid_id=hotel_id + 1000,
        hotel_name=hotel_name,
        hotel_type="Hotels",
        chain="The Z Hotels",
        latitude=51.5107,
        longitude=-0.1246,
        stars=3,
        rating=8.3,
        review_count=1200,
        phone="+44 20 3551 3720",
        email="info@example.com",
        child_allowed=True,
        description="<p>Hotel en Covent Garden</p>",
        address=Address(address="20 Bedford St", city="London", country="gb", postal_code="WC2E 9HP"),
        checkin=Checkin(
            checkin_start="14:00",
            checkin_end="23:00",
            checkout="11:00",
            instructions=["Presentar documento", "Pago en recepcion"],
        ),
        photos=[
            Photo(url="https://img.example.com/1.jpg", main_photo=True, score=4.5),
            Photo(url="https://img.example.com/2.jpg"),
        ],
        facilities=[Facility(facility_id=47, name="WiFi"), Facility(facility_id=96, name="Bar")],
        policies=[Policy(policy_type="pets", name="Mascotas", pets_allowed="no", id=7)],
        rooms=[
            Room(
                id=10,
                room_name="Double Room",
                max_adults=2,
                max_occupancy=2,
                bed_types=[BedType(bed_type="Double bed", quantity=1, id=101)],
                room_amenities=[RoomAmenity(amenities_id=1, name="TV", sort=1)],
                photos=[Photo(url="https://img.example.com/r10.jpg")],
            ),
            Room(
                id=20,
                room_name="Twin Room",
                max_adults=2,
                max_occupancy=2,
                bed_types=[BedType(bed_type="Single bed", quantity=2, id=201)],
                room_amenities=[RoomAmenity(amenities_id=2, name="Desk", sort=1)],
            ),
        ],
    )
    data.update(overrides)
    return Property(**data)


@pytest.fixture
def property_factory() -> Callable[..., Property]:
    return make_property
