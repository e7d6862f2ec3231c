"""
Tests del repositorio de hoteles contra SQLite (aiosqlite).

Cubre:
- upsert idempotente del hotel (created_at se preserva)
- reemplazo de colecciones y remapeo de IDs de habitaciones
- listas vacias = sin cambios
- atomicidad: un fallo a mitad de escritura no deja nada aplicado
- reemplazo de reviews y traducciones
"""
from datetime import date, datetime

import pytest
from sqlalchemy import func, select, update

from app.domain.entities.hotel import BedType, Photo, Room
from app.domain.entities.review import Review, Translation
from app.infrastructure.database.models import (
    HotelCheckinInstructionModel,
    HotelFacilityModel,
    HotelModel,
    HotelPhotoModel,
    HotelRoomModel,
    RoomAmenityModel,
    RoomBedTypeModel,
    RoomPhotoModel,
)
from app.shared.constants.hotel_constants import TranslationEntityType
from app.shared.exceptions.domain import HotelNotFoundException
from app.shared.exceptions.infrastructure import PersistenceException


async def _count(session_factory, model, *where) -> int:
    async with session_factory() as session:
        stmt = select(func.count()).select_from(model)
        if where:
            stmt = stmt.where(*where)
        return (await session.execute(stmt)).scalar_one()


def _review(hotel_id: int, title: str, rating: int = 4) -> Review:
    return Review(hotel_id=hotel_id, rating=rating, title=title, content=f"contenido {title}", review_date=date(2024, 5, 1))


# =============================================================================
# store_property / get_hotel_by_id
# =============================================================================

@pytest.mark.asyncio
async def test_store_property_and_read_back(hotel_repository, property_factory):
    hotel_id = await hotel_repository.store_property(property_factory())

    assert hotel_id == 1641879
    hotel = await hotel_repository.get_hotel_by_id(1641879)
    assert hotel.hotel_id == 1641879
    assert hotel.hotel_name == "The Z Hotel Covent Garden"
    assert hotel.rating == pytest.approx(8.3)
    assert hotel.review_count == 1200


@pytest.mark.asyncio
async def test_get_hotel_by_id_not_found(hotel_repository):
    with pytest.raises(HotelNotFoundException) as exc_info:
        await hotel_repository.get_hotel_by_id(999999)

    assert exc_info.value.hotel_id == 999999
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_store_property_is_idempotent(hotel_repository, session_factory, property_factory):
    await hotel_repository.store_property(property_factory())
    first = await hotel_repository.get_hotel_by_id(1641879)

    await hotel_repository.store_property(property_factory())
    second = await hotel_repository.get_hotel_by_id(1641879)

    assert await _count(session_factory, HotelModel) == 1
    assert second.created_at == first.created_at
    assert await _count(session_factory, HotelPhotoModel) == 2
    assert await _count(session_factory, HotelFacilityModel) == 2
    assert await _count(session_factory, HotelRoomModel) == 2
    assert await _count(session_factory, RoomBedTypeModel) == 2
    assert await _count(session_factory, HotelCheckinInstructionModel) == 2


@pytest.mark.asyncio
async def test_store_property_keeps_created_at_and_refreshes_updated_at(
    hotel_repository, session_factory, property_factory
):
    old = datetime(2020, 1, 1)
    await hotel_repository.store_property(property_factory())
    # Fechas antiguas explicitas: now() en SQLite tiene resolucion de segundos
    async with session_factory() as session:
        async with session.begin():
            await session.execute(
                update(HotelModel)
                .where(HotelModel.hotel_id == 1641879)
                .values(created_at=old, updated_at=old)
            )

    await hotel_repository.store_property(property_factory(hotel_name="Renombrado"))
    hotel = await hotel_repository.get_hotel_by_id(1641879)

    assert hotel.hotel_name == "Renombrado"
    assert hotel.created_at.replace(tzinfo=None) == old
    assert hotel.updated_at.replace(tzinfo=None) > old


@pytest.mark.asyncio
async def test_store_property_updates_mutable_fields(hotel_repository, property_factory):
    await hotel_repository.store_property(property_factory())
    await hotel_repository.store_property(property_factory(hotel_name="Z Covent Garden", rating=9.1))

    hotel = await hotel_repository.get_hotel_by_id(1641879)
    assert hotel.hotel_name == "Z Covent Garden"
    assert hotel.rating == pytest.approx(9.1)


@pytest.mark.asyncio
async def test_room_children_reference_correct_internal_room(hotel_repository, session_factory, property_factory):
    await hotel_repository.store_property(property_factory())

    async with session_factory() as session:
        rows = (await session.execute(
            select(HotelRoomModel.cupid_room_id, RoomBedTypeModel.cupid_bed_id)
            .join(RoomBedTypeModel, RoomBedTypeModel.room_id == HotelRoomModel.id)
            .order_by(HotelRoomModel.cupid_room_id)
        )).all()
        amenity_rooms = (await session.execute(
            select(HotelRoomModel.cupid_room_id, RoomAmenityModel.amenities_id)
            .join(RoomAmenityModel, RoomAmenityModel.room_id == HotelRoomModel.id)
            .order_by(HotelRoomModel.cupid_room_id)
        )).all()
        photo_rooms = (await session.execute(
            select(HotelRoomModel.cupid_room_id)
            .join(RoomPhotoModel, RoomPhotoModel.room_id == HotelRoomModel.id)
        )).scalars().all()

    assert [tuple(r) for r in rows] == [(10, 101), (20, 201)]
    assert [tuple(r) for r in amenity_rooms] == [(10, 1), (20, 2)]
    assert photo_rooms == [10]


@pytest.mark.asyncio
async def test_rooms_are_replaced_and_children_cascade(hotel_repository, session_factory, property_factory):
    await hotel_repository.store_property(property_factory())

    new_rooms = [Room(id=30, room_name="Suite", bed_types=[BedType(bed_type="King", id=301)])]
    await hotel_repository.store_property(property_factory(rooms=new_rooms))

    async with session_factory() as session:
        room_ids = (await session.execute(select(HotelRoomModel.cupid_room_id))).scalars().all()
    assert room_ids == [30]
    assert await _count(session_factory, RoomBedTypeModel) == 1
    assert await _count(session_factory, RoomAmenityModel) == 0
    assert await _count(session_factory, RoomPhotoModel) == 0


@pytest.mark.asyncio
async def test_empty_collections_leave_existing_rows(hotel_repository, session_factory, property_factory):
    await hotel_repository.store_property(property_factory())

    empty = property_factory(photos=[], facilities=[], policies=[], rooms=[])
    empty.checkin.instructions = []
    await hotel_repository.store_property(empty)

    assert await _count(session_factory, HotelPhotoModel) == 2
    assert await _count(session_factory, HotelFacilityModel) == 2
    assert await _count(session_factory, HotelRoomModel) == 2
    assert await _count(session_factory, HotelCheckinInstructionModel) == 2


@pytest.mark.asyncio
async def test_duplicate_photos_are_collapsed(hotel_repository, session_factory, property_factory):
    photos = [Photo(url="https://img.example.com/a.jpg"), Photo(url="https://img.example.com/a.jpg")]
    await hotel_repository.store_property(property_factory(photos=photos))

    assert await _count(session_factory, HotelPhotoModel) == 1


@pytest.mark.asyncio
async def test_failure_mid_write_rolls_back_new_hotel(hotel_repository, property_factory):
    # Dos habitaciones con el mismo ID externo violan la unicidad por hotel
    rooms = [Room(id=10, room_name="A"), Room(id=10, room_name="B")]

    with pytest.raises(PersistenceException):
        await hotel_repository.store_property(property_factory(rooms=rooms))

    with pytest.raises(HotelNotFoundException):
        await hotel_repository.get_hotel_by_id(1641879)


@pytest.mark.asyncio
async def test_failure_mid_write_keeps_previous_graph(hotel_repository, session_factory, property_factory):
    await hotel_repository.store_property(property_factory())

    rooms = [Room(id=40, room_name="A"), Room(id=40, room_name="B")]
    with pytest.raises(PersistenceException):
        await hotel_repository.store_property(property_factory(hotel_name="Nombre nuevo", rooms=rooms))

    hotel = await hotel_repository.get_hotel_by_id(1641879)
    assert hotel.hotel_name == "The Z Hotel Covent Garden"
    async with session_factory() as session:
        room_ids = (await session.execute(
            select(HotelRoomModel.cupid_room_id).order_by(HotelRoomModel.cupid_room_id)
        )).scalars().all()
    assert room_ids == [10, 20]


@pytest.mark.asyncio
async def test_get_hotels_paginates_by_hotel_id(hotel_repository, property_factory):
    for hotel_id in (300, 100, 200):
        await hotel_repository.store_property(property_factory(hotel_id=hotel_id, hotel_name=f"Hotel {hotel_id}"))

    first_page = await hotel_repository.get_hotels(limit=2, offset=0)
    second_page = await hotel_repository.get_hotels(limit=2, offset=2)

    assert [h.hotel_id for h in first_page] == [100, 200]
    assert [h.hotel_id for h in second_page] == [300]


# =============================================================================
# Reviews
# =============================================================================

@pytest.mark.asyncio
async def test_store_reviews_replaces_previous_set(hotel_repository, property_factory):
    await hotel_repository.store_property(property_factory())

    await hotel_repository.store_reviews(1641879, [_review(1641879, "A"), _review(1641879, "B")])
    await hotel_repository.store_reviews(1641879, [_review(1641879, "C")])

    reviews = await hotel_repository.get_hotel_reviews(1641879)
    assert [r.title for r in reviews] == ["C"]


@pytest.mark.asyncio
async def test_store_reviews_empty_list_clears(hotel_repository, property_factory):
    await hotel_repository.store_property(property_factory())
    await hotel_repository.store_reviews(1641879, [_review(1641879, "A")])

    stored = await hotel_repository.store_reviews(1641879, [])

    assert stored == 0
    assert await hotel_repository.get_hotel_reviews(1641879) == []


@pytest.mark.asyncio
async def test_store_reviews_for_unknown_hotel_fails(hotel_repository):
    with pytest.raises(PersistenceException) as exc_info:
        await hotel_repository.store_reviews(424242, [_review(424242, "A")])

    assert exc_info.value.operation == "store_reviews"


@pytest.mark.asyncio
async def test_store_reviews_rejects_out_of_range_rating(hotel_repository, property_factory):
    await hotel_repository.store_property(property_factory())
    await hotel_repository.store_reviews(1641879, [_review(1641879, "ok")])

    with pytest.raises(PersistenceException):
        await hotel_repository.store_reviews(1641879, [_review(1641879, "mala", rating=7)])

    # El set anterior sigue intacto
    reviews = await hotel_repository.get_hotel_reviews(1641879)
    assert [r.title for r in reviews] == ["ok"]


# =============================================================================
# Traducciones
# =============================================================================

def _translation(language: str, field_name: str, text: str, entity_id: int = 1641879) -> Translation:
    return Translation(
        entity_type=TranslationEntityType.HOTEL,
        entity_id=entity_id,
        language_code=language,
        field_name=field_name,
        translated_text=text,
    )


@pytest.mark.asyncio
async def test_store_translations_replaces_per_language(hotel_repository, property_factory):
    await hotel_repository.store_property(property_factory())
    await hotel_repository.store_translations(1641879, [
        _translation("fr", "hotel_name", "Hôtel Z"),
        _translation("fr", "description", "Description FR"),
        _translation("es", "hotel_name", "Hotel Z ES"),
    ])

    await hotel_repository.store_translations(1641879, [_translation("fr", "hotel_name", "Hôtel Z v2")])

    fr = await hotel_repository.get_hotel_translations(1641879, "fr")
    es = await hotel_repository.get_hotel_translations(1641879, "es")
    assert [(t.field_name, t.translated_text) for t in fr] == [("hotel_name", "Hôtel Z v2")]
    assert [(t.field_name, t.translated_text) for t in es] == [("hotel_name", "Hotel Z ES")]


@pytest.mark.asyncio
async def test_store_translations_empty_language_scope_clears(hotel_repository, property_factory):
    await hotel_repository.store_property(property_factory())
    await hotel_repository.store_translations(1641879, [_translation("fr", "hotel_name", "Hôtel Z")])

    await hotel_repository.store_translations(1641879, [], languages=["fr"])

    assert await hotel_repository.get_hotel_translations(1641879, "fr") == []


@pytest.mark.asyncio
async def test_store_translations_shared_facility_stays_per_hotel(hotel_repository, property_factory):
    await hotel_repository.store_property(property_factory(hotel_id=1))
    await hotel_repository.store_property(property_factory(hotel_id=2, hotel_name="Otro"))
    wifi_fr = Translation(
        entity_type=TranslationEntityType.FACILITY,
        entity_id=47,
        language_code="fr",
        field_name="name",
        translated_text="Wi-Fi",
    )

    await hotel_repository.store_translations(1, [wifi_fr])
    await hotel_repository.store_translations(2, [wifi_fr])
    # Vaciar fr del hotel 2 no toca el hotel 1
    await hotel_repository.store_translations(2, [], languages=["fr"])

    hotel_1 = await hotel_repository.get_hotel_translations(1, "fr")
    assert [(t.entity_type, t.entity_id, t.translated_text) for t in hotel_1] == [
        (TranslationEntityType.FACILITY, 47, "Wi-Fi"),
    ]
    assert await hotel_repository.get_hotel_translations(2, "fr") == []


@pytest.mark.asyncio
async def test_store_translations_for_unknown_hotel_fails(hotel_repository):
    with pytest.raises(PersistenceException):
        await hotel_repository.store_translations(424242, [_translation("fr", "hotel_name", "X", entity_id=424242)])


@pytest.mark.asyncio
async def test_ping(hotel_repository):
    await hotel_repository.ping()
