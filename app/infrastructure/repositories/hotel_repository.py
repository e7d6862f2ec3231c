"""
Implementación del repositorio de hoteles (motor de persistencia).

Escrituras:
- store_property: upsert del hotel + reemplazo del grafo completo en UNA transaccion.
- store_reviews / store_translations: reemplazo independiente, cada uno en su transaccion.

Reglas de reemplazo:
- Fotos, facilities, politicas, habitaciones e instrucciones de check-in:
  lista vacia = "sin cambios" (no se borra nada).
- Reviews y traducciones: lista vacia = "clear" valido.

Cada operacion abre su propia sesion (conexion del pool) y respeta un
timeout; si se supera o se cancela, la transaccion se revierte.
"""
import asyncio
from typing import Any, Awaitable, Callable, Dict, Hashable, Iterable, List, Optional, Sequence, TypeVar

from loguru import logger
from sqlalchemy import delete, func, insert, select, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
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
from app.domain.entities.review import Review, Translation
from app.domain.repositories.hotel_repository import IHotelRepository
from app.infrastructure.database.models import (
    HotelAddressModel,
    HotelCheckinInstructionModel,
    HotelCheckinModel,
    HotelFacilityModel,
    HotelModel,
    HotelPhotoModel,
    HotelPolicyModel,
    HotelRoomModel,
    ReviewModel,
    RoomAmenityModel,
    RoomBedTypeModel,
    RoomPhotoModel,
    TranslationModel,
)
from app.shared.constants.hotel_constants import EmbeddingStatus, TranslationEntityType
from app.shared.exceptions.domain import HotelNotFoundException
from app.shared.exceptions.infrastructure import PersistenceException

T = TypeVar("T")

# Columnas que se actualizan al re-sincronizar un hotel existente.
# hotel_id/cupid_id son identidad; created_at se preserva.
_HOTEL_MUTABLE_COLUMNS = (
    "main_image_th",
    "hotel_type",
    "hotel_type_id",
    "chain",
    "chain_id",
    "latitude",
    "longitude",
    "hotel_name",
    "phone",
    "fax",
    "email",
    "stars",
    "airport_code",
    "rating",
    "review_count",
    "parking",
    "group_room_min",
    "child_allowed",
    "pets_allowed",
    "description",
    "markdown_description",
    "important_info",
)


def _dedupe(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """Elimina duplicados por clave conservando el primero (orden estable)."""
    seen: set = set()
    result: List[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        result.append(item)
    return result


def _photo_row(photo: Photo) -> Dict[str, Any]:
    return {
        "url": photo.url,
        "hd_url": photo.hd_url,
        "image_description": photo.image_description,
        "image_class1": photo.image_class1,
        "image_class2": photo.image_class2,
        "main_photo": photo.main_photo,
        "score": photo.score,
        "class_id": photo.class_id,
        "class_order": photo.class_order,
    }


class HotelRepository(IHotelRepository):
    """Repositorio para gestionar el grafo de hoteles, reviews y traducciones."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        operation_timeout_s: Optional[float] = None,
    ):
        self._session_factory = session_factory
        self._timeout_s = operation_timeout_s

    # =========================================================================
    # Infraestructura de transacciones
    # =========================================================================

    async def _run(self, operation: str, work: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """
        Ejecuta `work` dentro de una transaccion propia.

        - Commit solo si todo `work` termina bien.
        - Cualquier error, timeout o cancelacion -> rollback completo.
        - Errores del store se propagan como PersistenceException.
        """
        async def _in_transaction() -> T:
            async with self._session_factory() as session:
                async with session.begin():
                    return await work(session)

        try:
            if self._timeout_s:
                return await asyncio.wait_for(_in_transaction(), timeout=self._timeout_s)
            return await _in_transaction()
        except asyncio.TimeoutError as e:
            logger.error(f"Timeout en {operation} tras {self._timeout_s}s (rollback)")
            raise PersistenceException(f"Timeout en {operation}", operation=operation) from e
        except SQLAlchemyError as e:
            logger.error(f"Error de base de datos en {operation}: {e}")
            raise PersistenceException(f"Fallo en {operation}: {e.__class__.__name__}", operation=operation) from e

    @staticmethod
    def _upsert_insert(session: AsyncSession, model):
        """INSERT con soporte ON CONFLICT segun el dialecto del store."""
        dialect = session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(model)
        if dialect == "sqlite":
            return sqlite.insert(model)
        raise PersistenceException(f"Dialecto no soportado para upsert: {dialect}", operation="upsert")

    # =========================================================================
    # Escritura: grafo de Property
    # =========================================================================

    async def store_property(self, property: Property) -> int:
        """
        Escribe atomicamente el grafo completo de un hotel.

        Orden: hotel -> direccion -> check-in -> fotos -> facilities ->
        politicas -> habitaciones (y sus hijos). Si cualquier paso falla no
        queda nada aplicado.
        """
        async def _work(session: AsyncSession) -> int:
            hotel_id = await self._upsert_hotel(session, property)
            await self._upsert_address(session, hotel_id, property.address)
            await self._upsert_checkin(session, hotel_id, property.checkin)
            await self._replace_photos(session, hotel_id, property.photos)
            await self._replace_facilities(session, hotel_id, property.facilities)
            await self._replace_policies(session, hotel_id, property.policies)
            await self._replace_rooms(session, hotel_id, property.rooms)
            return hotel_id

        hotel_id = await self._run("store_property", _work)
        logger.debug(
            f"Hotel {hotel_id} guardado: photos={len(property.photos)}, "
            f"facilities={len(property.facilities)}, policies={len(property.policies)}, "
            f"rooms={len(property.rooms)}"
        )
        return hotel_id

    async def _upsert_hotel(self, session: AsyncSession, property: Property) -> int:
        values = {
            "hotel_id": property.hotel_id,
            "cupid_id": property.cupid_id,
            "main_image_th": property.main_image_th,
            "hotel_type": property.hotel_type,
            "hotel_type_id": property.hotel_type_id,
            "chain": property.chain,
            "chain_id": property.chain_id,
            "latitude": property.latitude,
            "longitude": property.longitude,
            "hotel_name": property.hotel_name,
            "phone": property.phone,
            "fax": property.fax,
            "email": property.email,
            "stars": property.stars,
            "airport_code": property.airport_code,
            "rating": property.rating,
            "review_count": property.review_count,
            "parking": property.parking,
            "group_room_min": property.group_room_min,
            "child_allowed": property.child_allowed,
            "pets_allowed": property.pets_allowed,
            "description": property.description,
            "markdown_description": property.markdown_description,
            "important_info": property.important_info,
        }
        stmt = self._upsert_insert(session, HotelModel).values(**values)
        set_ = {col: stmt.excluded[col] for col in _HOTEL_MUTABLE_COLUMNS}
        set_["updated_at"] = func.now()
        stmt = stmt.on_conflict_do_update(
            index_elements=["hotel_id"],
            set_=set_,
        ).returning(HotelModel.hotel_id)

        result = await session.execute(stmt)
        return result.scalar_one()

    async def _upsert_address(self, session: AsyncSession, hotel_id: int, address: Address) -> None:
        values = {
            "address": address.address,
            "city": address.city,
            "state": address.state,
            "country": address.country,
            "postal_code": address.postal_code,
        }
        stmt = self._upsert_insert(session, HotelAddressModel).values(hotel_id=hotel_id, **values)
        stmt = stmt.on_conflict_do_update(index_elements=["hotel_id"], set_=values)
        await session.execute(stmt)

    async def _upsert_checkin(self, session: AsyncSession, hotel_id: int, checkin: Checkin) -> None:
        values = {
            "checkin_start": checkin.checkin_start,
            "checkin_end": checkin.checkin_end,
            "checkout": checkin.checkout,
            "special_instructions": checkin.special_instructions,
        }
        stmt = self._upsert_insert(session, HotelCheckinModel).values(hotel_id=hotel_id, **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["hotel_id"], set_=values
        ).returning(HotelCheckinModel.id)
        checkin_id = (await session.execute(stmt)).scalar_one()

        # Lista vacia: no se distingue "sin datos" de "borrar", se conserva lo previo
        if not checkin.instructions:
            return

        await session.execute(
            delete(HotelCheckinInstructionModel).where(
                HotelCheckinInstructionModel.hotel_checkin_id == checkin_id
            )
        )
        await session.execute(
            insert(HotelCheckinInstructionModel).values([
                {"hotel_checkin_id": checkin_id, "instruction": instruction, "sort_order": i}
                for i, instruction in enumerate(checkin.instructions)
            ])
        )

    async def _replace_photos(self, session: AsyncSession, hotel_id: int, photos: List[Photo]) -> None:
        if not photos:
            return

        await session.execute(delete(HotelPhotoModel).where(HotelPhotoModel.hotel_id == hotel_id))
        unique_photos = _dedupe(photos, key=lambda p: p.url)
        await session.execute(
            insert(HotelPhotoModel).values([
                {"hotel_id": hotel_id, **_photo_row(photo)} for photo in unique_photos
            ])
        )

    async def _replace_facilities(self, session: AsyncSession, hotel_id: int, facilities: List[Facility]) -> None:
        if not facilities:
            return

        await session.execute(delete(HotelFacilityModel).where(HotelFacilityModel.hotel_id == hotel_id))
        unique_facilities = _dedupe(facilities, key=lambda f: f.facility_id)
        await session.execute(
            insert(HotelFacilityModel).values([
                {"hotel_id": hotel_id, "facility_id": f.facility_id, "name": f.name}
                for f in unique_facilities
            ])
        )

    async def _replace_policies(self, session: AsyncSession, hotel_id: int, policies: List[Policy]) -> None:
        if not policies:
            return

        await session.execute(delete(HotelPolicyModel).where(HotelPolicyModel.hotel_id == hotel_id))
        unique_policies = _dedupe(policies, key=lambda p: p.id)
        await session.execute(
            insert(HotelPolicyModel).values([
                {
                    "hotel_id": hotel_id,
                    "policy_type": p.policy_type,
                    "name": p.name,
                    "description": p.description,
                    "child_allowed": p.child_allowed,
                    "pets_allowed": p.pets_allowed,
                    "parking": p.parking,
                    "cupid_policy_id": p.id,
                }
                for p in unique_policies
            ])
        )

    async def _replace_rooms(self, session: AsyncSession, hotel_id: int, rooms: List[Room]) -> None:
        """
        Reemplaza habitaciones en dos fases:
        1. Borra las previas (camas/amenities/fotos caen por cascade) e inserta
           las nuevas devolviendo (id interno, id externo).
        2. Inserta los hijos de cada habitacion usando el id interno resuelto.
        El mapeo externo -> interno solo vive dentro de esta llamada.
        """
        if not rooms:
            return

        await session.execute(delete(HotelRoomModel).where(HotelRoomModel.hotel_id == hotel_id))

        result = await session.execute(
            insert(HotelRoomModel).values([
                {
                    "hotel_id": hotel_id,
                    "cupid_room_id": room.id,
                    "room_name": room.room_name,
                    "description": room.description,
                    "room_size_square": room.room_size_square,
                    "room_size_unit": room.room_size_unit,
                    "max_adults": room.max_adults,
                    "max_children": room.max_children,
                    "max_occupancy": room.max_occupancy,
                    "bed_relation": room.bed_relation,
                }
                for room in rooms
            ]).returning(HotelRoomModel.id, HotelRoomModel.cupid_room_id)
        )
        room_id_map = {cupid_room_id: room_id for room_id, cupid_room_id in result.all()}

        for room in rooms:
            room_id = room_id_map.get(room.id)
            if room_id is None:
                raise PersistenceException(
                    f"Habitacion externa {room.id} del hotel {hotel_id} sin id interno tras el insert",
                    operation="store_rooms",
                )
            await self._insert_bed_types(session, room_id, room.bed_types)
            await self._insert_room_amenities(session, room_id, room.room_amenities)
            await self._insert_room_photos(session, room_id, room.photos)

    async def _insert_bed_types(self, session: AsyncSession, room_id: int, bed_types: List[BedType]) -> None:
        if not bed_types:
            return
        await session.execute(
            insert(RoomBedTypeModel).values([
                {
                    "room_id": room_id,
                    "quantity": b.quantity,
                    "bed_type": b.bed_type,
                    "bed_size": b.bed_size,
                    "cupid_bed_id": b.id,
                }
                for b in _dedupe(bed_types, key=lambda b: b.id)
            ])
        )

    async def _insert_room_amenities(self, session: AsyncSession, room_id: int, amenities: List[RoomAmenity]) -> None:
        if not amenities:
            return
        await session.execute(
            insert(RoomAmenityModel).values([
                {
                    "room_id": room_id,
                    "amenities_id": a.amenities_id,
                    "name": a.name,
                    "sort_order": a.sort,
                }
                for a in _dedupe(amenities, key=lambda a: a.amenities_id)
            ])
        )

    async def _insert_room_photos(self, session: AsyncSession, room_id: int, photos: List[Photo]) -> None:
        if not photos:
            return
        await session.execute(
            insert(RoomPhotoModel).values([
                {"room_id": room_id, **_photo_row(photo)}
                for photo in _dedupe(photos, key=lambda p: p.url)
            ])
        )

    # =========================================================================
    # Escritura: reviews y traducciones
    # =========================================================================

    async def store_reviews(self, hotel_id: int, reviews: List[Review]) -> int:
        """
        Reemplaza todas las reviews del hotel. Lista vacia = borrar todas.
        Si el hotel no existe el insert falla por FK (no se descarta en silencio).
        """
        async def _work(session: AsyncSession) -> int:
            await session.execute(delete(ReviewModel).where(ReviewModel.hotel_id == hotel_id))
            if not reviews:
                return 0
            await session.execute(
                insert(ReviewModel).values([
                    {
                        "hotel_id": hotel_id,
                        "reviewer_name": r.reviewer_name,
                        "rating": r.rating,
                        "title": r.title,
                        "content": r.content,
                        "language_code": r.language_code,
                        "review_date": r.review_date,
                        "helpful_votes": r.helpful_votes,
                        "embedding_status": r.embedding_status.value,
                    }
                    for r in reviews
                ])
            )
            return len(reviews)

        stored = await self._run("store_reviews", _work)
        logger.debug(f"Reviews del hotel {hotel_id} reemplazadas: {stored}")
        return stored

    async def store_translations(
        self,
        hotel_id: int,
        translations: List[Translation],
        languages: Optional[Sequence[str]] = None,
    ) -> int:
        """
        Reemplaza las traducciones del hotel por idioma.

        El alcance del reemplazo son los idiomas presentes en `translations`
        mas los indicados en `languages` (permite vaciar un idioma).
        Solo toca filas de este hotel: la misma clave
        (entity_type, entity_id, language_code, field_name) en otro hotel
        es otra fila.
        """
        scope = set(languages or []) | {t.language_code for t in translations}
        # La ultima ocurrencia de cada clave gana
        by_key = {
            (t.entity_type.value, t.entity_id, t.language_code, t.field_name): t
            for t in translations
        }

        async def _work(session: AsyncSession) -> int:
            for language in sorted(scope):
                await session.execute(
                    delete(TranslationModel).where(
                        TranslationModel.hotel_id == hotel_id,
                        TranslationModel.language_code == language,
                    )
                )
            if not by_key:
                return 0

            stmt = self._upsert_insert(session, TranslationModel).values([
                {
                    "hotel_id": hotel_id,
                    "entity_type": entity_type,
                    "entity_id": entity_id,
                    "language_code": language_code,
                    "field_name": field_name,
                    "translated_text": t.translated_text,
                }
                for (entity_type, entity_id, language_code, field_name), t in by_key.items()
            ])
            stmt = stmt.on_conflict_do_update(
                index_elements=["hotel_id", "entity_type", "entity_id", "language_code", "field_name"],
                set_={
                    "translated_text": stmt.excluded.translated_text,
                    "updated_at": func.now(),
                },
            )
            await session.execute(stmt)
            return len(by_key)

        stored = await self._run("store_translations", _work)
        logger.debug(f"Traducciones del hotel {hotel_id} reemplazadas ({sorted(scope)}): {stored}")
        return stored

    # =========================================================================
    # Lectura
    # =========================================================================

    async def get_hotel_by_id(self, hotel_id: int) -> Property:
        """
        Obtiene un hotel por su ID externo (solo columnas raiz).
        """
        async def _work(session: AsyncSession) -> Optional[HotelModel]:
            result = await session.execute(
                select(HotelModel).where(HotelModel.hotel_id == hotel_id)
            )
            return result.scalar_one_or_none()

        model = await self._run("get_hotel_by_id", _work)
        if model is None:
            raise HotelNotFoundException(hotel_id)
        return self._to_property(model)

    async def get_hotels(self, limit: int = 50, offset: int = 0) -> List[Property]:
        async def _work(session: AsyncSession) -> List[HotelModel]:
            result = await session.execute(
                select(HotelModel).order_by(HotelModel.hotel_id).limit(limit).offset(offset)
            )
            return list(result.scalars().all())

        return [self._to_property(m) for m in await self._run("get_hotels", _work)]

    async def get_hotel_reviews(self, hotel_id: int) -> List[Review]:
        async def _work(session: AsyncSession) -> List[ReviewModel]:
            result = await session.execute(
                select(ReviewModel)
                .where(ReviewModel.hotel_id == hotel_id)
                .order_by(ReviewModel.review_date.desc().nulls_last(), ReviewModel.id)
            )
            return list(result.scalars().all())

        return [self._to_review(m) for m in await self._run("get_hotel_reviews", _work)]

    async def get_hotel_translations(self, hotel_id: int, language_code: str) -> List[Translation]:
        async def _work(session: AsyncSession) -> List[TranslationModel]:
            result = await session.execute(
                select(TranslationModel)
                .where(
                    TranslationModel.hotel_id == hotel_id,
                    TranslationModel.language_code == language_code,
                )
                .order_by(
                    TranslationModel.entity_type,
                    TranslationModel.entity_id,
                    TranslationModel.field_name,
                )
            )
            return list(result.scalars().all())

        return [
            Translation(
                entity_type=TranslationEntityType(m.entity_type),
                entity_id=m.entity_id,
                language_code=m.language_code,
                field_name=m.field_name,
                translated_text=m.translated_text,
            )
            for m in await self._run("get_hotel_translations", _work)
        ]

    async def ping(self) -> None:
        async def _work(session: AsyncSession) -> None:
            await session.execute(text("SELECT 1"))

        await self._run("ping", _work)

    # =========================================================================
    # Mapeo ORM -> dominio
    # =========================================================================

    @staticmethod
    def _to_property(model: HotelModel) -> Property:
        return Property(
            hotel_id=model.hotel_id,
            cupid_id=model.cupid_id,
            hotel_name=model.hotel_name,
            main_image_th=model.main_image_th or "",
            hotel_type=model.hotel_type or "",
            hotel_type_id=model.hotel_type_id or 0,
            chain=model.chain or "",
            chain_id=model.chain_id or 0,
            latitude=model.latitude or 0.0,
            longitude=model.longitude or 0.0,
            phone=model.phone or "",
            fax=model.fax or "",
            email=model.email or "",
            stars=model.stars or 0,
            airport_code=model.airport_code or "",
            rating=model.rating or 0.0,
            review_count=model.review_count or 0,
            parking=model.parking or "",
            group_room_min=model.group_room_min,
            child_allowed=bool(model.child_allowed),
            pets_allowed=bool(model.pets_allowed),
            description=model.description or "",
            markdown_description=model.markdown_description or "",
            important_info=model.important_info or "",
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _to_review(model: ReviewModel) -> Review:
        return Review(
            id=model.id,
            hotel_id=model.hotel_id,
            rating=model.rating,
            content=model.content or "",
            reviewer_name=model.reviewer_name or "",
            title=model.title or "",
            language_code=model.language_code or "en",
            review_date=model.review_date,
            helpful_votes=model.helpful_votes or 0,
            embedding_status=EmbeddingStatus(model.embedding_status or EmbeddingStatus.PENDING.value),
            created_at=model.created_at,
        )
