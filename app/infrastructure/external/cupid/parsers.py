"""
Parsers de payloads de la Cupid content API -> entidades de dominio.

Todos lanzan PayloadParseException ante JSON invalido o estructura
inesperada; nunca devuelven entidades a medio construir.
"""
import json
from datetime import date
from typing import Any, Dict, List, Optional

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
from app.shared.constants.hotel_constants import SyncKind, TranslationEntityType
from app.shared.exceptions.infrastructure import PayloadParseException

# Campos traducibles por tipo de entidad
HOTEL_TRANSLATABLE_FIELDS = ("hotel_name", "description", "markdown_description", "important_info")
ROOM_TRANSLATABLE_FIELDS = ("room_name", "description")
FACILITY_TRANSLATABLE_FIELDS = ("name",)


# =============================================================================
# Helpers de coercion (la fuente devuelve null en muchos campos opcionales)
# =============================================================================

def _load_json(body: bytes, kind: SyncKind) -> Any:
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    try:
        return json.loads(body)
    except (json.JSONDecodeError, TypeError) as e:
        raise PayloadParseException(f"JSON invalido ({kind.value}): {e}", kind=kind.value) from e


def _str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _date(value: Any) -> Optional[date]:
    """Acepta 'YYYY-MM-DD' o 'YYYY-MM-DD HH:MM:SS' / ISO con hora."""
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


# =============================================================================
# Property
# =============================================================================

def _parse_photo(data: Dict[str, Any]) -> Photo:
    return Photo(
        url=_str(data.get("url")),
        hd_url=_str(data.get("hd_url")),
        image_description=_str(data.get("image_description")),
        image_class1=_str(data.get("image_class1")),
        image_class2=_str(data.get("image_class2")),
        main_photo=bool(data.get("main_photo")),
        score=_float(data.get("score")),
        class_id=_int(data.get("class_id")),
        class_order=_int(data.get("class_order")),
    )


def _parse_photos(items: Any) -> List[Photo]:
    # Una foto sin url no se puede identificar (clave unica por url)
    return [_parse_photo(p) for p in _list(items) if isinstance(p, dict) and p.get("url")]


def _parse_room(data: Dict[str, Any]) -> Room:
    return Room(
        id=_int(data.get("id")),
        room_name=_str(data.get("room_name")),
        description=_str(data.get("description")),
        room_size_square=_int(data.get("room_size_square")),
        room_size_unit=_str(data.get("room_size_unit")),
        max_adults=_int(data.get("max_adults"), 1),
        max_children=_int(data.get("max_children")),
        max_occupancy=_int(data.get("max_occupancy"), 1),
        bed_relation=_str(data.get("bed_relation")),
        bed_types=[
            BedType(
                bed_type=_str(b.get("bed_type")),
                quantity=_int(b.get("quantity"), 1),
                bed_size=_str(b.get("bed_size")),
                id=_int(b.get("id")),
            )
            for b in _list(data.get("bed_types")) if isinstance(b, dict)
        ],
        room_amenities=[
            RoomAmenity(
                amenities_id=_int(a.get("amenities_id")),
                name=_str(a.get("name")),
                sort=_int(a.get("sort")),
            )
            for a in _list(data.get("room_amenities")) if isinstance(a, dict)
        ],
        photos=_parse_photos(data.get("photos")),
    )


def parse_property(body: bytes) -> Property:
    """
    Parsea el payload de contenido de un hotel.

    Los campos opcionales ausentes o null toman valores por defecto;
    group_room_min se conserva como None. Las `views` de las habitaciones
    se ignoran.

    Raises:
        PayloadParseException: JSON invalido, no es un objeto o falta hotel_id
    """
    data = _load_json(body, SyncKind.CONTENT)
    if not isinstance(data, dict):
        raise PayloadParseException("El payload de contenido no es un objeto", kind=SyncKind.CONTENT.value)

    hotel_id = _int(data.get("hotel_id"))
    if hotel_id <= 0:
        raise PayloadParseException("Payload de contenido sin hotel_id valido", kind=SyncKind.CONTENT.value)

    address = _dict(data.get("address"))
    checkin = _dict(data.get("checkin"))
    group_room_min = data.get("group_room_min")

    return Property(
        hotel_id=hotel_id,
        cupid_id=_int(data.get("cupid_id")),
        main_image_th=_str(data.get("main_image_th")),
        hotel_type=_str(data.get("hotel_type")),
        hotel_type_id=_int(data.get("hotel_type_id")),
        chain=_str(data.get("chain")),
        chain_id=_int(data.get("chain_id")),
        latitude=_float(data.get("latitude")),
        longitude=_float(data.get("longitude")),
        hotel_name=_str(data.get("hotel_name")),
        phone=_str(data.get("phone")),
        fax=_str(data.get("fax")),
        email=_str(data.get("email")),
        stars=_int(data.get("stars")),
        airport_code=_str(data.get("airport_code")),
        rating=_float(data.get("rating")),
        review_count=_int(data.get("review_count")),
        parking=_str(data.get("parking")),
        group_room_min=_int(group_room_min) if group_room_min is not None else None,
        child_allowed=bool(data.get("child_allowed")),
        pets_allowed=bool(data.get("pets_allowed")),
        description=_str(data.get("description")),
        markdown_description=_str(data.get("markdown_description")),
        important_info=_str(data.get("important_info")),
        address=Address(
            address=_str(address.get("address")),
            city=_str(address.get("city")),
            state=_str(address.get("state")),
            country=_str(address.get("country")),
            postal_code=_str(address.get("postal_code")),
        ),
        checkin=Checkin(
            checkin_start=_str(checkin.get("checkin_start")),
            checkin_end=_str(checkin.get("checkin_end")),
            checkout=_str(checkin.get("checkout")),
            instructions=[_str(i) for i in _list(checkin.get("instructions")) if i],
            special_instructions=_str(checkin.get("special_instructions")),
        ),
        photos=_parse_photos(data.get("photos")),
        facilities=[
            Facility(facility_id=_int(f.get("facility_id")), name=_str(f.get("name")))
            for f in _list(data.get("facilities")) if isinstance(f, dict)
        ],
        policies=[
            Policy(
                policy_type=_str(p.get("policy_type")),
                name=_str(p.get("name")),
                description=_str(p.get("description")),
                child_allowed=_str(p.get("child_allowed")),
                pets_allowed=_str(p.get("pets_allowed")),
                parking=_str(p.get("parking")),
                id=_int(p.get("id")),
            )
            for p in _list(data.get("policies")) if isinstance(p, dict)
        ],
        rooms=[_parse_room(r) for r in _list(data.get("rooms")) if isinstance(r, dict)],
    )


# =============================================================================
# Reviews
# =============================================================================

def _clamp_rating(value: int) -> int:
    return max(1, min(5, value))


def _parse_review(data: Dict[str, Any], hotel_id: int) -> Review:
    if "rating" in data:
        rating = _clamp_rating(_int(data.get("rating"), 1))
        content = _str(data.get("content"))
    else:
        # Formato de la fuente: average_score en escala 0-10
        rating = _clamp_rating(round(_float(data.get("average_score")) / 2))
        parts = [_str(data.get("pros")).strip(), _str(data.get("cons")).strip()]
        content = _str(data.get("content")) or "\n".join(p for p in parts if p)

    return Review(
        hotel_id=hotel_id,
        rating=rating,
        content=content,
        reviewer_name=_str(data.get("reviewer_name") or data.get("name")),
        title=_str(data.get("title") or data.get("headline")),
        language_code=_str(data.get("language_code") or data.get("language")) or "en",
        review_date=_date(data.get("review_date") or data.get("date")),
        helpful_votes=_int(data.get("helpful_votes")),
    )


def parse_reviews(body: bytes, hotel_id: int) -> List[Review]:
    """
    Parsea la lista de reviews de un hotel.

    Acepta una lista JSON o un objeto {"reviews": [...]}. Body vacio o
    null -> lista vacia.
    """
    if not body or not body.strip():
        return []

    data = _load_json(body, SyncKind.REVIEWS)
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("reviews")
    if not isinstance(data, list):
        raise PayloadParseException("El payload de reviews no es una lista", kind=SyncKind.REVIEWS.value)

    return [_parse_review(item, hotel_id) for item in data if isinstance(item, dict)]


# =============================================================================
# Traducciones
# =============================================================================

def _translation(entity_type: TranslationEntityType, entity_id: int, language: str, field_name: str, text: Any) -> Optional[Translation]:
    text = _str(text).strip()
    if not text:
        return None
    return Translation(
        entity_type=entity_type,
        entity_id=entity_id,
        language_code=language,
        field_name=field_name,
        translated_text=text,
    )


def _translations_from_records(records: List[Any], language: str) -> List[Translation]:
    result: List[Translation] = []
    for record in records:
        if not isinstance(record, dict):
            continue
        try:
            entity_type = TranslationEntityType(_str(record.get("entity_type")))
        except ValueError as e:
            raise PayloadParseException(
                f"entity_type desconocido: {record.get('entity_type')}",
                kind=SyncKind.TRANSLATIONS.value,
            ) from e
        translation = _translation(
            entity_type,
            _int(record.get("entity_id")),
            language,
            _str(record.get("field_name")),
            record.get("translated_text"),
        )
        if translation and translation.field_name:
            result.append(translation)
    return result


def _translations_from_property(data: Dict[str, Any], hotel_id: int, language: str) -> List[Translation]:
    candidates = [
        _translation(TranslationEntityType.HOTEL, hotel_id, language, f, data.get(f))
        for f in HOTEL_TRANSLATABLE_FIELDS
    ]
    for room in _list(data.get("rooms")):
        if isinstance(room, dict) and _int(room.get("id")):
            candidates.extend(
                _translation(TranslationEntityType.ROOM, _int(room.get("id")), language, f, room.get(f))
                for f in ROOM_TRANSLATABLE_FIELDS
            )
    for facility in _list(data.get("facilities")):
        if isinstance(facility, dict) and _int(facility.get("facility_id")):
            candidates.extend(
                _translation(TranslationEntityType.FACILITY, _int(facility.get("facility_id")), language, f, facility.get(f))
                for f in FACILITY_TRANSLATABLE_FIELDS
            )
    return [t for t in candidates if t is not None]


def parse_translations(body: bytes, hotel_id: int, language: str) -> List[Translation]:
    """
    Parsea el contenido de un hotel en un idioma y lo convierte en traducciones.

    Formatos aceptados:
    - payload de contenido traducido (objeto de hotel)
    - lista explicita de registros de traduccion, o {"translations": [...]}

    Todas las traducciones quedan con `language_code = language`.
    Los textos vacios se omiten.
    """
    if not body or not body.strip():
        return []

    data = _load_json(body, SyncKind.TRANSLATIONS)
    if data is None:
        return []
    if isinstance(data, list):
        return _translations_from_records(data, language)
    if not isinstance(data, dict):
        raise PayloadParseException("El payload de traducciones no es un objeto", kind=SyncKind.TRANSLATIONS.value)
    if isinstance(data.get("translations"), list):
        return _translations_from_records(data["translations"], language)
    return _translations_from_property(data, hotel_id, language)
