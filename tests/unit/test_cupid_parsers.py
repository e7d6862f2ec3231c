"""
Tests de los parsers de payloads de Cupid.
"""
import json
from datetime import date

import pytest

from app.infrastructure.external.cupid.parsers import parse_property, parse_reviews, parse_translations
from app.shared.constants.hotel_constants import TranslationEntityType
from app.shared.exceptions.infrastructure import PayloadParseException


PROPERTY_PAYLOAD = {
    "hotel_id": 1641879,
    "cupid_id": 1641879,
    "main_image_th": "https://img.example.com/th.jpg",
    "hotel_type": "Hotels",
    "hotel_type_id": 204,
    "chain": "The Z Hotels",
    "chain_id": 13,
    "latitude": 51.5107,
    "longitude": -0.1246,
    "hotel_name": "The Z Hotel Covent Garden",
    "phone": None,
    "address": {"address": "20 Bedford St", "city": "London", "state": None, "country": "gb", "postal_code": "WC2E 9HP"},
    "stars": 3,
    "rating": 8.3,
    "review_count": 1200,
    "checkin": {
        "checkin_start": "14:00",
        "checkin_end": "",
        "checkout": "11:00",
        "instructions": ["Documento obligatorio", ""],
        "special_instructions": None,
    },
    "group_room_min": None,
    "child_allowed": True,
    "pets_allowed": False,
    "photos": [{"url": "https://img.example.com/1.jpg", "main_photo": True, "score": 4.5}, {"url": ""}],
    "description": "<p>Hotel</p>",
    "facilities": [{"facility_id": 47, "name": "WiFi"}],
    "policies": [{"policy_type": "pets", "name": "Mascotas", "id": 7}],
    "rooms": [
        {
            "id": 10,
            "room_name": "Double Room",
            "hotel_id": "1641879",
            "max_adults": 2,
            "bed_types": [{"quantity": 1, "bed_type": "Double bed", "bed_size": "140", "id": 101}],
            "room_amenities": [{"amenities_id": 1, "name": "TV", "sort": 1}],
            "photos": [{"url": "https://img.example.com/r10.jpg"}],
            "views": [{"id": 1}],
        }
    ],
}


def _body(data) -> bytes:
    return json.dumps(data).encode("utf-8")


# =============================================================================
# parse_property
# =============================================================================

def test_parse_property_full_graph():
    prop = parse_property(_body(PROPERTY_PAYLOAD))

    assert prop.hotel_id == 1641879
    assert prop.hotel_name == "The Z Hotel Covent Garden"
    assert prop.rating == pytest.approx(8.3)
    assert prop.phone == ""
    assert prop.group_room_min is None
    assert prop.address.city == "London"
    assert prop.address.state == ""
    assert prop.checkin.instructions == ["Documento obligatorio"]
    assert [p.url for p in prop.photos] == ["https://img.example.com/1.jpg"]
    assert prop.facilities[0].facility_id == 47
    assert prop.policies[0].id == 7
    room = prop.rooms[0]
    assert room.id == 10
    assert room.max_adults == 2
    assert room.max_occupancy == 1
    assert room.bed_types[0].id == 101
    assert room.room_amenities[0].amenities_id == 1
    assert room.photos[0].url == "https://img.example.com/r10.jpg"


def test_parse_property_minimal_payload_uses_defaults():
    prop = parse_property(_body({"hotel_id": 5, "hotel_name": "Mini"}))

    assert prop.hotel_id == 5
    assert prop.photos == []
    assert prop.rooms == []
    assert prop.checkin.instructions == []


@pytest.mark.parametrize("body", [b"", b"not json", b"[1, 2]", b'{"hotel_name": "sin id"}', b'{"hotel_id": 0}'])
def test_parse_property_rejects_invalid_payloads(body):
    with pytest.raises(PayloadParseException):
        parse_property(body)


# =============================================================================
# parse_reviews
# =============================================================================

def test_parse_reviews_store_shape():
    body = _body([{
        "reviewer_name": "Ana",
        "rating": 5,
        "title": "Genial",
        "content": "Todo perfecto",
        "language_code": "es",
        "review_date": "2024-03-02",
        "helpful_votes": 3,
    }])

    reviews = parse_reviews(body, 1641879)

    assert len(reviews) == 1
    review = reviews[0]
    assert review.hotel_id == 1641879
    assert review.rating == 5
    assert review.language_code == "es"
    assert review.review_date == date(2024, 3, 2)
    assert review.helpful_votes == 3


def test_parse_reviews_source_shape_maps_score():
    body = _body({"reviews": [
        {"name": "John", "average_score": 8, "headline": "Nice", "pros": "Location", "cons": "Small room",
         "language": "en", "date": "2023-01-15 10:22:11"},
        {"name": "Low", "average_score": 0},
        {"name": "High", "average_score": 10},
    ]})

    reviews = parse_reviews(body, 1)

    assert [r.rating for r in reviews] == [4, 1, 5]
    assert reviews[0].reviewer_name == "John"
    assert reviews[0].title == "Nice"
    assert reviews[0].content == "Location\nSmall room"
    assert reviews[0].review_date == date(2023, 1, 15)


def test_parse_reviews_clamps_store_rating():
    reviews = parse_reviews(_body([{"rating": 9}, {"rating": -1}]), 1)

    assert [r.rating for r in reviews] == [5, 1]


@pytest.mark.parametrize("body", [b"", b"   ", b"null", b"[]"])
def test_parse_reviews_empty(body):
    assert parse_reviews(body, 1) == []


def test_parse_reviews_invalid():
    with pytest.raises(PayloadParseException):
        parse_reviews(b'{"reviews": "x"}', 1)


# =============================================================================
# parse_translations
# =============================================================================

def test_parse_translations_from_property_payload():
    payload = {
        "hotel_id": 1641879,
        "hotel_name": "Hôtel Z",
        "description": "Description",
        "markdown_description": "",
        "important_info": None,
        "rooms": [{"id": 10, "room_name": "Chambre double", "description": ""}],
        "facilities": [{"facility_id": 47, "name": "Wi-Fi gratuit"}],
    }

    translations = parse_translations(_body(payload), 1641879, "fr")

    keys = {(t.entity_type, t.entity_id, t.field_name): t.translated_text for t in translations}
    assert keys == {
        (TranslationEntityType.HOTEL, 1641879, "hotel_name"): "Hôtel Z",
        (TranslationEntityType.HOTEL, 1641879, "description"): "Description",
        (TranslationEntityType.ROOM, 10, "room_name"): "Chambre double",
        (TranslationEntityType.FACILITY, 47, "name"): "Wi-Fi gratuit",
    }
    assert all(t.language_code == "fr" for t in translations)


def test_parse_translations_explicit_records_are_stamped_with_language():
    body = _body([
        {"entity_type": "hotel", "entity_id": 1, "language_code": "en", "field_name": "hotel_name", "translated_text": "Hotel"},
    ])

    translations = parse_translations(body, 1, "es")

    assert translations[0].language_code == "es"


def test_parse_translations_unknown_entity_type():
    body = _body({"translations": [{"entity_type": "planet", "entity_id": 1, "field_name": "x", "translated_text": "y"}]})

    with pytest.raises(PayloadParseException):
        parse_translations(body, 1, "es")


def test_parse_translations_invalid_json():
    with pytest.raises(PayloadParseException):
        parse_translations(b"{", 1, "es")
