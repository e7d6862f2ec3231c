"""
Tests unitarios de los endpoints de hoteles.

Verifica el contrato HTTP con los casos de uso mockeados via
dependency_overrides, y la integracion real contra SQLite para los
casos de error (400 / 404).
"""
from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.application.dto.hotel_dto import HotelReviewsResponseDTO, ReviewResponseDTO
from app.api.v1.dependencies.repository_deps import get_hotel_repository, get_review_cache
from app.api.v1.dependencies.use_case_deps import get_review_use_cases
from app.shared.exceptions.infrastructure import PersistenceException


@pytest.fixture
def app_with_repository(hotel_repository):
    """App FastAPI apuntando al repositorio de test y sin cache."""
    from main import create_application
    app = create_application()
    app.dependency_overrides[get_hotel_repository] = lambda: hotel_repository
    app.dependency_overrides[get_review_cache] = lambda: None
    yield app
    app.dependency_overrides.clear()


async def _get(app, url: str):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get(url)


@pytest.mark.asyncio
async def test_get_hotel(app_with_repository, hotel_repository, property_factory) -> None:
    await hotel_repository.store_property(property_factory())

    response = await _get(app_with_repository, "/api/v1/hotels/1641879")

    assert response.status_code == 200
    data = response.json()
    assert data["hotel_id"] == 1641879
    assert data["hotel_name"] == "The Z Hotel Covent Garden"
    assert data["rating"] == pytest.approx(8.3)


@pytest.mark.asyncio
async def test_get_hotel_not_found(app_with_repository) -> None:
    response = await _get(app_with_repository, "/api/v1/hotels/999999")

    assert response.status_code == 404
    assert response.json()["error"] == "HOTEL_NOT_FOUND"


@pytest.mark.asyncio
async def test_get_hotel_invalid_id(app_with_repository) -> None:
    response = await _get(app_with_repository, "/api/v1/hotels/abc")

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_list_hotels_falls_back_to_default_limit(app_with_repository, hotel_repository, property_factory) -> None:
    await hotel_repository.store_property(property_factory())

    response = await _get(app_with_repository, "/api/v1/hotels?limit=500&offset=-1")

    assert response.status_code == 200
    data = response.json()
    assert data["limit"] == 50
    assert data["offset"] == 0
    assert data["count"] == 1


@pytest.mark.asyncio
async def test_translations_unsupported_language(app_with_repository) -> None:
    response = await _get(app_with_repository, "/api/v1/hotels/1641879/translations/xx")

    assert response.status_code == 400
    assert response.json()["details"]["field"] == "language"


@pytest.mark.asyncio
async def test_reviews_endpoint_uses_review_use_cases() -> None:
    from main import create_application
    uc = AsyncMock()
    uc.get_hotel_reviews = AsyncMock(return_value=HotelReviewsResponseDTO(
        hotel_id=1641879,
        reviews=[ReviewResponseDTO(id=1, hotel_id=1641879, rating=5, title="Top")],
        count=1,
        from_cache=True,
        retrieved_at=datetime.now(timezone.utc),
    ))
    app = create_application()
    app.dependency_overrides[get_review_use_cases] = lambda: uc

    response = await _get(app, "/api/v1/hotels/1641879/reviews")

    assert response.status_code == 200
    data = response.json()
    assert data["from_cache"] is True
    assert data["reviews"][0]["title"] == "Top"
    uc.get_hotel_reviews.assert_awaited_once_with("1641879")


@pytest.mark.asyncio
async def test_health_ok(app_with_repository) -> None:
    response = await _get(app_with_repository, "/health")

    assert response.status_code == 200
    data = response.json()
    assert data["database"] == "connected"
    assert data["cache"] == "disabled"


@pytest.mark.asyncio
async def test_health_database_down() -> None:
    from main import create_application
    repo = AsyncMock()
    repo.ping = AsyncMock(side_effect=PersistenceException("sin conexion", operation="ping"))
    app = create_application()
    app.dependency_overrides[get_hotel_repository] = lambda: repo

    response = await _get(app, "/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


@pytest.mark.asyncio
async def test_persistence_error_returns_generic_500() -> None:
    from main import create_application
    repo = AsyncMock()
    repo.get_hotel_by_id = AsyncMock(side_effect=PersistenceException(
        "Fallo en get_hotel_by_id: OperationalError", operation="get_hotel_by_id"
    ))
    app = create_application()
    app.dependency_overrides[get_hotel_repository] = lambda: repo

    response = await _get(app, "/api/v1/hotels/1")

    assert response.status_code == 500
    assert response.json() == {"error": "PERSISTENCE_ERROR", "message": "Error interno"}
    assert "OperationalError" not in response.text


@pytest.mark.asyncio
async def test_lifespan_runs_startup_and_shutdown(monkeypatch, tmp_path) -> None:
    from app.core import events
    from main import create_application
    init_db = AsyncMock()
    close_db = AsyncMock()
    cache = AsyncMock()
    monkeypatch.setattr(events, "init_db", init_db)
    monkeypatch.setattr(events, "close_db", close_db)
    monkeypatch.setattr(events, "connect_review_cache", AsyncMock(return_value=cache))
    monkeypatch.setattr(events.settings, "LOG_FILE", str(tmp_path / "app.log"))
    app = create_application()

    async with app.router.lifespan_context(app):
        init_db.assert_awaited_once()
        assert app.state.review_cache is cache

    cache.close.assert_awaited_once()
    close_db.assert_awaited_once()
