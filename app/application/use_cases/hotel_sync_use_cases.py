"""
Casos de uso para sincronizacion de hoteles desde la fuente externa.

Una unidad de trabajo es (hotel_id, tipo de dato). Cada unidad recorre
idle -> fetching -> parsing -> persisting -> done | failed y su fallo no
afecta al resto del batch.
"""
import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from loguru import logger

from app.application.interfaces.external_source import ExternalSourceClient
from app.core.config import settings
from app.domain.entities.review import Translation
from app.domain.repositories.hotel_repository import IHotelRepository
from app.domain.repositories.review_cache import IReviewCache
from app.infrastructure.external.cupid.parsers import parse_property, parse_reviews, parse_translations
from app.shared.constants.hotel_constants import (
    CONTENT_PATH,
    REVIEWS_PATH,
    TRANSLATIONS_PATH,
    SyncKind,
    SyncState,
)
from app.shared.exceptions.base import AppException
from app.shared.exceptions.infrastructure import CacheException


@dataclass
class SyncUnitResult:
    """Resultado de sincronizar un tipo de dato de un hotel."""

    hotel_id: int
    kind: SyncKind
    state: SyncState = SyncState.IDLE
    stored: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.state == SyncState.DONE


@dataclass
class BatchSyncResult:
    """Resumen de un batch de sincronizacion."""

    total: int = 0
    successful: int = 0
    failed: int = 0
    failed_hotel_ids: List[int] = field(default_factory=list)
    results: List[SyncUnitResult] = field(default_factory=list)


class HotelSyncUseCases:
    """
    Orquestador del sync: fetch -> parse -> persist por unidad.

    Las dependencias se inyectan (cliente de la fuente, repositorio, cache
    opcional); la lista de hoteles e idiomas llega explicita.
    """

    def __init__(
        self,
        source: ExternalSourceClient,
        repository: IHotelRepository,
        cache: Optional[IReviewCache] = None,
        *,
        languages: Optional[Sequence[str]] = None,
        review_count: Optional[int] = None,
        unit_timeout_s: Optional[float] = None,
    ):
        self.source = source
        self.repository = repository
        self.cache = cache
        self.languages = list(languages if languages is not None else settings.SYNC_LANGUAGES)
        self.review_count = review_count or settings.SYNC_REVIEW_COUNT
        self.unit_timeout_s = unit_timeout_s if unit_timeout_s is not None else settings.SYNC_UNIT_TIMEOUT_S

    def _transition(self, result: SyncUnitResult, state: SyncState) -> None:
        logger.debug(f"[sync] hotel={result.hotel_id} kind={result.kind.value}: {result.state.value} -> {state.value}")
        result.state = state

    async def sync_hotel(self, hotel_id: int, kind: SyncKind) -> SyncUnitResult:
        """
        Sincroniza un tipo de dato de un hotel.

        Nunca lanza: el error queda en el resultado (state=failed).
        """
        result = SyncUnitResult(hotel_id=hotel_id, kind=kind)
        try:
            work = self._run_unit(result)
            if self.unit_timeout_s:
                await asyncio.wait_for(work, timeout=self.unit_timeout_s)
            else:
                await work
            self._transition(result, SyncState.DONE)
        except asyncio.TimeoutError:
            result.error = f"timeout tras {self.unit_timeout_s}s en estado {result.state.value}"
            self._transition(result, SyncState.FAILED)
            logger.error(f"Sync {kind.value} del hotel {hotel_id} fallido: {result.error}")
        except AppException as e:
            result.error = e.message
            self._transition(result, SyncState.FAILED)
            logger.error(f"Sync {kind.value} del hotel {hotel_id} fallido: {e.message}")
        except Exception as e:
            result.error = str(e)
            self._transition(result, SyncState.FAILED)
            logger.exception(f"Error inesperado en sync {kind.value} del hotel {hotel_id}: {e}")
        return result

    async def _run_unit(self, result: SyncUnitResult) -> None:
        if result.kind == SyncKind.CONTENT:
            await self._sync_content(result)
        elif result.kind == SyncKind.REVIEWS:
            await self._sync_reviews(result)
        elif result.kind == SyncKind.TRANSLATIONS:
            await self._sync_translations(result)
        else:
            raise ValueError(f"Tipo de sync no soportado: {result.kind}")

    async def _sync_content(self, result: SyncUnitResult) -> None:
        self._transition(result, SyncState.FETCHING)
        body = await self.source.fetch("GET", CONTENT_PATH.format(hotel_id=result.hotel_id))

        self._transition(result, SyncState.PARSING)
        property = parse_property(body)

        self._transition(result, SyncState.PERSISTING)
        await self.repository.store_property(property)
        result.stored = 1
        logger.info(f"Hotel {result.hotel_id} sincronizado: {property.hotel_name}")

    async def _sync_reviews(self, result: SyncUnitResult) -> None:
        self._transition(result, SyncState.FETCHING)
        body = await self.source.fetch(
            "GET", REVIEWS_PATH.format(hotel_id=result.hotel_id, count=self.review_count)
        )

        self._transition(result, SyncState.PARSING)
        reviews = parse_reviews(body, result.hotel_id)
        if not reviews:
            # Respuesta vacia: no se toca lo almacenado
            logger.info(f"Hotel {result.hotel_id} sin reviews en la fuente")
            return

        self._transition(result, SyncState.PERSISTING)
        result.stored = await self.repository.store_reviews(result.hotel_id, reviews)
        logger.info(f"Hotel {result.hotel_id}: {result.stored} reviews sincronizadas")

        await self._invalidate_reviews_cache(result.hotel_id)

    async def _invalidate_reviews_cache(self, hotel_id: int) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.delete_reviews(hotel_id)
        except CacheException as e:
            logger.warning(f"No se pudo invalidar la cache de reviews del hotel {hotel_id}: {e.message}")

    async def _sync_translations(self, result: SyncUnitResult) -> None:
        translations: List[Translation] = []
        fetched_languages: List[str] = []

        for language in self.languages:
            self._transition(result, SyncState.FETCHING)
            try:
                body = await self.source.fetch(
                    "GET", TRANSLATIONS_PATH.format(hotel_id=result.hotel_id, language=language)
                )
                self._transition(result, SyncState.PARSING)
                translations.extend(parse_translations(body, result.hotel_id, language))
                fetched_languages.append(language)
            except AppException as e:
                # Un idioma fallido no invalida los demas
                logger.warning(f"Traducciones '{language}' del hotel {result.hotel_id} omitidas: {e.message}")

        if not translations:
            logger.info(f"Hotel {result.hotel_id} sin traducciones para {self.languages}")
            return

        self._transition(result, SyncState.PERSISTING)
        result.stored = await self.repository.store_translations(
            result.hotel_id, translations, languages=fetched_languages
        )
        logger.info(f"Hotel {result.hotel_id}: {result.stored} traducciones sincronizadas ({fetched_languages})")

    async def sync_batch(
        self,
        hotel_ids: Sequence[int],
        kind: SyncKind,
        delay_ms: Optional[int] = None,
    ) -> BatchSyncResult:
        """
        Sincroniza una lista de hoteles de forma secuencial.

        Entre hotel y hotel espera `delay_ms` (rate limit de la fuente).
        """
        delay_ms = settings.SYNC_DELAY_MS if delay_ms is None else delay_ms
        batch = BatchSyncResult(total=len(hotel_ids))
        logger.info(f"Iniciando sync de {kind.value} para {batch.total} hoteles")

        for i, hotel_id in enumerate(hotel_ids):
            logger.info(f"({i + 1}/{batch.total}) Sincronizando {kind.value} del hotel {hotel_id}")
            unit = await self.sync_hotel(hotel_id, kind)
            batch.results.append(unit)
            if unit.success:
                batch.successful += 1
            else:
                batch.failed += 1
                batch.failed_hotel_ids.append(hotel_id)

            if delay_ms > 0 and i < len(hotel_ids) - 1:
                await asyncio.sleep(delay_ms / 1000)

        logger.info(
            f"Sync de {kind.value} completado: {batch.successful}/{batch.total} correctos, "
            f"{batch.failed} fallidos"
        )
        if batch.failed_hotel_ids:
            logger.warning(f"Hoteles fallidos: {batch.failed_hotel_ids}")
        return batch
