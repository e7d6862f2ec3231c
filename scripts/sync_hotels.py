"""
CLI: Cupid content API -> Postgres (sync de hoteles).

Uso recomendado:
  - Ejecutar como job (cron/systemd timer), no desde el API.
  - Primero `content` (crea los hoteles), luego `reviews` y `translations`.

Variables de entorno:
  - CUPID_API_KEY (obligatoria)
  - CUPID_BASE_URL, DATABASE_URL / DATABASE_*, REDIS_URL / REDIS_* (opcionales)
  - SYNC_HOTEL_IDS, SYNC_LANGUAGES, SYNC_DELAY_MS (opcionales)

Ejecucion:
  python scripts/sync_hotels.py -e content
  python scripts/sync_hotels.py -e reviews --hotel-id 1641879
  python scripts/sync_hotels.py -e translations --hotel-ids 1641879,317597
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

load_dotenv(_PROJECT_ROOT / ".env", override=False)

from app.application.use_cases.hotel_sync_use_cases import HotelSyncUseCases
from app.core.config import parse_id_list, settings
from app.infrastructure.cache.redis_review_cache import connect_review_cache
from app.infrastructure.database.session import AsyncSessionLocal, close_db
from app.infrastructure.external.cupid.client import CupidClient
from app.infrastructure.repositories.hotel_repository import HotelRepository
from app.shared.constants.hotel_constants import SyncKind


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sincroniza hoteles desde la Cupid content API")
    parser.add_argument(
        "-e",
        "--endpoint",
        required=True,
        choices=[k.value for k in SyncKind],
        help="Tipo de dato a sincronizar.",
    )
    parser.add_argument(
        "--hotel-id",
        type=int,
        default=None,
        help="Sincroniza un solo hotel (por defecto, la lista SYNC_HOTEL_IDS).",
    )
    parser.add_argument(
        "--hotel-ids",
        default=None,
        help="Lista de hoteles separada por coma o JSON (override de SYNC_HOTEL_IDS).",
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=None,
        help="Pausa entre hoteles en milisegundos (por defecto SYNC_DELAY_MS).",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    if not settings.CUPID_API_KEY:
        raise SystemExit("Falta variable de entorno obligatoria: CUPID_API_KEY")

    if args.hotel_id is not None:
        hotel_ids = [args.hotel_id]
    elif args.hotel_ids:
        hotel_ids = parse_id_list(args.hotel_ids)
    else:
        hotel_ids = list(settings.SYNC_HOTEL_IDS)

    kind = SyncKind(args.endpoint)
    repository = HotelRepository(AsyncSessionLocal, operation_timeout_s=settings.DB_OPERATION_TIMEOUT_S)
    # La cache solo se usa para invalidar reviews tras el sync
    cache = await connect_review_cache() if kind == SyncKind.REVIEWS else None

    try:
        async with CupidClient(connection_close=True) as client:
            use_cases = HotelSyncUseCases(client, repository, cache)
            result = await use_cases.sync_batch(hotel_ids, kind, delay_ms=args.delay_ms)
    finally:
        if cache is not None:
            await cache.close()
        await close_db()

    logger.info(
        f"Resumen {kind.value}: total={result.total} correctos={result.successful} "
        f"fallidos={result.failed}"
    )
    if result.failed_hotel_ids:
        logger.warning(f"Hoteles fallidos: {result.failed_hotel_ids}")
        return 1
    return 0


def main() -> int:
    args = _parse_args()
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
