"""
Constantes relacionadas con hoteles, reviews, traducciones y sync.
"""
from enum import Enum


class SyncKind(str, Enum):
    """Tipos de datos que se sincronizan desde la fuente externa."""
    CONTENT = "content"
    REVIEWS = "reviews"
    TRANSLATIONS = "translations"


class SyncState(str, Enum):
    """Estados de una unidad de trabajo (hotel, tipo de dato)."""
    IDLE = "idle"
    FETCHING = "fetching"
    PARSING = "parsing"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


class EmbeddingStatus(str, Enum):
    """Estado del embedding de una review (lo muta el pipeline de embeddings)."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class TranslationEntityType(str, Enum):
    """Entidades que admiten traducciones."""
    HOTEL = "hotel"
    ROOM = "room"
    FACILITY = "facility"
    REVIEW = "review"


# Rutas de la content API de Cupid
CONTENT_PATH = "/v3.0/property/{hotel_id}"
REVIEWS_PATH = "/v3.0/property/reviews/{hotel_id}/{count}"
TRANSLATIONS_PATH = "/v3.0/property/{hotel_id}/lang/{language}"

# Header donde la fuente externa devuelve el correlation id
CORRELATION_ID_HEADER = "X-Request-Id"

# Clave de cache de reviews por hotel
REVIEWS_CACHE_KEY = "reviews:hotel:{hotel_id}"

# Limites de paginacion del listado de hoteles
DEFAULT_HOTELS_LIMIT = 50
MAX_HOTELS_LIMIT = 100
