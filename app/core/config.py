"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.
Soporta configuracion dinamica para desarrollo (ENVIRONMENT=development)
y produccion (ENVIRONMENT=production).
"""
import json
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.

    - DATABASE_URL se puede especificar completa o por componentes
    - REDIS_URL se puede especificar completa o por componentes
    - Las listas de hoteles e idiomas del sync se pasan explicitamente
      al orquestador (no son constantes de modulo)
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="Cupid Hotels API")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    CORS_ORIGINS: str = Field(default="*")

    # Base de datos - Componentes separados (recomendado para flexibilidad)
    DATABASE_HOST: str = Field(default="localhost")
    DATABASE_PORT: int = Field(default=5432)
    DATABASE_USER: str = Field(default="cupid")
    DATABASE_PASSWORD: str = Field(default="cupid123")
    DATABASE_NAME: str = Field(default="cupid")

    # Base de datos - URL completa (override de componentes si se proporciona)
    DATABASE_URL: str = Field(default="")
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=10)
    DB_OPERATION_TIMEOUT_S: float = Field(default=15.0)

    # Cache de reviews (Redis)
    CACHE_ENABLED: bool = Field(default=True)
    REDIS_HOST: str = Field(default="localhost")
    REDIS_PORT: int = Field(default=6379)
    REDIS_DB: int = Field(default=0)
    REDIS_URL: str = Field(default="")
    REVIEWS_CACHE_TTL_S: float = Field(default=300.0)
    CACHE_OPERATION_TIMEOUT_S: float = Field(default=3.0)

    # Fuente externa (Cupid content API)
    CUPID_BASE_URL: str = Field(default="https://content-api.cupid.travel")
    CUPID_API_KEY: str = Field(default="")
    CUPID_TIMEOUT_S: float = Field(default=10.0)
    CUPID_USER_AGENT: str = Field(default="cupid-data-sync/1.0")

    # Sync
    SYNC_HOTEL_IDS: List[int] = Field(default=[
        1641879, 317597, 1202743, 1037179, 1154868, 1270324, 1305326, 1617655,
        1975211, 2017823, 1503950, 1033299, 378772, 1563003, 1085875, 828917,
        830417, 838887, 1702062, 1144294, 1738870, 898052, 906450, 906467,
        2241195, 1244595, 1277032, 956026, 957111, 152896, 896868, 982911,
        986491, 986622, 988544, 989315, 989544, 990223, 990341, 990370,
        990490, 990609, 990629, 1259611, 991819, 992027, 992851, 993851,
        994085, 994333, 994495, 994903, 995227, 995787, 996977, 1186578,
        999444, 1000017, 1000051, 1198750, 1001100, 1001296, 1001402, 1002200,
        1003142, 1004288, 1006404, 1006602, 1006810, 1006887, 1007101, 1007269,
        1007466, 1011203, 1011644, 1011945, 1012047, 1012140, 1012944, 1023527,
        1013529, 1013584, 1014383, 1015094, 1016591, 1016611, 1017019, 1017039,
        1017044, 1018030, 1018130, 1018251, 1018402, 1018946, 1019473, 1020332,
        1020335, 1020386, 1021856, 1022380,
    ])
    SYNC_LANGUAGES: List[str] = Field(default=["fr", "es", "en"])
    SYNC_DELAY_MS: int = Field(default=100)
    SYNC_REVIEW_COUNT: int = Field(default=100)
    SYNC_UNIT_TIMEOUT_S: float = Field(default=15.0)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def effective_database_url(self) -> str:
        """
        Retorna la URL de base de datos efectiva.
        Si DATABASE_URL esta definida, la usa directamente.
        Si no, construye la URL desde los componentes individuales.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    @computed_field
    @property
    def effective_redis_url(self) -> str:
        """URL de Redis efectiva (REDIS_URL o componentes)."""
        if self.REDIS_URL:
            return self.REDIS_URL
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    @computed_field
    @property
    def is_development(self) -> bool:
        """Indica si el entorno es de desarrollo."""
        return self.ENVIRONMENT.lower() == "development"

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


def get_cors_origins(cors_string: str) -> List[str]:
    """
    Parsea la configuracion de CORS.
    Acepta "*" para todos los origenes, una lista JSON o valores separados por coma.
    """
    if cors_string == "*":
        return ["*"]
    try:
        return json.loads(cors_string)
    except json.JSONDecodeError:
        return [origin.strip() for origin in cors_string.split(",")]


def parse_id_list(raw: str) -> List[int]:
    """
    Parsea una lista de IDs de hotel.
    Acepta una lista JSON ("[1, 2]") o valores separados por coma ("1,2").
    """
    raw = raw.strip()
    if not raw:
        return []
    try:
        values = json.loads(raw)
    except json.JSONDecodeError:
        values = [v for v in raw.split(",") if v.strip()]
    if isinstance(values, int):
        values = [values]
    return [int(str(v).strip()) for v in values]


# Instancia global de configuración
settings = Settings()
