"""
Punto de entrada principal de la aplicación FastAPI.
Configura la aplicación, middlewares, rutas y eventos.
"""
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from app.core.config import settings, get_cors_origins
from app.core.events import lifespan
from app.api.v1.router import api_router
from app.api.v1.dependencies.repository_deps import get_hotel_repository
from app.api.middlewares.error_handler import ErrorHandlerMiddleware
from app.domain.repositories.hotel_repository import IHotelRepository
from app.shared.exceptions.base import AppException
from app.shared.exceptions.infrastructure import PersistenceException


def create_application() -> FastAPI:
    """
    Factory para crear y configurar la aplicación FastAPI.

    Returns:
        FastAPI: Instancia configurada de la aplicación
    """
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="API de hoteles, reviews y traducciones sincronizados desde Cupid",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    # Sin cache hasta que el startup conecte Redis
    application.state.review_cache = None

    # Configurar CORS
    cors_origins = get_cors_origins(settings.CORS_ORIGINS)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Middleware personalizado para manejo de errores
    application.add_middleware(ErrorHandlerMiddleware)

    # Incluir routers de la API
    application.include_router(api_router, prefix="/api")

    # Manejador global de excepciones personalizadas
    @application.exception_handler(AppException)
    async def app_exception_handler(request, exc: AppException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc!r} details={exc.details}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @application.get("/health", tags=["Health"])
    async def health_check(
        request: Request,
        hotel_repository: IHotelRepository = Depends(get_hotel_repository),
    ):
        """
        Estado del servicio: 200 si la base de datos responde, 503 si no.
        La cache es opcional y solo se informa.
        """
        cache_status = "disabled" if request.app.state.review_cache is None else "connected"
        try:
            await hotel_repository.ping()
        except PersistenceException as e:
            logger.error(f"Health check: base de datos no disponible: {e.message}")
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "database": "unavailable", "cache": cache_status},
            )

        return {
            "status": "healthy",
            "app_name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "database": "connected",
            "cache": cache_status,
        }

    return application


# Crear instancia de la aplicación
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
