"""
Excepciones de infraestructura: store relacional, cache y fuente externa.
"""
from typing import Optional

from app.shared.exceptions.base import AppException


class PersistenceException(AppException):
    """
    Cualquier fallo dentro de una transaccion del motor de persistencia.
    La transaccion siempre se revierte completa antes de propagar.
    """
    
    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=500,
            error_code="PERSISTENCE_ERROR",
            details={"operation": operation} if operation else None
        )
        self.operation = operation


class CacheException(AppException):
    """Fallo del backend de cache. Nunca es fatal para el caller."""
    
    def __init__(self, message: str):
        super().__init__(message=message, status_code=503, error_code="CACHE_ERROR")


class PayloadParseException(AppException):
    """El cuerpo devuelto por la fuente externa no se pudo parsear."""
    
    def __init__(self, message: str, kind: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=502,
            error_code="PAYLOAD_PARSE_ERROR",
            details={"kind": kind} if kind else None
        )


class ExternalSourceException(AppException):
    """Excepcion base para errores de la fuente externa (Cupid)."""
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        correlation_id: Optional[str] = None,
        error_code: str = "EXTERNAL_SOURCE_ERROR",
    ):
        super().__init__(
            message=message,
            status_code=502,
            error_code=error_code,
            details={"upstream_status": status_code, "correlation_id": correlation_id}
        )
        # status_code del AppException es el que se devuelve al cliente HTTP;
        # el status de la fuente externa se conserva aparte.
        self.upstream_status = status_code
        self.correlation_id = correlation_id


class ExternalSourceHTTPError(ExternalSourceException):
    """Respuesta 4xx/5xx clasificada, con status y correlation id."""
    
    retryable = False
    
    def __init__(self, status_code: int, correlation_id: str = "", error_code: str = "EXTERNAL_SOURCE_HTTP_ERROR"):
        super().__init__(
            message=f"error: status={status_code} request_id={correlation_id}",
            status_code=status_code,
            correlation_id=correlation_id,
            error_code=error_code,
        )


class ExternalSourceClientError(ExternalSourceHTTPError):
    """4xx: fallo del lado cliente, el orquestador no lo reintenta."""
    
    def __init__(self, status_code: int, correlation_id: str = ""):
        super().__init__(status_code, correlation_id, error_code="EXTERNAL_SOURCE_CLIENT_ERROR")


class ExternalSourceServerError(ExternalSourceHTTPError):
    """5xx: fallo del lado servidor, candidato a una politica de reintentos futura."""
    
    retryable = True
    
    def __init__(self, status_code: int, correlation_id: str = ""):
        super().__init__(status_code, correlation_id, error_code="EXTERNAL_SOURCE_SERVER_ERROR")


class UnexpectedStatusError(ExternalSourceException):
    """Codigo fuera de 2xx/4xx/5xx (p.ej. 1xx o 3xx no resuelto)."""
    
    def __init__(self, status_code: int):
        super().__init__(
            message=f"unexpected status code: {status_code}",
            status_code=status_code,
            error_code="EXTERNAL_SOURCE_UNEXPECTED_STATUS",
        )


class ExternalSourceTransportError(ExternalSourceException):
    """Error de red o timeout hablando con la fuente externa."""
    
    def __init__(self, message: str):
        super().__init__(message=message, error_code="EXTERNAL_SOURCE_TRANSPORT_ERROR")
