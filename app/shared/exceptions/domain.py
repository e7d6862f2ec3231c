"""
Excepciones relacionadas con la lógica de dominio.
"""
from typing import Any

from app.shared.exceptions.base import AppException


class DomainException(AppException):
    """Excepción base para errores de dominio."""
    
    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details
        )


class EntityNotFoundException(DomainException):
    """Excepción cuando no se encuentra una entidad."""
    
    def __init__(self, entity_name: str, entity_id: Any):
        super().__init__(
            message=f"{entity_name} con ID {entity_id} no encontrado",
            error_code="ENTITY_NOT_FOUND",
            details={"entity": entity_name, "id": str(entity_id)}
        )
        self.status_code = 404


class HotelNotFoundException(EntityNotFoundException):
    """Excepcion cuando un hotel no existe en el store."""
    
    def __init__(self, hotel_id: int):
        super().__init__(entity_name="Hotel", entity_id=hotel_id)
        self.error_code = "HOTEL_NOT_FOUND"
        self.hotel_id = hotel_id


class ValidationException(DomainException):
    """Excepción para errores de validación."""
    
    def __init__(self, message: str, field: str = None):
        details = {"field": field} if field else None
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details
        )


class UnsupportedLanguageException(ValidationException):
    """Excepcion cuando se pide un idioma no soportado."""
    
    def __init__(self, language: str, supported: list[str]):
        super().__init__(
            message=f"Idioma '{language}' no soportado. Soportados: {', '.join(supported)}",
            field="language"
        )
        self.details["supported"] = list(supported)
