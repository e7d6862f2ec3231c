"""
Excepción base para todas las excepciones personalizadas de la aplicación.
"""
from typing import Optional, Dict, Any


class AppException(Exception):
    """
    Excepción base de la aplicación.

    status_code es el código HTTP con el que la API responde; error_code
    es estable y lo pueden usar los clientes para distinguir errores.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        """
        Cuerpo JSON de la respuesta de error.
        Los 5xx no exponen mensaje ni detalles internos; eso queda en el log.
        """
        if self.status_code >= 500:
            return {"error": self.error_code, "message": "Error interno"}
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.error_code}: {self.message})"
