"""
Sistema de manejo de errores personalizado.

Este módulo define las excepciones de la aplicación y proporciona
utilidades para manejo consistente de errores durante el seeding.
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Fragmentos que Medusa usa al rechazar un registro existente
_DUPLICATE_MESSAGE_MARKERS = ("already exists", "duplicate")


class ErrorCode(Enum):
    """
    Códigos de error estandardizados para la aplicación.
    """

    # Errores generales
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Errores de la API de Medusa
    MEDUSA_CONNECTION_FAILED = "MEDUSA_CONNECTION_FAILED"
    MEDUSA_AUTH_FAILED = "MEDUSA_AUTH_FAILED"
    MEDUSA_API_ERROR = "MEDUSA_API_ERROR"
    MEDUSA_DUPLICATE = "MEDUSA_DUPLICATE"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Errores de seeding
    SEED_FAILED = "SEED_FAILED"
    SEED_MISSING_RESOURCE = "SEED_MISSING_RESOURCE"


class ErrorSeverity(Enum):
    """
    Niveles de severidad para errores.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Excepción base para todas las excepciones personalizadas de la aplicación.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        is_retryable: bool = False,
    ):
        """
        Inicializa la excepción.

        Args:
            message: Mensaje de error
            error_code: Código de error estandardizado
            details: Información adicional del error
            severity: Severidad del error
            is_retryable: Si la operación puede reintentarse
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.severity = severity
        self.is_retryable = is_retryable
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convierte la excepción a diccionario.

        Returns:
            Dict: Representación de la excepción
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        """String representation del error."""
        return f"{self.error_code.value}: {self.message}"


class ConfigurationException(AppException):
    """
    Excepción para configuraciones faltantes o inválidas.
    """

    def __init__(self, message: str, setting: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        self.setting = setting
        self.details.update({"setting": setting})


class MedusaAPIException(AppException):
    """
    Excepción para errores de la Admin API de Medusa.
    """

    def __init__(
        self,
        message: str,
        api_response_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        api_error_type: Optional[str] = None,
        rate_limited: bool = False,
        retry_after: Optional[int] = None,
        **kwargs,
    ):
        """
        Inicializa la excepción de Medusa API.

        Args:
            message: Mensaje de error
            api_response_code: Código HTTP devuelto por Medusa
            endpoint: Endpoint que falló
            api_error_type: Campo ``type`` del cuerpo de error (p.ej. ``duplicate_error``)
            rate_limited: Si es por rate limiting
            retry_after: Segundos para reintentar
            **kwargs: Argumentos adicionales para AppException
        """
        error_code = kwargs.pop("error_code", ErrorCode.MEDUSA_API_ERROR)
        severity = ErrorSeverity.MEDIUM
        is_retryable = False

        if rate_limited:
            error_code = ErrorCode.RATE_LIMIT_EXCEEDED
            severity = ErrorSeverity.LOW
            is_retryable = True
        elif api_response_code in (401, 403):
            error_code = ErrorCode.MEDUSA_AUTH_FAILED
            severity = ErrorSeverity.HIGH
        elif api_response_code is None or api_response_code >= 500:
            severity = ErrorSeverity.HIGH
            is_retryable = True

        super().__init__(
            message=message,
            error_code=error_code,
            severity=severity,
            is_retryable=is_retryable,
            **kwargs,
        )

        self.api_response_code = api_response_code
        self.endpoint = endpoint
        self.api_error_type = api_error_type
        self.rate_limited = rate_limited
        self.retry_after = retry_after

        if self.is_duplicate:
            self.error_code = ErrorCode.MEDUSA_DUPLICATE

        self.details.update(
            {
                "api_response_code": api_response_code,
                "endpoint": endpoint,
                "api_error_type": api_error_type,
                "rate_limited": rate_limited,
                "retry_after": retry_after,
            }
        )

    @property
    def is_duplicate(self) -> bool:
        """Indica si Medusa rechazó la operación porque el registro ya existe."""
        if self.api_error_type == "duplicate_error" or self.api_response_code == 409:
            return True
        message = self.message.lower()
        return any(marker in message for marker in _DUPLICATE_MESSAGE_MARKERS)


class SeedException(AppException):
    """
    Excepción para pasos de seeding que no pueden continuar.
    """

    def __init__(self, message: str, step: str, **kwargs):
        """
        Inicializa la excepción de seeding.

        Args:
            message: Mensaje de error
            step: Paso del seeding que falló
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(
            message=message,
            error_code=kwargs.pop("error_code", ErrorCode.SEED_FAILED),
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        self.step = step
        self.details.update({"step": step})


# === FUNCIONES DE UTILIDAD ===


def log_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Loggea un error de manera consistente.

    Args:
        exception: Excepción a loggear
        context: Contexto adicional
        level: Nivel de logging
    """
    context = context or {}

    log_data = {
        "exception_type": type(exception).__name__,
        "exception_message": str(exception),
        "traceback": traceback.format_exc(),
        **context,
    }

    if isinstance(exception, AppException):
        message = f"{exception.error_code.value}: {exception.message}"
        log_data.update(
            {
                "error_code": exception.error_code.value,
                "severity": exception.severity.value,
                "is_retryable": exception.is_retryable,
            }
        )
    else:
        message = f"Unhandled exception: {type(exception).__name__}: {str(exception)}"

    logger.log(level, message, extra=log_data)
