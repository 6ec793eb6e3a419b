"""
Configuración del sistema de logging.

Este módulo configura el logging del seeder con:
- Consola con colores cuando la salida es una terminal
- Archivo rotativo y archivo separado de errores (opcional)
- Logging estructurado en JSON para producción
"""

import json
import logging
import logging.config
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from medusa_seed.core.config import Settings, get_settings

# Atributos estándar de LogRecord que no se copian como "extra"
_RESERVED_RECORD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "taskName",
}


class ColoredFormatter(logging.Formatter):
    """
    Formatter personalizado que agrega colores a los logs en consola.
    """

    # Códigos de color ANSI
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Verde
        "WARNING": "\033[33m",  # Amarillo
        "ERROR": "\033[31m",  # Rojo
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def format(self, record):
        """
        Formatea el record con colores si es para consola.

        Args:
            record: LogRecord a formatear

        Returns:
            str: Mensaje formateado con colores
        """
        formatted = super().format(record)

        # Agregar color solo si es TTY (terminal)
        if hasattr(sys.stdout, "isatty") and sys.stdout.isatty():
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            reset = self.COLORS["RESET"]
            formatted = formatted.replace(record.levelname, f"{color}{record.levelname}{reset}", 1)

        return formatted


class StructuredFormatter(logging.Formatter):
    """
    Formatter para logging estructurado en JSON.
    """

    def __init__(self, config: Optional[Settings] = None, **kwargs):
        super().__init__(**kwargs)
        self.config = config

    def format(self, record):
        """
        Formatea el record como JSON estructurado.

        Args:
            record: LogRecord a formatear

        Returns:
            str: Mensaje en formato JSON
        """
        config = self.config or get_settings()
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "app_name": config.APP_NAME,
            "app_version": config.APP_VERSION,
            "environment": config.ENVIRONMENT,
        }

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        extra_fields = {
            key: value for key, value in record.__dict__.items() if key not in _RESERVED_RECORD_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(config: Optional[Settings] = None) -> None:
    """
    Configura el sistema de logging completo del seeder.

    Args:
        config: Configuración a usar (por defecto la global)
    """
    config = config or get_settings()

    # Crear directorio de logs si no existe
    if config.LOG_FILE_PATH:
        Path(config.LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_configuration(config))
    configure_specific_loggers(config)

    logger = logging.getLogger(__name__)
    logger.debug(f"Sistema de logging configurado - Nivel: {config.LOG_LEVEL}")
    if config.LOG_FILE_PATH:
        logger.debug(f"Logs guardándose en: {config.LOG_FILE_PATH}")


def get_logging_configuration(config: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Genera configuración completa de logging.

    Returns:
        Dict: Configuración de logging para dictConfig
    """
    config = config or get_settings()

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": config.LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": ("%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "colored": {
                "()": ColoredFormatter,
                "format": config.LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {"()": StructuredFormatter, "config": config},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": config.LOG_LEVEL,
                "formatter": "colored" if config.DEBUG else "standard",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": config.LOG_LEVEL, "handlers": ["console"]},
    }

    # Agregar handlers de archivo si está configurado
    if config.LOG_FILE_PATH:
        logging_config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": config.LOG_LEVEL,
            "formatter": "detailed",
            "filename": config.LOG_FILE_PATH,
            "maxBytes": config.LOG_MAX_SIZE_MB * 1024 * 1024,
            "backupCount": config.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
        }

        error_log_path = config.LOG_FILE_PATH.replace(".log", "_errors.log")
        logging_config["handlers"]["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": error_log_path,
            "maxBytes": config.LOG_MAX_SIZE_MB * 1024 * 1024,
            "backupCount": config.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
        }

        if config.is_production:
            json_log_path = config.LOG_FILE_PATH.replace(".log", ".json")
            logging_config["handlers"]["json_file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "INFO",
                "formatter": "json",
                "filename": json_log_path,
                "maxBytes": config.LOG_MAX_SIZE_MB * 1024 * 1024,
                "backupCount": config.LOG_BACKUP_COUNT,
                "encoding": "utf-8",
            }
            logging_config["root"]["handlers"].append("json_file")

        logging_config["root"]["handlers"].extend(["file", "error_file"])

    return logging_config


def configure_specific_loggers(config: Optional[Settings] = None) -> None:
    """
    Configura loggers específicos para diferentes módulos.
    """
    config = config or get_settings()

    # Las llamadas HTTP se loggean en DEBUG; visibles con DEBUG=true o LOG_LEVEL=DEBUG
    client_logger = logging.getLogger("medusa_seed.db")
    client_logger.setLevel(logging.DEBUG if config.DEBUG else config.LOG_LEVEL)

    # Reducir verbosidad de librerías externas
    for logger_name in ("aiohttp.access", "aiohttp.client", "asyncio"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def log_api_call(method: str, path: str, status_code: int, duration: float, **kwargs) -> None:
    """
    Loggea una llamada a la Admin API.

    Args:
        method: Método HTTP
        path: Ruta llamada
        status_code: Código de respuesta
        duration: Duración en segundos
        **kwargs: Datos adicionales
    """
    logger = logging.getLogger("medusa_seed.db.api")
    extra_data = {
        "http_method": method,
        "http_path": path,
        "status_code": status_code,
        "duration_ms": round(duration * 1000, 2),
        **kwargs,
    }
    logger.debug(f"{method} {path} -> {status_code} ({duration:.2f}s)", extra=extra_data)
