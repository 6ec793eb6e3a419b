"""
Configuración centralizada de la aplicación.

Este módulo maneja todas las variables de entorno y configuraciones
del seeder usando Pydantic Settings para validación automática.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from medusa_seed.utils.error_handler import ConfigurationException


class Settings(BaseSettings):
    """
    Configuración del seeder usando Pydantic Settings.

    Todas las configuraciones se cargan desde variables de entorno
    con valores por defecto apropiados para desarrollo local.
    """

    # === CONFIGURACIÓN BÁSICA DE LA APP ===
    APP_NAME: str = "Medusa Demo Seeder"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # === CONFIGURACIÓN DE MEDUSA ===
    MEDUSA_BACKEND_URL: str = Field(default="http://localhost:9000")
    MEDUSA_ADMIN_EMAIL: Optional[str] = Field(default=None)
    MEDUSA_ADMIN_PASSWORD: Optional[str] = Field(default=None)
    # Secret API key; si está presente tiene prioridad sobre email/password
    MEDUSA_ADMIN_API_TOKEN: Optional[str] = Field(default=None)
    MEDUSA_REQUEST_TIMEOUT: int = Field(default=30)
    MEDUSA_MAX_RETRIES: int = Field(default=3)
    # Segundos mínimos entre requests
    MEDUSA_MIN_REQUEST_INTERVAL: float = Field(default=0.1)
    MEDUSA_PAGE_SIZE: int = Field(default=100)

    # === CONFIGURACIÓN DE SEEDING ===
    INVENTORY_LEVEL_BATCH_SIZE: int = Field(default=100)

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("MEDUSA_BACKEND_URL")
    @classmethod
    def validate_backend_url(cls, v):
        """Normaliza la URL del backend: esquema explícito y sin barra final."""
        v = v.strip()
        if not v:
            raise ValueError("MEDUSA_BACKEND_URL no puede estar vacío")
        if not v.startswith("https://") and not v.startswith("http://"):
            v = f"http://{v}"
        return v.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Valida que el nivel de log sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL debe ser uno de: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Valida que el entorno sea válido."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT debe ser uno de: {valid_envs}")
        return v.lower()

    @field_validator("MEDUSA_PAGE_SIZE", "INVENTORY_LEVEL_BATCH_SIZE", "MEDUSA_MAX_RETRIES")
    @classmethod
    def validate_positive(cls, v):
        """Valida que los tamaños y contadores sean positivos."""
        if v < 1:
            raise ValueError("El valor debe ser mayor o igual a 1")
        return v

    @property
    def is_production(self) -> bool:
        """Verifica si está en entorno de producción."""
        return self.ENVIRONMENT == "production"

    @property
    def admin_api_base_url(self) -> str:
        """URL base de la Admin API de Medusa."""
        return f"{self.MEDUSA_BACKEND_URL}/admin"

    @property
    def uses_api_token(self) -> bool:
        """Indica si la autenticación se hace con secret API key."""
        return bool(self.MEDUSA_ADMIN_API_TOKEN)


@lru_cache()
def get_settings() -> Settings:
    """
    Obtiene instancia singleton de configuración.

    Usa LRU cache para evitar recrear la configuración
    múltiples veces durante la ejecución.

    Returns:
        Settings: Instancia de configuración
    """
    return Settings()


# Instancia global para uso directo
settings = get_settings()


def reload_settings() -> Settings:
    """
    Recarga la configuración (útil para testing).

    Returns:
        Settings: Nueva instancia de configuración
    """
    get_settings.cache_clear()
    return get_settings()


def validate_required_settings(config: Optional[Settings] = None) -> bool:
    """
    Valida que las credenciales de Medusa estén presentes.

    Returns:
        bool: True si todas las configuraciones están presentes

    Raises:
        ConfigurationException: Si alguna configuración requerida falta
    """
    config = config or get_settings()

    if config.uses_api_token:
        return True

    missing = [
        name
        for name in ("MEDUSA_ADMIN_EMAIL", "MEDUSA_ADMIN_PASSWORD")
        if not getattr(config, name)
    ]
    if missing:
        raise ConfigurationException(
            f"Faltan credenciales de Medusa: {', '.join(missing)} "
            "(o defina MEDUSA_ADMIN_API_TOKEN)",
            setting=missing[0],
        )
    return True
