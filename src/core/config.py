"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que helpers y adaptadores (codec/HTTP/logging) lean config de forma
  consistente.
"""

from __future__ import annotations

import os
import sys
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "http-glue"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "http-glue"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "http-glue"
    return Path.home() / ".config" / "http-glue"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la librería.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters/helpers.
    """

    model_config = SettingsConfigDict(
        env_prefix="HTTP_GLUE_",
        extra="ignore",
        case_sensitive=False,
        env_file_encoding="utf-8",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Orden: proyecto primero (dev), luego config global de usuario.
        # Se resuelve en cada instancia, no al importar el módulo.
        dotenv = DotEnvSettingsSource(settings_cls, env_file=(".env", get_user_env_file()))
        return (init_settings, env_settings, dotenv, file_secret_settings)

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="http-glue/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para los clientes HTTP construidos aquí.",
    )
    fallback_encoding: str | None = Field(
        default=None,
        description=(
            "Encoding de respaldo cuando el encoding pedido no existe. "
            "Si no se define, se usa el encoding preferido de la plataforma."
        ),
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de los paquetes (DEBUG, INFO, WARNING...).",
    )
    rich_logging: bool = Field(
        default=True,
        description="Usar rich.logging.RichHandler en lugar de un StreamHandler plano.",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}:
            raise ValueError(f"log level desconocido: {value!r}")
        return level

    @field_validator("fallback_encoding")
    @classmethod
    def _blank_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Instancia compartida de settings (usar `get_settings.cache_clear()` en tests)."""

    return AppSettings()
