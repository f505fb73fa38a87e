"""Configuración de la aplicación.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP) lean timeouts/headers de forma consistente.

Nota:
- Las credenciales de la cuenta NO viven aquí: se leen del YAML que se pasa
  con `--config` (ver `core.config_loader`).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import SettingsError

ENV_PREFIX = "BW_SNAPSHOT_"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "bw-snapshot"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "bw-snapshot"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "bw-snapshot"
    return Path.home() / ".config" / "bw-snapshot"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Ajustes de ejecución (no credenciales).

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="survol/1.0",
        min_length=1,
        description="User-Agent que identifica al cliente ante identity/api.",
    )
    device_type_header: str = Field(
        default="21",
        min_length=1,
        description="Valor fijo del header `Device-Type` en el token request.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Nivel de logging por defecto.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


def load_settings() -> AppSettings:
    """Construye `AppSettings` traduciendo errores de validación a `SettingsError`."""

    try:
        return AppSettings()
    except ValidationError as exc:
        names = sorted(
            {ENV_PREFIX + str(error["loc"][0]).upper() for error in exc.errors() if error.get("loc")}
        )
        raise SettingsError(
            f"invalid value for {', '.join(names) or 'application settings'}",
            fields=names,
            cause=exc,
        ) from exc
