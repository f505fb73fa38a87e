"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El YAML de configuración se valida en el borde: si falta un campo, el run
  aborta antes de tocar la red.

Nota:
- Las respuestas HTTP (prelogin/token/profile/sync) se tratan como JSON opaco;
  no se modelan aquí.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.stage import Stage


class VaultConfig(BaseModel):
    """Credenciales y metadata de dispositivo para el flujo OAuth2 password grant.

    Todos los campos son strings obligatorios y no vacíos. Las claves
    desconocidas del YAML se ignoran.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        strict=True,
        str_strip_whitespace=True,
    )

    email: str = Field(
        ...,
        min_length=1,
        max_length=320,
        description="Email de la cuenta (también forma parte del nombre de los artefactos).",
    )
    api_url: str = Field(
        ...,
        min_length=1,
        description="Base URL del servicio API (p.ej. 'https://api.bitwarden.com').",
    )
    identity_url: str = Field(
        ...,
        min_length=1,
        description="Base URL del servicio identity (p.ej. 'https://identity.bitwarden.com').",
    )
    client_id: str = Field(..., min_length=1, description="OAuth client id.")
    client_secret: str = Field(..., min_length=1, description="OAuth client secret.")
    scope: str = Field(..., min_length=1, description="Scope OAuth solicitado (p.ej. 'api').")
    device_type: str = Field(
        ...,
        min_length=1,
        description="Tipo de dispositivo enviado como `deviceType` en el form.",
    )
    device_identifier: str = Field(
        ...,
        min_length=1,
        description="Identificador estable del dispositivo (UUID).",
    )
    device_name: str = Field(..., min_length=1, description="Nombre legible del dispositivo.")
    grant_type: str = Field(
        ...,
        min_length=1,
        description="Grant OAuth2 (p.ej. 'client_credentials' o 'password').",
    )

    @field_validator("api_url", "identity_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        # `{base}/connect/token` no debe producir '//'.
        stripped = value.rstrip("/")
        if not stripped:
            raise ValueError("base URL must not be empty")
        return stripped

    @field_validator("email")
    @classmethod
    def _check_filename_safe(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("email must not contain path separators")
        # El SO rechaza NUL en rutas; el resto de controles no tiene sentido en un nombre.
        if any(ord(char) < 32 or ord(char) == 127 for char in value):
            raise ValueError("email must not contain control characters")
        return value


class ExportArtifact(BaseModel):
    """Un fichero JSON escrito por el pipeline."""

    stage: Stage = Field(..., description="Etapa que produjo el artefacto.")
    path: Path = Field(..., description="Ruta del fichero escrito.")
    status_code: int = Field(..., description="HTTP status de la respuesta (sin validar).")
    bytes_written: int = Field(default=0, ge=0, description="Tamaño del fichero en bytes (UTF-8).")
