"""Carga del documento de configuración (YAML).

Este módulo vive en `core/` porque:
- centraliza el *qué* datos necesitamos (credenciales/metadata de dispositivo)
- traduce errores de lectura/parseo a la taxonomía de `core.errors`, de modo
  que la CLI solo conoce `ExportError`.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from core.domain.models import VaultConfig
from core.errors import ConfigParseError, ConfigReadError

logger = logging.getLogger(__name__)


def _invalid_fields(exc: ValidationError) -> list[str]:
    fields: set[str] = set()
    for error in exc.errors():
        loc = error.get("loc") or ()
        if loc:
            fields.add(".".join(str(part) for part in loc))
    return sorted(fields)


def load_vault_config(path: Path) -> VaultConfig:
    """Lee `path` y lo valida como `VaultConfig`.

    Errores:
    - `ConfigReadError` si el fichero no existe o no se puede leer.
    - `ConfigParseError` si no es YAML válido, no es un mapping, o falta
      (o está vacío) algún campo obligatorio.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigParseError(f"{path} is not valid UTF-8 text", cause=exc) from exc
    except OSError as exc:
        raise ConfigReadError(f"cannot read {path}: {exc.strerror or exc}", cause=exc) from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigParseError(f"{path} is not valid YAML: {exc}", cause=exc) from exc

    if not isinstance(data, dict):
        raise ConfigParseError(
            f"{path} must contain a mapping of key: value pairs, got {type(data).__name__}"
        )

    try:
        config = VaultConfig.model_validate(data)
    except ValidationError as exc:
        fields = _invalid_fields(exc)
        raise ConfigParseError(
            f"{path} has missing or invalid fields: {', '.join(fields)}",
            fields=fields,
            cause=exc,
        ) from exc

    logger.debug("Loaded configuration for %s from %s", config.email, path)
    return config
