"""Exportación JSON de las respuestas.

Por qué JSON tal cual:
- El snapshot debe ser fiel a lo que devolvió el servidor (sin reinterpretar).
- Permite inspeccionar/backup del vault sin depender de este programa.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from core.errors import FileWriteError

logger = logging.getLogger(__name__)

ARTIFACT_FILENAME = "bitwarden.{email}.{stage}.json"


def artifact_path(*, output_dir: Path, email: str, stage: Any) -> Path:
    """Ruta del artefacto de `stage` para `email` dentro de `output_dir`."""

    stage_name = str(getattr(stage, "value", stage))
    return output_dir / ARTIFACT_FILENAME.format(email=email, stage=stage_name)


def render_json(payload: Any) -> str:
    """JSON UTF-8 indentado, respetando el orden de claves recibido."""

    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def export_response_json(*, payload: Any, output_path: Path, stage: Any) -> int:
    """Escribe `payload` en `output_path` y devuelve los bytes escritos.

    No crea el directorio: si no existe, es un `FileWriteError`.
    """

    text = render_json(payload)
    try:
        output_path.write_text(text, encoding="utf-8")
    except (OSError, ValueError) as exc:
        # ValueError: ruta inválida para el SO (p.ej. byte NUL).
        reason = getattr(exc, "strerror", None) or exc
        raise FileWriteError(
            f"cannot write {output_path}: {reason}",
            stage=stage,
            cause=exc,
        ) from exc

    size = len(text.encode("utf-8"))
    logger.info("Wrote %s (%d bytes)", output_path, size)
    return size
