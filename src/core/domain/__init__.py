"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni SDKs: solo conceptos del problema.
"""

from core.domain.models import ExportArtifact, VaultConfig
from core.domain.stage import Stage

__all__ = [
	"ExportArtifact",
	"Stage",
	"VaultConfig",
]
