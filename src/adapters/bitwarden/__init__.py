"""Clientes de los servicios identity/api de Bitwarden.

Por qué un paquete:
- Separa el servicio identity (sin autenticar) del API (Bearer token).
- Cada módulo es I/O puro; la orquestación vive en `core.services`.
"""

from adapters.bitwarden.api import build_auth_headers, fetch_profile, fetch_sync
from adapters.bitwarden.identity import (
    build_token_form,
    build_token_headers,
    extract_access_token,
    prelogin,
    request_token,
)

__all__ = [
	"build_auth_headers",
	"build_token_form",
	"build_token_headers",
	"extract_access_token",
	"fetch_profile",
	"fetch_sync",
	"prelogin",
	"request_token",
]
