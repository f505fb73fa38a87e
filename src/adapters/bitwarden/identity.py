"""Cliente del servicio identity (prelogin + token).

Endpoints:
- `POST {identity_url}/accounts/prelogin` (JSON `{"email": ...}`): parámetros KDF.
- `POST {identity_url}/connect/token` (form urlencoded): OAuth2 token.

Notas:
- El form del token se construye en un orden fijo; el servidor no lo exige,
  pero así el request es reproducible.
- `Device-Type` es un valor fijo que el servidor usa para identificar al cliente.
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.http_client import JSON_ACCEPT, JsonResponse, send_json_request
from core.config import AppSettings
from core.domain.models import VaultConfig
from core.domain.stage import Stage
from core.errors import MissingFieldError

PRELOGIN_PATH = "/accounts/prelogin"
TOKEN_PATH = "/connect/token"
TOKEN_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"


def build_token_form(config: VaultConfig) -> dict[str, str]:
    """Campos del password/client-credentials grant, copiados tal cual del config."""

    return {
        "scope": config.scope,
        "client_id": config.client_id,
        "client_secret": config.client_secret,
        "deviceType": config.device_type,
        "deviceIdentifier": config.device_identifier,
        "deviceName": config.device_name,
        "grant_type": config.grant_type,
    }


def build_token_headers(settings: AppSettings) -> dict[str, str]:
    return {
        "Content-Type": TOKEN_CONTENT_TYPE,
        "Accept": JSON_ACCEPT,
        "Device-Type": settings.device_type_header,
    }


async def prelogin(client: httpx.AsyncClient, config: VaultConfig) -> JsonResponse:
    """Consulta los parámetros KDF de la cuenta."""

    return await send_json_request(
        client,
        "POST",
        f"{config.identity_url}{PRELOGIN_PATH}",
        stage=Stage.PRELOGIN,
        json_body={"email": config.email},
    )


async def request_token(
    client: httpx.AsyncClient,
    config: VaultConfig,
    *,
    settings: AppSettings,
) -> JsonResponse:
    """Intercambia credenciales + metadata de dispositivo por un access token."""

    return await send_json_request(
        client,
        "POST",
        f"{config.identity_url}{TOKEN_PATH}",
        stage=Stage.TOKEN,
        headers=build_token_headers(settings),
        form=build_token_form(config),
    )


def extract_access_token(payload: Any) -> str:
    """Devuelve `access_token` o lanza `MissingFieldError`.

    Si el servidor devolvió un error OAuth (`error`/`error_description`), se
    incluye en el mensaje para diagnosticar sin abrir el fichero.
    """

    if not isinstance(payload, dict):
        raise MissingFieldError(
            f"token response is a JSON {type(payload).__name__}, expected an object with 'access_token'",
            stage=Stage.TOKEN,
            field="access_token",
        )

    token = payload.get("access_token")
    if isinstance(token, str) and token:
        return token

    message = "token response has no 'access_token' string field"
    error = payload.get("error")
    if error:
        description = payload.get("error_description")
        message += f" (server error: {error}"
        message += f": {description})" if description else ")"
    raise MissingFieldError(message, stage=Stage.TOKEN, field="access_token")
