"""Cliente autenticado del servicio API (profile + sync)."""

from __future__ import annotations

import httpx

from adapters.http_client import JSON_ACCEPT, JsonResponse, send_json_request
from core.domain.models import VaultConfig
from core.domain.stage import Stage

PROFILE_PATH = "/accounts/profile"
SYNC_PATH = "/sync"


def build_auth_headers(access_token: str) -> dict[str, str]:
    """Headers compartidos por profile y sync (el User-Agent lo pone el cliente)."""

    return {
        "Authorization": f"Bearer {access_token}",
        "Accept": JSON_ACCEPT,
    }


async def fetch_profile(
    client: httpx.AsyncClient,
    config: VaultConfig,
    *,
    headers: dict[str, str],
) -> JsonResponse:
    return await send_json_request(
        client,
        "GET",
        f"{config.api_url}{PROFILE_PATH}",
        stage=Stage.PROFILE,
        headers=headers,
    )


async def fetch_sync(
    client: httpx.AsyncClient,
    config: VaultConfig,
    *,
    headers: dict[str, str],
) -> JsonResponse:
    """Descarga el estado completo (cifrado) del vault."""

    return await send_json_request(
        client,
        "GET",
        f"{config.api_url}{SYNC_PATH}",
        stage=Stage.SYNC,
        headers=headers,
    )
