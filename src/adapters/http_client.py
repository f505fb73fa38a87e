"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, User-Agent y headers JSON para identity y api.
- Traduce las excepciones de httpx/json a la taxonomía de `core.errors`.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from core.config import AppSettings
from core.errors import NetworkError, RequestTimeoutError, ResponseDecodeError

logger = logging.getLogger(__name__)

JSON_ACCEPT = "application/json"


@dataclass(frozen=True)
class JsonResponse:
    """Respuesta HTTP ya decodificada como JSON (opaco)."""

    status_code: int
    url: str
    payload: Any

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeout/User-Agent para que todas las llamadas se comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": JSON_ACCEPT,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


async def send_json_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    stage: Any,
    headers: dict[str, str] | None = None,
    json_body: Any | None = None,
    form: dict[str, str] | None = None,
) -> JsonResponse:
    """Envía un request y decodifica el body como JSON.

    El status HTTP no se valida: un error 4xx/5xx con body JSON se devuelve
    igualmente (se persiste como evidencia); solo se registra un warning.
    """

    # httpx aplica el timeout por fase (connect/read/write/pool); el request
    # completo tiene además el mismo límite total.
    deadline = client.timeout.read
    logger.debug("%s %s", method, url)
    try:
        response = await asyncio.wait_for(
            client.request(
                method,
                url,
                headers=headers,
                json=json_body,
                data=form,
            ),
            timeout=deadline,
        )
    except httpx.TimeoutException as exc:
        raise RequestTimeoutError(f"{method} {url} timed out", stage=stage, cause=exc) from exc
    except asyncio.TimeoutError as exc:
        raise RequestTimeoutError(
            f"{method} {url} timed out after {deadline}s", stage=stage, cause=exc
        ) from exc
    except httpx.HTTPError as exc:
        raise NetworkError(f"{method} {url} failed: {exc}", stage=stage, cause=exc) from exc

    if not response.is_success:
        logger.warning("%s %s returned HTTP %s", method, url, response.status_code)

    try:
        payload = response.json()
    except ValueError as exc:
        content_type = response.headers.get("content-type", "unknown")
        raise ResponseDecodeError(
            f"{method} {url} returned a non-JSON body (HTTP {response.status_code}, {content_type})",
            stage=stage,
            cause=exc,
        ) from exc

    return JsonResponse(status_code=response.status_code, url=str(response.url), payload=payload)
