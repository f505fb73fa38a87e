"""Shared pytest fixtures for all tests."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Union

import httpx
import pytest
import yaml

from core.config import AppSettings
from core.domain.models import VaultConfig

IDENTITY_URL = "https://identity.example.test"
API_URL = "https://api.example.test"

PRELOGIN_RESPONSE = {
    "kdf": 0,
    "kdfIterations": 600000,
    "kdfMemory": None,
    "kdfParallelism": None,
}
TOKEN_RESPONSE = {
    "access_token": "eyJhbGciOi.test-access-token",
    "expires_in": 3600,
    "token_type": "Bearer",
    "scope": "api",
    "Kdf": 0,
    "KdfIterations": 600000,
}
PROFILE_RESPONSE = {
    "id": "6a0c3f7e-0000-4000-8000-000000000001",
    "name": "Alice Ñandú",
    "email": "alice@example.com",
    "emailVerified": True,
    "object": "profile",
}
SYNC_RESPONSE = {
    "object": "sync",
    "folders": [],
    "ciphers": [
        {
            "id": "c0ffee00-0000-4000-8000-000000000002",
            "type": 1,
            "name": "2.bm9uY2U=|Y2lwaGVy|bWFj",
        }
    ],
    "collections": [],
    "domains": None,
}

Route = Union[Callable[[httpx.Request], httpx.Response], tuple[int, Any]]


def run(coro: Any) -> Any:
    """Drive a coroutine to completion from a sync test."""
    return asyncio.run(coro)


# ============================================================================
# Fake server
# ============================================================================


class FakeVaultServer:
    """In-memory identity + API server built on `httpx.MockTransport`.

    Routes are keyed by (method, path); a route is either a
    `(status, json_payload)` tuple or a callable returning an `httpx.Response`.
    Every request received is recorded in `requests`.
    """

    def __init__(self, routes: dict[tuple[str, str], Route] | None = None) -> None:
        self.routes: dict[tuple[str, str], Route] = {
            ("POST", "/accounts/prelogin"): (200, PRELOGIN_RESPONSE),
            ("POST", "/connect/token"): (200, TOKEN_RESPONSE),
            ("GET", "/accounts/profile"): (200, PROFILE_RESPONSE),
            ("GET", "/sync"): (200, SYNC_RESPONSE),
        }
        if routes:
            self.routes.update(routes)
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Resource not found."})
        if callable(route):
            return route(request)
        status, payload = route
        return httpx.Response(status, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def request_for(self, path: str) -> httpx.Request:
        for request in self.requests:
            if request.url.path == path:
                return request
        raise AssertionError(f"no request for {path}; got {self.paths}")


@pytest.fixture
def vault_server() -> FakeVaultServer:
    """Provide a fake server answering every endpoint with valid JSON."""
    return FakeVaultServer()


# ============================================================================
# Configuration fixtures
# ============================================================================


@pytest.fixture
def config_data() -> dict[str, str]:
    """Standard configuration mapping, as written in the YAML file."""
    return {
        "email": "alice@example.com",
        "api_url": API_URL,
        "identity_url": IDENTITY_URL,
        "client_id": "user.6a0c3f7e-0000-4000-8000-000000000001",
        "client_secret": "s3cr3t-client-secret",
        "scope": "api",
        "device_type": "8",
        "device_identifier": "0b5f2b1c-1111-4222-8333-444455556666",
        "device_name": "linux",
        "grant_type": "client_credentials",
    }


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Return a helper that dumps a mapping to a YAML file under tmp_path."""

    def _write(data: dict[str, Any], name: str = "config.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_file(write_config: Callable[[dict[str, Any]], Path], config_data: dict[str, str]) -> Path:
    """Provide a valid YAML configuration file."""
    return write_config(config_data)


@pytest.fixture
def vault_config(config_data: dict[str, str]) -> VaultConfig:
    """Provide a validated configuration record."""
    return VaultConfig.model_validate(config_data)


@pytest.fixture
def settings() -> AppSettings:
    """Settings isolated from .env files."""
    return AppSettings(_env_file=None)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Provide an existing, empty output directory."""
    path = tmp_path / "out"
    path.mkdir()
    return path
