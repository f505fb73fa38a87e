"""Vault export orchestration.

The run is a strict sequence: prelogin, token exchange, then profile and
sync with the bearer token. Each response is written to disk as soon as it
arrives, so a late failure leaves the earlier artifacts in place. Any
`ExportError` aborts the remaining stages. Printing and progress belong to
the caller and are reached through `PipelineHooks`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import httpx

from adapters.bitwarden import (
    build_auth_headers,
    extract_access_token,
    fetch_profile,
    fetch_sync,
    prelogin,
    request_token,
)
from adapters.http_client import JsonResponse, build_async_client
from adapters.json_exporter import artifact_path, export_response_json
from core.config import AppSettings
from core.domain.models import ExportArtifact, VaultConfig
from core.domain.stage import Stage

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress)."""

    stage_started: Callable[[Stage], None] | None = None
    stage_finished: Callable[[ExportArtifact], None] | None = None


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    email: str
    output_dir: Path
    artifacts: list[ExportArtifact] = field(default_factory=list)


async def export_vault(
    *,
    settings: AppSettings,
    config: VaultConfig,
    output_dir: Path,
    hooks: PipelineHooks | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PipelineResult:
    hooks = hooks or PipelineHooks()
    result = PipelineResult(email=config.email, output_dir=output_dir)

    def started(stage: Stage) -> None:
        logger.info("Stage %s: starting", stage.value)
        if hooks.stage_started:
            hooks.stage_started(stage)

    def persist(stage: Stage, response: JsonResponse) -> None:
        path = artifact_path(output_dir=output_dir, email=config.email, stage=stage)
        size = export_response_json(payload=response.payload, output_path=path, stage=stage)
        artifact = ExportArtifact(
            stage=stage,
            path=path,
            status_code=response.status_code,
            bytes_written=size,
        )
        result.artifacts.append(artifact)
        if hooks.stage_finished:
            hooks.stage_finished(artifact)

    async with build_async_client(settings, transport=transport) as client:
        started(Stage.PRELOGIN)
        persist(Stage.PRELOGIN, await prelogin(client, config))

        started(Stage.TOKEN)
        token_response = await request_token(client, config, settings=settings)
        # The raw response is archived before the token is checked, so a
        # rejected login still leaves the server's error on disk.
        persist(Stage.TOKEN, token_response)
        access_token = extract_access_token(token_response.payload)

        auth_headers = build_auth_headers(access_token)

        started(Stage.PROFILE)
        persist(Stage.PROFILE, await fetch_profile(client, config, headers=auth_headers))

        started(Stage.SYNC)
        persist(Stage.SYNC, await fetch_sync(client, config, headers=auth_headers))

    logger.info("Exported %d artifacts for %s", len(result.artifacts), config.email)
    return result
