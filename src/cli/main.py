"""Command-line entry point.

Single command: read the YAML config, run the export pipeline and report
the written artifacts. Any `ExportError` ends the process with exit code 1
and a one-line message on stderr naming the failing stage.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.ui_components import build_artifacts_table, format_stage_line, print_banner
from core.config import load_settings
from core.config_loader import load_vault_config
from core.errors import ExportError
from core.services.export_pipeline import PipelineHooks, export_vault

app = typer.Typer(
    add_completion=False,
    help="Log in to a Bitwarden-compatible server and save profile/sync JSON to a directory.",
)

_console = Console()
_err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Route stdlib logging through Rich on stderr."""

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO; keep it for --verbose only.
    logging.getLogger("httpx").setLevel(logging.INFO if level.upper() == "DEBUG" else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.command()
def export(
    config: Path = typer.Option(
        ...,
        "--config",
        metavar="FILE",
        help="Path to the YAML configuration file.",
    ),
    output_dir: Path = typer.Argument(
        ...,
        metavar="DIR",
        help="Existing directory where the JSON files are written.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only report errors."),
) -> None:
    """Export prelogin, token, profile and sync responses as JSON files."""

    hooks = PipelineHooks()
    if not quiet:
        hooks.stage_finished = lambda artifact: _console.print(format_stage_line(artifact))

    try:
        settings = load_settings()
        configure_logging("DEBUG" if verbose else settings.log_level)
        vault_config = load_vault_config(config)
        if not quiet:
            print_banner(_console, email=vault_config.email)
        result = asyncio.run(
            export_vault(
                settings=settings,
                config=vault_config,
                output_dir=output_dir,
                hooks=hooks,
            )
        )
    except ExportError as exc:
        logging.getLogger(__name__).debug("Export aborted", exc_info=exc.cause or exc)
        _err_console.print(f"Error: {exc}", style="bold red", markup=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc

    if not quiet:
        _console.print(build_artifacts_table(result.artifacts))


def run() -> None:
    app()
