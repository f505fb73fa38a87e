"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El pipeline solo emite `ExportArtifact`; aquí se decide cómo se ven.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ExportArtifact
from core.domain.stage import Stage


def print_banner(console: Console, *, email: str) -> None:
    """Imprime la cabecera del run (cuenta exportada)."""

    title = Text("bw-snapshot", style="bold cyan")
    subtitle = Text(f"Vault snapshot • {email}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(0, 4)))


def format_stage_line(artifact: ExportArtifact) -> Text:
    """Línea de progreso para una etapa terminada."""

    status_style = "green" if 200 <= artifact.status_code < 300 else "yellow"
    return Text.assemble(
        ("✓ ", "bright_green"),
        (f"{artifact.stage.label():<16}", "white"),
        (f"HTTP {artifact.status_code}", status_style),
    )


def build_artifacts_table(artifacts: Iterable[ExportArtifact]) -> Table:
    """Tabla resumen de los ficheros escritos."""

    table = Table(title="Exported artifacts")
    table.add_column("Stage", style="cyan", no_wrap=True)
    table.add_column("HTTP", style="white", justify="right")
    table.add_column("Bytes", style="green", justify="right")
    table.add_column("File", style="magenta")

    by_stage = {artifact.stage: artifact for artifact in artifacts}
    for stage in Stage.ordered():
        artifact = by_stage.get(stage)
        if artifact is None:
            table.add_row(stage.value, "-", "-", "[dim]not written[/dim]")
            continue
        table.add_row(
            stage.value,
            str(artifact.status_code),
            str(artifact.bytes_written),
            # Text: el email puede contener '[...]' y no debe leerse como markup.
            Text(str(artifact.path)),
        )
    return table
