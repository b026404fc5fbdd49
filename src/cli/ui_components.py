"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.resources_catalog import CatalogEntry


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Se omite en modo `--json` para no ensuciar pipelines.
    """

    title = Text("NLP4J-Decode", style="bold cyan")
    subtitle = Text("LAPPS adapter • NLPDecode • POS/NER/DEP", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_outputs_table(response_map: Mapping[str, str], *, preview_chars: int = 80) -> Table:
    """Tabla con las claves del mapa de respuesta y un extracto de cada valor."""

    table = Table(title="Decode Outputs")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Chars", style="green", justify="right")
    table.add_column("Preview", style="white")
    for key, value in response_map.items():
        text = str(value)
        preview = text.strip().replace("\n", " ⏎ ")
        if len(preview) > preview_chars:
            preview = preview[: preview_chars - 1] + "…"
        table.add_row(key, str(len(text)), preview)
    return table


def build_catalog_table(entries: Iterable[CatalogEntry]) -> Table:
    table = Table(title="Resource Catalog")
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Name", style="white", no_wrap=True)
    table.add_column("File", style="magenta")
    table.add_column("Field", style="dim")
    for entry in entries:
        table.add_row(entry.category, entry.name, entry.file_name, entry.field or "-")
    return table


def build_error_panel(message: str) -> Panel:
    """Panel para presentar un sobre de error."""

    return Panel(Text(message.strip()), title=Text("Error", style="bold red"), border_style="red")
