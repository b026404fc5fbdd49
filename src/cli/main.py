"""CLI principal (Typer).

Comandos:
- `decode`: ejecuta un sobre JSON (fichero) contra el servicio.
- `text`: construye el sobre GET a partir de un fichero de texto y opciones.
- `metadata` / `catalog`: información estática del servicio.
- `doctor`: diagnósticos del entorno (Java, classpath, recursos).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.envelope import (
    export_envelope_json,
    parse_envelope,
    response_map_of,
    to_json,
)
from cli import doctor
from cli.ui_components import (
    build_catalog_table,
    build_error_panel,
    build_outputs_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.discriminators import Discriminator
from core.domain.failures import DecodeFault
from core.domain.models import DataEnvelope
from core.resources_catalog import iter_entries
from core.services.decode_pipeline import DecodeService

app = typer.Typer(no_args_is_help=True, help="LAPPS adapter for the NLP4J decoder.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


def _emit(request_json: str, *, as_json: bool, output: Optional[Path]) -> None:
    service = DecodeService()
    try:
        response_json = service.execute(request_json)
    except DecodeFault as exc:
        _err_console.print(build_error_panel(str(exc)))
        raise typer.Exit(code=2) from exc

    response = parse_envelope(response_json)
    if output is not None:
        export_envelope_json(envelope=response, output_path=output)

    if as_json:
        typer.echo(response_json)
    else:
        print_banner(_console)
        if Discriminator.matches(response.discriminator, Discriminator.LAPPS):
            _console.print(build_outputs_table(response_map_of(response)))
        else:
            _console.print(build_error_panel(str(response.payload)))
        if output is not None:
            _console.print(f"[green]Response saved to:[/green] {output}")

    if Discriminator.matches(response.discriminator, Discriminator.ERROR):
        raise typer.Exit(code=1)


@app.command()
def decode(
    request_file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the response envelope here."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw response envelope."),
) -> None:
    """Run a JSON request envelope through the decoder."""

    _emit(request_file.read_text(encoding="utf-8"), as_json=as_json, output=output)


@app.command()
def text(
    input_file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    ambiguity: Optional[str] = typer.Option(None, help="Ambiguity classes (e.g. simplified)."),
    clusters: Optional[str] = typer.Option(None, help="Word clusters (e.g. brown-twit-lc)."),
    gazetteers: Optional[str] = typer.Option(None, help="Named entity gazetteers."),
    embeddings: Optional[str] = typer.Option(None, help="Word embeddings (e.g. undigitalized)."),
    pos: bool = typer.Option(False, "--pos", help="Part-of-speech model."),
    ner: bool = typer.Option(False, "--ner", help="Named entity model."),
    dep: bool = typer.Option(False, "--dep", help="Dependency model."),
    tsv_fields: Optional[str] = typer.Option(None, "--tsv-fields"),
    tsv_indices: Optional[str] = typer.Option(None, "--tsv-indices"),
    output_format: Optional[str] = typer.Option(None, "--format", help="Input format (raw, line, tsv)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Decode a plain text file."""

    parameters: dict[str, object] = {
        "ambiguity": ambiguity,
        "clusters": clusters,
        "gazetteers": gazetteers,
        "embeddings": embeddings,
        "tsv-fields": tsv_fields,
        "tsv-indices": tsv_indices,
        "format": output_format,
    }
    for flag, enabled in (("pos", pos), ("ner", ner), ("dep", dep)):
        if enabled:
            parameters[flag] = "yes"

    envelope = DataEnvelope(
        discriminator=Discriminator.GET.value,
        payload=json.dumps({"input": input_file.read_text(encoding="utf-8")}, ensure_ascii=False),
        parameters={k: v for k, v in parameters.items() if v is not None},
    )
    _emit(to_json(envelope), as_json=as_json, output=output)


@app.command()
def metadata() -> None:
    """Print the service metadata envelope."""

    typer.echo(DecodeService().get_metadata())


@app.command()
def catalog() -> None:
    """List the symbolic resource names accepted in requests."""

    _console.print(build_catalog_table(iter_entries()))


def run() -> None:
    app()
