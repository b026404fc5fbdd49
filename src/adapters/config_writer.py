"""Escritura del fichero de configuración XML del motor.

Por qué está en adapters:
- El XML es un detalle del motor (plantilla Jinja2).
- El Core solo conoce el `ConfigurationDocument`.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from adapters.workspace import write_temp_file
from core.domain.models import ConfigurationDocument


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        keep_trailing_newline=False,
    )


def render_configuration_xml(document: ConfigurationDocument) -> str:
    """Renderiza el documento como el XML `<configuration>` que lee NLP4J."""

    template = _get_env().get_template("configuration.xml")
    return template.render(document=document)


def write_configuration(document: ConfigurationDocument, directory: Path) -> Path:
    """Escribe `config*.xml` en el directorio de trabajo y devuelve su ruta."""

    return write_temp_file(directory, "config", render_configuration_xml(document), ".xml")
