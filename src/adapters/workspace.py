"""Directorio de trabajo por petición y vector de argumentos del motor.

Por qué está en adapters:
- Crear ficheros temporales es infraestructura; el Core solo entrega el
  `ConfigurationDocument` y las opciones ya validadas.
- Cualquier `OSError` aquí se traduce a `WorkspaceFault`.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterator, Mapping

from core.domain.failures import WorkspaceFault

logger = logging.getLogger(__name__)

INPUT_KEY_MARKER = "input"
INPUT_EXTENSION = "input"
OUTPUT_EXTENSION = "out"


def sanitize_key_for_filename(value: str) -> str:
    """Genera un prefijo de fichero seguro a partir de una clave del payload."""

    out: list[str] = []
    for ch in value.strip():
        if ch.isalnum() or ch in ("-", "_"):
            out.append(ch)
        else:
            out.append("-")
    cleaned = "".join(out).strip("-_")
    return cleaned or INPUT_KEY_MARKER


@contextlib.contextmanager
def working_directory(*, keep: bool = False) -> Iterator[Path]:
    """Crea un directorio temporal exclusivo y lo borra al salir (best-effort)."""

    try:
        path = Path(tempfile.mkdtemp(prefix="nlp4j-decode-"))
    except OSError as exc:
        raise WorkspaceFault("A problem occurred in the handling of the temporary files.") from exc

    logger.debug("working directory: %s", path)
    try:
        yield path
    finally:
        if keep:
            logger.info("keeping working directory %s", path)
        else:
            shutil.rmtree(path, ignore_errors=True)


def write_temp_file(directory: Path, prefix: str, content: str, suffix: str) -> Path:
    """Escribe `content` en un fichero nuevo `<prefix>XXXX<suffix>` dentro de `directory`."""

    try:
        fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=directory)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
    except OSError as exc:
        raise WorkspaceFault("A problem occurred in the handling of the temporary files.") from exc
    return Path(name)


def write_input_files(payload: Mapping[str, str], directory: Path) -> list[Path]:
    written: list[Path] = []
    for key, content in payload.items():
        if INPUT_KEY_MARKER not in key:
            continue
        written.append(
            write_temp_file(directory, sanitize_key_for_filename(key), content, f".{INPUT_EXTENSION}")
        )
    return written


def _posix(value: str | Path) -> str:
    return str(value).replace("\\", "/")


def build_argument_vector(
    *,
    payload: Mapping[str, str],
    working_dir: Path,
    config_path: Path,
    output_format: str | None = None,
) -> list[str]:
    """Materializa los inputs del payload y devuelve el argv de `NLPDecode`.

    `-c <config> -i <dir> -ie input -oe out [-format <valor>]`
    """

    inputs = write_input_files(payload, working_dir)
    logger.debug("wrote %d input file(s) into %s", len(inputs), working_dir)

    argv = [
        "-c",
        _posix(config_path),
        "-i",
        _posix(working_dir),
        "-ie",
        INPUT_EXTENSION,
        "-oe",
        OUTPUT_EXTENSION,
    ]
    if output_format is not None:
        argv.extend(["-format", output_format])
    return argv
