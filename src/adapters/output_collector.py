"""Recolección de las salidas del motor.

El motor escribe `<input>.out` junto a los inputs; aquí se leen y se
numeran como `output-file-N` (1-based). La consola capturada va siempre
bajo `Printed`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.domain.failures import WorkspaceFault

logger = logging.getLogger(__name__)

PRINTED_KEY = "Printed"
OUTPUT_KEY_PREFIX = "output-file-"


def list_output_files(working_dir: Path, *, marker: str = ".out", sort: bool = True) -> list[Path]:
    """Ficheros regulares directamente bajo `working_dir` cuyo nombre contiene `marker`.

    Con `sort=False` se respeta el orden de listado del sistema de ficheros,
    que no es estable entre plataformas.
    """

    files = [p for p in working_dir.iterdir() if p.is_file() and marker in p.name]
    if sort:
        files.sort(key=lambda p: p.name)
    return files


def collect_outputs(
    working_dir: Path,
    printed: str,
    *,
    marker: str = ".out",
    sort: bool = True,
) -> dict[str, str]:
    response: dict[str, str] = {PRINTED_KEY: printed}
    try:
        for i, path in enumerate(list_output_files(working_dir, marker=marker, sort=sort), start=1):
            response[f"{OUTPUT_KEY_PREFIX}{i}"] = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise WorkspaceFault("A problem occurred in the handling of the output files.") from exc

    logger.debug("collected %d output file(s) from %s", len(response) - 1, working_dir)
    return response
