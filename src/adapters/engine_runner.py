"""Ejecución del motor NLP4J y captura de su salida por consola.

Por qué un adaptador:
- La JVM, el classpath y el timeout son detalles de infraestructura.
- La captura de consola es un recurso compartido: `ProcessAdapter` la
  serializa con un lock y garantiza su liberación en cualquier salida.
"""

from __future__ import annotations

import contextlib
import io
import logging
import subprocess
import threading
from typing import Callable, Iterator, Sequence, TextIO

from core.config import AppSettings
from core.domain.failures import EngineFault
from core.domain.models import CapturedOutput
from core.interfaces.engine import DecodingEngine

logger = logging.getLogger(__name__)


class SubprocessEngine(DecodingEngine):
    """Lanza `NLPDecode` en una JVM hija.

    El comando base sale de `AppSettings`; `command` permite sustituirlo
    (p.ej. un script de pruebas).
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        command: Sequence[str] | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._command = list(command) if command is not None else None

    def command(self) -> list[str]:
        if self._command is not None:
            return list(self._command)
        s = self._settings
        return [s.java_executable, *s.java_options, "-cp", s.engine_classpath, s.engine_main_class]

    def run(self, argv: Sequence[str], stdout: TextIO) -> int:
        cmd = [*self.command(), *argv]
        logger.debug("running engine: %s", cmd)
        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self._settings.engine_timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise EngineFault(
                f"Engine timed out after {self._settings.engine_timeout_seconds} seconds."
            ) from exc
        except OSError as exc:
            raise EngineFault(f"Engine could not be started: {exc}") from exc

        stdout.write(completed.stdout or "")
        if completed.stderr:
            logger.debug("engine stderr:\n%s", completed.stderr)
        if completed.returncode != 0:
            raise EngineFault(
                f"Engine exited with status {completed.returncode}.",
                exit_status=completed.returncode,
                stderr=completed.stderr or "",
            )
        return completed.returncode


class InProcessEngine(DecodingEngine):
    """Ejecuta un entry point Python (`main(argv)`) redirigiendo `sys.stdout`.

    Las excepciones del entry point se propagan; `sys.stdout` se restaura siempre.
    """

    def __init__(self, entry_point: Callable[[list[str]], object]) -> None:
        self._entry_point = entry_point

    def run(self, argv: Sequence[str], stdout: TextIO) -> int:
        with contextlib.redirect_stdout(stdout):
            result = self._entry_point(list(argv))
        return result if isinstance(result, int) else 0


class ProcessAdapter:
    """Invoca un motor capturando su consola de forma exclusiva.

    Solo una invocación a la vez por proceso: el lock se mantiene mientras
    el buffer privado está activo.
    """

    _capture_lock = threading.Lock()

    def __init__(self, engine: DecodingEngine) -> None:
        self._engine = engine

    @contextlib.contextmanager
    def capture(self) -> Iterator[io.StringIO]:
        with self._capture_lock:
            buffer = io.StringIO()
            try:
                yield buffer
            finally:
                buffer.close()

    def invoke(self, argv: Sequence[str]) -> CapturedOutput:
        with self.capture() as buffer:
            status = self._engine.run(argv, buffer)
            text = buffer.getvalue()
        logger.debug("engine finished with status %s (%d chars printed)", status, len(text))
        return CapturedOutput(text=text, exit_status=status)
