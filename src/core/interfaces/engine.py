"""Contrato del motor de decodificación.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el motor real (JVM vía subprocess) y un motor en proceso
  (tests, callables Python) sean intercambiables sin acoplar el Core.
"""

from __future__ import annotations

from typing import Protocol, Sequence, TextIO, runtime_checkable


@runtime_checkable
class DecodingEngine(Protocol):
    """Contrato mínimo para ejecutar el decodificador.

    Reglas de diseño:
    - `run` es síncrono y bloqueante: una invocación por petición.
    - Todo lo que el motor imprime por consola se escribe en `stdout`.
    - Devuelve el exit status; los fallos se señalan con `EngineFault`.
    """

    def run(self, argv: Sequence[str], stdout: TextIO) -> int:
        """Ejecuta el motor con `argv` y vuelca su salida en `stdout`."""

        ...
