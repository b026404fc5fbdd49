"""Script de ejecución.

Por qué existe:
- Permite ejecutar la CLI con `python -m main` desde `src/` durante desarrollo.
- Mantiene un entrypoint simple además del script `nlp4j-decode`.
"""

from __future__ import annotations

import sys

# Las salidas del motor son UTF-8; las consolas Windows (cp1252) no lo son por defecto.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
