"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (workspace/engine/colector) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "nlp4j-decode"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "nlp4j-decode"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "nlp4j-decode"
    return Path.home() / ".config" / "nlp4j-decode"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# NLP4J-Decode user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del adaptador.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="NLP4J_DECODE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    java_executable: str = Field(
        default="java",
        min_length=1,
        description="Ejecutable de Java usado para lanzar el motor NLP4J.",
    )
    java_options: list[str] = Field(
        default_factory=lambda: ["-Xmx4g"],
        description="Opciones extra de la JVM (p.ej. memoria).",
    )
    engine_classpath: str = Field(
        default="lib/*",
        min_length=1,
        description="Classpath con los jars de NLP4J.",
    )
    engine_main_class: str = Field(
        default="edu.emory.mathcs.nlp.bin.NLPDecode",
        min_length=1,
        description="Clase principal del decodificador.",
    )
    engine_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Límite de tiempo por invocación del motor (None = sin límite).",
    )

    lexica_dir: Path = Field(
        default=Path("resources/lexica"),
        description="Directorio raíz de los lexica (ambigüedad, clusters, gazetteers, embeddings).",
    )
    models_dir: Path = Field(
        default=Path("resources/models"),
        description="Directorio raíz de los modelos entrenados (pos/ner/dep).",
    )

    output_marker: str = Field(
        default=".out",
        min_length=1,
        description="Subcadena que identifica los ficheros generados por el motor.",
    )
    sort_output_files: bool = Field(
        default=True,
        description="Numerar output-file-N por nombre de fichero en vez de por orden de listado.",
    )
    keep_workdir: bool = Field(
        default=False,
        description="No borrar el directorio de trabajo al terminar (depuración).",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging para la CLI.",
    )
