"""Catálogo de recursos (lexica y modelos).

Este módulo vive en `core/` porque:
- centraliza el *qué* recursos acepta el motor sin acoplarse a la CLI
- la petición solo aporta nombres simbólicos; las rutas salen de aquí.

No incluye los ficheros `.xz` en el repo; se buscan bajo `lexica_dir` y
`models_dir` (ver `AppSettings`).
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from pydantic import BaseModel
from pydantic.config import ConfigDict

from core.config import AppSettings


AMBIGUITY = "ambiguity"
CLUSTERS = "clusters"
GAZETTEERS = "gazetteers"
EMBEDDINGS = "embeddings"
MODELS = "models"

LEXICA_CATEGORIES: tuple[str, ...] = (AMBIGUITY, CLUSTERS, GAZETTEERS, EMBEDDINGS)

# Elemento XML que el motor espera para cada categoría de lexica.
LEXICA_ELEMENTS: dict[str, str] = {
    AMBIGUITY: "ambiguity_classes",
    CLUSTERS: "word_clusters",
    GAZETTEERS: "named_entity_gazetteers",
    EMBEDDINGS: "word_embeddings",
}

MODEL_TASKS: tuple[str, ...] = ("pos", "ner", "dep")


class CatalogEntry(BaseModel):
    """Fila del catálogo: nombre simbólico -> (fichero, campo)."""

    model_config = ConfigDict(frozen=True)

    category: str
    name: str
    file_name: str
    field: str | None = None

    def path(self, settings: AppSettings) -> Path:
        root = settings.models_dir if self.category == MODELS else settings.lexica_dir
        return root / self.file_name


def _rows(category: str, rows: tuple[tuple[str, str, str | None], ...]) -> dict[str, CatalogEntry]:
    return {
        name: CatalogEntry(category=category, name=name, file_name=file_name, field=field)
        for name, file_name, field in rows
    }


_CATALOG: dict[str, dict[str, CatalogEntry]] = {
    AMBIGUITY: _rows(
        AMBIGUITY,
        (
            ("simplified", "en-ambiguity-classes-simplified.xz", "word_form_simplified"),
            (
                "simplified-lowercase",
                "en-ambiguity-classes-simplified-lowercase.xz",
                "word_form_simplified_lowercase",
            ),
        ),
    ),
    CLUSTERS: _rows(
        CLUSTERS,
        (
            (
                "brown-simplified-lc",
                "en-brown-clusters-simplified-lowercase.xz",
                "word_form_simplified_lowercase",
            ),
            ("brown-twit-lc", "en-brown-clusters-twit-lowercase.xz", "word_form_lowercase"),
        ),
    ),
    GAZETTEERS: _rows(
        GAZETTEERS,
        (
            ("simplified", "en-named-entity-gazetteers-simplified.xz", "word_form_simplified"),
            (
                "simplified-lowercase",
                "en-named-entity-gazetteers-simplified-lowercase.xz",
                "word_form_simplified_lowercase",
            ),
        ),
    ),
    EMBEDDINGS: _rows(
        EMBEDDINGS,
        (("undigitalized", "en-word-embeddings-undigitalized.xz", "word_form_undigitalized"),),
    ),
    MODELS: _rows(
        MODELS,
        (
            ("pos", "en-pos.xz", None),
            ("ner", "en-ner.xz", None),
            ("dep", "en-dep.xz", None),
        ),
    ),
}


def resolve(category: str, name: str) -> CatalogEntry | None:
    """Busca un nombre simbólico; `None` si la categoría o el nombre no existen."""

    return _CATALOG.get(category, {}).get(name)


def iter_entries() -> Iterator[CatalogEntry]:
    for rows in _CATALOG.values():
        yield from rows.values()


def missing_resource_files(settings: AppSettings) -> list[Path]:
    """Ficheros del catálogo que no existen en disco (para `doctor`)."""

    missing: list[Path] = []
    for entry in iter_entries():
        p = entry.path(settings)
        if not p.is_file():
            missing.append(p)
    return missing
