"""Compilación de opciones de petición a `ConfigurationDocument`.

Orden fijo de evaluación (el primer fallo gana):
tsv -> ambiguity -> clusters -> gazetteers -> embeddings -> models.

Función pura: no escribe ficheros ni lee el disco; el XML lo genera
`adapters.config_writer`.
"""

from __future__ import annotations

import logging
import re

from core import resources_catalog
from core.config import AppSettings
from core.domain.failures import (
    IndexFieldMismatch,
    UnknownAmbiguityName,
    UnknownClusterName,
    UnknownEmbeddingName,
    UnknownGazetteerName,
    ValidationFailure,
)
from core.domain.models import (
    ColumnBinding,
    ConfigurationDocument,
    DecodeOptions,
    LexiconBinding,
    ModelBinding,
)

logger = logging.getLogger(__name__)

_LIST_SEPARATOR = re.compile(r",\s*")

_UNKNOWN_NAME_FAILURES: dict[str, type] = {
    resources_catalog.AMBIGUITY: UnknownAmbiguityName,
    resources_catalog.CLUSTERS: UnknownClusterName,
    resources_catalog.GAZETTEERS: UnknownGazetteerName,
    resources_catalog.EMBEDDINGS: UnknownEmbeddingName,
}


def split_list(value: str) -> list[str]:
    """Parte `"a, b,c"` en `["a", "b", "c"]`; descarta vacíos finales."""

    items = _LIST_SEPARATOR.split(value)
    while len(items) > 1 and items[-1] == "":
        items.pop()
    return items


def compile_columns(options: DecodeOptions) -> tuple[ColumnBinding, ...] | IndexFieldMismatch:
    if options.tsv_fields is None:
        return ()

    fields = split_list(options.tsv_fields)
    if options.tsv_indices is None:
        return tuple(ColumnBinding(index=str(i), field=f) for i, f in enumerate(fields))

    indices = split_list(options.tsv_indices)
    columns: list[ColumnBinding] = []
    for i, field in enumerate(fields):
        if i >= len(indices):
            return IndexFieldMismatch(given_indices=options.tsv_indices, given_fields=options.tsv_fields)
        columns.append(ColumnBinding(index=indices[i], field=field))
    return tuple(columns)


def compile_lexica(
    options: DecodeOptions,
    settings: AppSettings,
) -> tuple[LexiconBinding, ...] | ValidationFailure:
    lexica: list[LexiconBinding] = []
    for category in resources_catalog.LEXICA_CATEGORIES:
        given = getattr(options, category)
        if given is None:
            continue
        entry = resources_catalog.resolve(category, given)
        if entry is None:
            return _UNKNOWN_NAME_FAILURES[category](value=given)
        lexica.append(
            LexiconBinding(
                element=resources_catalog.LEXICA_ELEMENTS[category],
                field=entry.field or "",
                path=entry.path(settings).as_posix(),
            )
        )
    return tuple(lexica)


def compile_models(options: DecodeOptions, settings: AppSettings) -> tuple[ModelBinding, ...]:
    models: list[ModelBinding] = []
    for task in resources_catalog.MODEL_TASKS:
        if not getattr(options, task):
            continue
        entry = resources_catalog.resolve(resources_catalog.MODELS, task)
        assert entry is not None
        models.append(ModelBinding(task=task, path=entry.path(settings).as_posix()))
    return tuple(models)


def compile_configuration(
    options: DecodeOptions,
    settings: AppSettings | None = None,
) -> ConfigurationDocument | ValidationFailure:
    """Traduce las opciones validadas a un documento de configuración.

    Devuelve la primera `ValidationFailure` encontrada; en ese caso no se
    evalúan las secciones siguientes.
    """

    settings = settings or AppSettings()

    columns = compile_columns(options)
    if isinstance(columns, IndexFieldMismatch):
        logger.debug("tsv compilation failed: %r", columns)
        return columns

    lexica = compile_lexica(options, settings)
    if not isinstance(lexica, tuple):
        logger.debug("lexica compilation failed: %r", lexica)
        return lexica

    models = compile_models(options, settings)
    return ConfigurationDocument(columns=columns, lexica=lexica, models=models)
