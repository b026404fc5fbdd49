"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El mapa de parámetros abierto de la petición se valida una sola vez en el
  borde (`DecodeOptions`) en vez de consultarse ad hoc.

Nota:
- Estos modelos describen *qué* se configura, no *cómo* se escribe el XML
  ni cómo se ejecuta el motor.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class DataEnvelope(BaseModel):
    """Sobre de petición/respuesta (forma `Data` de LAPPS).

    - `discriminator`: URI que identifica el tipo de contenido.
    - `payload`: contenido (mapa de entradas en GET, mensaje en ERROR, ...).
    - `parameters`: mapa abierto de parámetros escalares.
    """

    model_config = ConfigDict(extra="ignore")

    discriminator: str = Field(
        ...,
        min_length=1,
        description="URI del discriminador (GET, ERROR, LAPPS, ...).",
    )
    payload: Any = Field(
        default=None,
        description="Contenido del sobre; su forma depende del discriminador.",
    )
    parameters: dict[str, Any] = Field(
        default_factory=dict,
        description="Parámetros de la petición (clave -> escalar).",
    )

    @field_validator("parameters", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


_PRESENCE_FLAGS = ("pos", "ner", "dep")
_TEXT_OPTIONS = (
    "tsv_indices",
    "tsv_fields",
    "ambiguity",
    "clusters",
    "gazetteers",
    "embeddings",
    "format",
)


class DecodeOptions(BaseModel):
    """Opciones reconocidas del mapa de parámetros.

    Reglas:
    - Los nombres en la petición usan guiones (`tsv-fields`); solo esa grafía
      se reconoce (`tsv_fields` es un parámetro desconocido más).
    - `pos`/`ner`/`dep` son flags de presencia: cualquier valor no nulo cuenta,
      incluso `false`.
    - El resto de opciones se normaliza a texto; parámetros desconocidos se ignoran.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    tsv_indices: str | None = Field(default=None, validation_alias="tsv-indices")
    tsv_fields: str | None = Field(default=None, validation_alias="tsv-fields")
    ambiguity: str | None = None
    clusters: str | None = None
    gazetteers: str | None = None
    embeddings: str | None = None
    pos: bool = False
    ner: bool = False
    dep: bool = False
    format: str | None = None

    @field_validator(*_PRESENCE_FLAGS, mode="before")
    @classmethod
    def _presence(cls, value: Any) -> bool:
        return value is not None

    @field_validator(*_TEXT_OPTIONS, mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        # Listas/objetos no son parámetros válidos: que falle la validación.
        return value

    @classmethod
    def from_parameters(cls, parameters: dict[str, Any]) -> "DecodeOptions":
        return cls.model_validate(parameters)


class ColumnBinding(BaseModel):
    """Columna TSV: índice (tal como llega) y nombre de campo."""

    model_config = ConfigDict(frozen=True)

    index: str
    field: str


class LexiconBinding(BaseModel):
    """Lexicon resuelto desde el catálogo (el campo viene del catálogo)."""

    model_config = ConfigDict(frozen=True)

    element: str = Field(..., description="Elemento XML (p.ej. 'ambiguity_classes').")
    field: str
    path: str


class ModelBinding(BaseModel):
    """Modelo entrenado por tarea (pos/ner/dep)."""

    model_config = ConfigDict(frozen=True)

    task: str
    path: str


class ConfigurationDocument(BaseModel):
    """Documento de configuración del motor, antes de serializarlo a XML.

    Invariante: cada entrada de `lexica`/`models` corresponde a una búsqueda
    resuelta en el catálogo; un nombre desconocido nunca llega aquí.
    """

    model_config = ConfigDict(frozen=True)

    columns: tuple[ColumnBinding, ...] = ()
    lexica: tuple[LexiconBinding, ...] = ()
    models: tuple[ModelBinding, ...] = ()

    @property
    def has_tsv(self) -> bool:
        return bool(self.columns)

    @property
    def has_lexica(self) -> bool:
        return bool(self.lexica)

    @property
    def has_models(self) -> bool:
        return bool(self.models)


class CapturedOutput(BaseModel):
    """Texto impreso por el motor durante una invocación."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    exit_status: int = 0


class IOSpecification(BaseModel):
    format: list[str] = Field(default_factory=list)
    encoding: str = "UTF-8"
    annotations: list[str] = Field(default_factory=list)


class ServiceMetadata(BaseModel):
    """Metadatos publicados por el servicio (estáticos)."""

    name: str
    description: str
    version: str
    vendor: str
    license: str
    requires: IOSpecification
    produces: IOSpecification
