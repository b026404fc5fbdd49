"""Fallos de validación y errores del adaptador.

Por qué variantes tipadas:
- El compilador de configuración devuelve `ConfigurationDocument | ValidationFailure`;
  el flujo de control nunca depende del contenido de un string.
- Cada variante conserva los valores ofensivos para el mensaje de error.

Los fallos de infraestructura y del motor son excepciones (`DecodeFault`):
no son esperables y se escalan al llamador.
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel
from pydantic.config import ConfigDict


class _Failure(BaseModel):
    model_config = ConfigDict(frozen=True)


class IndexFieldMismatch(_Failure):
    kind: Literal["index_field_mismatch"] = "index_field_mismatch"
    given_indices: str
    given_fields: str

    def message(self) -> str:
        return (
            "The given list of TSV indices and TSV fields did not match.\r\n"
            f"Given indices: {self.given_indices}\r\n"
            f"Given fields: {self.given_fields}"
        )


class UnknownAmbiguityName(_Failure):
    kind: Literal["unknown_ambiguity_name"] = "unknown_ambiguity_name"
    value: str

    def message(self) -> str:
        return f"Invalid field given for ambiguity classes.\r\nGiven: {self.value}"


class UnknownClusterName(_Failure):
    kind: Literal["unknown_cluster_name"] = "unknown_cluster_name"
    value: str

    def message(self) -> str:
        return f"Invalid field given for word clusters.\r\nGiven: {self.value}"


class UnknownGazetteerName(_Failure):
    kind: Literal["unknown_gazetteer_name"] = "unknown_gazetteer_name"
    value: str

    def message(self) -> str:
        return f"Invalid field given for named entity gazetteers.\r\nGiven: {self.value}"


class UnknownEmbeddingName(_Failure):
    kind: Literal["unknown_embedding_name"] = "unknown_embedding_name"
    value: str

    def message(self) -> str:
        return f"Invalid field given for word embeddings.\r\nGiven: {self.value}"


ValidationFailure = Union[
    IndexFieldMismatch,
    UnknownAmbiguityName,
    UnknownClusterName,
    UnknownGazetteerName,
    UnknownEmbeddingName,
]

def is_failure(value: object) -> bool:
    return isinstance(value, _Failure)


class RequestRejected(Exception):
    """Petición mal formada (discriminador, payload o parámetros).

    Se responde con un sobre de error; el motor no llega a ejecutarse.
    """


class DecodeFault(Exception):
    """Fallo no recuperable durante una petición."""


class WorkspaceFault(DecodeFault):
    """Error creando/leyendo ficheros temporales del directorio de trabajo."""


class EngineFault(DecodeFault):
    """El motor NLP4J terminó con error (exit != 0, timeout, excepción)."""

    def __init__(self, message: str, *, exit_status: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.exit_status = exit_status
        self.stderr = stderr
