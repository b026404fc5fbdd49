"""Serialización JSON de los sobres de petición/respuesta.

Por qué JSON:
- Es el formato de intercambio de los servicios LAPPS (`Data`).
- El Core trabaja con `DataEnvelope`; este módulo es el único que conoce el texto.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from core.domain.discriminators import Discriminator
from core.domain.models import DataEnvelope, ServiceMetadata


def parse_envelope(text: str) -> DataEnvelope:
    """Parsea un sobre JSON. Lanza `pydantic.ValidationError` si no es válido."""

    return DataEnvelope.model_validate_json(text)


def to_json(envelope: DataEnvelope) -> str:
    """JSON UTF-8 con formato estable (indentado)."""

    return json.dumps(envelope.model_dump(mode="json"), ensure_ascii=False, indent=2)


def success_envelope(response_map: Mapping[str, str]) -> DataEnvelope:
    """Envuelve el mapa de respuesta: payload = JSON del mapa, discriminador LAPPS."""

    payload = json.dumps(dict(response_map), ensure_ascii=False)
    return DataEnvelope(discriminator=Discriminator.LAPPS.value, payload=payload)


def error_envelope(message: str) -> DataEnvelope:
    return DataEnvelope(discriminator=Discriminator.ERROR.value, payload=message)


def metadata_envelope(metadata: ServiceMetadata) -> DataEnvelope:
    return DataEnvelope(discriminator=Discriminator.META.value, payload=metadata.model_dump(mode="json"))


def response_map_of(envelope: DataEnvelope) -> dict[str, Any]:
    """Recupera el mapa de respuesta de un sobre de éxito (payload JSON o dict)."""

    payload = envelope.payload
    if isinstance(payload, str):
        return json.loads(payload)
    if isinstance(payload, dict):
        return payload
    raise ValueError("Envelope payload is not a response map.")


def export_envelope_json(*, envelope: DataEnvelope, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(to_json(envelope) + "\n", encoding="utf-8")
    return output_path
