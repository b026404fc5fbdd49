"""Decode request orchestration.

This module implements the full request path of the service:
protocol checks -> configuration compilation -> working directory and
argument vector -> engine invocation -> output collection -> response
envelope. Entry points (CLI, tests, a future HTTP layer) only talk to
`DecodeService`, which keeps side-effects (printing, progress) out of the
core logic.

Requests are serialized: the engine's console capture is process-wide, so
`DecodeService` holds a lock for the whole compile/build/invoke/collect path.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from pydantic import TypeAdapter, ValidationError

from adapters.config_writer import write_configuration
from adapters.engine_runner import ProcessAdapter, SubprocessEngine
from adapters.envelope import (
    error_envelope,
    metadata_envelope,
    parse_envelope,
    success_envelope,
    to_json,
)
from adapters.output_collector import collect_outputs
from adapters.workspace import build_argument_vector, working_directory
from core import __version__
from core.config import AppSettings
from core.domain.discriminators import APACHE2_LICENSE, Discriminator
from core.domain.failures import RequestRejected, WorkspaceFault, is_failure
from core.domain.models import (
    DataEnvelope,
    DecodeOptions,
    IOSpecification,
    ServiceMetadata,
)
from core.interfaces.engine import DecodingEngine
from core.services.config_compiler import compile_configuration

logger = logging.getLogger(__name__)

SERVICE_NAME = "nlp4j-decode"
SERVICE_DESCRIPTION = "The Decode function from EmoryNLP's NLP4J project."
SERVICE_VENDOR = "http://www.lappsgrid.org"

_PAYLOAD_ADAPTER = TypeAdapter(dict[str, str])


@dataclass
class DecodeRequest:
    """A well-formed GET request, ready for compilation."""

    payload: dict[str, str]
    options: DecodeOptions = field(default_factory=DecodeOptions)


def build_service_metadata() -> ServiceMetadata:
    return ServiceMetadata(
        name=SERVICE_NAME,
        description=SERVICE_DESCRIPTION,
        version=__version__,
        vendor=SERVICE_VENDOR,
        license=APACHE2_LICENSE,
        requires=IOSpecification(format=[Discriminator.GET.value]),
        produces=IOSpecification(format=[Discriminator.LAPPS.value]),
    )


def _parse_payload(payload: Any) -> dict[str, str]:
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise RequestRejected(f"Error in parameter syntax.\n{exc}") from exc
    try:
        return _PAYLOAD_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise RequestRejected(f"Error in parameter syntax.\n{exc}") from exc


def read_request(envelope: DataEnvelope) -> DecodeRequest:
    """Validate discriminator, payload and parameters of a non-ERROR envelope."""

    if not Discriminator.matches(envelope.discriminator, Discriminator.GET):
        raise RequestRejected(
            "Invalid discriminator.\n"
            f"Expected {Discriminator.GET.value}\n"
            f"Found {envelope.discriminator}"
        )
    if envelope.payload is None:
        raise RequestRejected("No input given.")

    payload = _parse_payload(envelope.payload)
    try:
        options = DecodeOptions.from_parameters(envelope.parameters)
    except ValidationError as exc:
        raise RequestRejected(f"Error in parameter syntax.\n{exc}") from exc
    return DecodeRequest(payload=payload, options=options)


class DecodeService:
    """Service entry point: JSON envelope in, JSON envelope out."""

    _request_lock = threading.Lock()

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        engine: DecodingEngine | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._adapter = ProcessAdapter(engine or SubprocessEngine(self._settings))
        self._metadata = to_json(metadata_envelope(build_service_metadata()))

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def get_metadata(self) -> str:
        return self._metadata

    def execute(self, text: str) -> str:
        """Process a JSON envelope; ERROR envelopes are returned untouched."""

        try:
            envelope = parse_envelope(text)
        except ValidationError as exc:
            return to_json(self._reject(RequestRejected(f"Error in parameter syntax.\n{exc}")))

        if Discriminator.matches(envelope.discriminator, Discriminator.ERROR):
            return text
        return to_json(self.process(envelope))

    def process(self, envelope: DataEnvelope) -> DataEnvelope:
        if Discriminator.matches(envelope.discriminator, Discriminator.ERROR):
            return envelope
        try:
            request = read_request(envelope)
        except RequestRejected as exc:
            return self._reject(exc)

        with self._request_lock:
            return self._run(request)

    def _reject(self, exc: RequestRejected) -> DataEnvelope:
        error = error_envelope(str(exc))
        logger.error(to_json(error))
        return error

    def _run(self, request: DecodeRequest) -> DataEnvelope:
        compiled = compile_configuration(request.options, self._settings)
        if is_failure(compiled):
            error = error_envelope(compiled.message())
            logger.error(to_json(error))
            return error

        try:
            with working_directory(keep=self._settings.keep_workdir) as workdir:
                config_path = write_configuration(compiled, workdir)
                argv = build_argument_vector(
                    payload=request.payload,
                    working_dir=workdir,
                    config_path=config_path,
                    output_format=request.options.format,
                )
                captured = self._adapter.invoke(argv)
                response_map = collect_outputs(
                    workdir,
                    captured.text,
                    marker=self._settings.output_marker,
                    sort=self._settings.sort_output_files,
                )
        except WorkspaceFault:
            logger.error(to_json(error_envelope("Error in handling of temporary files.")))
            raise

        return success_envelope(response_map)
