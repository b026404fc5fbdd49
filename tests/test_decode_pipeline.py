# tests/test_decode_pipeline.py
from __future__ import annotations

import json
from pathlib import Path

import pytest

from adapters.engine_runner import InProcessEngine, SubprocessEngine
from adapters.envelope import parse_envelope, response_map_of, to_json
from core.domain.discriminators import Discriminator
from core.domain.failures import EngineFault, WorkspaceFault
from core.domain.models import DataEnvelope
from core.services.decode_pipeline import DecodeService, build_service_metadata


def _get(payload=None, **parameters) -> str:
    envelope = DataEnvelope(
        discriminator=Discriminator.GET.value,
        payload=payload,
        parameters=parameters,
    )
    return to_json(envelope)


def _never_called(argv):
    raise AssertionError("engine must not run")


def test_error_envelope_is_returned_byte_identical(service):
    raw = '{"discriminator": "http://vocab.lappsgrid.org/ns/error",   "payload": "This is an error message"}'
    assert service.execute(raw) == raw


def test_invalid_discriminator(service):
    raw = to_json(DataEnvelope(discriminator=Discriminator.QUERY.value, payload=""))
    response = parse_envelope(service.execute(raw))
    assert response.discriminator == Discriminator.ERROR.value
    assert f"Expected {Discriminator.GET.value}" in response.payload
    assert f"Found {Discriminator.QUERY.value}" in response.payload


def test_missing_payload(service):
    response = parse_envelope(service.execute(_get()))
    assert response.discriminator == Discriminator.ERROR.value
    assert response.payload == "No input given."


def test_malformed_json_is_rejected(service):
    response = parse_envelope(service.execute("{not json"))
    assert response.discriminator == Discriminator.ERROR.value
    assert response.payload.startswith("Error in parameter syntax.")


def test_payload_must_be_a_string_map(service):
    response = parse_envelope(service.execute(_get(payload={"input": ["not", "text"]})))
    assert response.payload.startswith("Error in parameter syntax.")


def test_validation_failure_skips_engine(settings):
    service = DecodeService(settings, engine=InProcessEngine(_never_called))
    response = parse_envelope(service.execute(_get(payload={"input": "x"}, ambiguity="bogus")))
    assert response.discriminator == Discriminator.ERROR.value
    assert "Invalid field given for ambiguity classes." in response.payload
    assert "Given: bogus" in response.payload


def test_index_field_mismatch_message(settings):
    service = DecodeService(settings, engine=InProcessEngine(_never_called))
    response = service.process(
        DataEnvelope(
            discriminator=Discriminator.GET.value,
            payload={"input": "x"},
            parameters={"tsv-fields": "a,b", "tsv-indices": "5"},
        )
    )
    assert response.discriminator == Discriminator.ERROR.value
    assert "Given indices: 5" in response.payload
    assert "Given fields: a,b" in response.payload


def test_end_to_end_with_fake_engine(service):
    payload = json.dumps({"input": "The cat sat."})
    response = parse_envelope(service.execute(_get(payload=payload, ambiguity="simplified", pos="yes")))

    assert response.discriminator == Discriminator.LAPPS.value
    outputs = response_map_of(response)
    assert "Printed" in outputs
    assert "Models: pos" in outputs["Printed"]
    assert outputs["output-file-1"] == "1\tThe\n2\tcat\n3\tsat.\n"


def test_end_to_end_several_inputs_and_format(service):
    payload = {"input-a": "one", "input-b": "two words", "meta": "skip"}
    response = service.process(
        DataEnvelope(
            discriminator=Discriminator.GET.value,
            payload=payload,
            parameters={"format": "line", "ner": True},
        )
    )
    outputs = response_map_of(response)
    assert set(outputs) == {"Printed", "output-file-1", "output-file-2"}
    assert "Format: line" in outputs["Printed"]
    assert sorted([outputs["output-file-1"], outputs["output-file-2"]]) == [
        "1\tone\n",
        "1\ttwo\n2\twords\n",
    ]


def test_engine_fault_propagates(settings, fake_engine_command):
    engine = SubprocessEngine(settings, command=[*fake_engine_command, "--fail"])
    service = DecodeService(settings, engine=engine)
    with pytest.raises(EngineFault):
        service.execute(_get(payload={"input": "x"}))


def test_workspace_fault_escalates(settings, monkeypatch):
    import adapters.workspace as workspace

    def broken_mkdtemp(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(workspace.tempfile, "mkdtemp", broken_mkdtemp)
    service = DecodeService(settings, engine=InProcessEngine(_never_called))
    with pytest.raises(WorkspaceFault):
        service.execute(_get(payload={"input": "x"}))


def test_working_directory_is_cleaned_up(settings):
    seen: list[str] = []

    def entry_point(argv):
        seen.append(argv[argv.index("-i") + 1])

    service = DecodeService(settings, engine=InProcessEngine(entry_point))
    response = service.execute(_get(payload={"input": "x"}))
    assert parse_envelope(response).discriminator == Discriminator.LAPPS.value

    assert seen and not Path(seen[0]).exists()


def test_in_process_engine_prints_are_collected(settings):
    def entry_point(argv):
        print("hello from the engine")

    service = DecodeService(settings, engine=InProcessEngine(entry_point))
    outputs = response_map_of(service.process(
        DataEnvelope(discriminator=Discriminator.GET.value, payload={"input": "x"})
    ))
    assert outputs == {"Printed": "hello from the engine\n"}


def test_metadata(service):
    envelope = parse_envelope(service.get_metadata())
    assert envelope.discriminator == Discriminator.META.value
    metadata = envelope.payload
    assert metadata["vendor"] == "http://www.lappsgrid.org"
    assert metadata["produces"]["format"] == [Discriminator.LAPPS.value]
    assert metadata["requires"]["format"] == [Discriminator.GET.value]
    assert metadata["requires"]["encoding"] == "UTF-8"
    assert metadata["version"] == build_service_metadata().version
