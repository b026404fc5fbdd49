# tests/test_workspace.py
from __future__ import annotations

from pathlib import Path

import pytest

from adapters.workspace import (
    build_argument_vector,
    sanitize_key_for_filename,
    working_directory,
    write_input_files,
)
from core.domain.failures import WorkspaceFault


def test_only_input_keys_become_files(tmp_path):
    written = write_input_files(
        {"input": "The cat sat.", "input-2": "Dogs bark.", "notes": "ignored"},
        tmp_path,
    )
    assert len(written) == 2
    assert all(p.suffix == ".input" for p in written)
    contents = sorted(p.read_text(encoding="utf-8") for p in written)
    assert contents == ["Dogs bark.", "The cat sat."]
    assert not any("notes" in p.name for p in tmp_path.iterdir())


def test_input_content_is_written_verbatim(tmp_path):
    text = "Línea uno\r\nLínea dos\n"
    (path,) = write_input_files({"input": text}, tmp_path)
    assert path.read_bytes() == text.encode("utf-8")


def test_argument_vector_layout(tmp_path):
    config = tmp_path / "config1.xml"
    argv = build_argument_vector(payload={"input": "x"}, working_dir=tmp_path, config_path=config)
    assert argv == [
        "-c",
        config.as_posix(),
        "-i",
        tmp_path.as_posix(),
        "-ie",
        "input",
        "-oe",
        "out",
    ]


def test_format_flag_is_appended(tmp_path):
    argv = build_argument_vector(
        payload={},
        working_dir=tmp_path,
        config_path=tmp_path / "c.xml",
        output_format="tsv",
    )
    assert argv[-2:] == ["-format", "tsv"]


def test_backslashes_are_normalized():
    argv = build_argument_vector(
        payload={},
        working_dir=Path("."),
        config_path=Path("C:\\tmp\\config.xml"),
    )
    assert argv[1] == "C:/tmp/config.xml"


def test_sanitize_key_for_filename():
    assert sanitize_key_for_filename("input") == "input"
    assert sanitize_key_for_filename("../input/x") == "input-x"
    assert sanitize_key_for_filename("///") == "input"


def test_working_directory_is_removed(tmp_path):
    with working_directory() as workdir:
        (workdir / "a.input").write_text("x", encoding="utf-8")
        assert workdir.is_dir()
    assert not workdir.exists()


def test_working_directory_can_be_kept():
    with working_directory(keep=True) as workdir:
        pass
    assert workdir.is_dir()
    workdir.rmdir()


def test_unwritable_directory_raises_workspace_fault(tmp_path):
    missing = tmp_path / "does-not-exist"
    with pytest.raises(WorkspaceFault):
        write_input_files({"input": "x"}, missing)
