# tests/test_output_collector.py
from __future__ import annotations

from adapters.output_collector import collect_outputs, list_output_files


def _touch(directory, name, content=""):
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


def test_printed_is_always_present(tmp_path):
    assert collect_outputs(tmp_path, "") == {"Printed": ""}


def test_only_marked_regular_files_are_collected(tmp_path):
    _touch(tmp_path, "input1.input", "The cat sat.")
    _touch(tmp_path, "config1.xml", "<configuration/>")
    _touch(tmp_path, "input1.input.out", "1\tThe\n")
    (tmp_path / "nested.out").mkdir()

    response = collect_outputs(tmp_path, "printed text")
    assert response == {"Printed": "printed text", "output-file-1": "1\tThe\n"}


def test_output_files_are_numbered_by_name(tmp_path):
    _touch(tmp_path, "b.input.out", "second")
    _touch(tmp_path, "a.input.out", "first")
    _touch(tmp_path, "c.input.out", "third")

    response = collect_outputs(tmp_path, "")
    assert [response[f"output-file-{i}"] for i in (1, 2, 3)] == ["first", "second", "third"]


def test_listing_order_mode_keeps_every_file(tmp_path):
    for name in ("x.out", "y.out"):
        _touch(tmp_path, name)
    files = list_output_files(tmp_path, sort=False)
    assert sorted(p.name for p in files) == ["x.out", "y.out"]


def test_custom_marker(tmp_path):
    _touch(tmp_path, "doc.nlp", "tokens")
    _touch(tmp_path, "doc.out", "ignored")
    assert collect_outputs(tmp_path, "", marker=".nlp") == {"Printed": "", "output-file-1": "tokens"}
