# tests/test_resources_catalog.py
from __future__ import annotations

import pytest

from core import resources_catalog
from core.resources_catalog import missing_resource_files, resolve


@pytest.mark.parametrize(
    ("category", "name", "file_name", "field"),
    [
        ("ambiguity", "simplified", "en-ambiguity-classes-simplified.xz", "word_form_simplified"),
        ("clusters", "brown-simplified-lc", "en-brown-clusters-simplified-lowercase.xz", "word_form_simplified_lowercase"),
        ("gazetteers", "simplified-lowercase", "en-named-entity-gazetteers-simplified-lowercase.xz", "word_form_simplified_lowercase"),
        ("embeddings", "undigitalized", "en-word-embeddings-undigitalized.xz", "word_form_undigitalized"),
        ("models", "dep", "en-dep.xz", None),
    ],
)
def test_resolve_known_names(category, name, file_name, field):
    entry = resolve(category, name)
    assert entry is not None
    assert (entry.file_name, entry.field) == (file_name, field)


def test_unknown_name_or_category_is_absent():
    assert resolve("ambiguity", "bogus") is None
    assert resolve("nope", "simplified") is None


def test_same_symbolic_name_differs_per_category():
    assert resolve("ambiguity", "simplified").file_name != resolve("gazetteers", "simplified").file_name


def test_paths_live_under_configured_roots(settings):
    lexicon = resolve("clusters", "brown-twit-lc")
    model = resolve("models", "pos")
    assert lexicon.path(settings) == settings.lexica_dir / "en-brown-clusters-twit-lowercase.xz"
    assert model.path(settings) == settings.models_dir / "en-pos.xz"


def test_missing_resource_files(settings):
    total = len(list(resources_catalog.iter_entries()))
    assert len(missing_resource_files(settings)) == total

    settings.models_dir.mkdir(parents=True)
    (settings.models_dir / "en-pos.xz").write_bytes(b"")
    missing = missing_resource_files(settings)
    assert len(missing) == total - 1
    assert settings.models_dir / "en-pos.xz" not in missing
