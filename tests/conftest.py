# tests/conftest.py
# ============================================================
# Fixtures comunes de pytest:
#   - settings: AppSettings aislado (sin .env) con lexica/models en tmp_path
#   - fake_engine_command: script Python que imita a NLPDecode
#   - service: DecodeService conectado al motor falso
# ============================================================

from __future__ import annotations

import sys
from pathlib import Path

import pytest


# ---------- Ensure src/ is importable ----------
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

FIXTURES = Path(__file__).resolve().parent / "fixtures"

from adapters.engine_runner import SubprocessEngine  # noqa: E402
from core.config import AppSettings  # noqa: E402
from core.services.decode_pipeline import DecodeService  # noqa: E402


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        lexica_dir=tmp_path / "lexica",
        models_dir=tmp_path / "models",
    )


@pytest.fixture
def fake_engine_command() -> list[str]:
    return [sys.executable, str(FIXTURES / "fake_engine.py")]


@pytest.fixture
def service(settings: AppSettings, fake_engine_command: list[str]) -> DecodeService:
    engine = SubprocessEngine(settings, command=fake_engine_command)
    return DecodeService(settings, engine=engine)
