"""
Wspólna konfiguracja testów.
Testy uruchamiane przez `pytest` lokalnie i w CI; muszą być deterministyczne.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Zmienne INCDOC_* z otoczenia nie mogą wpływać na testy."""

    for key in ("INCDOC_ROOT", "INCDOC_EXTENSIONS", "INCDOC_JOBS"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def write(tmp_path: Path) -> Callable[[str, str], Path]:
    """Zapisuje plik względem tmp_path (z katalogami pośrednimi) bez translacji końców linii."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write
