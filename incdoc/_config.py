"""Domyślne ustawienia CLI — konfiguracja przez zmienne środowiskowe."""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass


@dataclass(slots=True)
class Settings:
    root:       pathlib.Path
    extensions: tuple[str, ...]
    jobs:       int


def get_settings() -> Settings:
    """Odczytuje INCDOC_*; niepoprawna wartość → ValueError z opisem zmiennej."""
    extensions = os.getenv("INCDOC_EXTENSIONS", ".rs")
    return Settings(
        root       = pathlib.Path(os.getenv("INCDOC_ROOT", ".")),
        extensions = tuple(e.strip() for e in extensions.split(",") if e.strip()),
        jobs       = _parse_jobs(os.getenv("INCDOC_JOBS", "1")),
    )


def _parse_jobs(raw: str) -> int:
    try:
        jobs = int(raw)
    except ValueError:
        jobs = 0
    if jobs < 1:
        raise ValueError(f"INCDOC_JOBS musi być dodatnią liczbą całkowitą, otrzymano: {raw!r}")
    return jobs
