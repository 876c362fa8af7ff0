"""
docsync/loader.py — operacje plikowe używane przez silnik i CLI.

Publiczne API:
  read_lines(path)                       -> list[str]   (bez końców linii)
  read_text(path)                        -> str
  write_text(path, text)                 -> None
  discover_sources(paths, extensions)    -> list[Path]

Pliki czytamy i zapisujemy jako UTF-8 bez translacji końców linii
(newline=""), żeby przepisany plik różnił się od oryginału wyłącznie
w podmienionych blokach.
"""

from __future__ import annotations

import os
import pathlib
from typing import Iterable

from markers import split_lines, strip_eol

# Pomijane zawsze: katalogi ukryte (.git, .hg, ...). Te nazwy tylko
# bezpośrednio w przeszukiwanym katalogu (wyniki kompilacji cargo).
TOP_LEVEL_SKIP_DIR_NAMES = {"target"}


def read_text(path: pathlib.Path) -> str:
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: pathlib.Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def read_lines(path: pathlib.Path) -> list[str]:
    """Linie pliku docelowego bez znaków końca linii ('\\n' i '\\r\\n')."""
    return [strip_eol(line) for line in split_lines(read_text(path))]


# ---------------------------------------------------------------------------
# Wyszukiwanie plików źródłowych
# ---------------------------------------------------------------------------

def _normalize_extensions(extensions: Iterable[str]) -> set[str]:
    return {e if e.startswith(".") else f".{e}" for e in extensions if e}


def _walk(directory: pathlib.Path, extensions: set[str]) -> Iterable[pathlib.Path]:
    for current, dirnames, filenames in os.walk(directory):
        top_level = pathlib.Path(current) == directory
        dirnames[:] = sorted(
            d for d in dirnames
            if not d.startswith(".")
            and not (top_level and d in TOP_LEVEL_SKIP_DIR_NAMES)
        )
        for name in sorted(filenames):
            if pathlib.Path(name).suffix in extensions:
                yield pathlib.Path(current) / name


def discover_sources(
    paths: Iterable[str | pathlib.Path],
    extensions: Iterable[str] = (".rs",),
) -> list[pathlib.Path]:
    """
    Zwraca pliki źródłowe do przetworzenia, bez duplikatów.

    Katalogi są przeszukiwane rekurencyjnie (z pominięciem katalogów
    ukrytych i TOP_LEVEL_SKIP_DIR_NAMES na pierwszym poziomie); pliki
    podane jawnie są brane bez względu na rozszerzenie. Brakująca
    ścieżka → FileNotFoundError.
    """
    exts = _normalize_extensions(extensions)
    found: list[pathlib.Path] = []
    seen: set[pathlib.Path] = set()

    for raw in paths:
        path = pathlib.Path(raw)
        if path.is_dir():
            candidates: Iterable[pathlib.Path] = _walk(path, exts)
        elif path.is_file():
            candidates = [path]
        else:
            raise FileNotFoundError(f"Brak pliku lub katalogu: {path}")

        for candidate in candidates:
            key = candidate.resolve()
            if key not in seen:
                seen.add(key)
                found.append(candidate)

    return found
