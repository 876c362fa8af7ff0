"""
selection/paths.py — rozwiązywanie ścieżki pliku docelowego względem root.

Sprawdzenie jest czysto leksykalne (os.path.normpath): dowiązania
symboliczne nie są rozwiązywane, więc link wewnątrz root wskazujący poza
root przejdzie kontrolę. To znane ograniczenie, nie gwarancja
bezpieczeństwa.
"""

from __future__ import annotations

import os
import pathlib


class PathEscapesRootError(ValueError):
    """Znormalizowana ścieżka leży poza katalogiem root."""

    def __init__(self, target_path: str, resolved: pathlib.Path, root: pathlib.Path) -> None:
        super().__init__(
            f"Ścieżka '{target_path}' wskazuje poza root: {resolved} (root: {root})."
        )
        self.target_path = target_path
        self.resolved = resolved
        self.root = root


def normalize(path: str | pathlib.Path) -> pathlib.Path:
    """Absolutna ścieżka z rozwiązanymi segmentami '.' i '..' (bez dostępu do dysku)."""
    return pathlib.Path(os.path.normpath(os.path.abspath(path)))


def resolve_target(
    target_path: str,
    source_dir: str | pathlib.Path,
    root: str | pathlib.Path,
) -> pathlib.Path:
    """
    Zwraca absolutną, znormalizowaną ścieżkę pliku docelowego.

    Ścieżka względna jest liczona od katalogu pliku źródłowego; wynik musi
    być równy root albo leżeć pod nim, inaczej PathEscapesRootError.
    """
    root_path = normalize(root)
    resolved = normalize(pathlib.Path(source_dir) / target_path)

    if resolved != root_path and root_path not in resolved.parents:
        raise PathEscapesRootError(target_path, resolved, root_path)
    return resolved
