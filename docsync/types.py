"""
docsync/types.py — kody błędów i struktury wyniku synchronizacji.

SyncError  — pojedynczy błąd pary markerów (lub markera) z kodem,
    lokalizacją w pliku źródłowym, ścieżką docelową i selektorem.
FileResult — wynik dla jednego pliku źródłowego: nowy tekst albo lista
    błędów (wtedy plik nie jest przepisywany).
"""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from enum import StrEnum


class ErrorCode(StrEnum):
    """Stałe kody błędów synchronizacji."""

    # Struktura markerów
    UNTERMINATED_MARKER   = "E_UNTERMINATED_MARKER"
    DANGLING_END          = "E_DANGLING_END"
    MISMATCHED_KIND       = "E_MISMATCHED_KIND"
    MALFORMED_MARKER      = "E_MALFORMED_MARKER"
    OVERLAPPING_PAIRS     = "E_OVERLAPPING_PAIRS"

    # Ścieżki
    PATH_ESCAPES_ROOT     = "E_PATH_ESCAPES_ROOT"
    TARGET_FILE_NOT_FOUND = "E_TARGET_FILE_NOT_FOUND"
    TARGET_UNREADABLE     = "E_TARGET_UNREADABLE"

    # Zakres linii
    LINE_OUT_OF_RANGE     = "E_LINE_OUT_OF_RANGE"
    TEXT_NOT_FOUND        = "E_TEXT_NOT_FOUND"
    INVERTED_RANGE        = "E_INVERTED_RANGE"


@dataclass(slots=True)
class SyncError:
    """
    Pojedynczy błąd synchronizacji.

    - code:        stały identyfikator klasy błędu (ErrorCode)
    - source:      plik źródłowy z markerem
    - line:        numer linii markera (1-based)
    - target_path: ścieżka z markera (None gdy marker nieczytelny)
    - selector:    tekstowa postać winnego selektora (None gdy nie dotyczy)
    - message:     czytelny opis błędu
    - raw:         linia markera, do wyświetlenia w raporcie
    """

    code: ErrorCode
    source: pathlib.Path
    line: int
    target_path: str | None
    message: str
    selector: str | None = None
    raw: str = ""


@dataclass(slots=True)
class FileResult:
    """
    Wynik synchronizacji jednego pliku.

    - path:     plik źródłowy
    - original: tekst przed synchronizacją
    - text:     tekst po synchronizacji (== original gdy są błędy)
    - errors:   wszystkie błędy zebrane dla pliku
    - pairs:    liczba znalezionych par markerów
    """

    path: pathlib.Path
    original: str
    text: str
    errors: list[SyncError] = field(default_factory=list)
    pairs: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def changed(self) -> bool:
        return self.ok and self.text != self.original
