"""
docsync/engine.py — synchronizacja bloków dokumentacji w plikach źródłowych.

Publiczne API:
  sync_text(text, source, root, load)        -> FileResult
  sync_file(path, root, load)                -> FileResult
  sync_many(paths, root, jobs, load)         -> list[FileResult]
  write_result(result)                       -> bool

Przebieg dla jednego pliku:
  parse_markers → dla każdej pary: resolve_target → load → select_range
  → render_block → podmiana content_span.

Pary są przetwarzane w kolejności źródłowej i niezależnie od siebie:
wynik pary zależy wyłącznie od treści jej pliku docelowego. Błędy
wszystkich par są zbierane; jeśli jest choć jeden, tekst pliku zostaje
bez zmian.
"""

from __future__ import annotations

import pathlib
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable

from markers import MarkerError, MarkerPair, Span, parse_markers
from selection import (
    PathEscapesRootError,
    RangeError,
    resolve_target,
    select_range,
    slice_lines,
)

from .loader import read_lines, read_text, write_text
from .renderer import render_block
from .types import ErrorCode, FileResult, SyncError

Loader = Callable[[pathlib.Path], list[str]]


class _PairFailed(Exception):
    def __init__(self, error: SyncError) -> None:
        super().__init__(error.message)
        self.error = error


# ---------------------------------------------------------------------------
# Jeden plik
# ---------------------------------------------------------------------------

def sync_text(
    text: str,
    source: str | pathlib.Path,
    root: str | pathlib.Path,
    load: Loader = read_lines,
) -> FileResult:
    """
    Zwraca zsynchronizowany tekst pliku `source` albo listę błędów.

    Args:
        text:   pełny tekst pliku źródłowego
        source: ścieżka pliku źródłowego (względne ścieżki markerów liczone
                są od jego katalogu)
        root:   katalog, poza który ścieżki docelowe nie mogą wychodzić
        load:   funkcja path -> linie pliku docelowego (bez końców linii)
    """
    source = pathlib.Path(source)
    parsed = parse_markers(text)

    errors = [_from_marker_error(e, source) for e in parsed.errors]
    marker_lines = {a.line for a in parsed.annotations}
    marker_lines.update(e.line for e in parsed.errors)

    cache: dict[pathlib.Path, list[str]] = {}

    def cached_load(path: pathlib.Path) -> list[str]:
        if path not in cache:
            cache[path] = load(path)
        return cache[path]

    replacements: list[tuple[Span, str]] = []
    for pair in parsed.pairs:
        try:
            block = _sync_pair(pair, text, source, root, marker_lines, cached_load)
        except _PairFailed as failed:
            errors.append(failed.error)
            continue
        replacements.append((pair.content_span, block))

    errors.sort(key=lambda e: e.line)
    if errors:
        return FileResult(
            path=source, original=text, text=text,
            errors=errors, pairs=len(parsed.pairs),
        )

    return FileResult(
        path=source,
        original=text,
        text=_splice(text, replacements),
        pairs=len(parsed.pairs),
    )


def sync_file(
    path: str | pathlib.Path,
    root: str | pathlib.Path,
    load: Loader = read_lines,
) -> FileResult:
    path = pathlib.Path(path)
    return sync_text(read_text(path), path, root, load)


def sync_many(
    paths: Iterable[str | pathlib.Path],
    root: str | pathlib.Path,
    jobs: int = 1,
    load: Loader = read_lines,
) -> list[FileResult]:
    """
    Synchronizuje wiele plików, opcjonalnie równolegle.

    Pliki nie dzielą stanu, więc każdy trafia do osobnego zadania;
    wyniki są zwracane w kolejności wejściowej po zakończeniu wszystkich.
    """
    paths = list(paths)
    if jobs <= 1 or len(paths) <= 1:
        return [sync_file(p, root, load) for p in paths]

    with ThreadPoolExecutor(max_workers=jobs) as pool:
        return list(pool.map(lambda p: sync_file(p, root, load), paths))


def write_result(result: FileResult) -> bool:
    """Zapisuje plik tylko gdy wszystkie pary się powiodły i treść się zmieniła."""
    if not result.changed:
        return False
    write_text(result.path, result.text)
    return True


# ---------------------------------------------------------------------------
# Jedna para
# ---------------------------------------------------------------------------

def _sync_pair(
    pair: MarkerPair,
    text: str,
    source: pathlib.Path,
    root: str | pathlib.Path,
    marker_lines: set[int],
    load: Loader,
) -> str:
    content = pair.content_span
    inside = sorted(
        line for line in marker_lines
        if content.first_line <= line <= content.last_line
    )
    if inside:
        raise _fail(
            pair, source, ErrorCode.OVERLAPPING_PAIRS,
            f"Między markerami '{pair.target_path}' (linie {pair.start.line}–{pair.end.line}) "
            f"leży inny marker (linia {inside[0]}); jego linia zostałaby nadpisana.",
        )

    try:
        path = resolve_target(pair.target_path, source.parent, root)
    except PathEscapesRootError as exc:
        raise _fail(pair, source, ErrorCode.PATH_ESCAPES_ROOT, str(exc)) from exc

    try:
        lines = load(path)
    except FileNotFoundError as exc:
        raise _fail(
            pair, source, ErrorCode.TARGET_FILE_NOT_FOUND,
            f"Brak pliku docelowego: {path}",
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise _fail(
            pair, source, ErrorCode.TARGET_UNREADABLE,
            f"Nie można odczytać pliku {path}: {exc}",
        ) from exc

    try:
        line_range = select_range(lines, pair.start_selector, pair.end_selector)
    except RangeError as exc:
        raise _fail(
            pair, source, ErrorCode(exc.code.value), exc.message,
            selector=exc.selector,
        ) from exc

    return render_block(
        slice_lines(lines, line_range),
        pair.kind,
        indent=pair.start.indent,
        newline=_newline_of(text, pair.start_marker_span),
    )


def _fail(
    pair: MarkerPair,
    source: pathlib.Path,
    code: ErrorCode,
    message: str,
    selector: object | None = None,
) -> _PairFailed:
    # Błąd selektora wskazujemy linią markera, z którego pochodzi.
    marker = pair.end if selector is not None and selector is pair.end_selector else pair.start
    return _PairFailed(SyncError(
        code=code,
        source=source,
        line=marker.line,
        target_path=pair.target_path,
        message=message,
        selector=str(selector) if selector is not None else None,
        raw=marker.raw,
    ))


def _from_marker_error(error: MarkerError, source: pathlib.Path) -> SyncError:
    return SyncError(
        code=ErrorCode(error.code.value),
        source=source,
        line=error.line,
        target_path=error.target_path,
        message=error.message,
        raw=error.raw,
    )


# ---------------------------------------------------------------------------
# Podmiana tekstu
# ---------------------------------------------------------------------------

def _newline_of(text: str, marker_span: Span) -> str:
    return "\r\n" if text[marker_span.start:marker_span.end].endswith("\r\n") else "\n"


def _splice(text: str, replacements: list[tuple[Span, str]]) -> str:
    parts: list[str] = []
    cursor = 0
    for span, block in sorted(replacements, key=lambda r: r[0].start):
        parts.append(text[cursor:span.start])
        parts.append(block)
        cursor = span.end
    parts.append(text[cursor:])
    return "".join(parts)
