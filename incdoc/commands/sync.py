"""Komenda: incdoc sync — podmienia bloki dokumentacji między markerami include_doc."""

from __future__ import annotations

import argparse
import dataclasses
import json
import pathlib
import sys

from rich.console import Console
from rich.markup import escape

from docsync import (
    FileResult,
    discover_sources,
    read_lines,
    sync_many,
    write_result,
)
from incdoc._config import get_settings
from incdoc._report import display_path, print_error, print_summary

console = Console()


# ---------------------------------------------------------------------------
# Wspólna logika (sync / check)
# ---------------------------------------------------------------------------

def _read_lines_verbose(path: pathlib.Path) -> list[str]:
    console.print(f"[dim]reading {escape(display_path(path))}[/dim]")
    return read_lines(path)


def collect(args: argparse.Namespace) -> tuple[pathlib.Path, list[FileResult]]:
    """Wyszukuje pliki źródłowe i synchronizuje je w pamięci (bez zapisu)."""
    try:
        settings = get_settings()
    except ValueError as exc:
        console.print(f"[red]Błędna konfiguracja:[/red] {escape(str(exc))}")
        raise SystemExit(1)
    root = pathlib.Path(args.root) if args.root else settings.root
    extensions = args.ext or list(settings.extensions)
    jobs = args.jobs if args.jobs is not None else settings.jobs

    if not root.is_dir():
        console.print(f"[red]Katalog root nie istnieje:[/red] {escape(str(root))}")
        raise SystemExit(1)

    try:
        sources = discover_sources(args.paths or [root], extensions)
    except FileNotFoundError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1)

    load = _read_lines_verbose if args.verbose else read_lines

    try:
        results = sync_many(sources, root, jobs=jobs, load=load)
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"[red]Błąd odczytu pliku źródłowego:[/red] {escape(str(exc))}")
        raise SystemExit(1)

    for result in results:
        for error in result.errors:
            print_error(console, error)

    return root, results


def print_json(results: list[FileResult], *, written: set[pathlib.Path]) -> None:
    out = {
        "ok": all(r.ok for r in results),
        "files": [
            {
                "path":    str(r.path),
                "pairs":   r.pairs,
                "changed": r.changed,
                "written": r.path in written,
                "errors":  [dataclasses.asdict(e) for e in r.errors],
            }
            for r in results
        ],
    }
    print(json.dumps(out, ensure_ascii=False, indent=2, default=str))


def add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "paths",
        nargs="*",
        metavar="ŚCIEŻKA",
        help="Pliki lub katalogi do przetworzenia (domyślnie: root).",
    )
    p.add_argument(
        "--root",
        default=None,
        metavar="KATALOG",
        help="Granica dla ścieżek w markerach (domyślnie: $INCDOC_ROOT lub bieżący katalog).",
    )
    p.add_argument(
        "--ext",
        action="append",
        default=None,
        metavar="ROZSZERZENIE",
        help="Rozszerzenie plików źródłowych; można podać wielokrotnie (domyślnie: .rs).",
    )
    p.add_argument(
        "--jobs", "-j",
        type=int,
        default=None,
        metavar="N",
        help="Liczba równoległych wątków (domyślnie: $INCDOC_JOBS lub 1).",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Wypisuj każdy czytany plik docelowy.",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz raport jako JSON na stdout.",
    )


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    root, results = collect(args)

    written: set[pathlib.Path] = set()
    for result in results:
        if not result.changed:
            continue
        console.print(f"update : {escape(display_path(result.path))}")
        if not args.dry_run and write_result(result):
            written.add(result.path)

    print_summary(console, results)

    failed = [r for r in results if not r.ok]
    if failed:
        console.print(
            f"[red]BŁĄD[/red]  {len(failed)} plik(ów) z błędami — nie zostały zmienione."
        )
    else:
        console.print(f"[green]OK[/green]  {len(results)} plik(ów) przetworzonych.")

    if args.json_output:
        print_json(results, written=written)

    if failed:
        sys.exit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "sync",
        help="Synchronizuje bloki dokumentacji z plikami markdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyszukuje pary markerów include_doc w plikach źródłowych i zastępuje
treść między nimi liniami pliku docelowego jako komentarze /// lub //!.
Plik jest przepisywany tylko wtedy, gdy wszystkie jego pary się powiodły.

Markery:
  // #[include_doc("docs/intro.md", start)]
  // #[include_doc("docs/intro.md", end)]

  // #![include_doc("README.md", start("## Przykład"))]
  // #![include_doc("README.md", end(-1))]

Przykłady:
  incdoc sync
  incdoc sync src --root .
  incdoc sync src/lib.rs --dry-run
  incdoc sync --ext rs --ext rs.in -j 4
        """,
    )
    add_common_arguments(p)
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Nie zapisuj plików, tylko pokaż, które zostałyby zmienione.",
    )
    p.set_defaults(func=run)
