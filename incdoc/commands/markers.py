"""Komenda: incdoc markers — listowanie par markerów include_doc."""

from __future__ import annotations

import argparse
import pathlib
import sys

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from docsync import discover_sources, read_text
from incdoc._config import get_settings
from incdoc._report import display_path
from markers import Kind, parse_markers

console = Console(width=200)

# Kolory per kind
KIND_STYLE: dict[Kind, str] = {
    Kind.LINE_COMMENT:   "cyan",
    Kind.ENCLOSING_ITEM: "magenta",
}


def run(args: argparse.Namespace) -> None:
    try:
        settings = get_settings()
    except ValueError as exc:
        console.print(f"[red]Błędna konfiguracja:[/red] {escape(str(exc))}")
        raise SystemExit(1)
    extensions = args.ext or list(settings.extensions)

    try:
        sources = discover_sources(args.paths or [settings.root], extensions)
    except FileNotFoundError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1)

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
    )
    table.add_column("PLIK",   no_wrap=True, style="bold")
    table.add_column("LINIE",  justify="right", no_wrap=True)
    table.add_column("KIND",   no_wrap=True)
    table.add_column("TARGET", no_wrap=True)
    table.add_column("START",  no_wrap=True)
    table.add_column("END",    no_wrap=True)

    pair_count = 0
    error_count = 0
    for source in sources:
        try:
            text = read_text(source)
        except (OSError, UnicodeDecodeError) as exc:
            console.print(f"[red]Błąd odczytu:[/red] {escape(str(exc))}")
            raise SystemExit(1)

        parsed = parse_markers(text)
        rel = escape(display_path(pathlib.Path(source)))
        for pair in parsed.pairs:
            pair_count += 1
            style = KIND_STYLE[pair.kind]
            table.add_row(
                rel,
                f"{pair.start.line}–{pair.end.line}",
                f"[{style}]{escape(pair.kind.doc_prefix.strip())}[/{style}]",
                escape(pair.target_path),
                escape(str(pair.start_selector)),
                escape(str(pair.end_selector)),
            )
        for error in parsed.errors:
            error_count += 1
            table.add_row(
                rel,
                str(error.line),
                f"[red]{error.code}[/red]",
                escape(error.target_path or "-"),
                escape(error.message),
                "",
            )

    console.print()
    console.print(table)
    console.print(
        f"  [dim]{pair_count} par, {error_count} błędów w {len(sources)} plikach[/dim]\n"
    )

    if error_count:
        sys.exit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "markers",
        help="Listuje pary markerów include_doc i błędy strukturalne.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Skanuje pliki źródłowe i wyświetla znalezione pary markerów (bez czytania
plików docelowych). Błędy strukturalne są wyświetlane w tej samej tabeli.

Przykłady:
  incdoc markers
  incdoc markers src/lib.rs
  incdoc markers src --ext rs
        """,
    )
    p.add_argument(
        "paths",
        nargs="*",
        metavar="ŚCIEŻKA",
        help="Pliki lub katalogi (domyślnie: $INCDOC_ROOT lub bieżący katalog).",
    )
    p.add_argument(
        "--ext",
        action="append",
        default=None,
        metavar="ROZSZERZENIE",
        help="Rozszerzenie plików źródłowych; można podać wielokrotnie (domyślnie: .rs).",
    )
    p.set_defaults(func=run)
