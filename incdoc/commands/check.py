"""Komenda: incdoc check — sprawdza, czy bloki dokumentacji są aktualne (tryb CI)."""

from __future__ import annotations

import argparse
import sys

from rich.console import Console
from rich.markup import escape

from incdoc._report import display_path, print_summary
from incdoc.commands.sync import add_common_arguments, collect, print_json

console = Console()


def run(args: argparse.Namespace) -> None:
    _, results = collect(args)

    stale = [r for r in results if r.changed]
    for result in stale:
        console.print(f"[yellow]nieaktualny[/yellow] : {escape(display_path(result.path))}")

    print_summary(console, results)

    failed = [r for r in results if not r.ok]
    if failed or stale:
        console.print(
            f"[red]BŁĄD[/red]  {len(stale)} nieaktualny(ch), {len(failed)} z błędami."
        )
    else:
        console.print(f"[green]OK[/green]  {len(results)} plik(ów) aktualnych.")

    if args.json_output:
        print_json(results, written=set())

    if failed or stale:
        sys.exit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "check",
        help="Sprawdza aktualność bloków dokumentacji (bez zapisu).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Działa jak `incdoc sync --dry-run`, ale kończy się kodem 1, gdy którykolwiek
plik wymaga aktualizacji lub zawiera błędy markerów. Przeznaczone do CI.

Przykłady:
  incdoc check
  incdoc check src --root . --json-output
        """,
    )
    add_common_arguments(p)
    p.set_defaults(func=run)
