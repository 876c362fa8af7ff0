"""
incdoc — narzędzie CLI do synchronizacji dokumentacji z plikami markdown.

Użycie:
  incdoc <komenda> [opcje]

Komendy:
  sync     Podmienia bloki między markerami include_doc treścią plików markdown.
  check    Sprawdza, czy bloki są aktualne (kod 1 gdy nie — tryb CI).
  markers  Listuje pary markerów i błędy strukturalne.

Konfiguracja (zmienne środowiskowe, nadpisywane flagami):
  INCDOC_ROOT        granica dla ścieżek w markerach (domyślnie: .)
  INCDOC_EXTENSIONS  rozszerzenia plików źródłowych, po przecinku (domyślnie: .rs)
  INCDOC_JOBS        liczba równoległych wątków (domyślnie: 1)
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252; wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from incdoc.commands import check as cmd_check
from incdoc.commands import markers as cmd_markers
from incdoc.commands import sync as cmd_sync

VERSION = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="incdoc",
        description="incdoc — synchronizacja komentarzy dokumentacyjnych z plikami markdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"incdoc {VERSION}"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_sync.add_parser(subparsers)
    cmd_check.add_parser(subparsers)
    cmd_markers.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
