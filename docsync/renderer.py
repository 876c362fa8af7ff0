"""
docsync/renderer.py — zamiana linii pliku docelowego na komentarze dokumentacyjne.

Każda linia dostaje prefiks zgodny z Kind ("/// " lub "//! ") bez
zawijania, przycinania i interpretacji markdownu. Pusta linia daje
sam prefiks bez końcowej spacji ("///"), więc podziały akapitów są
zachowane dokładnie tak, jak w źródle.
"""

from __future__ import annotations

from markers.types import Kind


def render_line(line: str, kind: Kind, indent: str = "") -> str:
    prefix = kind.doc_prefix
    if not line:
        return indent + prefix.rstrip()
    return indent + prefix + line


def render_block(
    lines: list[str],
    kind: Kind,
    indent: str = "",
    newline: str = "\n",
) -> str:
    """
    Renderuje wybrane linie jako blok komentarzy.

    Każda linia wyjściowa kończy się `newline`; pusty wybór daje pusty blok.
    """
    return "".join(render_line(line, kind, indent) + newline for line in lines)
