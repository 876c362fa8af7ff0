"""
markers/patterns.py — wzorce regex dla adnotacji include_doc.

Adnotacja zajmuje całą linię komentarza, np.:

    // #[include_doc("docs/example.md", start("# Przykład"))]
    //! treść generowana
    // #[include_doc("docs/example.md", end(-1))]

CANDIDATE_RE rozpoznaje każdą linię, która *wygląda* na adnotację;
MARKER_RE dopasowuje wyłącznie poprawną gramatykę. Linia pasująca do
pierwszego, ale nie do drugiego, jest zgłaszana jako błędny marker.
"""

from __future__ import annotations

import re

# Białe znaki dozwolone między tokenami (bez znaku nowej linii).
_WS = r"[ \t]*"


def _p(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern.replace("~", _WS))


CANDIDATE_RE = _p(r"^~//~#!?\[~include_doc\b")

MARKER_RE = _p(
    r'^(?P<indent>[ \t]*)//~#(?P<bang>!?)\[~include_doc~'
    r'\(~"(?P<path>[^"]*)"~,~(?P<role>start|end)~'
    r'(?:\(~(?:"(?P<text>[^"]*)"|(?P<neg>-)?(?P<num>[0-9]+))~\)~)?'
    r'\)~\]~$'
)
