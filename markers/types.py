"""
markers/types.py — typy danych parsera markerów include_doc.

Kind       — styl komentarza dokumentacyjnego (/// lub //!)
Role       — rola adnotacji: start / end
Selector   — reguła wyboru linii granicznej w pliku docelowym
Annotation — pojedyncza, poprawnie sparsowana linia markera
MarkerPair — dopasowana para start/end wraz z zakresami w pliku źródłowym
MarkerError — błąd strukturalny (niesparowany / błędny marker)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import TypeAlias


# ---------------------------------------------------------------------------
# Kind / Role
# ---------------------------------------------------------------------------

class Kind(Enum):
    """
    Forma adnotacji.

    LINE_COMMENT   — `// #[include_doc(...)]`  → dokumentacja następnego elementu
    ENCLOSING_ITEM — `// #![include_doc(...)]` → dokumentacja elementu otaczającego
    """

    LINE_COMMENT   = "#["
    ENCLOSING_ITEM = "#!["

    @property
    def doc_prefix(self) -> str:
        match self:
            case Kind.LINE_COMMENT:
                return "/// "
            case Kind.ENCLOSING_ITEM:
                return "//! "


class Role(StrEnum):
    START = "start"
    END   = "end"


# ---------------------------------------------------------------------------
# Selector: wariant otagowany
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Unbounded:
    """Brak argumentu: start → linia 1, end → ostatnia linia."""

    def __str__(self) -> str:
        return "-"


@dataclass(frozen=True, slots=True)
class ByLineNumber:
    """Bezwzględny numer linii (1-based)."""
    line: int

    def __str__(self) -> str:
        return str(self.line)


@dataclass(frozen=True, slots=True)
class ByNegativeOffset:
    """Odległość od końca pliku — dozwolone tylko dla granicy end."""
    offset: int

    def __str__(self) -> str:
        return f"-{self.offset}"


@dataclass(frozen=True, slots=True)
class ByText:
    """Pierwsza linia, której treść (po strip()) równa się `text`."""
    text: str

    def __str__(self) -> str:
        return f'"{self.text}"'


Selector: TypeAlias = Unbounded | ByLineNumber | ByNegativeOffset | ByText


# ---------------------------------------------------------------------------
# Adnotacje i pary
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Span:
    """
    Zakres w tekście pliku źródłowego.

    - start, end: offsety znakowe [start, end)
    - first_line, last_line: numery linii (1-based, włącznie);
      dla pustego zakresu last_line == first_line - 1
    """
    start: int
    end: int
    first_line: int
    last_line: int

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True, slots=True)
class Annotation:
    """
    Jedna linia markera znaleziona w pliku źródłowym.

    - kind, role:  forma i rola adnotacji
    - target_path: ścieżka dokładnie tak, jak zapisana w markerze
    - selector:    argument roli (start(...) / end(...))
    - span:        cała linia markera razem ze znakiem końca linii
    - indent:      wiodące białe znaki linii markera
    - raw:         tekst linii bez znaku końca linii
    """
    kind: Kind
    role: Role
    target_path: str
    selector: Selector
    span: Span
    indent: str
    raw: str

    @property
    def line(self) -> int:
        return self.span.first_line


@dataclass(frozen=True, slots=True)
class MarkerPair:
    """
    Dopasowana para start/end dla jednego pliku docelowego.

    content_span obejmuje wyłącznie tekst pomiędzy liniami markerów —
    to jedyny fragment, który silnik podmienia.
    """
    kind: Kind
    target_path: str
    start_selector: Selector
    end_selector: Selector
    start: Annotation
    end: Annotation
    content_span: Span

    @property
    def start_marker_span(self) -> Span:
        return self.start.span

    @property
    def end_marker_span(self) -> Span:
        return self.end.span


# ---------------------------------------------------------------------------
# Błędy strukturalne
# ---------------------------------------------------------------------------

class MarkerErrorCode(StrEnum):
    """Kody błędów strukturalnych parsera."""

    UNTERMINATED_MARKER = "E_UNTERMINATED_MARKER"
    DANGLING_END        = "E_DANGLING_END"
    MISMATCHED_KIND     = "E_MISMATCHED_KIND"
    MALFORMED_MARKER    = "E_MALFORMED_MARKER"


@dataclass(slots=True)
class MarkerError:
    """
    Błąd strukturalny wykryty podczas skanowania.

    - code:        MarkerErrorCode
    - line:        numer linii markera (1-based)
    - target_path: ścieżka z markera (None gdy marker nieczytelny)
    - message:     czytelny opis
    - raw:         tekst linii markera
    """
    code: MarkerErrorCode
    line: int
    target_path: str | None
    message: str
    raw: str


@dataclass(slots=True)
class ParseResult:
    """Wynik parse_markers: pary w kolejności źródłowej + błędy."""
    pairs: list[MarkerPair]
    errors: list[MarkerError]
    annotations: list[Annotation]

    @property
    def is_valid(self) -> bool:
        return not self.errors
