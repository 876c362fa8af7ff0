"""
selection/ranges.py — wybór zakresu linii w pliku docelowym.

select_range(lines, start, end) -> LineRange

Reguły:
  ByLineNumber(n)     — 1 ≤ n ≤ total, inaczej E_LINE_OUT_OF_RANGE
  ByNegativeOffset(n) — tylko end: total - n  (end(-1) kończy się na
                        przedostatniej linii)
  ByText(s)           — start: pierwsza linia od początku pliku;
                        end: pierwsza linia od wyznaczonej linii startu
                        (włącznie); porównanie z linią po strip().
                        Tekst końca obecny tylko przed startem →
                        E_INVERTED_RANGE, nieobecny w ogóle → E_TEXT_NOT_FOUND
  Unbounded          — start → 1, end → total

Zakresy nie są przycinane: każde naruszenie to błąd, nigdy cichy clamp.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from markers.types import ByLineNumber, ByNegativeOffset, ByText, Selector, Unbounded


class RangeErrorCode(StrEnum):
    LINE_OUT_OF_RANGE = "E_LINE_OUT_OF_RANGE"
    TEXT_NOT_FOUND    = "E_TEXT_NOT_FOUND"
    INVERTED_RANGE    = "E_INVERTED_RANGE"


class RangeError(ValueError):
    """Nie da się wyznaczyć zakresu; `selector` wskazuje winną granicę."""

    def __init__(self, code: RangeErrorCode, message: str, selector: Selector) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.selector = selector


@dataclass(frozen=True, slots=True)
class LineRange:
    """Zakres linii 1-based, włącznie. Pusty tylko dla pustego pliku (last == 0)."""
    first: int
    last: int

    def __len__(self) -> int:
        return max(0, self.last - self.first + 1)


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def select_range(lines: list[str], start: Selector, end: Selector) -> LineRange:
    total = len(lines)

    # Pusty plik i brak ograniczeń → pusty blok zamiast błędu.
    if total == 0 and isinstance(start, Unbounded) and isinstance(end, Unbounded):
        return LineRange(first=1, last=0)

    first = _resolve_start(lines, start)
    last = _resolve_end(lines, end, first)

    if first > last:
        raise RangeError(
            RangeErrorCode.INVERTED_RANGE,
            f"Odwrócony zakres: początek w linii {first}, koniec w linii {last}.",
            end,
        )
    return LineRange(first=first, last=last)


def slice_lines(lines: list[str], line_range: LineRange) -> list[str]:
    return lines[line_range.first - 1:line_range.last]


# ---------------------------------------------------------------------------
# Granice
# ---------------------------------------------------------------------------

def _resolve_start(lines: list[str], selector: Selector) -> int:
    match selector:
        case Unbounded():
            return 1
        case ByLineNumber(line=n):
            return _checked(n, len(lines), selector)
        case ByText(text=text):
            return _find_text(lines, text, 1, selector)
        case ByNegativeOffset():
            raise RangeError(
                RangeErrorCode.LINE_OUT_OF_RANGE,
                "Ujemny offset jest dozwolony tylko dla granicy end.",
                selector,
            )
    raise TypeError(f"Nieznany selektor: {selector!r}")


def _resolve_end(lines: list[str], selector: Selector, first: int) -> int:
    total = len(lines)
    match selector:
        case Unbounded():
            return total
        case ByLineNumber(line=n):
            return _checked(n, total, selector)
        case ByNegativeOffset(offset=n):
            return _checked(total - n, total, selector)
        case ByText(text=text):
            try:
                return _find_text(lines, text, first, selector)
            except RangeError:
                earlier = _first_match(lines, text, 1)
                if earlier is None:
                    raise
                raise RangeError(
                    RangeErrorCode.INVERTED_RANGE,
                    f'Linia końca "{text}" (linia {earlier}) występuje przed '
                    f"początkiem zakresu (linia {first}).",
                    selector,
                ) from None
    raise TypeError(f"Nieznany selektor: {selector!r}")


def _checked(line: int, total: int, selector: Selector) -> int:
    if line < 1 or line > total:
        raise RangeError(
            RangeErrorCode.LINE_OUT_OF_RANGE,
            f"Linia {line} poza zakresem pliku (1–{total}).",
            selector,
        )
    return line


def _first_match(lines: list[str], text: str, from_line: int) -> int | None:
    for index in range(from_line - 1, len(lines)):
        if lines[index].strip() == text:
            return index + 1
    return None


def _find_text(lines: list[str], text: str, from_line: int, selector: Selector) -> int:
    found = _first_match(lines, text, from_line)
    if found is not None:
        return found
    where = "" if from_line == 1 else f" od linii {from_line}"
    raise RangeError(
        RangeErrorCode.TEXT_NOT_FOUND,
        f'Nie znaleziono linii "{text}"{where}.',
        selector,
    )
