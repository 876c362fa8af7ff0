"""
markers/parser.py — skanowanie pliku źródłowego w poszukiwaniu par markerów.

Publiczne API:
  split_lines(text)       -> list[str]   linie z zachowanymi znakami końca linii
  find_annotations(text)  -> list[Annotation | MarkerError]
  parse_markers(text)     -> ParseResult

Dopasowanie par: jedno przejście w przód z mapą oczekujących startów
kluczowaną ścieżką docelową. Start zamyka najbliższy następny end z tą
samą ścieżką; markery dla różnych plików mogą się dowolnie przeplatać.
Zagnieżdżenie markerów dla tego samego pliku nie jest wspierane.
"""

from __future__ import annotations

from .patterns import CANDIDATE_RE, MARKER_RE
from .types import (
    Annotation,
    ByLineNumber,
    ByNegativeOffset,
    ByText,
    Kind,
    MarkerError,
    MarkerErrorCode,
    MarkerPair,
    ParseResult,
    Role,
    Selector,
    Span,
    Unbounded,
)


# ---------------------------------------------------------------------------
# Linie
# ---------------------------------------------------------------------------

def split_lines(text: str) -> list[str]:
    """
    Dzieli tekst na linie, zachowując znaki końca linii.

    Dzielimy wyłącznie po '\\n' ('\\r\\n' zostaje na końcu linii), więc
    "".join(split_lines(text)) == text dla dowolnego tekstu.
    """
    if not text:
        return []
    parts = text.split("\n")
    lines = [p + "\n" for p in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def strip_eol(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


# ---------------------------------------------------------------------------
# Pojedyncze adnotacje
# ---------------------------------------------------------------------------

def find_annotations(text: str) -> list[Annotation | MarkerError]:
    """Zwraca wszystkie linie markerów w kolejności źródłowej (błędne jako MarkerError)."""
    found: list[Annotation | MarkerError] = []
    offset = 0
    for lineno, line in enumerate(split_lines(text), start=1):
        body = strip_eol(line)
        if CANDIDATE_RE.match(body):
            span = Span(
                start=offset,
                end=offset + len(line),
                first_line=lineno,
                last_line=lineno,
            )
            found.append(_parse_annotation(body, span))
        offset += len(line)
    return found


def _parse_annotation(body: str, span: Span) -> Annotation | MarkerError:
    m = MARKER_RE.match(body)
    if m is None:
        return _malformed(
            span.first_line, None, body,
            "Niepoprawna składnia adnotacji include_doc "
            '(oczekiwano np. include_doc("plik.md", start)).',
        )

    path = m.group("path")
    role = Role(m.group("role"))
    if not path:
        return _malformed(span.first_line, path, body, "Pusta ścieżka pliku docelowego.")

    selector: Selector
    if m.group("text") is not None:
        selector = ByText(m.group("text"))
    elif m.group("num") is not None:
        value = int(m.group("num"))
        if m.group("neg"):
            if role is Role.START:
                return _malformed(
                    span.first_line, path, body,
                    f"Ujemny offset (-{value}) jest dozwolony tylko dla end.",
                )
            selector = ByNegativeOffset(value)
        else:
            selector = ByLineNumber(value)
    else:
        selector = Unbounded()

    return Annotation(
        kind=Kind.ENCLOSING_ITEM if m.group("bang") else Kind.LINE_COMMENT,
        role=role,
        target_path=path,
        selector=selector,
        span=span,
        indent=m.group("indent"),
        raw=body,
    )


def _malformed(line: int, path: str | None, raw: str, message: str) -> MarkerError:
    return MarkerError(
        code=MarkerErrorCode.MALFORMED_MARKER,
        line=line,
        target_path=path,
        message=message,
        raw=raw,
    )


# ---------------------------------------------------------------------------
# Parowanie
# ---------------------------------------------------------------------------

def parse_markers(text: str) -> ParseResult:
    """
    Paruje adnotacje start/end.

    Błędy (zbierane, nie przerywają skanu):
      E_UNTERMINATED_MARKER — start bez następnego end (także gdy przed
                              end pojawi się kolejny start tego samego pliku)
      E_DANGLING_END        — end bez oczekującego startu
      E_MISMATCHED_KIND     — start i end tego samego pliku w różnych formach
      E_MALFORMED_MARKER    — linia wyglądająca na marker, ale niepoprawna
    """
    annotations: list[Annotation] = []
    pairs: list[MarkerPair] = []
    errors: list[MarkerError] = []
    pending: dict[str, Annotation] = {}

    for item in find_annotations(text):
        if isinstance(item, MarkerError):
            errors.append(item)
            continue
        annotations.append(item)

        if item.role is Role.START:
            previous = pending.get(item.target_path)
            if previous is not None:
                errors.append(_unterminated(
                    previous,
                    f"Kolejny start dla '{previous.target_path}' w linii {item.line} "
                    f"przed end — zagnieżdżanie markerów nie jest wspierane.",
                ))
            pending[item.target_path] = item
            continue

        start = pending.pop(item.target_path, None)
        if start is None:
            errors.append(MarkerError(
                code=MarkerErrorCode.DANGLING_END,
                line=item.line,
                target_path=item.target_path,
                message=f"end dla '{item.target_path}' bez wcześniejszego start.",
                raw=item.raw,
            ))
        elif start.kind is not item.kind:
            errors.append(MarkerError(
                code=MarkerErrorCode.MISMATCHED_KIND,
                line=item.line,
                target_path=item.target_path,
                message=(
                    f"Forma end ({item.kind.value}) nie zgadza się z formą start "
                    f"({start.kind.value}) z linii {start.line}."
                ),
                raw=item.raw,
            ))
        else:
            pairs.append(_make_pair(start, item))

    for start in pending.values():
        errors.append(_unterminated(
            start, f"start dla '{start.target_path}' bez odpowiadającego end.",
        ))

    pairs.sort(key=lambda p: p.start.line)
    errors.sort(key=lambda e: e.line)
    return ParseResult(pairs=pairs, errors=errors, annotations=annotations)


def _unterminated(start: Annotation, message: str) -> MarkerError:
    return MarkerError(
        code=MarkerErrorCode.UNTERMINATED_MARKER,
        line=start.line,
        target_path=start.target_path,
        message=message,
        raw=start.raw,
    )


def _make_pair(start: Annotation, end: Annotation) -> MarkerPair:
    return MarkerPair(
        kind=start.kind,
        target_path=start.target_path,
        start_selector=start.selector,
        end_selector=end.selector,
        start=start,
        end=end,
        content_span=Span(
            start=start.span.end,
            end=end.span.start,
            first_line=start.line + 1,
            last_line=end.line - 1,
        ),
    )
