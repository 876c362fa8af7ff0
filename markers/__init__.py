"""
markers — parser adnotacji include_doc w plikach źródłowych.

Interfejs publiczny:
    parse_markers(text)    — pary start/end + błędy strukturalne
    find_annotations(text) — pojedyncze linie markerów
    split_lines(text)      — podział tekstu z zachowaniem końców linii
    Kind, Role, MarkerPair, Annotation, Span, MarkerError, MarkerErrorCode
    Selector: Unbounded | ByLineNumber | ByNegativeOffset | ByText

Typowe użycie:
    from markers import parse_markers

    result = parse_markers(source_text)
    for err in result.errors:
        print(err.code, err.line, err.message)
    for pair in result.pairs:
        print(pair.target_path, pair.start_selector, pair.end_selector)
"""

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
from .parser import find_annotations, parse_markers, split_lines, strip_eol

__all__ = [
    "Annotation",
    "ByLineNumber",
    "ByNegativeOffset",
    "ByText",
    "Kind",
    "MarkerError",
    "MarkerErrorCode",
    "MarkerPair",
    "ParseResult",
    "Role",
    "Selector",
    "Span",
    "Unbounded",
    "find_annotations",
    "parse_markers",
    "split_lines",
    "strip_eol",
]
