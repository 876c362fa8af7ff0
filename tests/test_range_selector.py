# Wybór zakresu linii: numery, offsety od końca, dopasowanie tekstu i błędy.

from __future__ import annotations

import pytest

from markers import ByLineNumber, ByNegativeOffset, ByText, Unbounded
from selection import LineRange, RangeError, RangeErrorCode, select_range, slice_lines

LINES = ["line 1", "line 2", "line 3"]

DOC = [
    "# Title",
    "",
    "intro",
    "## Example",
    "```rust",
    "let x = 1;",
    "```",
    "## Example",
    "tail",
]


def test_whole_file_by_default() -> None:
    assert select_range(LINES, Unbounded(), Unbounded()) == LineRange(1, 3)


def test_start_line_number() -> None:
    line_range = select_range(LINES, ByLineNumber(2), Unbounded())
    assert slice_lines(LINES, line_range) == ["line 2", "line 3"]


def test_end_negative_offset_stops_before_last_line() -> None:
    line_range = select_range(LINES, Unbounded(), ByNegativeOffset(1))
    assert slice_lines(LINES, line_range) == ["line 1", "line 2"]


def test_end_line_number() -> None:
    assert select_range(LINES, ByLineNumber(1), ByLineNumber(1)) == LineRange(1, 1)


@pytest.mark.parametrize(
    ("start", "end"),
    [
        (ByLineNumber(0), Unbounded()),
        (ByLineNumber(4), Unbounded()),
        (Unbounded(), ByLineNumber(4)),
        (Unbounded(), ByNegativeOffset(3)),
        (ByNegativeOffset(1), Unbounded()),
    ],
)
def test_line_out_of_range(start: object, end: object) -> None:
    with pytest.raises(RangeError) as info:
        select_range(LINES, start, end)
    assert info.value.code == RangeErrorCode.LINE_OUT_OF_RANGE


def test_no_silent_clamp() -> None:
    with pytest.raises(RangeError):
        select_range(LINES, ByLineNumber(2), ByLineNumber(99))


def test_start_text_takes_first_match() -> None:
    line_range = select_range(DOC, ByText("## Example"), Unbounded())
    assert line_range.first == 4


def test_text_match_ignores_surrounding_whitespace() -> None:
    lines = ["a", "   # Title  ", "b"]
    assert select_range(lines, ByText("# Title"), Unbounded()).first == 2


def test_end_text_scans_from_start_line() -> None:
    line_range = select_range(DOC, ByText("```rust"), ByText("```"))
    assert slice_lines(DOC, line_range) == ["```rust", "let x = 1;", "```"]


def test_end_text_may_match_start_line() -> None:
    assert select_range(DOC, ByText("## Example"), ByText("## Example")) == LineRange(4, 4)


def test_end_text_ignores_earlier_occurrence() -> None:
    line_range = select_range(DOC, ByLineNumber(5), ByText("## Example"))
    assert line_range == LineRange(5, 8)


def test_text_not_found() -> None:
    with pytest.raises(RangeError) as info:
        select_range(DOC, ByText("# Missing"), Unbounded())
    assert info.value.code == RangeErrorCode.TEXT_NOT_FOUND
    assert info.value.selector == ByText("# Missing")


def test_end_text_before_start_text_is_inverted() -> None:
    with pytest.raises(RangeError) as info:
        select_range(DOC, ByText("tail"), ByText("intro"))
    assert info.value.code == RangeErrorCode.INVERTED_RANGE


def test_end_line_before_start_line_is_inverted() -> None:
    with pytest.raises(RangeError) as info:
        select_range(LINES, ByLineNumber(3), ByLineNumber(2))
    assert info.value.code == RangeErrorCode.INVERTED_RANGE


def test_empty_file_whole_selection_is_empty() -> None:
    line_range = select_range([], Unbounded(), Unbounded())
    assert len(line_range) == 0
    assert slice_lines([], line_range) == []


def test_empty_file_with_selector_fails() -> None:
    with pytest.raises(RangeError) as info:
        select_range([], ByLineNumber(1), Unbounded())
    assert info.value.code == RangeErrorCode.LINE_OUT_OF_RANGE
