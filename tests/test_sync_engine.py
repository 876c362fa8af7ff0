# Silnik synchronizacji: podmiana bloków, idempotencja, niezależność par i
# polityka "wszystko albo nic" dla pliku z błędami.

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from docsync import ErrorCode, sync_file, sync_many, sync_text, write_result

Write = Callable[[str, str], Path]

MD = "line 1\nline 2\nline 3\n"


def _source(*body: str) -> str:
    return "".join(line + "\n" for line in body)


def test_replaces_content_between_markers(tmp_path: Path, write: Write) -> None:
    write("a.md", MD)
    text = _source(
        "// header",
        '// #[include_doc("a.md", start)]',
        "/// stale",
        '// #[include_doc("a.md", end)]',
        "pub struct A;",
    )
    result = sync_text(text, tmp_path / "lib.rs", tmp_path)

    assert result.ok
    assert result.changed
    assert result.text == _source(
        "// header",
        '// #[include_doc("a.md", start)]',
        "/// line 1",
        "/// line 2",
        "/// line 3",
        '// #[include_doc("a.md", end)]',
        "pub struct A;",
    )


def test_range_selectors(tmp_path: Path, write: Write) -> None:
    write("a.md", MD)
    text = _source(
        '// #![include_doc("a.md", start(2))]',
        '// #![include_doc("a.md", end)]',
        '// #[include_doc("a.md", start)]',
        '// #[include_doc("a.md", end(-1))]',
    )
    result = sync_text(text, tmp_path / "lib.rs", tmp_path)

    assert result.text == _source(
        '// #![include_doc("a.md", start(2))]',
        "//! line 2",
        "//! line 3",
        '// #![include_doc("a.md", end)]',
        '// #[include_doc("a.md", start)]',
        "/// line 1",
        "/// line 2",
        '// #[include_doc("a.md", end(-1))]',
    )


def test_idempotent(tmp_path: Path, write: Write) -> None:
    write("docs/a.md", "# Title\n\nSome text.\n\n```rust\nlet x = 1;\n```\n")
    text = _source(
        "mod m {",
        '    // #![include_doc("docs/a.md", start("# Title"))]',
        '    // #![include_doc("docs/a.md", end)]',
        "}",
    )
    first = sync_text(text, tmp_path / "lib.rs", tmp_path)
    second = sync_text(first.text, tmp_path / "lib.rs", tmp_path)

    assert first.changed
    assert second.ok
    assert not second.changed
    assert second.text == first.text
    assert "    //! # Title\n    //!\n    //! Some text.\n" in first.text


def test_splice_touches_only_content(tmp_path: Path, write: Write) -> None:
    md = write("a.md", "old\n")
    before = "// prefix \t kept\r\n"
    start = '// #[include_doc("a.md", start)]\n'
    end = '// #[include_doc("a.md", end)]\n'
    after = "fn x() {}   \n\n"

    synced = sync_text(before + start + end + after, tmp_path / "lib.rs", tmp_path).text
    assert synced == before + start + "/// old\n" + end + after

    md.write_text("new 1\nnew 2\n", encoding="utf-8")
    resynced = sync_text(synced, tmp_path / "lib.rs", tmp_path).text
    assert resynced == before + start + "/// new 1\n/// new 2\n" + end + after


def test_crlf_source_keeps_crlf(tmp_path: Path, write: Write) -> None:
    write("a.md", "x\r\n\r\ny\r\n")
    text = '// #[include_doc("a.md", start)]\r\n// #[include_doc("a.md", end)]\r\n'

    result = sync_text(text, tmp_path / "lib.rs", tmp_path)
    assert result.text == (
        '// #[include_doc("a.md", start)]\r\n'
        "/// x\r\n///\r\n/// y\r\n"
        '// #[include_doc("a.md", end)]\r\n'
    )


def test_end_marker_without_trailing_newline(tmp_path: Path, write: Write) -> None:
    write("a.md", "x\n")
    text = '// #[include_doc("a.md", start)]\n// #[include_doc("a.md", end)]'

    result = sync_text(text, tmp_path / "lib.rs", tmp_path)
    assert result.text == '// #[include_doc("a.md", start)]\n/// x\n// #[include_doc("a.md", end)]'


def test_text_not_found_leaves_file_unmodified(tmp_path: Path, write: Write) -> None:
    write("a.md", MD)
    text = _source(
        '// #[include_doc("a.md", start("# Title"))]',
        "/// keep me",
        '// #[include_doc("a.md", end)]',
    )
    result = sync_text(text, tmp_path / "lib.rs", tmp_path)

    assert not result.ok
    assert not result.changed
    assert result.text == text
    [error] = result.errors
    assert error.code == ErrorCode.TEXT_NOT_FOUND
    assert error.line == 1
    assert error.target_path == "a.md"
    assert error.selector == '"# Title"'


def test_partial_failure_collects_every_error(tmp_path: Path, write: Write) -> None:
    write("src/a.md", MD)
    text = _source(
        '// #[include_doc("a.md", start)]',
        '// #[include_doc("a.md", end(9))]',
        '// #[include_doc("missing.md", start)]',
        '// #[include_doc("missing.md", end)]',
        '// #[include_doc("b.md", start)]',
        '// #[include_doc("../../etc/passwd", start)]',
        '// #[include_doc("../../etc/passwd", end)]',
        '// #[include_doc("ok.md", start)]',
    )
    result = sync_text(text, tmp_path / "src" / "lib.rs", tmp_path)

    assert result.text == text
    assert [(e.line, e.code) for e in result.errors] == [
        (2, ErrorCode.LINE_OUT_OF_RANGE),
        (3, ErrorCode.TARGET_FILE_NOT_FOUND),
        (5, ErrorCode.UNTERMINATED_MARKER),
        (6, ErrorCode.PATH_ESCAPES_ROOT),
        (8, ErrorCode.UNTERMINATED_MARKER),
    ]


def test_escaping_path_performs_no_read(tmp_path: Path) -> None:
    reads: list[Path] = []

    def load(path: Path) -> list[str]:
        reads.append(path)
        return ["x"]

    text = _source(
        '// #[include_doc("../../etc/passwd", start)]',
        '// #[include_doc("../../etc/passwd", end)]',
    )
    result = sync_text(text, tmp_path / "lib.rs", tmp_path, load=load)

    assert [e.code for e in result.errors] == [ErrorCode.PATH_ESCAPES_ROOT]
    assert reads == []


def test_other_pairs_do_not_change_a_pair_output(tmp_path: Path) -> None:
    files = {"a.md": ["A1", "A2"], "b.md": ["B1"]}

    def load(path: Path) -> list[str]:
        return files[path.name]

    a_pair = _source(
        '// #[include_doc("a.md", start)]',
        '// #[include_doc("a.md", end)]',
    )
    b_pair = _source(
        '// #[include_doc("b.md", start)]',
        '// #[include_doc("b.md", end)]',
    )
    a_block = '// #[include_doc("a.md", start)]\n/// A1\n/// A2\n// #[include_doc("a.md", end)]\n'
    b_block = '// #[include_doc("b.md", start)]\n/// B1\n// #[include_doc("b.md", end)]\n'

    def sync(text: str) -> str:
        return sync_text(text, tmp_path / "lib.rs", tmp_path, load=load).text

    assert sync(a_pair) == a_block
    assert sync(b_pair + "fn x() {}\n" + a_pair) == b_block + "fn x() {}\n" + a_block
    assert sync(a_pair + "fn x() {}\n" + b_pair) == a_block + "fn x() {}\n" + b_block

    files["b.md"] = ["B1 changed", "B2"]
    assert sync(b_pair + a_pair).endswith(a_block)


def test_overlapping_pairs_are_not_spliced(tmp_path: Path) -> None:
    text = _source(
        '// #[include_doc("a.md", start)]',
        '// #[include_doc("b.md", start)]',
        '// #[include_doc("a.md", end)]',
        '// #[include_doc("b.md", end)]',
    )
    result = sync_text(text, tmp_path / "lib.rs", tmp_path, load=lambda path: ["x"])

    assert result.text == text
    assert {e.code for e in result.errors} == {ErrorCode.OVERLAPPING_PAIRS}


def test_empty_target_empties_block(tmp_path: Path, write: Write) -> None:
    write("a.md", "")
    text = _source(
        '// #[include_doc("a.md", start)]',
        "/// stale",
        '// #[include_doc("a.md", end)]',
    )
    result = sync_text(text, tmp_path / "lib.rs", tmp_path)

    assert result.ok
    assert result.text == _source(
        '// #[include_doc("a.md", start)]',
        '// #[include_doc("a.md", end)]',
    )


def test_file_without_markers_is_untouched(tmp_path: Path) -> None:
    result = sync_text("fn main() {}\n", tmp_path / "main.rs", tmp_path)

    assert result.ok
    assert result.pairs == 0
    assert not result.changed


def test_sync_file_and_write_result(tmp_path: Path, write: Write) -> None:
    write("docs/a.md", "hello\n")
    source = write(
        "src/lib.rs",
        _source(
            '// #[include_doc("../docs/a.md", start)]',
            '// #[include_doc("../docs/a.md", end)]',
        ),
    )

    result = sync_file(source, tmp_path)
    assert write_result(result)
    assert "/// hello\n" in source.read_text(encoding="utf-8")

    again = sync_file(source, tmp_path)
    assert not write_result(again)


def test_failed_result_is_never_written(tmp_path: Path, write: Write) -> None:
    text = _source('// #[include_doc("a.md", start)]')
    source = write("lib.rs", text)

    result = sync_file(source, tmp_path)
    assert not write_result(result)
    assert source.read_text(encoding="utf-8") == text


@pytest.mark.parametrize("jobs", [1, 4])
def test_sync_many_keeps_input_order(tmp_path: Path, write: Write, jobs: int) -> None:
    write("a.md", "x\n")
    sources = [
        write(
            f"m{i}.rs",
            _source(
                '// #[include_doc("a.md", start)]',
                '// #[include_doc("a.md", end)]',
            ),
        )
        for i in range(6)
    ]

    results = sync_many(sources, tmp_path, jobs=jobs)

    assert [r.path for r in results] == sources
    assert all(r.ok and r.changed for r in results)
