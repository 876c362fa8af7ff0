"""
selection — lokalizacja pliku docelowego i wybór zakresu jego linii.

Interfejs publiczny:
    resolve_target(target_path, source_dir, root) -> Path
    select_range(lines, start, end)               -> LineRange
    slice_lines(lines, line_range)                -> list[str]
    PathEscapesRootError, RangeError, RangeErrorCode, LineRange
"""

from .paths import PathEscapesRootError, normalize, resolve_target
from .ranges import LineRange, RangeError, RangeErrorCode, select_range, slice_lines

__all__ = [
    "LineRange",
    "PathEscapesRootError",
    "RangeError",
    "RangeErrorCode",
    "normalize",
    "resolve_target",
    "select_range",
    "slice_lines",
]
