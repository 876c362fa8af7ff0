"""
docsync — silnik synchronizacji bloków dokumentacji z plikami markdown.

Publiczne API:
  sync_text(text, source, root, load)   → FileResult (czysta transformacja tekstu)
  sync_file(path, root, load)           → FileResult
  sync_many(paths, root, jobs, load)    → list[FileResult]
  write_result(result)                  → bool (zapis tylko przy pełnym sukcesie)
  render_block(lines, kind, ...)        → str
  read_lines / read_text / write_text / discover_sources   operacje plikowe
  ErrorCode, SyncError, FileResult      typy wyniku
"""

from .engine import Loader, sync_file, sync_many, sync_text, write_result
from .loader import TOP_LEVEL_SKIP_DIR_NAMES, discover_sources, read_lines, read_text, write_text
from .renderer import render_block, render_line
from .types import ErrorCode, FileResult, SyncError

__all__ = [
    "ErrorCode",
    "FileResult",
    "Loader",
    "TOP_LEVEL_SKIP_DIR_NAMES",
    "SyncError",
    "discover_sources",
    "read_lines",
    "read_text",
    "render_block",
    "render_line",
    "sync_file",
    "sync_many",
    "sync_text",
    "write_result",
    "write_text",
]
