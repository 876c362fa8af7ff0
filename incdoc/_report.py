"""Wspólne formatowanie raportów błędów dla komend incdoc."""

from __future__ import annotations

import os
import pathlib
from typing import Iterable

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from docsync import FileResult, SyncError


def display_path(path: pathlib.Path, base: pathlib.Path | None = None) -> str:
    try:
        return os.path.relpath(path, base or pathlib.Path.cwd())
    except ValueError:  # inny dysk (Windows)
        return str(path)


def fmt_link(rel_path: str, line: int) -> str:
    return f"--> {rel_path}:{line}"


def fmt_source(lines: Iterable[tuple[object, str]]) -> str:
    """
    Linie źródła w stylu kompilatora, z numerami wyrównanymi do prawej:

         12 | // #[include_doc("a.md", start)]
    """
    rows = [(str(label), content) for label, content in lines]
    width = max((len(label) for label, _ in rows), default=0)
    out: list[str] = []
    for label, content in rows:
        gutter = f" {label.rjust(width)} " if width else " "
        out.append(f"{gutter}[bold cyan]|[/bold cyan] {escape(content)}")
    return "\n".join(out)


def print_error(console: Console, error: SyncError, base: pathlib.Path | None = None) -> None:
    rel = display_path(error.source, base)
    label = escape(f"error[{error.code}]")
    console.print(f"[bold red]{label}[/bold red]: {escape(error.message)}")
    console.print(f"  [cyan]{escape(fmt_link(rel, error.line))}[/cyan]")
    if error.raw:
        console.print(fmt_source([(error.line, error.raw)]))
    details: list[str] = []
    if error.target_path is not None:
        details.append(f"target: {error.target_path}")
    if error.selector is not None:
        details.append(f"selector: {error.selector}")
    if details:
        console.print(f"  [dim]{escape(', '.join(details))}[/dim]")
    console.print()


def print_summary(
    console: Console,
    results: list[FileResult],
    base: pathlib.Path | None = None,
) -> None:
    """Tabela zbiorcza: tylko pliki z błędami lub zmianami."""
    rows = [r for r in results if r.errors or r.changed]
    if not rows:
        return

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Plik",   style="cyan", no_wrap=True)
    table.add_column("Pary",   justify="right")
    table.add_column("Status", no_wrap=True)
    table.add_column("Kody błędów", style="yellow")

    for r in rows:
        if r.errors:
            status = f"[red]{len(r.errors)} błąd(ów)[/red]"
        else:
            status = "[green]zmieniony[/green]"
        codes = ", ".join(sorted({e.code for e in r.errors}))
        table.add_row(escape(display_path(r.path, base)), str(r.pairs), status, codes)

    console.print(table)
