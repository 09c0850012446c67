# topmark:header:start
#
#   project      : CogMark
#   file         : utils.py
#   file_relpath : src/cogmark/cli/utils.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rendering helpers for ``run`` results.

All user-facing text goes through a `ConsoleLike`; nothing here logs.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from cogmark.core.diagnostics import DiagnosticLevel, compute_diagnostic_stats
from cogmark.engine.status import RunStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from cogmark.cli.console_api import ConsoleLike
    from cogmark.core.diagnostics import Diagnostic, DiagnosticSink, DiagnosticStats
    from cogmark.engine import FileResult


def render_diagnostic(diag: Diagnostic, *, enable_color: bool) -> str:
    """Return ``[level] message`` with the level colored by severity."""
    tag: str = f"[{diag.level.value}]"
    if enable_color:
        tag = diag.level.color(tag)
    return f"{tag} {diag.message}"


def make_live_sink(console: ConsoleLike, path: Path) -> DiagnosticSink:
    """Return a sink that prints each diagnostic of ``path`` as soon as it arrives."""

    def sink(diag: Diagnostic) -> None:
        line: str = f"{path}: {render_diagnostic(diag, enable_color=console.enable_color)}"
        if diag.level is DiagnosticLevel.ERROR:
            console.error(line)
        else:
            console.print(line)

    return sink


def render_result(console: ConsoleLike, result: FileResult, *, show_diagnostics: bool) -> None:
    """Print the status line of one file, followed by its diagnostics.

    Failures go to stderr. Debug diagnostics are never repeated here.

    Args:
        console (ConsoleLike): Output console.
        result (FileResult): The file's outcome.
        show_diagnostics (bool): Also print the file's non-debug diagnostics
            (False when they were already printed live).
    """
    status: str = result.status.render(enable_color=console.enable_color)
    line: str = f"{result.path}: {status}"
    if result.status == RunStatus.SUCCESS:
        line += f" ({result.blocks} block{'s' if result.blocks != 1 else ''})"

    emit = console.error if result.status.is_failure else console.print
    emit(line)

    if not show_diagnostics:
        return
    for diag in result.diagnostics:
        if diag.level is DiagnosticLevel.DEBUG:
            continue
        text: str = f"  {render_diagnostic(diag, enable_color=console.enable_color)}"
        if diag.level is DiagnosticLevel.ERROR:
            console.error(text)
        else:
            console.print(text)


def render_summary(console: ConsoleLike, results: Sequence[FileResult]) -> None:
    """Print aggregate counts per outcome and per diagnostic level."""
    counts: Counter[RunStatus] = Counter(r.status for r in results)
    stats: DiagnosticStats = compute_diagnostic_stats([d for r in results for d in r.diagnostics])

    console.print()
    console.print(console.styled("Summary:", bold=True, underline=True))
    console.print(f"  {len(results)} file(s) processed")
    for status in RunStatus:
        n: int = counts.get(status, 0)
        if n:
            console.print(f"  {status.render(enable_color=console.enable_color)}: {n}")
    if stats.total:
        console.print(
            f"  diagnostics: {stats.n_error} error(s), "
            f"{stats.n_warning} warning(s), {stats.n_info} info"
        )
