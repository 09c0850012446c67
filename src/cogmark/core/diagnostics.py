# topmark:header:start
#
#   project      : CogMark
#   file         : diagnostics.py
#   file_relpath : src/cogmark/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics support.

A `Diagnostic` is a user-facing message attached to a single run (one file or
one config load). Diagnostics are collected in a `DiagnosticLog` and may be
forwarded to an injected `DiagnosticSink` as they are produced.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import cast

from yachalk import chalk


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics collected during processing.

    Levels map to terminal colors and are ordered by importance:
    ERROR > WARNING > INFO > DEBUG.
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only.

        Returns:
            Callable[[str], str]: The `yachalk` color function associated with this severity level.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.DEBUG: chalk.gray,
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level and message."""

    level: DiagnosticLevel
    message: str

    def __str__(self) -> str:
        return f"[{self.level.value}] {self.message}"


# Receives every diagnostic as soon as it is produced.
DiagnosticSink = Callable[[Diagnostic], None]


@dataclass
class DiagnosticLog:
    """Ordered, append-only collection of diagnostics."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def add(self, level: DiagnosticLevel, message: str) -> Diagnostic:
        """Append a new diagnostic and return it.

        Args:
            level (DiagnosticLevel): Severity of the diagnostic.
            message (str): Human-readable message.

        Returns:
            Diagnostic: The diagnostic that was appended.
        """
        diag = Diagnostic(level=level, message=message)
        self.items.append(diag)
        return diag

    def add_warning(self, message: str) -> Diagnostic:
        """Append a WARNING diagnostic."""
        return self.add(DiagnosticLevel.WARNING, message)

    def extend(self, diags: Sequence[Diagnostic]) -> None:
        """Append diagnostics from another collection, preserving order."""
        self.items.extend(diags)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity level."""

    n_info: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of non-debug diagnostics."""
        return self.n_info + self.n_warning + self.n_error


def compute_diagnostic_stats(diags: Sequence[Diagnostic]) -> DiagnosticStats:
    """Return per-level counts for a sequence of diagnostics."""
    n_info: int = sum(1 for d in diags if d.level == DiagnosticLevel.INFO)
    n_warn: int = sum(1 for d in diags if d.level == DiagnosticLevel.WARNING)
    n_err: int = sum(1 for d in diags if d.level == DiagnosticLevel.ERROR)
    return DiagnosticStats(n_info=n_info, n_warning=n_warn, n_error=n_err)
