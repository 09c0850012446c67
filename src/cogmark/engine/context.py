# topmark:header:start
#
#   project      : CogMark
#   file         : context.py
#   file_relpath : src/cogmark/engine/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-file engine context.

One `EngineContext` exists per file being processed. It references the shared,
immutable `Config` and owns everything else the run needs: the diagnostics it
produced, the number of generator blocks handled and the current line number.
Contexts never share mutable state, so any number of them may be in flight
concurrently.

User-facing diagnostics are forwarded to an injected `DiagnosticSink` as soon
as they are produced (there is no process-wide verbosity switch), and they are
mirrored to the package logger for developers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cogmark.config.logging import get_logger
from cogmark.core.diagnostics import Diagnostic, DiagnosticLevel, DiagnosticLog

if TYPE_CHECKING:
    from pathlib import Path

    from cogmark.config import Config
    from cogmark.config.logging import CogmarkLogger
    from cogmark.core.diagnostics import DiagnosticSink

logger: CogmarkLogger = get_logger(__name__)

_LOG_LEVELS: dict[DiagnosticLevel, int] = {
    DiagnosticLevel.DEBUG: logging.DEBUG,
    DiagnosticLevel.INFO: logging.INFO,
    DiagnosticLevel.WARNING: logging.WARNING,
    DiagnosticLevel.ERROR: logging.ERROR,
}


@dataclass
class EngineContext:
    """State of one engine run.

    Attributes:
        path (Path): The file being rewritten.
        config (Config): Shared, read-only run configuration.
        sink (DiagnosticSink | None): Callback receiving each diagnostic as it is produced.
        diagnostics (DiagnosticLog): All diagnostics produced during the run.
        blocks (int): Number of generator blocks processed so far.
        line_no (int): Number of input lines consumed so far.
    """

    path: Path
    config: Config
    sink: DiagnosticSink | None = None
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    blocks: int = 0
    line_no: int = 0

    def emit(self, level: DiagnosticLevel, message: str) -> Diagnostic:
        """Record a diagnostic, log it and forward it to the sink."""
        diag: Diagnostic = self.diagnostics.add(level, message)
        logger.log(_LOG_LEVELS[level], "%s: %s", self.path, message)
        if self.sink is not None:
            self.sink(diag)
        return diag

    def trace(self, message: str) -> None:
        """Emit a DEBUG diagnostic, only when the run is verbose."""
        if self.config.verbose:
            self.emit(DiagnosticLevel.DEBUG, message)
        else:
            logger.trace("%s: %s", self.path, message)

    def info(self, message: str) -> None:
        """Emit an INFO diagnostic."""
        self.emit(DiagnosticLevel.INFO, message)

    def warn(self, message: str) -> None:
        """Emit a WARNING diagnostic."""
        self.emit(DiagnosticLevel.WARNING, message)

    def error(self, message: str) -> None:
        """Emit an ERROR diagnostic."""
        self.emit(DiagnosticLevel.ERROR, message)
