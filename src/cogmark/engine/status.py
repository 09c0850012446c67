# topmark:header:start
#
#   project      : CogMark
#   file         : status.py
#   file_relpath : src/cogmark/engine/status.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Status enums for the CogMark rewrite engine.

Conventions:
  * `RunStatus` and `Phase` inherit from `ColoredStrEnum` so the CLI can render
    them with their associated color.
  * Values are human-readable strings used in CLI output and diagnostics; do not
    rely on identity (`is`) checks, prefer equality (`==`).
"""

from __future__ import annotations

from enum import Enum

from yachalk import chalk

from cogmark.rendering.colored_enum import ColoredStrEnum


class ScanTerminal(Enum):
    """How a scan over the input stream stopped."""

    OK = "ok"
    END_OF_INPUT = "end-of-input"


class Phase(ColoredStrEnum):
    """Phases of the per-file rewrite state machine (strict, repeating order)."""

    # Value format: (description: str, color_renderer: ChalkBuilder)
    PLAIN = ("plain text", chalk.gray)
    GENERATOR = ("generator source", chalk.cyan)
    STALE_OUTPUT = ("generated output", chalk.magenta)


class RunStatus(ColoredStrEnum):
    """Terminal outcome of one engine run over one file."""

    SUCCESS = ("rewritten", chalk.green)
    NO_GENERATOR_BLOCKS = ("no generator blocks", chalk.gray)
    MALFORMED_BLOCK = ("malformed block", chalk.red_bright)
    EXTERNAL_PROCESS_FAILURE = ("generator failed", chalk.red_bright)
    FILESYSTEM_CONFLICT = ("artifact exists", chalk.yellow)
    IO_FAILURE = ("I/O error", chalk.red)

    @property
    def is_failure(self) -> bool:
        """Return True for outcomes that must be reported as failures.

        `NO_GENERATOR_BLOCKS` is a recognized no-op and not a failure.
        """
        return self not in (RunStatus.SUCCESS, RunStatus.NO_GENERATOR_BLOCKS)
