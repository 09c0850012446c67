# topmark:header:start
#
#   project      : CogMark
#   file         : __init__.py
#   file_relpath : src/cogmark/engine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CogMark rewrite engine.

Public entry points:
    - `run_file`: rewrite one file in place and return a `FileResult`.
    - `run_files`: fan out over many files (serially or on a thread pool).
"""

from __future__ import annotations

from cogmark.engine.errors import (
    CogError,
    ExternalProcessFailure,
    FilesystemConflict,
    IOFailure,
    MalformedBlock,
    NoGeneratorBlocks,
)
from cogmark.engine.fanout import exit_code_for, run_files
from cogmark.engine.runner import FileResult, run_file
from cogmark.engine.status import Phase, RunStatus, ScanTerminal

__all__ = [
    "CogError",
    "ExternalProcessFailure",
    "FileResult",
    "FilesystemConflict",
    "IOFailure",
    "MalformedBlock",
    "NoGeneratorBlocks",
    "Phase",
    "RunStatus",
    "ScanTerminal",
    "exit_code_for",
    "run_file",
    "run_files",
]
