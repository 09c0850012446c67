# topmark:header:start
#
#   project      : CogMark
#   file         : errors.py
#   file_relpath : src/cogmark/engine/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised inside a single engine run.

Every exception here is local to one file: `run_file` catches them and turns
them into a `FileResult`, so a failure never aborts other files of a batch.
The CLI never sees these types directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cogmark.engine.status import RunStatus

if TYPE_CHECKING:
    from pathlib import Path


class CogError(Exception):
    """Base class for file-specific engine failures.

    Attributes:
        path (Path): The file being processed.
        message (str): Human-readable description.
        status (RunStatus): The run outcome this error maps to.
    """

    status: RunStatus = RunStatus.IO_FAILURE

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path: Path = path
        self.message: str = message


class NoGeneratorBlocks(CogError):
    """The file contains no start marker; nothing was rewritten."""

    status = RunStatus.NO_GENERATOR_BLOCKS


class MalformedBlock(CogError):
    """A generator block or its generated section is not terminated."""

    status = RunStatus.MALFORMED_BLOCK

    def __init__(self, path: Path, message: str, *, line: int | None = None) -> None:
        where: str = f" (line {line})" if line is not None else ""
        super().__init__(path, f"{message}{where}")
        self.line: int | None = line


class ExternalProcessFailure(CogError):
    """The generator command exited nonzero or could not be launched."""

    status = RunStatus.EXTERNAL_PROCESS_FAILURE

    def __init__(
        self,
        path: Path,
        message: str,
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(path, message)
        self.returncode: int | None = returncode
        self.stderr: str = stderr


class FilesystemConflict(CogError):
    """A scratch or output artifact already exists at its deterministic name."""

    status = RunStatus.FILESYSTEM_CONFLICT

    def __init__(self, path: Path, artifact: Path) -> None:
        super().__init__(
            path,
            f"{artifact} already exists (concurrent run or leftover from a crash?)",
        )
        self.artifact: Path = artifact


class IOFailure(CogError):
    """Reading, writing or renaming a file failed.

    The originating `OSError` is chained as ``__cause__``.
    """

    status = RunStatus.IO_FAILURE

    @classmethod
    def from_os_error(cls, path: Path, action: str, err: OSError) -> IOFailure:
        """Return an `IOFailure` describing ``err`` (caller chains it with ``from``)."""
        detail: str = err.strerror or str(err)
        return cls(path, f"cannot {action}: {detail}")
