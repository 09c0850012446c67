# topmark:header:start
#
#   project      : CogMark
#   file         : commit.py
#   file_relpath : src/cogmark/engine/commit.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Commit manager: lifecycle of the rewritten-output file.

The original file is never written directly. The rewritten document goes to
``<file>_cog``, created exclusively, and only a successful run moves it over
the original with a single atomic `os.replace`. Any other outcome discards the
output file and leaves the original byte-identical.

A pre-existing ``<file>_cog`` is reported as a conflict and left alone: it may
belong to a concurrent run on the same target, or to a crashed one that
someone wants to inspect.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from cogmark.constants import OUTPUT_SUFFIX
from cogmark.engine.errors import FilesystemConflict, IOFailure

if TYPE_CHECKING:
    from cogmark.engine.context import EngineContext


def output_path_for(path: Path) -> Path:
    """Return the deterministic rewritten-output file name for ``path``."""
    return Path(f"{path}{OUTPUT_SUFFIX}")


class CommitManager:
    """Create, then commit or discard, the output file of one engine run."""

    def __init__(self, ctx: EngineContext) -> None:
        self.ctx: EngineContext = ctx
        self.output: Path = output_path_for(ctx.path)
        self._created: bool = False

    @property
    def created(self) -> bool:
        """Return True once this run owns the output file."""
        return self._created

    def create(self) -> BinaryIO:
        """Create the output file exclusively and return it opened for writing.

        Raises:
            FilesystemConflict: If the output file already exists.
            IOFailure: If the output file cannot be created.
        """
        try:
            fh: BinaryIO = open(self.output, "xb")  # noqa: SIM115 (caller closes)
        except FileExistsError as e:
            raise FilesystemConflict(self.ctx.path, self.output) from e
        except OSError as e:
            raise IOFailure.from_os_error(self.ctx.path, f"create {self.output}", e) from e
        self._created = True
        self.ctx.trace(f"Writing output to {self.output}")
        return fh

    def commit(self) -> None:
        """Replace the original file with the output file.

        The original's permission bits are copied first, so an executable
        script stays executable.

        Raises:
            IOFailure: If the permissions cannot be copied or the replace fails.
        """
        try:
            shutil.copymode(self.ctx.path, self.output)
        except OSError as e:
            raise IOFailure.from_os_error(self.ctx.path, "copy file permissions", e) from e
        self.ctx.trace(f"Renaming output file {self.output} to original filename {self.ctx.path}")
        try:
            os.replace(self.output, self.ctx.path)
        except OSError as e:
            raise IOFailure.from_os_error(self.ctx.path, f"replace with {self.output}", e) from e
        self._created = False

    def discard(self) -> None:
        """Remove the output file, best effort, if this run created it."""
        if not self._created:
            return
        try:
            self.output.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            self.ctx.warn(f"Could not remove output file {self.output}: {e}")
            return
        self._created = False
        self.ctx.trace(f"Removed output file {self.output}")
