# topmark:header:start
#
#   project      : CogMark
#   file         : generator.py
#   file_relpath : src/cogmark/engine/generator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generator runner: execute one generator block through the external interpreter.

For each block the runner:
  1. writes the de-prefixed generator source to ``<file>_cog_<ext>`` (exclusive create);
  2. runs the configured command, with every ``%s`` in the command and its arguments
     replaced by that scratch path;
  3. returns the captured standard output, newline-terminated when non-empty;
  4. removes the scratch file, whatever the outcome.

Standard error is never written into the document: it is reported as a
diagnostic (INFO on success, ERROR on failure).
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from cogmark.config.logging import get_logger
from cogmark.constants import PLACEHOLDER, SCRATCH_SUFFIX
from cogmark.engine.errors import ExternalProcessFailure, FilesystemConflict, IOFailure
from cogmark.engine.scanner import strip_prefix

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cogmark.config.logging import CogmarkLogger
    from cogmark.engine.context import EngineContext

logger: CogmarkLogger = get_logger(__name__)


def scratch_path_for(path: Path, ext: str) -> Path:
    """Return the deterministic scratch generator file name for ``path``."""
    return Path(f"{path}{SCRATCH_SUFFIX}{ext}")


def build_argv(command: str, args: Sequence[str], scratch: Path) -> list[str]:
    """Return the command line with every placeholder replaced by ``scratch``.

    Args:
        command (str): Interpreter command (may itself contain the placeholder).
        args (Sequence[str]): Argument templates.
        scratch (Path): Path of the scratch generator file.

    Returns:
        list[str]: The argument vector passed to the subprocess.
    """
    target: str = str(scratch)
    return [command.replace(PLACEHOLDER, target)] + [a.replace(PLACEHOLDER, target) for a in args]


class GeneratorRunner:
    """Run generator blocks for one engine context."""

    def __init__(self, ctx: EngineContext) -> None:
        self.ctx: EngineContext = ctx
        self.scratch: Path = scratch_path_for(ctx.path, ctx.config.ext)

    def run(self, source: Sequence[bytes], prefix: bytes) -> bytes:
        """Execute one generator block and return its output.

        Args:
            source (Sequence[bytes]): Generator source lines, closing marker excluded.
            prefix (bytes): Comment prefix stripped from each source line.

        Returns:
            bytes: The generator's standard output; empty, or ending with ``\\n``.

        Raises:
            FilesystemConflict: If the scratch file already exists.
            IOFailure: If the scratch file cannot be written.
            ExternalProcessFailure: If the command cannot be launched or exits nonzero.
        """
        self._write_scratch(source, prefix)
        try:
            cfg = self.ctx.config
            output: bytes = self._execute(build_argv(cfg.command, cfg.args, self.scratch))
        finally:
            self._remove_scratch()

        if output and not output.endswith(b"\n"):
            output += b"\n"
        return output

    def _write_scratch(self, source: Sequence[bytes], prefix: bytes) -> None:
        try:
            with open(self.scratch, "xb") as fh:
                fh.writelines(strip_prefix(line, prefix) for line in source)
        except FileExistsError as e:
            raise FilesystemConflict(self.ctx.path, self.scratch) from e
        except OSError as e:
            # We created it, so it is ours to clean up.
            self._remove_scratch()
            raise IOFailure.from_os_error(self.ctx.path, f"write {self.scratch}", e) from e
        self.ctx.trace(f"Wrote {len(source)} generator line(s) to {self.scratch}")

    def _execute(self, argv: list[str]) -> bytes:
        self.ctx.trace(f"Running generator: {' '.join(argv)}")
        try:
            proc: subprocess.CompletedProcess[bytes] = subprocess.run(
                argv,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise ExternalProcessFailure(
                self.ctx.path,
                f"cannot launch generator {argv[0]!r}: {e.strerror or e}",
            ) from e

        stderr: str = proc.stderr.decode("utf-8", errors="replace").rstrip()
        if proc.returncode != 0:
            if stderr:
                self.ctx.error(stderr)
            raise ExternalProcessFailure(
                self.ctx.path,
                f"generator exited with status {proc.returncode}",
                returncode=proc.returncode,
                stderr=stderr,
            )
        if stderr:
            self.ctx.info(stderr)
        return proc.stdout

    def _remove_scratch(self) -> None:
        try:
            self.scratch.unlink(missing_ok=True)
        except OSError as e:
            self.ctx.warn(f"Could not remove scratch file {self.scratch}: {e}")
