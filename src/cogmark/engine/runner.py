# topmark:header:start
#
#   project      : CogMark
#   file         : runner.py
#   file_relpath : src/cogmark/engine/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Engine entry point for a single file.

`run_file` wires an `EngineContext`, the `Rewriter` and the `CommitManager`
together and turns every file-specific failure into a `FileResult`. It never
prints; user-facing messages travel through the diagnostic sink.

Typical usage:

    result = run_file(Path("README.md"), config, sink=print)
    if result.status.is_failure:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from cogmark.config.logging import get_logger
from cogmark.engine.commit import CommitManager
from cogmark.engine.context import EngineContext
from cogmark.engine.errors import CogError, IOFailure, NoGeneratorBlocks
from cogmark.engine.rewriter import Rewriter
from cogmark.engine.status import RunStatus

if TYPE_CHECKING:
    from cogmark.config import Config
    from cogmark.config.logging import CogmarkLogger
    from cogmark.core.diagnostics import Diagnostic, DiagnosticSink

logger: CogmarkLogger = get_logger(__name__)


@dataclass(frozen=True)
class FileResult:
    """Terminal outcome of one engine run.

    Attributes:
        path (Path): The processed file.
        status (RunStatus): The run outcome.
        blocks (int): Number of generator blocks handled before the run ended.
        diagnostics (tuple[Diagnostic, ...]): Diagnostics produced during the run.
        error (CogError | None): The failure, for non-success outcomes.
    """

    path: Path
    status: RunStatus
    blocks: int = 0
    diagnostics: tuple[Diagnostic, ...] = ()
    error: CogError | None = None

    @property
    def ok(self) -> bool:
        """Return True when the run did not fail (rewritten or nothing to do)."""
        return not self.status.is_failure


def _rewrite(ctx: EngineContext, commit: CommitManager) -> int:
    try:
        src: BinaryIO = open(ctx.path, "rb")  # noqa: SIM115
    except OSError as e:
        raise IOFailure.from_os_error(ctx.path, "open", e) from e

    with src:
        out: BinaryIO = commit.create()
        # Closing `out` flushes the last buffered write, which may fail too.
        try:
            with out:
                return Rewriter(ctx, src, out).run()
        except OSError as e:
            raise IOFailure.from_os_error(ctx.path, "rewrite", e) from e


def run_file(
    path: Path | str,
    config: Config,
    *,
    sink: DiagnosticSink | None = None,
) -> FileResult:
    """Rewrite ``path`` in place, regenerating the output of every generator block.

    The original file is only replaced when the whole document was rewritten
    successfully; on any other outcome it is left untouched.

    Args:
        path (Path | str): File to process.
        config (Config): Shared run configuration (never mutated).
        sink (DiagnosticSink | None): Receives each diagnostic as it is produced.

    Returns:
        FileResult: The outcome. File-specific failures are reported here, not raised.
    """
    ctx = EngineContext(path=Path(path), config=config, sink=sink)
    ctx.trace(f"Processing file '{ctx.path}'")
    commit = CommitManager(ctx)

    try:
        blocks: int = _rewrite(ctx, commit)
        commit.commit()
    except NoGeneratorBlocks as e:
        commit.discard()
        ctx.trace(f"No generator code found in file '{ctx.path}'")
        return FileResult(
            path=ctx.path,
            status=e.status,
            diagnostics=tuple(ctx.diagnostics),
        )
    except CogError as e:
        commit.discard()
        ctx.error(e.message)
        return FileResult(
            path=ctx.path,
            status=e.status,
            blocks=ctx.blocks,
            diagnostics=tuple(ctx.diagnostics),
            error=e,
        )
    except BaseException:
        commit.discard()
        raise

    ctx.trace(f"Successfully processed '{ctx.path}' ({blocks} block(s))")
    return FileResult(
        path=ctx.path,
        status=RunStatus.SUCCESS,
        blocks=blocks,
        diagnostics=tuple(ctx.diagnostics),
    )
