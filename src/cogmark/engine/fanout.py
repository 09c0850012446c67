# topmark:header:start
#
#   project      : CogMark
#   file         : fanout.py
#   file_relpath : src/cogmark/engine/fanout.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fan-out driver: run the engine over many files.

This module is shared by the CLI and API callers. It never prints and has no
CLI dependencies: it returns the per-file results plus the first non-success
`ExitCode` encountered, and callers decide how to surface them.

Files are independent. In serial mode they run one after the other in input
order; otherwise one task per file is submitted to a thread pool and the call
returns only after every task completed. Results are always returned in input
order.

Exit code mapping:
    MALFORMED_INPUT
        A generator block or generated section was not terminated.
    GENERATOR_FAILED
        The generator command exited nonzero or could not be launched.
    CANNOT_CREATE
        A scratch or output artifact already exists.
    FILE_NOT_FOUND / PERMISSION_DENIED / IO_ERROR
        Reading, writing or replacing the file failed.
    PIPELINE_ERROR
        Any unexpected exception; the file then has no result.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

from cogmark.config.logging import get_logger
from cogmark.core.exit_codes import ExitCode
from cogmark.engine.runner import FileResult, run_file
from cogmark.engine.status import RunStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from cogmark.config import Config
    from cogmark.config.logging import CogmarkLogger
    from cogmark.core.diagnostics import DiagnosticSink

    # Returns the diagnostic sink for one file (or None for no live reporting).
    SinkFactory = Callable[[Path], DiagnosticSink | None]

logger: CogmarkLogger = get_logger(__name__)

_STATUS_EXIT_CODES: dict[RunStatus, ExitCode] = {
    RunStatus.SUCCESS: ExitCode.SUCCESS,
    RunStatus.NO_GENERATOR_BLOCKS: ExitCode.SUCCESS,
    RunStatus.MALFORMED_BLOCK: ExitCode.MALFORMED_INPUT,
    RunStatus.EXTERNAL_PROCESS_FAILURE: ExitCode.GENERATOR_FAILED,
    RunStatus.FILESYSTEM_CONFLICT: ExitCode.CANNOT_CREATE,
    RunStatus.IO_FAILURE: ExitCode.IO_ERROR,
}


def exit_code_for(result: FileResult) -> ExitCode:
    """Return the process exit code a single file result maps to."""
    if result.status == RunStatus.IO_FAILURE and result.error is not None:
        cause: BaseException | None = result.error.__cause__
        if isinstance(cause, (FileNotFoundError, IsADirectoryError)):
            return ExitCode.FILE_NOT_FOUND
        if isinstance(cause, PermissionError):
            return ExitCode.PERMISSION_DENIED
    return _STATUS_EXIT_CODES[result.status]


def _run_one(path: Path, config: Config, sink_factory: SinkFactory | None) -> FileResult:
    sink: DiagnosticSink | None = sink_factory(path) if sink_factory else None
    return run_file(path, config, sink=sink)


def run_files(
    paths: Sequence[Path | str],
    config: Config,
    *,
    sink_factory: SinkFactory | None = None,
) -> tuple[list[FileResult], ExitCode | None]:
    """Run the engine for each file and return (results, encountered_error_code).

    Args:
        paths (Sequence[Path | str]): Files to process; duplicates are processed as given.
        config (Config): Shared run configuration. ``config.serial`` and ``config.jobs``
            select the execution mode.
        sink_factory (SinkFactory | None): Builds the diagnostic sink for each file.

    Returns:
        tuple[list[FileResult], ExitCode | None]: A pair ``(results, error_code)`` where:
            - ``results`` holds one `FileResult` per input file, in input order,
              except for files whose run raised an unexpected exception.
            - ``error_code`` is ``None`` if every file succeeded (or had no
              generator blocks); otherwise the first non-success exit code in input order.
    """
    file_list: list[Path] = [Path(p) for p in paths]
    outcomes: list[FileResult | None] = []

    if config.serial or len(file_list) <= 1:
        logger.debug("Running %d file(s) serially", len(file_list))
        for path in file_list:
            try:
                outcomes.append(_run_one(path, config, sink_factory))
            except Exception as e:  # pragma: no cover
                logger.exception("Unexpected error processing %s: %s", path, e)
                outcomes.append(None)
    else:
        logger.debug("Running %d file(s) with jobs=%s", len(file_list), config.jobs)
        with ThreadPoolExecutor(max_workers=config.jobs) as executor:
            futures: list[Future[FileResult]] = [
                executor.submit(_run_one, path, config, sink_factory) for path in file_list
            ]
        # Leaving the executor block waits for every task.
        for path, future in zip(file_list, futures):
            try:
                outcomes.append(future.result())
            except Exception as e:  # pragma: no cover
                logger.exception("Unexpected error processing %s: %s", path, e)
                outcomes.append(None)

    results: list[FileResult] = []
    encountered_error_code: ExitCode | None = None
    for outcome in outcomes:
        if outcome is None:
            encountered_error_code = encountered_error_code or ExitCode.PIPELINE_ERROR
            continue
        results.append(outcome)
        code: ExitCode = exit_code_for(outcome)
        if code != ExitCode.SUCCESS:
            encountered_error_code = encountered_error_code or code

    return results, encountered_error_code
