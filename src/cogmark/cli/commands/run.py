# topmark:header:start
#
#   project      : CogMark
#   file         : run.py
#   file_relpath : src/cogmark/cli/commands/run.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CogMark `run` command.

Runs the rewrite engine over every input file. Inputs prefixed with ``@`` are
filelists (see `cogmark.cli.io`). Each file is processed independently; the
command exits with the first non-success exit code in input order, after every
file has been processed.

Examples:
  Regenerate the blocks of two files:

    $ cogmark run README.md docs/usage.md

  Use Python generators and read the targets from a filelist:

    $ cogmark run -c python3 -a %s -e .py @generated.lst

  Remove all generated output:

    $ cogmark run --excise README.md
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cogmark.cli.config_resolver import build_overrides, resolve_config_from_click
from cogmark.cli.errors import CogmarkUsageError
from cogmark.cli.io import expand_inputs
from cogmark.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_generator_options,
    common_run_options,
    split_comma_args,
)
from cogmark.cli.utils import make_live_sink, render_result, render_summary
from cogmark.config.logging import get_logger
from cogmark.core.exit_codes import ExitCode
from cogmark.engine import run_files

if TYPE_CHECKING:
    from pathlib import Path

    from cogmark.cli.console_api import ConsoleLike
    from cogmark.config import Config
    from cogmark.config.logging import CogmarkLogger
    from cogmark.core.diagnostics import DiagnosticSink
    from cogmark.engine import FileResult

logger: CogmarkLogger = get_logger(__name__)


@click.command(
    name="run",
    help=(
        "Run cog over each INFILE, regenerating the output of every generator block in place. "
        "Names prefixed with @ are newline delimited lists of files to be processed."
    ),
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("inputs", nargs=-1, metavar="[INFILE | @FILELIST]...")
@common_run_options
@common_generator_options
@common_config_options
@click.option(
    "--summary",
    "show_summary",
    is_flag=True,
    help="Print aggregate counts after processing.",
)
def run_command(
    *,
    inputs: tuple[str, ...],
    assume_end_at_eof: bool,
    excise: bool,
    serial: bool,
    jobs: int | None,
    command: str | None,
    args: tuple[str, ...],
    ext: str | None,
    start_mark: str | None,
    end_mark: str | None,
    no_config: bool,
    config_paths: tuple[str, ...],
    show_summary: bool,
) -> None:
    """Process every input file and exit with the aggregated exit code.

    Args:
        inputs (tuple[str, ...]): Paths and ``@FILELIST`` references.
        assume_end_at_eof (bool): Treat end of file as the end marker.
        excise (bool): Remove generated output without running generators.
        serial (bool): Process files one after another.
        jobs (int | None): Maximum number of parallel workers.
        command (str | None): Generator command override.
        args (tuple[str, ...]): Generator argument overrides (comma separated).
        ext (str | None): Scratch file extension override.
        start_mark (str | None): Start delimiter override.
        end_mark (str | None): End delimiter override.
        no_config (bool): If True, skip user and project config files.
        config_paths (tuple[str, ...]): Additional TOML config files to merge.
        show_summary (bool): Print aggregate counts at the end.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    verbosity_level: int = ctx.obj.get("verbosity_level", 0)

    if not inputs:
        raise CogmarkUsageError("No input files given. Usage: cogmark run [INFILE | @FILELIST]...")

    files: list[Path] = expand_inputs(inputs)
    if not files:
        console.print(console.styled("No files to process.", fg="blue"))
        return

    config: Config = resolve_config_from_click(
        files=files,
        no_config=no_config,
        config_paths=config_paths,
        overrides=build_overrides(
            verbosity_level=verbosity_level,
            start_mark=start_mark,
            end_mark=end_mark,
            command=command,
            args=split_comma_args(args),
            ext=ext,
            assume_end_at_eof=assume_end_at_eof,
            excise=excise,
            serial=serial,
            jobs=jobs,
        ),
    )
    logger.debug("Effective config: %s", config)
    for diag in config.diagnostics:
        console.warn(str(diag))

    live: bool = config.verbose

    def sink_factory(path: Path) -> DiagnosticSink | None:
        return make_live_sink(console, path) if live else None

    results: list[FileResult]
    exit_code: ExitCode | None
    results, exit_code = run_files(files, config, sink_factory=sink_factory)

    # Quiet runs only report failures.
    for result in results:
        if config.quiet and result.ok:
            continue
        render_result(console, result, show_diagnostics=not live)

    if show_summary and not config.quiet:
        render_summary(console, results)

    if exit_code is not None and exit_code != ExitCode.SUCCESS:
        ctx.exit(int(exit_code))
