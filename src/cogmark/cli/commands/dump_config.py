# topmark:header:start
#
#   project      : CogMark
#   file         : dump_config.py
#   file_relpath : src/cogmark/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CogMark `dump-config` command.

Emits the effective CogMark configuration as TOML after applying defaults,
user/project config files, explicit ``--config`` files and any CLI overrides.
The output is wrapped between `# === BEGIN ===` and `# === END ===` markers for
easy parsing in tests or tooling.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from cogmark.cli.config_resolver import build_overrides, resolve_config_from_click
from cogmark.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_generator_options,
    common_run_options,
    split_comma_args,
)
from cogmark.config.io import nest_under_tool_section, to_toml
from cogmark.config.logging import get_logger
from cogmark.constants import PYPROJECT_TOOL_SECTION

if TYPE_CHECKING:
    from cogmark.cli.console_api import ConsoleLike
    from cogmark.config import Config
    from cogmark.config.io import TomlTable
    from cogmark.config.logging import CogmarkLogger

logger: CogmarkLogger = get_logger(__name__)


@click.command(
    name="dump-config",
    help="Dump the final merged CogMark configuration as TOML.",
    epilog=(
        "Notes:\n"
        "  • Discovery starts in the current directory (or at --anchor).\n"
        "  • Output is wrapped between '# === BEGIN ===' and '# === END ===' markers."
    ),
    context_settings=CONTEXT_SETTINGS,
)
@click.option(
    "--anchor",
    type=click.Path(exists=True, file_okay=True, dir_okay=True),
    default=None,
    help="Start config discovery from this file or directory instead of the current directory.",
)
@click.option(
    "--pyproject",
    is_flag=True,
    help="Nest the output under [tool.cogmark], ready to paste into pyproject.toml.",
)
@common_config_options
@common_generator_options
@common_run_options
def dump_config_command(
    *,
    anchor: str | None,
    pyproject: bool,
    no_config: bool,
    config_paths: tuple[str, ...],
    command: str | None,
    args: tuple[str, ...],
    ext: str | None,
    start_mark: str | None,
    end_mark: str | None,
    assume_end_at_eof: bool,
    excise: bool,
    serial: bool,
    jobs: int | None,
) -> None:
    """Dump the final merged configuration as TOML.

    Args:
        anchor (str | None): Where config discovery starts (default: current directory).
        pyproject (bool): Render as a ``[tool.cogmark]`` table.
        no_config (bool): If True, skip user and project config files.
        config_paths (tuple[str, ...]): Additional TOML config files to merge.
        command (str | None): Generator command override.
        args (tuple[str, ...]): Generator argument overrides (comma separated).
        ext (str | None): Scratch file extension override.
        start_mark (str | None): Start delimiter override.
        end_mark (str | None): End delimiter override.
        assume_end_at_eof (bool): Assume the end marker at end of file.
        excise (bool): Excise mode.
        serial (bool): Serial processing.
        jobs (int | None): Parallel worker count.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    config: Config = resolve_config_from_click(
        files=[Path(anchor)] if anchor else [],
        no_config=no_config,
        config_paths=config_paths,
        overrides=build_overrides(
            verbosity_level=ctx.obj.get("verbosity_level", 0),
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
    logger.trace("Config for dump-config: %s", config)

    for diag in config.diagnostics:
        console.warn(str(diag))

    table: TomlTable = config.to_toml_dict()
    if pyproject:
        table = nest_under_tool_section(table, PYPROJECT_TOOL_SECTION)

    console.print("# Merged CogMark config (TOML):")
    for source in config.config_files:
        console.print(f"#   source: {source}")
    console.print()
    console.print("# === BEGIN ===")
    console.print(to_toml(table).rstrip("\n"))
    console.print("# === END ===")
