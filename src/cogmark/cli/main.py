# topmark:header:start
#
#   project      : CogMark
#   file         : main.py
#   file_relpath : src/cogmark/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CogMark CLI entry point.

Group-level options (verbosity, color) are initialized once and placed into
``ctx.obj``; subcommands read the shared console and verbosity from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cogmark.cli.commands.dump_config import dump_config_command
from cogmark.cli.commands.run import run_command
from cogmark.cli.commands.version import version_command
from cogmark.cli.console import ClickConsole
from cogmark.cli.options import (
    CONTEXT_SETTINGS,
    common_color_options,
    common_verbose_options,
    resolve_color,
    resolve_verbosity,
)
from cogmark.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from cogmark.cli.console_api import ConsoleLike
    from cogmark.config.logging import CogmarkLogger

logger: CogmarkLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging and color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    # Program-output verbosity (negative when quiet)
    level_cli: int = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = level_cli

    # Internal logging is configured via the environment only
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    enable_color: bool = resolve_color(no_color=no_color)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color, quiet=level_cli < 0)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="CogMark: regenerate text from generator code embedded in your files.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Entry point for the CogMark CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, no_color=no_color)
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'cogmark run [INFILE | @FILELIST]...' to process files.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(run_command)

cli.add_command(dump_config_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
