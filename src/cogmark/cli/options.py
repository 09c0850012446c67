# topmark:header:start
#
#   project      : CogMark
#   file         : options.py
#   file_relpath : src/cogmark/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for the Click-based CogMark CLI.

This module centralizes reusable options (verbosity, color, config, generator
and run-mode settings) and their resolution logic, so commands and groups can
stay thin. The helpers here are Click-aware.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, ParamSpec, TypeVar

import click
from click.core import ParameterSource

from cogmark.cli.errors import CogmarkUsageError
from cogmark.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from cogmark.config.logging import CogmarkLogger

P = ParamSpec("P")
R = TypeVar("R")

logger: CogmarkLogger = get_logger(__name__)

#: Click context settings shared by all commands.
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity level.

    Args:
        verbose_count (int): Number of times the verbose flag (-v) is passed.
        quiet_count (int): Number of times the quiet flag (-q) is passed.

    Returns:
        int: ``verbose_count`` when verbose, ``-quiet_count`` when quiet, else 0.

    Raises:
        CogmarkUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise CogmarkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count > 0:
        return verbose_count
    return -quiet_count


def resolve_color(*, no_color: bool, stdout_isatty: bool | None = None) -> bool:
    """Determine whether color output should be enabled.

    Honors ``--no-color``, then the ``FORCE_COLOR`` and ``NO_COLOR`` environment
    variables, and finally defaults to color when stdout is a TTY.
    """
    if no_color:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        stdout_isatty = sys.stdout.isatty()
    return bool(stdout_isatty)


def split_comma_args(values: Iterable[str]) -> list[str] | None:
    """Flatten repeated, comma-separated ``--args`` values.

    ``("run,%s",)`` and ``("run", "%s")`` both give ``["run", "%s"]``.
    Returns None when no value was given so the configured args stay in effect.
    """
    values = list(values)
    if not values:
        return None
    out: list[str] = []
    for value in values:
        out.extend(value.split(","))
    return out


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add -v/--verbose and -q/--quiet options (mutually exclusive counters)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity (report every step of the run).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress all output except errors.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the --no-color flag."""
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (NO_COLOR and FORCE_COLOR are honored too).",
    )(f)
    return f


def trap_underscored_option(ctx: click.Context, param: click.Parameter, _value: object) -> None:
    """Raise a helpful error for underscored long options (e.g., --no_config).

    Runs during option parsing (is_eager=True) so we can show a friendly hint
    instead of the generic "No such option" error.
    """
    name: str | None = param.name
    if name is None or ctx.get_parameter_source(name) is not ParameterSource.COMMANDLINE:
        return
    bad: str = param.opts[0] if param.opts else "--?"
    raise CogmarkUsageError(f"Unknown option: {bad}. Did you mean {bad.replace('_', '-')}?")


def underscored_trap_option(
    *names: str, is_flag: bool = False
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Register hidden underscored spellings that raise a helpful error.

    The hidden option gets a unique destination name so Click's parameter
    source tracking does not overlap with the real option.

    Args:
        *names (str): One or more underscored long option names to trap.
        is_flag (bool): Trap a boolean flag (no value) instead of a value option.

    Returns:
        Callable: A decorator compatible with Click's option stacking.
    """
    if not names:
        raise ValueError("underscored_trap_option requires at least one option name")

    dest: str = f"_trap_{names[0].lstrip('-').replace('-', '_')}"
    # Click refuses `multiple` on flags.
    arity: dict[str, bool] = {"is_flag": True} if is_flag else {"multiple": True}
    return click.option(
        *names,
        dest,
        hidden=True,
        expose_value=False,
        is_eager=True,
        callback=trap_underscored_option,
        **arity,
    )


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--no-config`` and ``--config`` options."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore user and project config files (only use defaults and --config).",
    )(f)
    f = underscored_trap_option("--no_config", is_flag=True)(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge, in order.",
    )(f)
    return f


def common_generator_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the marker and generator command options."""
    f = click.option(
        "-c",
        "--cmd",
        "command",
        default=None,
        help="The command used to run the generator code (default: go).",
    )(f)
    f = click.option(
        "-a",
        "--args",
        "args",
        multiple=True,
        metavar="ARGS",
        help="Comma separated arguments to cmd, %s for the code file (default: run,%s).",
    )(f)
    f = click.option(
        "-e",
        "--ext",
        "ext",
        default=None,
        help="Extension to append to the generator filename (default: .go).",
    )(f)
    f = click.option(
        "-M",
        "--startmark",
        "start_mark",
        default=None,
        help="String that starts gocog statements (default: [[[).",
    )(f)
    f = click.option(
        "-E",
        "--endmark",
        "end_mark",
        default=None,
        help="String that ends gocog statements (default: ]]]).",
    )(f)
    return f


def common_run_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the run-mode options (end-at-EOF, excise, serial, jobs)."""
    f = click.option(
        "-z",
        "--eof",
        "assume_end_at_eof",
        is_flag=True,
        help="The end marker can be omitted, and is assumed at end of file.",
    )(f)
    f = click.option(
        "-x",
        "--excise",
        "excise",
        is_flag=True,
        help="Remove all generated output without running the generators.",
    )(f)
    f = click.option(
        "-S",
        "--serial",
        "serial",
        is_flag=True,
        help="Process the files serially, in order (default is parallel).",
    )(f)
    f = click.option(
        "-j",
        "--jobs",
        "jobs",
        type=click.IntRange(min=1),
        default=None,
        help="Maximum number of files processed in parallel.",
    )(f)
    return f
