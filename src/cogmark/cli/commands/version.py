# topmark:header:start
#
#   project      : CogMark
#   file         : version.py
#   file_relpath : src/cogmark/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CogMark `version` command.

Prints the current CogMark version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cogmark.constants import COGMARK_VERSION

if TYPE_CHECKING:
    from cogmark.cli.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of CogMark.",
)
def version_command() -> None:
    """Show the current version of CogMark."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if ctx.obj.get("verbosity_level", 0) > 0:
        console.print(console.styled("CogMark version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(COGMARK_VERSION, bold=True)}")
    else:
        console.print(console.styled(COGMARK_VERSION, bold=True))
