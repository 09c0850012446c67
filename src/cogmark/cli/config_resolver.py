# topmark:header:start
#
#   project      : CogMark
#   file         : config_resolver.py
#   file_relpath : src/cogmark/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the effective CogMark configuration from Click parameters.

Resolution order (lowest → highest precedence):
  1. Runtime defaults.
  2. User config: ``$XDG_CONFIG_HOME/cogmark/cogmark.toml`` or ``~/.cogmark.toml``.
  3. Project configs discovered upward from the anchor (root-most first):
     ``pyproject.toml`` (``[tool.cogmark]``) then ``cogmark.toml`` per directory;
     ``root = true`` stops discovery.
  4. Explicit ``--config`` files, merged in order.
  5. CLI overrides.

``--no-config`` skips layers 2 and 3.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from cogmark.cli.errors import CogmarkConfigError
from cogmark.config import MutableConfig
from cogmark.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from cogmark.config import Config
    from cogmark.config.logging import CogmarkLogger

logger: CogmarkLogger = get_logger(__name__)


def discovery_anchor(files: Sequence[Path]) -> Path:
    """Return the directory where config discovery starts.

    This is the directory of the first input file, or the current working
    directory when there is no input.
    """
    if not files:
        return Path.cwd().resolve()
    first: Path = files[0]
    return (first if first.is_dir() else first.parent).resolve()


def resolve_config_from_click(
    *,
    files: Sequence[Path],
    no_config: bool,
    config_paths: Sequence[str],
    overrides: Mapping[str, Any],
) -> Config:
    """Build the frozen `Config` for a command.

    Args:
        files (Sequence[Path]): Expanded input files (the first one anchors discovery).
        no_config (bool): If True, skip user and project config discovery.
        config_paths (Sequence[str]): Explicit config files from ``--config``.
        overrides (Mapping[str, Any]): CLI overrides; ``None`` values are ignored.

    Returns:
        Config: The immutable configuration snapshot.

    Raises:
        CogmarkConfigError: If the merged configuration is invalid.
    """
    anchor: Path = discovery_anchor(files)
    logger.debug("Config discovery anchor: %s", anchor)

    draft: MutableConfig = MutableConfig.load_merged(
        anchor=anchor,
        extra_config_files=[Path(p) for p in config_paths],
        no_config=no_config,
    )
    draft = draft.apply_cli_args(overrides)
    logger.trace("Merged config draft: %s", draft)

    try:
        return draft.freeze()
    except ValueError as e:
        raise CogmarkConfigError(str(e)) from e


def build_overrides(
    *,
    verbosity_level: int,
    start_mark: str | None,
    end_mark: str | None,
    command: str | None,
    args: list[str] | None,
    ext: str | None,
    assume_end_at_eof: bool,
    excise: bool,
    serial: bool,
    jobs: int | None,
) -> dict[str, Any]:
    """Return the CLI overrides mapping consumed by `MutableConfig.apply_cli_args`."""
    return {
        "verbosity_level": max(verbosity_level, 0),
        "quiet": verbosity_level < 0,
        "start_mark": start_mark,
        "end_mark": end_mark,
        "command": command,
        "args": args,
        "ext": ext,
        "assume_end_at_eof": assume_end_at_eof,
        "excise": excise,
        "serial": serial,
        "jobs": jobs,
    }
