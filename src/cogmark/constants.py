# topmark:header:start
#
#   project      : CogMark
#   file         : constants.py
#   file_relpath : src/cogmark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CogMark Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version


def _installed_version() -> str:
    try:
        return get_version("cogmark")
    except PackageNotFoundError:
        return "0+unknown"


COGMARK_VERSION: str = _installed_version()

# Marker keywords glued to the configurable delimiters:
#   <start_mark>gocog ... gocog<end_mark> ... <start_mark>end<end_mark>
GENERATOR_KEYWORD: str = "gocog"
END_KEYWORD: str = "end"

DEFAULT_START_MARK: str = "[[["
DEFAULT_END_MARK: str = "]]]"

DEFAULT_COMMAND: str = "go"
DEFAULT_ARGS: tuple[str, ...] = ("run", "%s")
DEFAULT_EXT: str = ".go"

# Substituted by the scratch generator file path in the command and its arguments.
PLACEHOLDER: str = "%s"

# Transient artifacts: `<file>_cog` (rewritten output), `<file>_cog_<ext>` (generator source)
OUTPUT_SUFFIX: str = "_cog"
SCRATCH_SUFFIX: str = "_cog_"

CONFIG_FILE_NAME: str = "cogmark.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "cogmark"

LOG_LEVEL_ENV_VAR: str = "COGMARK_LOG_LEVEL"
