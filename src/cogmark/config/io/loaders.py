# topmark:header:start
#
#   project      : CogMark
#   file         : loaders.py
#   file_relpath : src/cogmark/config/io/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module provides I/O helpers for reading CogMark configuration from
on-disk TOML files (`cogmark.toml` / `pyproject.toml`) and the runtime defaults
defined in code. Parsing is done with `tomlkit` and returned as plain `dict`
structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from cogmark.config.keys import Toml
from cogmark.config.logging import get_logger
from cogmark.constants import (
    DEFAULT_ARGS,
    DEFAULT_COMMAND,
    DEFAULT_END_MARK,
    DEFAULT_EXT,
    DEFAULT_START_MARK,
    PYPROJECT_FILE_NAME,
    PYPROJECT_TOOL_SECTION,
)

if TYPE_CHECKING:
    from pathlib import Path

    from cogmark.config.logging import CogmarkLogger

    from .types import TomlTable

logger: CogmarkLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return CogMark's **runtime defaults** as a Python dict.

    This function intentionally performs **no I/O**. The returned value is a new
    dict so callers can mutate it safely.

    Returns:
        A TOML-table-compatible dict containing the runtime defaults.
    """
    return {
        Toml.SECTION_MARKERS: {
            Toml.KEY_START: DEFAULT_START_MARK,
            Toml.KEY_END: DEFAULT_END_MARK,
        },
        Toml.SECTION_GENERATOR: {
            Toml.KEY_COMMAND: DEFAULT_COMMAND,
            Toml.KEY_ARGS: list(DEFAULT_ARGS),
            Toml.KEY_EXT: DEFAULT_EXT,
        },
        Toml.SECTION_RUN: {
            Toml.KEY_ASSUME_END_AT_EOF: False,
            Toml.KEY_EXCISE: False,
            Toml.KEY_SERIAL: False,
            # NOTE: jobs defaults to None (executor default) unless configured.
        },
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (e.g., ``cogmark.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def extract_cogmark_table(path: Path, data: TomlTable) -> TomlTable | None:
    """Return the CogMark table of a parsed config document.

    For `pyproject.toml` this is the ``[tool.cogmark]`` subsection; any other
    file is a dedicated CogMark config whose top level *is* the table.

    Args:
        path (Path): Path the document was loaded from (selects the layout).
        data (TomlTable): Parsed document.

    Returns:
        TomlTable | None: The CogMark table, or None when a `pyproject.toml`
        carries no ``[tool.cogmark]`` section.
    """
    if path.name != PYPROJECT_FILE_NAME:
        return data
    tool_any: Any = data.get("tool", {})
    if not isinstance(tool_any, dict):
        return None
    section: Any = cast("TomlTable", tool_any).get(PYPROJECT_TOOL_SECTION)
    if not isinstance(section, dict) or not section:
        return None
    return cast("TomlTable", section)
