# topmark:header:start
#
#   project      : CogMark
#   file         : getters.py
#   file_relpath : src/cogmark/config/io/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Checked value getters for TOML config tables.

Each getter returns ``None`` when the key is absent, so an unset value never
overrides a lower-precedence layer during merging. When the key is present but
holds the wrong type, the getter records a **warning** in the supplied
`DiagnosticLog` (and logs it) and also returns ``None``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from cogmark.config.logging import get_logger

if TYPE_CHECKING:
    from cogmark.config.logging import CogmarkLogger
    from cogmark.core.diagnostics import DiagnosticLog

    from .types import TomlTable

logger: CogmarkLogger = get_logger(__name__)


def _warn(diagnostics: DiagnosticLog, where: str, key: str, expected: str, value: object) -> None:
    msg: str = f"Ignoring [{where}].{key}: expected {expected}, got {type(value).__name__}"
    logger.warning(msg)
    diagnostics.add_warning(msg)


def get_table_value(table: TomlTable, key: str, diagnostics: DiagnosticLog) -> TomlTable:
    """Return the sub-table stored under ``key`` (empty when absent or malformed).

    Args:
        table (TomlTable): Table to query.
        key (str): Sub-table name.
        diagnostics (DiagnosticLog): Log receiving a warning on type mismatch.

    Returns:
        TomlTable: The sub-table, or an empty dict.
    """
    value: Any = table.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        _warn(diagnostics, "<root>", key, "a table", value)
        return {}
    return cast("TomlTable", value)


def get_string_checked(
    table: TomlTable, where: str, key: str, diagnostics: DiagnosticLog
) -> str | None:
    """Return a string value, or None when absent or not a string."""
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        _warn(diagnostics, where, key, "a string", value)
        return None
    return value


def get_bool_checked(
    table: TomlTable, where: str, key: str, diagnostics: DiagnosticLog
) -> bool | None:
    """Return a boolean value, or None when absent or not a boolean."""
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        _warn(diagnostics, where, key, "a boolean", value)
        return None
    return value


def get_int_checked(
    table: TomlTable, where: str, key: str, diagnostics: DiagnosticLog
) -> int | None:
    """Return an integer value, or None when absent or not an integer.

    Booleans are rejected even though ``bool`` subclasses ``int`` in Python.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        _warn(diagnostics, where, key, "an integer", value)
        return None
    return value


def get_string_list_checked(
    table: TomlTable, where: str, key: str, diagnostics: DiagnosticLog
) -> list[str] | None:
    """Return a list of strings, or None when absent or not a list of strings."""
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        _warn(diagnostics, where, key, "an array of strings", value)
        return None
    items: list[object] = cast("list[object]", value)
    if not all(isinstance(item, str) for item in items):
        _warn(diagnostics, where, key, "an array of strings", value)
        return None
    return [cast("str", item) for item in items]
