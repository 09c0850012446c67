# topmark:header:start
#
#   project      : CogMark
#   file         : test_config_io.py
#   file_relpath : tests/config/test_config_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for TOML I/O helpers in cogmark.config.io."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import tomlkit

from cogmark.config.io import (
    extract_cogmark_table,
    get_bool_checked,
    get_int_checked,
    get_string_list_checked,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    nest_under_tool_section,
    to_toml,
)
from cogmark.core.diagnostics import DiagnosticLevel, DiagnosticLog

if TYPE_CHECKING:
    from pathlib import Path

    from cogmark.config.io import TomlTable


def test_defaults_dict_is_a_fresh_copy() -> None:
    """Mutating one defaults dict must not leak into the next call."""
    first: TomlTable = load_defaults_dict()
    first["markers"]["start"] = "<<<"

    assert load_defaults_dict()["markers"]["start"] == "[[["


def test_to_toml_drops_none_values() -> None:
    """`None` has no TOML representation and is silently omitted."""
    text: str = to_toml({"run": {"jobs": None, "serial": True}, "generator": {"args": ["a", None]}})
    parsed: Any = tomlkit.parse(text).unwrap()

    assert parsed == {"run": {"serial": True}, "generator": {"args": ["a"]}}


def test_nest_under_tool_section_renders_pyproject_layout() -> None:
    """Nesting produces a ``[tool.cogmark.*]`` document."""
    text: str = to_toml(nest_under_tool_section({"run": {"serial": True}}, "cogmark"))

    assert "[tool.cogmark.run]" in text
    assert tomlkit.parse(text).unwrap() == {"tool": {"cogmark": {"run": {"serial": True}}}}


def test_load_toml_dict_reports_parse_errors_as_empty(tmp_path: Path) -> None:
    """Broken TOML is logged and treated as an empty document."""
    f: Path = tmp_path / "cogmark.toml"
    f.write_text("[markers\nstart = 1\n", encoding="utf-8")

    assert load_toml_dict(f) == {}


def test_load_toml_dict_missing_file_is_empty(tmp_path: Path) -> None:
    """A missing file is logged and treated as an empty document."""
    assert load_toml_dict(tmp_path / "nope.toml") == {}


def test_extract_table_from_pyproject(tmp_path: Path) -> None:
    """Only ``[tool.cogmark]`` is taken from a `pyproject.toml`."""
    f: Path = tmp_path / "pyproject.toml"
    data: TomlTable = {"project": {"name": "x"}, "tool": {"cogmark": {"root": True}}}

    assert extract_cogmark_table(f, data) == {"root": True}
    assert extract_cogmark_table(f, {"project": {"name": "x"}}) is None
    assert extract_cogmark_table(f, {"tool": {"cogmark": {}}}) is None


def test_extract_table_from_dedicated_file(tmp_path: Path) -> None:
    """A dedicated config file is the CogMark table itself."""
    data: TomlTable = {"markers": {"start": "<<"}}

    assert extract_cogmark_table(tmp_path / "cogmark.toml", data) is data


def test_checked_getters_warn_on_type_mismatch() -> None:
    """Wrongly typed values yield None and a warning diagnostic."""
    diags = DiagnosticLog()
    table: TomlTable = {"jobs": True, "serial": "yes", "args": ["x", 1]}

    assert get_int_checked(table, "run", "jobs", diags) is None
    assert get_bool_checked(table, "run", "serial", diags) is None
    assert get_string_list_checked(table, "generator", "args", diags) is None

    assert len(diags) == 3
    assert all(d.level == DiagnosticLevel.WARNING for d in diags)
    assert "[run].jobs" in diags.items[0].message


def test_checked_getters_absent_keys_are_silent() -> None:
    """Absent keys return None without diagnostics."""
    diags = DiagnosticLog()

    assert get_int_checked({}, "run", "jobs", diags) is None
    assert get_table_value({}, "run", diags) == {}
    assert len(diags) == 0


def test_get_table_value_rejects_scalars() -> None:
    """A scalar where a table is expected is ignored with a warning."""
    diags = DiagnosticLog()

    assert get_table_value({"run": 3}, "run", diags) == {}
    assert len(diags) == 1
