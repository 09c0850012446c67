# topmark:header:start
#
#   project      : CogMark
#   file         : __init__.py
#   file_relpath : src/cogmark/config/io/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O for CogMark configuration (load, inspect, render)."""

from __future__ import annotations

from cogmark.config.io.getters import (
    get_bool_checked,
    get_int_checked,
    get_string_checked,
    get_string_list_checked,
    get_table_value,
)
from cogmark.config.io.loaders import extract_cogmark_table, load_defaults_dict, load_toml_dict
from cogmark.config.io.render import nest_under_tool_section, to_toml
from cogmark.config.io.types import TomlTable

__all__ = [
    "TomlTable",
    "extract_cogmark_table",
    "get_bool_checked",
    "get_int_checked",
    "get_string_checked",
    "get_string_list_checked",
    "get_table_value",
    "load_defaults_dict",
    "load_toml_dict",
    "nest_under_tool_section",
    "to_toml",
]
