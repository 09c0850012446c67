# topmark:header:start
#
#   project      : CogMark
#   file         : __init__.py
#   file_relpath : src/cogmark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CogMark configuration: immutable `Config`, mutable `MutableConfig` builder."""

from __future__ import annotations

from cogmark.config.model import ArgsLike, Config, MutableConfig

__all__ = ["ArgsLike", "Config", "MutableConfig"]
