# topmark:header:start
#
#   project      : CogMark
#   file         : keys.py
#   file_relpath : src/cogmark/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for CogMark configuration.

These constants define the external configuration schema as it appears in
`cogmark.toml` and in `[tool.cogmark]` inside `pyproject.toml`. Renaming or
removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by CogMark configuration."""

    # Root / discovery
    KEY_ROOT: Final[str] = "root"

    # [markers]
    SECTION_MARKERS: Final[str] = "markers"

    KEY_START: Final[str] = "start"
    KEY_END: Final[str] = "end"

    # [generator]
    SECTION_GENERATOR: Final[str] = "generator"

    KEY_COMMAND: Final[str] = "command"
    KEY_ARGS: Final[str] = "args"
    KEY_EXT: Final[str] = "ext"

    # [run]
    SECTION_RUN: Final[str] = "run"

    KEY_ASSUME_END_AT_EOF: Final[str] = "assume_end_at_eof"
    KEY_EXCISE: Final[str] = "excise"
    KEY_SERIAL: Final[str] = "serial"
    KEY_JOBS: Final[str] = "jobs"
