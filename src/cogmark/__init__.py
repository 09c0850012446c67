# topmark:header:start
#
#   project      : CogMark
#   file         : __init__.py
#   file_relpath : src/cogmark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CogMark package.

CogMark regenerates derived text inside source trees. It locates generator
blocks embedded in a file (typically inside line comments), runs each block
through an external interpreter and splices the captured output back between
the block and its end marker. It exposes both a CLI and a small typed engine
API (`cogmark.engine.run_file`, `cogmark.engine.run_files`).
"""

from __future__ import annotations
