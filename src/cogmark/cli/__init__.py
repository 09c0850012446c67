# topmark:header:start
#
#   project      : CogMark
#   file         : __init__.py
#   file_relpath : src/cogmark/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CogMark command-line interface (Click)."""
