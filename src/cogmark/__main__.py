# topmark:header:start
#
#   project      : CogMark
#   file         : __main__.py
#   file_relpath : src/cogmark/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running CogMark via ``python -m cogmark``.

It delegates directly to :func:`cogmark.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how CogMark is launched.

Examples:
    Regenerate a file using the module interface::

        python -m cogmark run src/constants.go
"""

from __future__ import annotations

from cogmark.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
