# topmark:header:start
#
#   file         : exit_codes.py
#   file_relpath : src/cogmark/core/exit_codes.py
#   project      : CogMark
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for CogMark.

CogMark aligns with the BSD `sysexits` convention where practical, so that other tooling
can interpret failures consistently. A batch run reports the *first* non-success code
it encountered; files without generator blocks are not failures.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for CogMark.

    Attributes:
        SUCCESS: Every file was rewritten, or had no generator blocks.
        FAILURE: Generic failure (non-specific error). Prefer a more specific
            code if available.
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        MALFORMED_INPUT: A generator block or generated section was not
            terminated. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path (or filelist) does not exist. Mirrors BSD
            ``EX_NOINPUT (66)``.
        GENERATOR_FAILED: The generator command exited nonzero or could not be
            launched. Mirrors BSD ``EX_UNAVAILABLE (69)``.
        PIPELINE_ERROR: Internal engine failure. Mirrors BSD ``EX_SOFTWARE (70)``.
        CANNOT_CREATE: A scratch or output artifact already exists. Mirrors BSD
            ``EX_CANTCREAT (73)``.
        IO_ERROR: I/O error reading/writing/renaming a file. Mirrors BSD
            ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions (read/write). Mirrors BSD
            ``EX_NOPERM (77)``.
        CONFIG_ERROR: Configuration error (missing/invalid/malformed config).
            Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    MALFORMED_INPUT = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    GENERATOR_FAILED = 69  # EX_UNAVAILABLE
    PIPELINE_ERROR = 70  # EX_SOFTWARE (internal error)
    CANNOT_CREATE = 73  # EX_CANTCREAT
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG
