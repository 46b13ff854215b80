# topmark:header:start
#
#   project      : DocMark
#   file         : exit_codes.py
#   file_relpath : src/docmark/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the DocMark CLI.

DocMark follows the BSD ``sysexits`` convention where practical so other
tooling can interpret failures consistently. ``WOULD_CHANGE = 2`` is the one
divergence: it signals a dry run that found files to update. Click's own
usage errors also exit with 2 and print a ``Usage:`` line.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the DocMark CLI.

    Attributes:
        SUCCESS: Nothing to do, or all requested changes were written.
        FAILURE: Generic failure.
        WOULD_CHANGE: Dry run: files would change with ``--apply``.
        USAGE_ERROR: Invalid invocation. Mirrors ``EX_USAGE (64)``.
        ENCODING_ERROR: A file is not valid UTF-8. Mirrors ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: An input path or manifest does not exist. Mirrors ``EX_NOINPUT (66)``.
        IO_ERROR: Reading or writing a file failed. Mirrors ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions. Mirrors ``EX_NOPERM (77)``.
        CONFIG_ERROR: Invalid configuration or annotations. Mirrors ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2

    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
