# topmark:header:start
#
#   project      : DocMark
#   file         : errors.py
#   file_relpath : src/docmark/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the DocMark CLI.

Each class carries the exit code Click uses when the exception escapes a
command. Messages go through the project console when one is attached to the
Click context, otherwise through Click's default error display.
"""

from __future__ import annotations

from typing import IO, Any

import click

from docmark.cli.exit_codes import ExitCode


class DocmarkCliError(click.ClickException):
    """Base class for all DocMark CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (coloring happens in `show`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        obj: Any = getattr(ctx, "obj", None)
        console: Any = obj.get("console") if isinstance(obj, dict) else None
        if console is not None:
            console.error(f"Error: {self.format_message()}")
            return
        super().show(file)


class DocmarkUsageError(DocmarkCliError):
    """Invalid flags or arguments."""

    exit_code = ExitCode.USAGE_ERROR


class DocmarkConfigError(DocmarkCliError):
    """Invalid configuration, option value or annotation."""

    exit_code = ExitCode.CONFIG_ERROR


class DocmarkFileNotFoundError(DocmarkCliError):
    """An input path or the manifest does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class DocmarkPermissionDeniedError(DocmarkCliError):
    """Insufficient permissions to read or write a file."""

    exit_code = ExitCode.PERMISSION_DENIED


class DocmarkIOError(DocmarkCliError):
    """Reading or writing a file failed."""

    exit_code = ExitCode.IO_ERROR


class DocmarkEncodingError(DocmarkCliError):
    """A file could not be decoded as UTF-8."""

    exit_code = ExitCode.ENCODING_ERROR
