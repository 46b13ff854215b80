# topmark:header:start
#
#   project      : DocMark
#   file         : errors.py
#   file_relpath : src/docmark/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core exceptions raised by DocMark.

These exceptions are framework-agnostic. The CLI translates them into Click
exceptions with dedicated exit codes (see `docmark.cli.errors`).

Hierarchy:
    DocmarkError
      ├── InvalidTagError      (also a ValueError; bad annotation configuration)
      ├── ConfigError          (also a ValueError; bad option values)
      └── ManifestError
            ├── ManifestNotFoundError
            ├── ManifestReadError
            └── ManifestDecodeError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class DocmarkError(Exception):
    """Base class for all DocMark errors."""


class InvalidTagError(DocmarkError, ValueError):
    """An annotation tag name failed validation.

    Attributes:
        key (object): The offending key, as given by the caller.
        allowed (tuple[str, ...]): The allow-list, populated for unknown tags only.
    """

    def __init__(self, message: str, *, key: object, allowed: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.key = key
        self.allowed: tuple[str, ...] = tuple(allowed)


class ConfigError(DocmarkError, ValueError):
    """A configuration option holds an unsupported value."""


class ManifestError(DocmarkError):
    """Base class for project manifest failures.

    Attributes:
        path (Path): The manifest path that failed.
    """

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class ManifestNotFoundError(ManifestError):
    """The manifest file does not exist."""


class ManifestReadError(ManifestError):
    """The manifest file exists but could not be read."""


class ManifestDecodeError(ManifestError):
    """The manifest content could not be decoded into a table."""
