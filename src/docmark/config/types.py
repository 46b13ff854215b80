# topmark:header:start
#
#   project      : DocMark
#   file         : types.py
#   file_relpath : src/docmark/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lightweight config enums and aliases.

This module hosts stable, import-friendly definitions that other modules can
depend on without risk of circular imports. Keep it free of side effects.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from docmark.errors import ConfigError
from docmark.tokens.model import TokenKind

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]


class Separate(str, Enum):
    """Blank-line policy around a newly inserted doc block.

    Members:
        TOP: Line break before the block.
        BOTTOM: Extra line break between the block and the declaration.
        BOTH: Both of the above.
        NONE: No extra separation.
    """

    TOP = "top"
    BOTTOM = "bottom"
    BOTH = "both"
    NONE = "none"

    @property
    def separates_top(self) -> bool:
        """True when a line break is emitted before the block."""
        return self in (Separate.TOP, Separate.BOTH)

    @property
    def separates_bottom(self) -> bool:
        """True when an extra line break is emitted after the block."""
        return self in (Separate.BOTTOM, Separate.BOTH)

    @classmethod
    def values(cls) -> list[str]:
        """Return the accepted option values, in declaration order."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: str | Separate) -> Separate:
        """Return the member for ``value`` (case-insensitive).

        Raises:
            ConfigError: If ``value`` is not one of `values`.
        """
        if isinstance(value, Separate):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(
                f'Invalid separate mode "{value}". Allowed values: {", ".join(cls.values())}'
            ) from None


class StructureKind(str, Enum):
    """Structural declarations DocMark can document."""

    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"
    ENUM = "enum"

    @property
    def token_kind(self) -> TokenKind:
        """The token kind of the declaring keyword."""
        return TokenKind(self.value)

    @classmethod
    def values(cls) -> list[str]:
        """Return the accepted option values, in declaration order."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: str | StructureKind) -> StructureKind:
        """Return the member for ``value`` (case-insensitive).

        Raises:
            ConfigError: If ``value`` is not a supported structure keyword.
        """
        if isinstance(value, StructureKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(
                f'Unknown structure "{value}". Allowed structures: {", ".join(cls.values())}'
            ) from None
