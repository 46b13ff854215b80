# topmark:header:start
#
#   project      : DocMark
#   file         : cli_types.py
#   file_relpath : src/docmark/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared CLI parameter types and argument containers.

`ArgsNamespace` is the mapping handed from Click commands to
`docmark.config.model.MutableConfig.apply_cli_args`; `EnumChoiceParam` and
`AnnotationParam` convert raw option strings into typed values.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, NoReturn, TypedDict, TypeVar, cast

import click

if TYPE_CHECKING:
    from collections.abc import Iterable

    from click.shell_completion import CompletionItem

E = TypeVar("E", bound=Enum)


class ArgsNamespace(TypedDict, total=False):
    """Parsed CLI overrides, in the shape `MutableConfig.apply_cli_args` expects.

    Attributes:
        annotations (dict[str, Any]): Tags from ``--annotation`` (lists for repeated keys).
        manifest_path (str | None): Manifest from ``--manifest``.
        preserve_existing (bool | None): ``--preserve-existing/--no-preserve-existing``.
        separate (str | None): ``--separate``.
        add_structure_name (bool | None): ``--add-structure-name/--no-add-structure-name``.
        ensure_spacing (bool | None): ``--ensure-spacing/--no-ensure-spacing``.
        structures (list[str]): ``--structure`` values.
        include_patterns (list[str]): ``--include`` patterns.
        exclude_patterns (list[str]): ``--exclude`` patterns.
    """

    annotations: dict[str, Any]
    manifest_path: str | None
    preserve_existing: bool | None
    separate: str | None
    add_structure_name: bool | None
    ensure_spacing: bool | None
    structures: list[str]
    include_patterns: list[str]
    exclude_patterns: list[str]


def build_annotations(pairs: Iterable[tuple[str, str]]) -> dict[str, Any]:
    """Group ``(key, value)`` pairs into annotations.

    A key given once maps to its value; a repeated key maps to the list of
    its values, in order.
    """
    grouped: dict[str, list[str]] = {}
    for key, value in pairs:
        grouped.setdefault(key, []).append(value)
    return {key: values[0] if len(values) == 1 else values for key, values in grouped.items()}


class AnnotationParam(click.ParamType):
    """Click type for ``KEY=VALUE`` annotation overrides.

    ``KEY`` alone (no ``=``) yields a bare tag with an empty value.
    """

    name = "annotation"

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> tuple[str, str]:
        """Split ``value`` into a ``(key, value)`` pair."""
        if isinstance(value, tuple):
            return cast("tuple[str, str]", value)
        key, _, text = str(value).partition("=")
        key = key.strip()
        if not key:
            self.fail(f"Invalid annotation {value!r}: expected KEY=VALUE", param, ctx)
        return key, text.strip()


class EnumChoiceParam(click.ParamType, Generic[E]):
    """Click type converting a string (case-insensitively) to a member of ``enum_cls``."""

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls: type[E] = enum_cls
        self.name: str = enum_cls.__name__.lower()
        self.choices: list[str] = [str(member.value) for member in enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert ``value`` to an enum member."""
        if value is None or isinstance(value, self.enum_cls):
            return value
        lookup: dict[str, E] = {str(member.value).lower(): member for member in self.enum_cls}
        key: str = str(value).lower()
        if key in lookup:
            return lookup[key]
        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def shell_complete(
        self,
        ctx: click.Context,
        param: click.Parameter,
        incomplete: str,
    ) -> list[CompletionItem]:
        """Complete enum values for shells (``_DOCMARK_COMPLETE=bash_source docmark``)."""
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix: str = (incomplete or "").lower()
        return [RuntimeCompletionItem(c) for c in self.choices if c.lower().startswith(prefix)]

    def __repr__(self) -> str:
        return f"EnumChoiceParam({self.enum_cls.__name__})"
