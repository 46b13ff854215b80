# topmark:header:start
#
#   project      : DocMark
#   file         : common.py
#   file_relpath : src/docmark/cli/commands/common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by DocMark subcommands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from docmark.cli.cli_types import ArgsNamespace, build_annotations
from docmark.cli.console import ClickConsole

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docmark.config.types import Separate, StructureKind


def get_console(ctx: click.Context) -> ClickConsole:
    """Return the console stored on the context, creating a plain one if missing."""
    ctx.ensure_object(dict)
    console: Any = ctx.obj.get("console")
    if not isinstance(console, ClickConsole):
        console = ClickConsole(enable_color=False)
        ctx.obj["console"] = console
    return console


def get_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity resolved by the group (0 when unset)."""
    root: click.Context = ctx.find_root()
    obj: Any = root.obj
    if isinstance(obj, dict):
        return int(obj.get("verbosity_level", 0))
    return 0


def build_args_namespace(
    *,
    annotation_pairs: Sequence[tuple[str, str]] = (),
    manifest_path: str | None = None,
    preserve_existing: bool | None = None,
    separate: Separate | None = None,
    add_structure_name: bool | None = None,
    ensure_spacing: bool | None = None,
    structures: Sequence[StructureKind] = (),
    include_patterns: Sequence[str] = (),
    exclude_patterns: Sequence[str] = (),
) -> ArgsNamespace:
    """Collect doc block and filtering options into an `ArgsNamespace`."""
    return ArgsNamespace(
        annotations=build_annotations(annotation_pairs),
        manifest_path=manifest_path,
        preserve_existing=preserve_existing,
        separate=separate.value if separate is not None else None,
        add_structure_name=add_structure_name,
        ensure_spacing=ensure_spacing,
        structures=[s.value for s in structures],
        include_patterns=list(include_patterns),
        exclude_patterns=list(exclude_patterns),
    )
