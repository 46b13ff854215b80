# topmark:header:start
#
#   project      : DocMark
#   file         : config.py
#   file_relpath : src/docmark/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocMark ``config`` commands.

* ``docmark config dump``: print the effective configuration as TOML, after
  defaults, discovered files, ``--config`` files and CLI overrides.
* ``docmark config init``: print the bundled default configuration, with its
  comments, ready to save as ``docmark.toml`` (or, with ``--pyproject``, as a
  ``[tool.docmark]`` table for ``pyproject.toml``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from docmark.cli.commands.common import build_args_namespace, get_console
from docmark.cli.config_resolver import resolve_config_from_click
from docmark.cli.errors import DocmarkConfigError
from docmark.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_docblock_options,
    common_file_filtering_options,
)
from docmark.config.io import load_defaults_text, nest_toml_under_section, to_toml
from docmark.constants import PYPROJECT_TOOL_SECTION

if TYPE_CHECKING:
    from docmark.cli.cli_types import ArgsNamespace
    from docmark.cli.console import ClickConsole
    from docmark.config.model import Config
    from docmark.config.types import Separate, StructureKind


@click.group(name="config", help="Inspect or create DocMark configuration.")
def config_group() -> None:
    """Configuration subcommands."""


@config_group.command(
    name="dump",
    help="Print the effective configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("paths", nargs=-1, type=click.Path(path_type=str))
@common_config_options
@common_file_filtering_options
@common_docblock_options
def dump_command(
    *,
    paths: tuple[str, ...],
    config_paths: tuple[str, ...],
    no_config: bool,
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    annotation_pairs: tuple[tuple[str, str], ...],
    manifest_path: str | None,
    preserve_existing: bool | None,
    separate: Separate | None,
    add_structure_name: bool | None,
    ensure_spacing: bool | None,
    structures: tuple[StructureKind, ...],
) -> None:
    """Dump the merged configuration; discovery is anchored at the first PATH."""
    console: ClickConsole = get_console(click.get_current_context())
    args: ArgsNamespace = build_args_namespace(
        annotation_pairs=annotation_pairs,
        manifest_path=manifest_path,
        preserve_existing=preserve_existing,
        separate=separate,
        add_structure_name=add_structure_name,
        ensure_spacing=ensure_spacing,
        structures=structures,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
    )
    config: Config = resolve_config_from_click(
        paths=paths, no_config=no_config, config_paths=config_paths, args=args
    )
    console.print(to_toml(config.to_toml_dict()), nl=False)


@config_group.command(name="init", help="Print the default configuration file.")
@click.option(
    "--pyproject",
    is_flag=True,
    help=f"Nest the configuration under [{PYPROJECT_TOOL_SECTION}] for pyproject.toml.",
)
def init_command(*, pyproject: bool) -> None:
    """Print the bundled ``docmark-default.toml``."""
    console: ClickConsole = get_console(click.get_current_context())
    text: str = load_defaults_text()
    if pyproject:
        try:
            text = nest_toml_under_section(text, PYPROJECT_TOOL_SECTION)
        except RuntimeError as exc:
            raise DocmarkConfigError(str(exc)) from exc
    console.print(text, nl=False)
