# topmark:header:start
#
#   project      : DocMark
#   file         : options.py
#   file_relpath : src/docmark/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reusable Click options and their resolution logic.

Commands stay thin: verbosity, color, config discovery, file filtering and
doc block overrides are declared once here and applied as decorators.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from docmark.cli.cli_types import AnnotationParam, EnumChoiceParam
from docmark.cli.errors import DocmarkUsageError
from docmark.config.types import Separate, StructureKind

P = ParamSpec("P")
R = TypeVar("R")

#: Click context settings shared by all commands.
CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve program-output verbosity from ``-v``/``-q`` counts.

    Returns:
        int: ``-1`` when quiet, ``0`` by default, ``1``/``2`` for ``-v``/``-vv``.

    Raises:
        DocmarkUsageError: If both ``-v`` and ``-q`` are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise DocmarkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return min(verbose_count, 2)


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (counted, mutually exclusive)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase output detail. Specify twice for more.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only print errors.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(*, cli_mode: ColorMode | None, stdout_isatty: bool | None = None) -> bool:
    """Return True when colored output should be enabled.

    Explicit ``--color`` values win, then ``FORCE_COLOR`` and ``NO_COLOR``,
    then whether stdout is a terminal.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        stdout_isatty = sys.stdout.isatty()
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color [auto|always|never]`` and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (same as --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config PATH`` (repeatable) and ``--no-config``."""
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        type=click.Path(dir_okay=False, path_type=str),
        help="Merge this TOML config file after discovery (repeatable).",
    )(f)
    f = click.option(
        "--no-config",
        is_flag=True,
        help="Skip discovery of docmark.toml / pyproject.toml files.",
    )(f)
    return f


def common_file_filtering_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--include`` and ``--exclude`` pattern options."""
    f = click.option(
        "--include",
        "-i",
        "include_patterns",
        multiple=True,
        help="Also process files matching this gitignore-style pattern (repeatable).",
    )(f)
    f = click.option(
        "--exclude",
        "-e",
        "exclude_patterns",
        multiple=True,
        help="Skip files matching this gitignore-style pattern (repeatable).",
    )(f)
    return f


def common_docblock_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the doc block overrides (annotations, manifest and rendering switches)."""
    f = click.option(
        "--annotation",
        "-a",
        "annotation_pairs",
        multiple=True,
        type=AnnotationParam(),
        help="Set an annotation as KEY=VALUE (repeat a key to build a list).",
    )(f)
    f = click.option(
        "--manifest",
        "manifest_path",
        type=click.Path(dir_okay=False, path_type=str),
        default=None,
        help="Derive author/license from this manifest (composer.json, package.json, ...).",
    )(f)
    f = click.option(
        "--preserve-existing/--no-preserve-existing",
        default=None,
        help="Merge into existing doc blocks instead of replacing them.",
    )(f)
    f = click.option(
        "--separate",
        type=EnumChoiceParam(Separate),
        default=None,
        help=f"Line breaks around inserted blocks ({', '.join(Separate.values())}).",
    )(f)
    f = click.option(
        "--add-structure-name/--no-add-structure-name",
        default=None,
        help="Write the declared name as the first line of the block.",
    )(f)
    f = click.option(
        "--ensure-spacing/--no-ensure-spacing",
        default=None,
        help="Keep a line break between the block and the declaration.",
    )(f)
    f = click.option(
        "--structure",
        "structures",
        multiple=True,
        type=EnumChoiceParam(StructureKind),
        help="Only document these declaration kinds (repeatable).",
    )(f)
    return f
