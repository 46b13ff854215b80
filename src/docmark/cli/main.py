# topmark:header:start
#
#   project      : DocMark
#   file         : main.py
#   file_relpath : src/docmark/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocMark command line entry point.

Group-level options (verbosity, color) are resolved once and stored in
``ctx.obj`` together with the program-output console; subcommands read them
from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from docmark.cli.commands.check import check_command
from docmark.cli.commands.config import config_group
from docmark.cli.commands.tags import tags_command
from docmark.cli.commands.version import version_command
from docmark.cli.console import ClickConsole
from docmark.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from docmark.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from docmark.config.logging import DocmarkLogger

logger: DocmarkLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize verbosity, logging, color and the console on the Click context.

    Args:
        ctx (click.Context): Current Click context; ``obj`` and ``color`` are set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit ``--color`` value.
        no_color (bool): Whether ``--no-color`` was passed.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging is driven by DOCMARK_LOG_LEVEL, not by -v/-q.
    setup_logging(level=resolve_env_log_level())
    logger.debug("Verbosity level: %d", ctx.obj["verbosity_level"])

    effective_mode: ColorMode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color: bool = resolve_color_mode(cli_mode=effective_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color
    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="DocMark: keep PHP class-level doc blocks in sync with your project annotations.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the DocMark CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    if ctx.invoked_subcommand is None:
        console: ClickConsole = ctx.obj["console"]
        console.print("Hint: use 'docmark check [PATHS...]' to check doc blocks.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(check_command)
cli.add_command(config_group)
cli.add_command(tags_command)
cli.add_command(version_command)

if __name__ == "__main__":
    cli()
