# topmark:header:start
#
#   project      : DocMark
#   file         : version.py
#   file_relpath : src/docmark/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocMark ``version`` command."""

from __future__ import annotations

import click

from docmark.cli.commands.common import get_console, get_verbosity
from docmark.constants import DOCMARK_VERSION


@click.command(name="version", help="Show the installed DocMark version.")
def version_command() -> None:
    """Print the DocMark version as installed in the active environment."""
    ctx: click.Context = click.get_current_context()
    console = get_console(ctx)
    if get_verbosity(ctx) > 0:
        console.print(console.styled("DocMark version:", bold=True, underline=True))
        console.print(f"    {console.styled(DOCMARK_VERSION, bold=True)}")
    else:
        console.print(console.styled(DOCMARK_VERSION, bold=True))
