# topmark:header:start
#
#   project      : DocMark
#   file         : tags.py
#   file_relpath : src/docmark/cli/commands/tags.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocMark ``tags`` command: list the annotation tags DocMark accepts."""

from __future__ import annotations

import click

from docmark.cli.commands.common import get_console, get_verbosity
from docmark.tags.validator import ALLOWED_TAGS


@click.command(name="tags", help="List the annotation tags that may be configured.")
def tags_command() -> None:
    """Print the allow-listed tags, one per line."""
    ctx: click.Context = click.get_current_context()
    console = get_console(ctx)
    if get_verbosity(ctx) > 0:
        console.print(console.styled("Allowed annotations:", bold=True, underline=True))
    for tag in ALLOWED_TAGS:
        console.print(f"@{tag}")
