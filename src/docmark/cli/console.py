# topmark:header:start
#
#   project      : DocMark
#   file         : console.py
#   file_relpath : src/docmark/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console for user-facing program output.

Program output (results, summaries, diffs) goes through `ClickConsole`;
diagnostics go through `logging`. Keeping the two apart lets ``-q`` silence
chatter without hiding log records and vice versa.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

import click


class ClickConsole:
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): Emit ANSI styles; plain text otherwise.
        out (TextIO | None): Standard output stream (defaults to ``sys.stdout``).
        err (TextIO | None): Error stream (defaults to ``sys.stderr``).
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color: bool = enable_color
        self.out: TextIO = out or sys.stdout
        self.err: TextIO = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write ``text`` to stdout."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning to stderr."""
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="yellow")

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error to stderr."""
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="bright_red")

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with `click.style`, or unchanged when color is off.

        Args:
            text (str): Text to style.
            **style_kwargs (Any): Keyword arguments accepted by `click.style`.

        Returns:
            str: The (possibly) styled text.
        """
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
