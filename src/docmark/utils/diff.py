# topmark:header:start
#
#   project      : DocMark
#   file         : diff.py
#   file_relpath : src/docmark/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diff generation and colorized rendering.

`unified_patch` produces the plain patch text between the original and the
updated source; `render_patch` colors a patch for terminal output.
"""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from yachalk import chalk

from docmark.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docmark.config.logging import DocmarkLogger

logger: DocmarkLogger = get_logger(__name__)


def unified_patch(original: str, updated: str, name: str) -> str:
    """Return a unified diff of ``original`` against ``updated``.

    Line endings are kept as found in the inputs so CRLF sources diff cleanly.

    Args:
        original (str): Text before the fix.
        updated (str): Text after the fix.
        name (str): Label used in the ``---``/``+++`` headers.

    Returns:
        str: The patch, or ``""`` when the texts are equal.
    """
    patch_lines: list[str] = list(
        difflib.unified_diff(
            original.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"{name} (current)",
            tofile=f"{name} (updated)",
            n=3,
        )
    )
    # A final line without newline would glue onto the next diff header.
    patch_lines = [line if line.endswith("\n") else line + "\n" for line in patch_lines]
    logger.trace("Patch for %s: %d line(s)", name, len(patch_lines))
    return "".join(patch_lines)


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch (Sequence[str] | str): Patch lines, or the patch as one string.
        show_line_numbers (bool): Prefix each line with a 4-digit line number.

    Returns:
        str: The colorized patch.
    """
    lines: list[str] = patch.splitlines() if isinstance(patch, str) else list(patch)

    def process_line(line: str) -> str:
        content: str = line.rstrip("\n").replace("\r", "\\r")
        if content.startswith(("---", "+++")):
            return chalk.bold(content)
        if content.startswith("@@"):
            return chalk.cyan(content)
        if content.startswith("-"):
            return chalk.red(content)
        if content.startswith("+"):
            return chalk.green(content)
        return content

    if show_line_numbers:
        return "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
    return "".join(f"{process_line(line)}\n" for line in lines)
