# topmark:header:start
#
#   project      : DocMark
#   file         : renderer.py
#   file_relpath : src/docmark/docblock/renderer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rendering of tag sets into documentation comment blocks.

Layout (with the optional structure name sentence):

/**
 * Foo.
 *
 * @author Jane Doe <jane@example.com>
 * @license MIT
 */

The closing ``*/`` is not followed by a newline: spacing after the block is
the mutation engine's business (see `docmark.engine.mutator`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from docmark.tags.model import ListValue

if TYPE_CHECKING:
    from docmark.tags.model import TagSet

DOCBLOCK_OPEN: Final[str] = "/**"
DOCBLOCK_CLOSE: Final[str] = " */"
EMPTY_DOCBLOCK: Final[str] = "/**\n */"


def render_docblock(
    tags: TagSet, name: str = "", *, add_name: bool = False, newline: str = "\n"
) -> str:
    """Serialize ``tags`` (and optionally the declaration name) into a doc block.

    The output depends only on the order and content of the inputs.

    Args:
        tags (TagSet): Tags to render, in rendering order.
        name (str): Declaration name; used only when ``add_name`` is True.
        add_name (bool): Emit ``" * {name}."`` as the leading sentence.
        newline (str): Line separator, ``"\\r\\n"`` for CRLF sources.

    Returns:
        str: The rendered block, from ``/**`` to ``*/`` without a trailing newline.
    """
    if not tags and not add_name:
        return newline.join((DOCBLOCK_OPEN, DOCBLOCK_CLOSE))

    lines: list[str] = [DOCBLOCK_OPEN]

    if add_name and name:
        lines.append(f" * {name}.")
        # Blank separator between summary and tags
        if tags:
            lines.append(" *")

    for tag, value in tags.items():
        if value.is_empty():
            lines.append(f" * @{tag}")
        elif isinstance(value, ListValue):
            lines.extend(f" * @{tag} {item}" for item in value.items)
        else:
            lines.append(f" * @{tag} {value.text}")

    lines.append(DOCBLOCK_CLOSE)
    return newline.join(lines)
