# topmark:header:start
#
#   project      : DocMark
#   file         : mutator.py
#   file_relpath : src/docmark/engine/mutator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Mutation engine: insert, merge or replace the doc block of a declaration.

Per declaration site there are three outcomes:

* no existing block -> **insert** a rendered block at the site's insertion
  point, with optional separation line breaks;
* existing block and ``preserve_existing`` -> **merge** the parsed tags with
  the configured ones and rewrite the block in place;
* existing block and not ``preserve_existing`` -> **replace** the block with
  the configured tags only.

With ``ensure_spacing`` the block is always followed by a line break so
that formatters collapsing blank lines or joining statements do not glue the
block onto the declaration line.

Blocks and line breaks use the line ending of the source: the existing block's
when rewriting, otherwise the first one found in the stream.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from docmark.config.logging import get_logger
from docmark.docblock.parser import parse_docblock
from docmark.docblock.renderer import render_docblock
from docmark.engine.types import FixAction, FixOutcome
from docmark.tags.merge import merge_tags
from docmark.tokens.model import Token, TokenKind

if TYPE_CHECKING:
    from docmark.config.logging import DocmarkLogger
    from docmark.config.model import Config
    from docmark.engine.types import DeclarationSite
    from docmark.tags.model import TagSet
    from docmark.tokens.model import TokenStream

logger: DocmarkLogger = get_logger(__name__)

LINE_BREAK: Final[Token] = Token(TokenKind.WHITESPACE, "\n")
CRLF_LINE_BREAK: Final[Token] = Token(TokenKind.WHITESPACE, "\r\n")


def detect_newline(text: str) -> str | None:
    """Return the line ending of the first line break in ``text``, if any."""
    pos: int = text.find("\n")
    if pos < 0:
        return None
    return "\r\n" if pos > 0 and text[pos - 1] == "\r" else "\n"


def stream_newline(stream: TokenStream) -> str:
    """Return the line ending used by ``stream`` (``"\\n"`` when it has none)."""
    for token in stream:
        found: str | None = detect_newline(token.text)
        if found is not None:
            return found
    return "\n"


def _line_break(newline: str) -> Token:
    return CRLF_LINE_BREAK if newline == "\r\n" else LINE_BREAK


def apply_docblock(stream: TokenStream, site: DeclarationSite, config: Config) -> FixOutcome:
    """Apply the configured doc block policy to one declaration site.

    Args:
        stream (TokenStream): Stream to mutate in place.
        site (DeclarationSite): Site located by the scanner on the current layout.
        config (Config): Frozen configuration for this run.

    Returns:
        FixOutcome: The action taken and the number of tokens inserted.
    """
    if site.docblock_index is None:
        return insert_docblock(stream, site, config)
    if config.preserve_existing:
        return merge_docblock(stream, site, config)
    return replace_docblock(stream, site, config)


def insert_docblock(stream: TokenStream, site: DeclarationSite, config: Config) -> FixOutcome:
    """Insert a new doc block before the declaration's modifiers and attributes."""
    newline: str = stream_newline(stream)
    line_break: Token = _line_break(newline)
    tokens: list[Token] = []

    if config.separate.separates_top:
        tokens.append(line_break)

    text: str = render_docblock(
        config.annotations, site.name, add_name=config.add_structure_name, newline=newline
    )
    tokens.append(Token(TokenKind.DOC_COMMENT, text))

    if config.ensure_spacing:
        tokens.append(line_break)

    if config.separate.separates_bottom:
        following: Token | None = stream.get(site.insert_index)
        if following is not None and not following.is_whitespace():
            tokens.append(line_break)

    shift: int = stream.insert_at(site.insert_index, tokens)
    logger.debug(
        "Inserted doc block for %s %r at token %d",
        site.kind.value,
        site.name,
        site.insert_index,
    )
    return FixOutcome(site=site, action=FixAction.INSERTED, shift=shift)


def merge_docblock(stream: TokenStream, site: DeclarationSite, config: Config) -> FixOutcome:
    """Merge the configured tags into the existing doc block."""
    assert site.docblock_index is not None
    current: str = stream[site.docblock_index].text
    existing: TagSet = parse_docblock(current)
    merged: TagSet = merge_tags(existing, config.annotations)
    text: str = render_docblock(
        merged,
        site.name,
        add_name=config.add_structure_name,
        newline=_block_newline(stream, current),
    )
    return _rewrite_docblock(stream, site, config, text, FixAction.MERGED)


def replace_docblock(stream: TokenStream, site: DeclarationSite, config: Config) -> FixOutcome:
    """Replace the existing doc block with one holding only the configured tags."""
    assert site.docblock_index is not None
    text: str = render_docblock(
        config.annotations,
        site.name,
        add_name=config.add_structure_name,
        newline=_block_newline(stream, stream[site.docblock_index].text),
    )
    return _rewrite_docblock(stream, site, config, text, FixAction.REPLACED)


def _block_newline(stream: TokenStream, block: str) -> str:
    return detect_newline(block) or stream_newline(stream)


def _rewrite_docblock(
    stream: TokenStream,
    site: DeclarationSite,
    config: Config,
    text: str,
    action: FixAction,
) -> FixOutcome:
    assert site.docblock_index is not None
    index: int = site.docblock_index
    unchanged: bool = stream[index].text == text
    if not unchanged:
        stream.replace_at(index, Token(TokenKind.DOC_COMMENT, text))

    shift: int = 0
    if config.ensure_spacing:
        shift = ensure_line_break_after(stream, index, newline=detect_newline(text) or "\n")

    if unchanged and shift == 0:
        logger.trace("Doc block for %s %r already up to date", site.kind.value, site.name)
        return FixOutcome(site=site, action=FixAction.UNCHANGED)

    logger.debug("%s doc block for %s %r", action.value.capitalize(), site.kind.value, site.name)
    return FixOutcome(site=site, action=action, shift=shift)


def ensure_line_break_after(stream: TokenStream, index: int, *, newline: str = "\n") -> int:
    """Make sure the token after ``index`` is whitespace containing a newline.

    Nothing is inserted when ``index`` is the last token; otherwise ``newline``
    is inserted.

    Returns:
        int: The number of tokens inserted (0 or 1).
    """
    following: Token | None = stream.get(index + 1)
    if following is None or following.is_line_break():
        return 0
    return stream.insert_at(index + 1, [_line_break(newline)])
