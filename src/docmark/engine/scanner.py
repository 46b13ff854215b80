# topmark:header:start
#
#   project      : DocMark
#   file         : scanner.py
#   file_relpath : src/docmark/engine/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Token stream scanner: finds structural declarations and their surroundings.

All backward looks (anonymous-class detection, doc block lookup and the
insertion point) share one primitive, `scan_backward`, parameterized by the
set of token kinds it may step over. Whitespace is always skipped, and a
complete attribute (``#[ ... ]``) is stepped over as a unit when walking
left from its closing ``]``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from docmark.config.logging import get_logger
from docmark.engine.types import BackwardScan, DeclarationSite
from docmark.tokens.model import STRUCTURE_KINDS, TokenKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from docmark.config.logging import DocmarkLogger
    from docmark.tokens.model import Token, TokenStream

logger: DocmarkLogger = get_logger(__name__)

# Modifiers allowed between `new` and `class` in an anonymous class expression.
ANONYMOUS_CLASS_MODIFIERS: Final[frozenset[TokenKind]] = frozenset(
    {TokenKind.FINAL, TokenKind.READONLY}
)

# Modifiers allowed between a doc block and the declaration it documents.
DECLARATION_MODIFIERS: Final[frozenset[TokenKind]] = frozenset(
    {TokenKind.FINAL, TokenKind.ABSTRACT, TokenKind.READONLY}
)


def _attribute_start(stream: TokenStream, close_index: int) -> int | None:
    """Return the index of the ``#[`` opening the attribute closed at ``close_index``."""
    for i in range(close_index - 1, -1, -1):
        if stream[i].kind is TokenKind.ATTRIBUTE_OPEN:
            return i
    return None


def scan_backward(
    stream: TokenStream,
    start: int,
    skip_kinds: frozenset[TokenKind],
) -> BackwardScan:
    """Walk left from ``start - 1`` over whitespace, ``skip_kinds`` and attributes.

    Args:
        stream (TokenStream): Stream to inspect.
        start (int): Position to start from (exclusive).
        skip_kinds (frozenset[TokenKind]): Non-whitespace kinds that may be stepped over.

    Returns:
        BackwardScan: The first non-skippable position and the left-most skipped
            modifier/attribute position.
    """
    furthest: int | None = None
    i: int = start - 1
    while i >= 0:
        token: Token = stream[i]
        if token.kind is TokenKind.WHITESPACE:
            i -= 1
            continue
        if token.kind is TokenKind.ATTRIBUTE_CLOSE:
            opening: int | None = _attribute_start(stream, i)
            if opening is None:
                return BackwardScan(stop_index=i, furthest_index=furthest)
            furthest = opening
            i = opening - 1
            continue
        if token.kind is TokenKind.ATTRIBUTE_OPEN or token.kind in skip_kinds:
            furthest = i
            i -= 1
            continue
        return BackwardScan(stop_index=i, furthest_index=furthest)
    return BackwardScan(stop_index=None, furthest_index=furthest)


def is_anonymous_class(stream: TokenStream, index: int) -> bool:
    """Return True when the ``class`` keyword at ``index`` opens a ``new class`` expression.

    ``final``/``readonly`` modifiers and attributes may sit between ``new`` and ``class``.
    """
    scan: BackwardScan = scan_backward(stream, index, ANONYMOUS_CLASS_MODIFIERS)
    return scan.stop_index is not None and stream[scan.stop_index].kind is TokenKind.NEW


def resolve_name(stream: TokenStream, index: int) -> str:
    """Return the declared name following the keyword at ``index``.

    Best effort: the first non-whitespace token must be an identifier,
    otherwise the name is ``""``.
    """
    for i in range(index + 1, len(stream)):
        token: Token = stream[i]
        if token.kind is TokenKind.WHITESPACE:
            continue
        if token.kind is TokenKind.IDENTIFIER:
            return token.text
        break
    return ""


def find_existing_docblock(stream: TokenStream, index: int) -> int | None:
    """Return the position of the doc block documenting the keyword at ``index``.

    Modifiers (``final``, ``abstract``, ``readonly``) and attributes between the
    block and the keyword are stepped over; anything else ends the search.
    """
    scan: BackwardScan = scan_backward(stream, index, DECLARATION_MODIFIERS)
    if scan.stop_index is not None and stream[scan.stop_index].kind is TokenKind.DOC_COMMENT:
        return scan.stop_index
    return None


def find_insert_position(stream: TokenStream, index: int) -> int:
    """Return where a new doc block for the keyword at ``index`` must be inserted.

    This is the left-most modifier/attribute of the declaration, so the block
    ends up in front of them, or the keyword itself when there are none.
    """
    scan: BackwardScan = scan_backward(stream, index, DECLARATION_MODIFIERS)
    return index if scan.furthest_index is None else scan.furthest_index


def locate_site(stream: TokenStream, index: int) -> DeclarationSite:
    """Build the `DeclarationSite` for the keyword at ``index``."""
    return DeclarationSite(
        keyword_index=index,
        kind=stream[index].kind,
        name=resolve_name(stream, index),
        docblock_index=find_existing_docblock(stream, index),
        insert_index=find_insert_position(stream, index),
    )


def iter_declaration_sites(
    stream: TokenStream,
    structures: Iterable[TokenKind] = STRUCTURE_KINDS,
) -> Iterator[DeclarationSite]:
    """Lazily yield the declaration sites of ``stream`` in a single forward pass.

    The consumer may mutate the stream between two yields (e.g. insert a doc
    block before the yielded keyword). The scan resumes right after the
    keyword's new position, using the stream's mutation journal, so no
    declaration is visited twice and tokens appended meanwhile are covered.

    Args:
        stream (TokenStream): Stream to scan.
        structures (Iterable[TokenKind]): Keyword kinds that count as declarations.

    Yields:
        DeclarationSite: One site per accepted declaration, in source order.
    """
    wanted: frozenset[TokenKind] = frozenset(structures)
    index: int = 0
    while index < len(stream):
        kind: TokenKind = stream[index].kind
        if kind not in wanted:
            index += 1
            continue
        if kind is TokenKind.CLASS and is_anonymous_class(stream, index):
            logger.trace("Skipping anonymous class at token %d", index)
            index += 1
            continue

        site: DeclarationSite = locate_site(stream, index)
        logger.trace("Declaration site: %s", site)
        mark: int = stream.checkpoint()
        yield site
        index = stream.relocate(site.keyword_index, mark) + 1
