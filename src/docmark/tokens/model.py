# topmark:header:start
#
#   project      : DocMark
#   file         : model.py
#   file_relpath : src/docmark/tokens/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Token model: kinds, immutable tokens and the mutable token stream.

A `TokenStream` is a flat, index-addressable arena of `Token` values. It is
owned by a single processing pass, which mutates it in place. Mutations never
alias: an insertion reports how many positions it shifted, and every mutation
is recorded in a journal so that an index taken before a mutation can be
translated to the position of the same token afterwards:

    mark = stream.checkpoint()
    stream.insert_at(3, [Token(TokenKind.WHITESPACE, "\\n")])
    stream.relocate(5, mark)  # -> 6

Concatenating the texts of all tokens (`TokenStream.render`) reproduces the
source.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final, overload


class TokenKind(str, Enum):
    """Token kinds understood by DocMark.

    Structural keywords (`CLASS`, `INTERFACE`, `TRAIT`, `ENUM`) mark candidate
    declarations; modifiers and attribute markers may sit between a doc block
    and the declaration it documents.
    """

    OPEN_TAG = "open_tag"
    CLOSE_TAG = "close_tag"
    INLINE_HTML = "inline_html"
    WHITESPACE = "whitespace"
    DOC_COMMENT = "doc_comment"
    COMMENT = "comment"
    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"
    ENUM = "enum"
    NEW = "new"
    FINAL = "final"
    ABSTRACT = "abstract"
    READONLY = "readonly"
    ATTRIBUTE_OPEN = "attribute_open"
    ATTRIBUTE_CLOSE = "attribute_close"
    IDENTIFIER = "identifier"
    VARIABLE = "variable"
    STRING = "string"
    NUMBER = "number"
    PUNCTUATION = "punctuation"


STRUCTURE_KINDS: Final[frozenset[TokenKind]] = frozenset(
    {TokenKind.CLASS, TokenKind.INTERFACE, TokenKind.TRAIT, TokenKind.ENUM}
)

KEYWORD_KINDS: Final[dict[str, TokenKind]] = {
    "class": TokenKind.CLASS,
    "interface": TokenKind.INTERFACE,
    "trait": TokenKind.TRAIT,
    "enum": TokenKind.ENUM,
    "new": TokenKind.NEW,
    "final": TokenKind.FINAL,
    "abstract": TokenKind.ABSTRACT,
    "readonly": TokenKind.READONLY,
}


@dataclass(frozen=True, slots=True)
class Token:
    """An immutable ``(kind, text)`` pair.

    Attributes:
        kind (TokenKind): Lexical category.
        text (str): Literal source text.
    """

    kind: TokenKind
    text: str

    def is_whitespace(self) -> bool:
        """Return True for whitespace tokens."""
        return self.kind is TokenKind.WHITESPACE

    def is_line_break(self) -> bool:
        """Return True for whitespace tokens that contain a newline."""
        return self.kind is TokenKind.WHITESPACE and "\n" in self.text


@dataclass(frozen=True, slots=True)
class Mutation:
    """Journal entry for one stream mutation.

    Attributes:
        index (int): Position where the mutation happened.
        delta (int): Positions added (> 0), removed (< 0) or 0 for a replacement.
    """

    index: int
    delta: int


class TokenStream(Sequence[Token]):
    """Ordered, mutable, index-addressable sequence of tokens."""

    __slots__ = ("_tokens", "_journal")

    def __init__(self, tokens: Iterable[Token] = ()) -> None:
        self._tokens: list[Token] = list(tokens)
        self._journal: list[Mutation] = []

    @overload
    def __getitem__(self, index: int) -> Token: ...
    @overload
    def __getitem__(self, index: slice) -> Sequence[Token]: ...
    def __getitem__(self, index: int | slice) -> Token | Sequence[Token]:
        if isinstance(index, slice):
            return tuple(self._tokens[index])
        return self._tokens[index]

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStream({len(self._tokens)} tokens)"

    def get(self, index: int) -> Token | None:
        """Return the token at ``index`` or None when out of range (negatives included)."""
        if 0 <= index < len(self._tokens):
            return self._tokens[index]
        return None

    # ---------------------------- Mutations ----------------------------
    def insert_at(self, index: int, tokens: Sequence[Token]) -> int:
        """Insert ``tokens`` (in order) before position ``index``.

        Args:
            index (int): Insertion point, ``0 <= index <= len(self)``.
            tokens (Sequence[Token]): Tokens to insert.

        Returns:
            int: The shift applied to every position at or after ``index``.

        Raises:
            IndexError: If ``index`` is outside the stream.
        """
        if not 0 <= index <= len(self._tokens):
            raise IndexError(f"insert position {index} out of range 0..{len(self._tokens)}")
        if not tokens:
            return 0
        self._tokens[index:index] = list(tokens)
        self._journal.append(Mutation(index=index, delta=len(tokens)))
        return len(tokens)

    def replace_at(self, index: int, token: Token) -> int:
        """Replace the token at ``index``.

        Returns:
            int: Always 0: replacements never shift positions.
        """
        self._tokens[index] = token
        self._journal.append(Mutation(index=index, delta=0))
        return 0

    def remove_at(self, index: int) -> int:
        """Remove the token at ``index``.

        Returns:
            int: ``-1``, the shift applied to every position after ``index``.
        """
        del self._tokens[index]
        self._journal.append(Mutation(index=index, delta=-1))
        return -1

    # ------------------------- Journal helpers -------------------------
    def checkpoint(self) -> int:
        """Return a marker for the current point in the mutation journal."""
        return len(self._journal)

    def relocate(self, index: int, checkpoint: int) -> int:
        """Translate a position taken at ``checkpoint`` to the current layout.

        Insertions at or before the tracked position push it right; removals
        before it pull it left.

        Args:
            index (int): Position valid when ``checkpoint`` was taken.
            checkpoint (int): Value previously returned by `checkpoint`.

        Returns:
            int: The position of the same token now.
        """
        for mutation in self._journal[checkpoint:]:
            if mutation.delta > 0 and mutation.index <= index:
                index += mutation.delta
            elif mutation.delta < 0 and mutation.index < index:
                index += mutation.delta
        return index

    def shift_since(self, checkpoint: int) -> int:
        """Return the net number of tokens added since ``checkpoint``."""
        return sum(m.delta for m in self._journal[checkpoint:])

    def render(self) -> str:
        """Concatenate all token texts, in order."""
        return "".join(token.text for token in self._tokens)
