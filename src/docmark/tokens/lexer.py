# topmark:header:start
#
#   project      : DocMark
#   file         : lexer.py
#   file_relpath : src/docmark/tokens/lexer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PHP-flavoured lexer producing DocMark token streams.

The lexer is deliberately small. It recognizes just enough of the language to
keep declarations, comments, strings and attributes apart:

* inline text outside ``<?php ... ?>`` (``INLINE_HTML``), open/close tags;
* whitespace runs, ``//``/``#`` and ``/* */`` comments, ``/** */`` doc comments;
* single/double/backtick quoted strings and heredoc/nowdoc literals;
* variables, numbers, (namespaced) names and keywords;
* attribute markers ``#[`` and the matching ``]``;
* everything else as single-character punctuation (``->``, ``?->`` and ``::``
  are kept whole because keywords directly after them are plain names, as in
  ``Foo::class``).

It never fails: unterminated constructs run to the end of the input and
unknown characters become punctuation, so ``tokenize(s).render() == s`` holds
for every input.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from docmark.config.logging import get_logger
from docmark.tokens.model import KEYWORD_KINDS, Token, TokenKind, TokenStream

if TYPE_CHECKING:
    from docmark.config.logging import DocmarkLogger

logger: DocmarkLogger = get_logger(__name__)

_OPEN_TAG_RE: Final[re.Pattern[str]] = re.compile(r"<\?php(?:\r\n|[ \t\n\r])?|<\?=", re.IGNORECASE)

_CODE_RE: Final[re.Pattern[str]] = re.compile(
    r"""
      (?P<close_tag>\?>(?:\r\n|\n)?)
    | (?P<whitespace>\s+)
    | (?P<attribute_open>\#\[)
    | (?P<doc_comment>/\*\*(?=\s).*?(?:\*/|\Z))
    | (?P<block_comment>/\*.*?(?:\*/|\Z))
    | (?P<line_comment>(?://|\#)(?:[^\r\n?]|\?(?!>))*)
    | (?P<string>'(?:[^'\\]|\\.)*(?:'|\Z)|"(?:[^"\\]|\\.)*(?:"|\Z)|`(?:[^`\\]|\\.)*(?:`|\Z))
    | (?P<variable>\$+[^\W\d]\w*)
    | (?P<number>\d\w*(?:\.\w*)?|\.\d\w*)
    | (?P<name>\\?[^\W\d]\w*(?:\\[^\W\d]\w*)*)
    | (?P<operator>\?->|->|::)
    """,
    re.VERBOSE | re.DOTALL,
)

_HEREDOC_START_RE: Final[re.Pattern[str]] = re.compile(
    r"""<<<[ \t]*(?P<quote>["']?)(?P<label>[^\W\d]\w*)(?P=quote)\r?\n"""
)

# Keywords directly after these are member/constant names, not keywords.
_MEMBER_ACCESS: Final[frozenset[str]] = frozenset({"->", "?->", "::"})

# `enum` is a soft keyword: only a declaration when a name follows.
_ENUM_DECLARATION_RE: Final[re.Pattern[str]] = re.compile(r"\s+[^\W\d]")


class PhpLexer:
    """Single-use lexer over one source text.

    Args:
        source (str): Text to tokenize.
        start_in_code (bool): Start in code mode instead of inline-text mode,
            for snippets that carry no ``<?php`` open tag.
    """

    def __init__(self, source: str, *, start_in_code: bool = False) -> None:
        self.source: str = source
        self.pos: int = 0
        self.in_code: bool = start_in_code
        self.tokens: list[Token] = []
        # Bracket depth inside the current attribute; None outside attributes.
        self._attribute_depth: int | None = None

    def tokenize(self) -> TokenStream:
        """Run the lexer to the end of the input and return the token stream."""
        while self.pos < len(self.source):
            if self.in_code:
                self._lex_code()
            else:
                self._lex_inline()
        logger.trace("Lexed %d characters into %d tokens", len(self.source), len(self.tokens))
        return TokenStream(self.tokens)

    def _emit(self, kind: TokenKind, end: int) -> None:
        self.tokens.append(Token(kind, self.source[self.pos : end]))
        self.pos = end

    def _lex_inline(self) -> None:
        match = _OPEN_TAG_RE.search(self.source, self.pos)
        if match is None:
            self._emit(TokenKind.INLINE_HTML, len(self.source))
            return
        if match.start() > self.pos:
            self._emit(TokenKind.INLINE_HTML, match.start())
        self._emit(TokenKind.OPEN_TAG, match.end())
        self.in_code = True

    def _lex_code(self) -> None:
        if self.source.startswith("<<<", self.pos):
            heredoc = _HEREDOC_START_RE.match(self.source, self.pos)
            if heredoc is not None:
                self._lex_heredoc(heredoc)
                return

        match = _CODE_RE.match(self.source, self.pos)
        if match is None:
            self._lex_punctuation()
            return

        group: str | None = match.lastgroup
        end: int = match.end()
        if group == "close_tag":
            self._emit(TokenKind.CLOSE_TAG, end)
            self.in_code = False
        elif group == "whitespace":
            self._emit(TokenKind.WHITESPACE, end)
        elif group == "attribute_open":
            self._emit(TokenKind.ATTRIBUTE_OPEN, end)
            self._attribute_depth = 0
        elif group == "doc_comment":
            self._emit(TokenKind.DOC_COMMENT, end)
        elif group in ("block_comment", "line_comment"):
            self._emit(TokenKind.COMMENT, end)
        elif group == "string":
            self._emit(TokenKind.STRING, end)
        elif group == "variable":
            self._emit(TokenKind.VARIABLE, end)
        elif group == "number":
            self._emit(TokenKind.NUMBER, end)
        elif group == "name":
            self._emit(self._classify_name(match.group("name"), end), end)
        else:
            self._emit(TokenKind.PUNCTUATION, end)

    def _lex_punctuation(self) -> None:
        char: str = self.source[self.pos]
        kind = TokenKind.PUNCTUATION
        if self._attribute_depth is not None:
            if char == "[":
                self._attribute_depth += 1
            elif char == "]":
                if self._attribute_depth == 0:
                    kind = TokenKind.ATTRIBUTE_CLOSE
                    self._attribute_depth = None
                else:
                    self._attribute_depth -= 1
        self._emit(kind, self.pos + 1)

    def _lex_heredoc(self, start: re.Match[str]) -> None:
        label: str = re.escape(start.group("label"))
        closing = re.compile(rf"^[ \t]*{label}\b", re.MULTILINE)
        match = closing.search(self.source, start.end())
        end: int = match.end() if match is not None else len(self.source)
        self._emit(TokenKind.STRING, end)

    def _classify_name(self, word: str, end: int) -> TokenKind:
        kind: TokenKind | None = KEYWORD_KINDS.get(word.lower())
        if kind is None:
            return TokenKind.IDENTIFIER
        previous: Token | None = self._previous_significant()
        if previous is not None and previous.text in _MEMBER_ACCESS:
            return TokenKind.IDENTIFIER
        if kind is TokenKind.ENUM and not _ENUM_DECLARATION_RE.match(self.source, end):
            return TokenKind.IDENTIFIER
        return kind

    def _previous_significant(self) -> Token | None:
        for token in reversed(self.tokens):
            if token.kind not in (TokenKind.WHITESPACE, TokenKind.COMMENT):
                return token
        return None


def tokenize(source: str, *, start_in_code: bool = False) -> TokenStream:
    """Tokenize ``source`` into a fresh `TokenStream`.

    Args:
        source (str): Source text.
        start_in_code (bool): Treat the text as code from the first character
            (no ``<?php`` open tag required).

    Returns:
        TokenStream: The token stream; rendering it reproduces ``source``.
    """
    return PhpLexer(source, start_in_code=start_in_code).tokenize()
