# topmark:header:start
#
#   project      : DocMark
#   file         : __init__.py
#   file_relpath : src/docmark/tokens/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tokens, token streams and the lexer that produces them."""

from __future__ import annotations

from docmark.tokens.lexer import tokenize
from docmark.tokens.model import STRUCTURE_KINDS, Token, TokenKind, TokenStream

__all__: list[str] = [
    "STRUCTURE_KINDS",
    "Token",
    "TokenKind",
    "TokenStream",
    "tokenize",
]
