# topmark:header:start
#
#   project      : DocMark
#   file         : __init__.py
#   file_relpath : src/docmark/docblock/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Doc block rendering and parsing."""

from __future__ import annotations

from docmark.docblock.parser import parse_docblock
from docmark.docblock.renderer import EMPTY_DOCBLOCK, render_docblock

__all__: list[str] = [
    "EMPTY_DOCBLOCK",
    "parse_docblock",
    "render_docblock",
]
