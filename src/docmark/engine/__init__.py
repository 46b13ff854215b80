# topmark:header:start
#
#   project      : DocMark
#   file         : __init__.py
#   file_relpath : src/docmark/engine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Declaration scanning and doc block mutation engine."""

from __future__ import annotations

from docmark.engine.mutator import apply_docblock
from docmark.engine.runner import fix_tokens
from docmark.engine.scanner import iter_declaration_sites
from docmark.engine.types import DeclarationSite, FixAction, FixOutcome, FixReport

__all__: list[str] = [
    "DeclarationSite",
    "FixAction",
    "FixOutcome",
    "FixReport",
    "apply_docblock",
    "fix_tokens",
    "iter_declaration_sites",
]
