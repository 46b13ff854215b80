# topmark:header:start
#
#   project      : DocMark
#   file         : __init__.py
#   file_relpath : src/docmark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocMark package.

DocMark keeps structural declarations (classes, interfaces, traits and enums)
in C-family source files documented: it inserts or updates the ``/** ... */``
block in front of each declaration with a configured set of annotation tags,
and exposes both a CLI and a small typed API for automation.
"""

from __future__ import annotations
