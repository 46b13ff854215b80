# topmark:header:start
#
#   project      : DocMark
#   file         : __init__.py
#   file_relpath : src/docmark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocMark configuration layer.

Submodules:
    - `docmark.config.model`: `Config` (frozen runtime snapshot) and
      `MutableConfig` (builder used while merging layers).
    - `docmark.config.io`: TOML helpers (reading, cleaning, nesting).
    - `docmark.config.types`: option enums (`Separate`, `StructureKind`).
    - `docmark.config.logging`: TRACE-aware, colored logging.

Nothing is re-exported here; import the submodules directly.
"""

from __future__ import annotations
