# topmark:header:start
#
#   project      : DocMark
#   file         : constants.py
#   file_relpath : src/docmark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocMark Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

DOCMARK_VERSION: str = get_version("docmark")

# Name of the bundled default config inside the package `docmark.config`:
DEFAULT_TOML_CONFIG_PACKAGE: str = "docmark.config"
DEFAULT_TOML_CONFIG_NAME: str = "docmark-default.toml"

# Project-local config file names, in same-directory merge order:
PYPROJECT_TOML_NAME: str = "pyproject.toml"
DOCMARK_TOML_NAME: str = "docmark.toml"

# Section holding the DocMark table inside pyproject.toml:
PYPROJECT_TOOL_SECTION: str = "tool.docmark"

# Name under which the docblock rule options are exported.
RULE_NAME: str = "docmark/docblock_header_comment"

DEFAULT_MANIFEST_NAME: str = "composer.json"

VALUE_NOT_SET: str = "<not set>"
