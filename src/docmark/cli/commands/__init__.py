# topmark:header:start
#
#   project      : DocMark
#   file         : __init__.py
#   file_relpath : src/docmark/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocMark CLI subcommands."""
