# topmark:header:start
#
#   project      : DocMark
#   file         : __main__.py
#   file_relpath : src/docmark/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Allow ``python -m docmark``."""

from docmark.cli.main import cli

if __name__ == "__main__":
    cli()
