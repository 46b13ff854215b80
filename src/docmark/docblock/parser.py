# topmark:header:start
#
#   project      : DocMark
#   file         : parser.py
#   file_relpath : src/docmark/docblock/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Extraction of annotation tags from an existing doc block.

Only tag lines are kept. Free text (summary sentences, descriptions) is
discarded, so a regenerated block never carries stale prose such as an old
structure name.
"""

from __future__ import annotations

import re
from typing import Final

from docmark.tags.model import ListValue, ScalarValue, TagSet, TagValue

TAG_LINE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^@([\w-]+)(?:\s+(.*))?$")

# Comment decoration trimmed from the start of each line before matching.
_LEADING_TRIM: Final[str] = " \t/*"

_CLOSING_RE: Final[re.Pattern[str]] = re.compile(r"\s*\*/$")


def parse_docblock(text: str) -> TagSet:
    """Parse the tags of a doc block.

    The first occurrence of a tag stores a scalar (possibly empty); each repeat
    promotes the stored value to a list and appends to it.

    Args:
        text (str): Raw comment text, e.g. ``"/**\\n * @license MIT\\n */"``.

    Returns:
        TagSet: Tags in order of first appearance.
    """
    found: dict[str, TagValue] = {}
    for raw_line in text.split("\n"):
        line: str = _CLOSING_RE.sub("", raw_line.lstrip(_LEADING_TRIM).rstrip())
        match = TAG_LINE_PATTERN.match(line)
        if match is None:
            continue
        tag: str = match.group(1)
        value: str = match.group(2) or ""

        current: TagValue | None = found.get(tag)
        if current is None:
            found[tag] = ScalarValue(value)
        elif isinstance(current, ListValue):
            found[tag] = ListValue((*current.items, value))
        else:
            found[tag] = ListValue((current.text, value))

    return TagSet(found.items())
