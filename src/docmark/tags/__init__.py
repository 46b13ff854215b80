# topmark:header:start
#
#   project      : DocMark
#   file         : __init__.py
#   file_relpath : src/docmark/tags/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Annotation tags: value model, validation and merge policy."""

from __future__ import annotations

from docmark.tags.merge import merge_tags
from docmark.tags.model import ListValue, ScalarValue, TagSet, TagValue, coerce_tag_value
from docmark.tags.validator import ALLOWED_TAGS, validate_tag_name, validate_tags

__all__: list[str] = [
    "ALLOWED_TAGS",
    "ListValue",
    "ScalarValue",
    "TagSet",
    "TagValue",
    "coerce_tag_value",
    "merge_tags",
    "validate_tag_name",
    "validate_tags",
]
