# topmark:header:start
#
#   project      : DocMark
#   file         : merge.py
#   file_relpath : src/docmark/tags/merge.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Merge policy for annotation tag sets.

Incoming (configured) tags win over existing (parsed) ones; there is no
value-level combination, even when both sides are lists. Keys only present on
the existing side keep their relative order, and brand-new incoming keys are
appended after them in incoming order.
"""

from __future__ import annotations

from docmark.tags.model import TagSet


def merge_tags(existing: TagSet, incoming: TagSet) -> TagSet:
    """Return the right-biased union of ``existing`` and ``incoming``.

    Example:
        ``merge({a: 1, b: 2}, {a: 3, c: 4}) == {a: 3, b: 2, c: 4}`` with ``a``
        kept in first position.

    Args:
        existing (TagSet): Tags parsed from a doc block already in the source.
        incoming (TagSet): Tags from the configuration.

    Returns:
        TagSet: The merged tag set.
    """
    merged = [(name, incoming.get(name, value)) for name, value in existing.items()]
    merged.extend((name, value) for name, value in incoming.items() if name not in existing)
    return TagSet(merged)
