# topmark:header:start
#
#   project      : DocMark
#   file         : test_merge.py
#   file_relpath : tests/tags/test_merge.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the right-biased tag merge policy."""

from __future__ import annotations

import pytest
from hypothesis import given

from docmark.tags.merge import merge_tags
from docmark.tags.model import ListValue, ScalarValue, TagSet
from tests.strategies_docmark import s_tagset

pytestmark: pytest.MarkDecorator = pytest.mark.tags


def test_incoming_wins_and_keeps_existing_position() -> None:
    existing = TagSet.from_mapping({"a": "1", "b": "2"})
    incoming = TagSet.from_mapping({"a": "3", "c": "4"})

    merged = merge_tags(existing, incoming)

    assert merged.to_plain() == {"a": "3", "b": "2", "c": "4"}
    assert merged.names() == ("a", "b", "c")


def test_lists_are_replaced_not_combined() -> None:
    existing = TagSet.from_mapping({"author": ["A", "B"]})
    incoming = TagSet.from_mapping({"author": "C"})

    merged = merge_tags(existing, incoming)

    assert merged["author"] == ScalarValue("C")


def test_new_incoming_keys_follow_in_incoming_order() -> None:
    existing = TagSet.from_mapping({"license": "MIT"})
    incoming = TagSet.from_mapping({"version": "1.0", "author": ["A", "B"]})

    merged = merge_tags(existing, incoming)

    assert merged.names() == ("license", "version", "author")
    assert merged["author"] == ListValue(("A", "B"))


def test_empty_sides() -> None:
    tags = TagSet.from_mapping({"license": "MIT"})
    assert merge_tags(TagSet(), tags) == tags
    assert merge_tags(tags, TagSet()) == tags


@given(existing=s_tagset(), incoming=s_tagset())
def test_merge_properties(existing: TagSet, incoming: TagSet) -> None:
    merged = merge_tags(existing, incoming)

    assert set(merged) == set(existing) | set(incoming)
    for name, value in incoming.items():
        assert merged[name] == value
    kept = [name for name in merged if name in existing]
    assert kept == list(existing)


@given(tags=s_tagset())
def test_merge_with_itself_is_identity(tags: TagSet) -> None:
    assert merge_tags(tags, tags) == tags
