# topmark:header:start
#
#   project      : DocMark
#   file         : test_renderer.py
#   file_relpath : tests/docblock/test_renderer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for doc block rendering."""

from __future__ import annotations

import pytest

from docmark.docblock.renderer import EMPTY_DOCBLOCK, render_docblock
from docmark.tags.model import TagSet

pytestmark: pytest.MarkDecorator = pytest.mark.docblock


def test_scalar_and_list_values_render_one_line_per_item() -> None:
    tags = TagSet.from_mapping({"author": ["Jane <jane@example.com>", "John"], "license": "MIT"})

    assert render_docblock(tags) == (
        "/**\n"
        " * @author Jane <jane@example.com>\n"
        " * @author John\n"
        " * @license MIT\n"
        " */"
    )


def test_empty_values_render_bare_tags() -> None:
    tags = TagSet.from_mapping({"internal": "", "api": None, "see": []})

    assert render_docblock(tags) == "/**\n * @internal\n * @api\n * @see\n */"


def test_zero_is_not_an_empty_value() -> None:
    assert render_docblock(TagSet.from_mapping({"version": "0"})) == "/**\n * @version 0\n */"


def test_structure_name_line_comes_first_with_separator() -> None:
    tags = TagSet.from_mapping({"author": "X"})

    assert render_docblock(tags, "MyClass", add_name=True) == (
        "/**\n * MyClass.\n *\n * @author X\n */"
    )


def test_name_without_tags_has_no_separator() -> None:
    assert render_docblock(TagSet(), "Foo", add_name=True) == "/**\n * Foo.\n */"


def test_name_is_ignored_unless_requested() -> None:
    tags = TagSet.from_mapping({"author": "X"})
    assert render_docblock(tags, "Foo") == render_docblock(tags)


def test_nothing_to_render() -> None:
    assert render_docblock(TagSet()) == EMPTY_DOCBLOCK == "/**\n */"
