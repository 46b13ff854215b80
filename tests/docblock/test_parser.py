# topmark:header:start
#
#   project      : DocMark
#   file         : test_parser.py
#   file_relpath : tests/docblock/test_parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for doc block parsing, including the render/parse round trip."""

from __future__ import annotations

import pytest
from hypothesis import given

from docmark.docblock.parser import parse_docblock
from docmark.docblock.renderer import render_docblock
from docmark.tags.model import ListValue, ScalarValue, TagSet
from tests.strategies_docmark import s_tagset

pytestmark: pytest.MarkDecorator = pytest.mark.docblock


def test_tags_are_collected_and_prose_is_dropped() -> None:
    text = (
        "/**\n"
        " * Foo.\n"
        " *\n"
        " * Longer description with an email@example.com.\n"
        " * @license MIT\n"
        " * @author Jane Doe <jane@example.com>\n"
        " */"
    )

    tags = parse_docblock(text)

    assert tags.to_plain() == {"license": "MIT", "author": "Jane Doe <jane@example.com>"}
    assert tags.names() == ("license", "author")


def test_repeated_tags_become_lists_in_order() -> None:
    text = "/**\n * @author A\n * @license MIT\n * @author B\n * @author C\n */"

    tags = parse_docblock(text)

    assert tags["author"] == ListValue(("A", "B", "C"))
    assert tags["license"] == ScalarValue("MIT")
    assert tags.names() == ("author", "license")


def test_bare_tags_parse_to_empty_scalars() -> None:
    tags = parse_docblock("/**\n * @internal\n * @property-read\n */")
    assert tags.to_plain() == {"internal": "", "property-read": ""}


def test_single_line_block() -> None:
    assert parse_docblock("/** @license MIT */").to_plain() == {"license": "MIT"}


def test_crlf_and_tabs_are_trimmed() -> None:
    tags = parse_docblock("/**\r\n *\t@license   MIT\r\n */")
    assert tags.to_plain() == {"license": "MIT"}


@pytest.mark.parametrize(
    "value",
    ["https://example.com/", "lib/*", "a *", "/", "*"],
)
def test_trailing_slash_and_star_survive_a_round_trip(value: str) -> None:
    tags = TagSet([("link", ScalarValue(value))])

    assert parse_docblock(render_docblock(tags)) == tags


def test_value_before_a_closing_marker_on_the_same_line() -> None:
    assert parse_docblock("/** @see https://example.com/docs/ */").to_plain() == {
        "see": "https://example.com/docs/"
    }


def test_block_without_tags() -> None:
    assert parse_docblock("/**\n * Just prose.\n */") == TagSet()


@given(tags=s_tagset())
def test_parse_inverts_render(tags: TagSet) -> None:
    assert parse_docblock(render_docblock(tags)) == tags


@given(tags=s_tagset(min_size=1))
def test_name_line_does_not_leak_into_tags(tags: TagSet) -> None:
    assert parse_docblock(render_docblock(tags, "Foo", add_name=True)) == tags


@given(tags=s_tagset())
def test_parse_inverts_crlf_render(tags: TagSet) -> None:
    assert parse_docblock(render_docblock(tags, newline="\r\n")) == tags
