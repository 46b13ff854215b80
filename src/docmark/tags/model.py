# topmark:header:start
#
#   project      : DocMark
#   file         : model.py
#   file_relpath : src/docmark/tags/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Annotation tag values and ordered tag sets.

A tag value is either a single string (``@license MIT``) or an ordered list of
strings for tags repeated in one block (several ``@author`` lines). The two
shapes are modelled as an explicit tagged variant instead of relying on
``isinstance(value, list)`` checks scattered across the code base:

    TagValue = ScalarValue | ListValue

`TagSet` is an immutable, insertion-ordered mapping from tag name to
`TagValue`. Its order is significant: renderers emit tags in this order and
the merge policy preserves it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class ScalarValue:
    """A single-valued tag payload.

    Attributes:
        text (str): The payload; may be empty for bare tags such as ``@internal``.
    """

    text: str = ""

    def is_empty(self) -> bool:
        """Return True when the tag renders without a payload."""
        return self.text == ""

    def to_plain(self) -> str:
        """Return the plain (TOML/JSON friendly) representation."""
        return self.text


@dataclass(frozen=True, slots=True)
class ListValue:
    """A multi-valued tag payload, one rendered line per item.

    Attributes:
        items (tuple[str, ...]): Payloads in rendering order.
    """

    items: tuple[str, ...] = ()

    def is_empty(self) -> bool:
        """Return True when there is nothing to render after the tag name."""
        return not self.items

    def to_plain(self) -> list[str]:
        """Return the plain (TOML/JSON friendly) representation."""
        return list(self.items)


TagValue: TypeAlias = ScalarValue | ListValue


def coerce_tag_value(raw: Any) -> TagValue:
    """Convert a raw configuration value into a `TagValue`.

    Accepted shapes:
        * ``None`` -> empty scalar (bare tag)
        * ``str`` -> scalar
        * ``int`` / ``float`` / ``bool`` -> scalar (stringified, like TOML getters do)
        * list/tuple of the above -> list value (items stringified)
        * an existing `ScalarValue` / `ListValue` -> returned as is

    Args:
        raw (Any): The raw value, typically from TOML or CLI options.

    Returns:
        TagValue: The coerced value.

    Raises:
        TypeError: If the value cannot be represented as tag text.
    """
    if isinstance(raw, (ScalarValue, ListValue)):
        return raw
    if raw is None:
        return ScalarValue()
    if isinstance(raw, str):
        return ScalarValue(raw)
    if isinstance(raw, bool):
        return ScalarValue(str(raw).lower())
    if isinstance(raw, (int, float)):
        return ScalarValue(str(raw))
    if isinstance(raw, (list, tuple)):
        items: list[str] = []
        for item in raw:  # pyright: ignore[reportUnknownVariableType]
            if isinstance(item, (dict, list, tuple)):
                raise TypeError(f"Nested values are not supported in tag lists: {item!r}")
            text: str = (
                "" if item is None else str(item)  # pyright: ignore[reportUnknownArgumentType]
            )
            items.append(text)
        return ListValue(tuple(items))
    raise TypeError(f"Unsupported tag value type: {type(raw).__name__}")


class TagSet(Mapping[str, TagValue]):
    """Immutable, insertion-ordered mapping of tag names to tag values.

    Build one from plain data with `TagSet.from_mapping`; convert back with
    `TagSet.to_plain`. Equality is order-sensitive, since the order drives
    rendering.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[tuple[str, TagValue]] = ()) -> None:
        ordered: dict[str, TagValue] = {}
        for name, value in entries:
            ordered[name] = value
        self._entries: dict[str, TagValue] = ordered

    @classmethod
    def from_mapping(cls, data: Mapping[Any, Any] | None) -> TagSet:
        """Build a TagSet from a plain mapping, coercing values.

        Keys are taken as given; use `docmark.tags.validator.validate_tags`
        before calling this for configuration input.

        Args:
            data (Mapping[Any, Any] | None): Plain mapping, e.g. ``{"author": ["A", "B"]}``.

        Returns:
            TagSet: The ordered tag set.
        """
        if not data:
            return cls()
        if isinstance(data, TagSet):
            return data
        return cls((str(k), coerce_tag_value(v)) for k, v in data.items())

    def __getitem__(self, key: str) -> TagValue:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagSet):
            return NotImplemented
        return list(self._entries.items()) == list(other._entries.items())

    def __hash__(self) -> int:
        return hash(tuple(self._entries.items()))

    def __repr__(self) -> str:
        return f"TagSet({self.to_plain()!r})"

    def names(self) -> tuple[str, ...]:
        """Return the tag names in order."""
        return tuple(self._entries)

    def to_plain(self) -> dict[str, str | list[str]]:
        """Return a plain dict (strings and lists of strings), preserving order."""
        return {name: value.to_plain() for name, value in self._entries.items()}
