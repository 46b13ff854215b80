# topmark:header:start
#
#   project      : DocMark
#   file         : io.py
#   file_relpath : src/docmark/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML helpers for the DocMark configuration layer.

Pure functions only: nothing here touches a `MutableConfig`. The model
module uses them to read the bundled defaults and project files, to pull
typed values out of parsed tables and to serialize the effective
configuration back to TOML.

``toml`` handles parsing and dumping. ``tomlkit`` is only used by
`nest_toml_under_section`, which must keep comments and layout intact when a
``docmark.toml`` document is rewrapped as a ``[tool.docmark]`` table for
``pyproject.toml``.
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING, Any, TypeGuard

import toml
import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError
from tomlkit.items import Table

from docmark.config.logging import get_logger
from docmark.constants import DEFAULT_TOML_CONFIG_NAME, DEFAULT_TOML_CONFIG_PACKAGE
from docmark.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from docmark.config.logging import DocmarkLogger

logger: DocmarkLogger = get_logger(__name__)

TomlTable = dict[str, Any]

__all__: list[str] = [
    "TomlTable",
    "is_toml_table",
    "get_table_value",
    "get_string_value_or_none",
    "get_bool_value_or_none",
    "get_string_list_or_none",
    "load_defaults_text",
    "load_defaults_dict",
    "load_toml_dict",
    "to_toml",
    "nest_toml_under_section",
]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Return True when ``val`` is a parsed TOML table (a ``dict``)."""
    return isinstance(val, dict)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table ``key`` of ``table``, or an empty dict.

    Args:
        table (TomlTable): Parent table.
        key (str): Sub-table name.

    Returns:
        TomlTable: The sub-table when present and a mapping, otherwise ``{}``.
    """
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Return ``table[key]`` as a string, or None when absent or not coercible.

    Numbers and booleans are stringified.
    """
    value: Any | None = table.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    return None


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Return ``table[key]`` as a bool, or None when absent or not coercible.

    Integers are accepted (``0``/``1``).
    """
    value: Any | None = table.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    return None


def get_string_list_or_none(table: TomlTable, key: str) -> list[str] | None:
    """Return ``table[key]`` as a list of strings, or None when absent.

    A single string is accepted as a one-element list.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value]  # pyright: ignore[reportUnknownVariableType]
    return None


def load_defaults_text() -> str:
    """Return the bundled ``docmark-default.toml`` verbatim, comments included.

    Raises:
        RuntimeError: If the packaged resource cannot be read.
    """
    resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    logger.debug("Loading defaults from package resource: %s", resource)
    try:
        return resource.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(
            f"Cannot read bundled default config {DEFAULT_TOML_CONFIG_NAME!r}: {exc}"
        ) from exc


def load_defaults_dict() -> TomlTable:
    """Return the bundled ``docmark-default.toml`` as a dict.

    Raises:
        RuntimeError: If the packaged resource cannot be read or parsed.
    """
    text: str = load_defaults_text()
    try:
        return toml.loads(text)
    except toml.TomlDecodeError as exc:
        raise RuntimeError(
            f"Bundled default config {DEFAULT_TOML_CONFIG_NAME!r} is invalid TOML: {exc}"
        ) from exc


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file.

    Args:
        path (Path): A ``docmark.toml`` or ``pyproject.toml`` file.

    Returns:
        TomlTable: The parsed document.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        return toml.load(path)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except toml.TomlDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize ``toml_dict`` to a TOML string."""
    return toml.dumps(toml_dict)


def nest_toml_under_section(toml_doc: str, section_keys: str) -> str:
    r"""Wrap a TOML document under a dotted table path, keeping its trivia.

    ``nest_toml_under_section("a = 1\\n", "tool.docmark")`` returns a document
    equivalent to ``[tool.docmark]\\na = 1``. Comments before the first key
    stay in front of the new table; trailing comments stay at the end.

    Args:
        toml_doc (str): The document to wrap.
        section_keys (str): Dotted path such as ``"tool.docmark"``.

    Returns:
        str: The nested document.

    Raises:
        ValueError: If ``section_keys`` has no non-empty component.
        RuntimeError: If ``toml_doc`` cannot be parsed.
    """
    keys: list[str] = [k for k in section_keys.split(".") if k]
    if not keys:
        raise ValueError("section_keys must contain at least one non-empty component")

    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(toml_doc)
    except TomlkitParseError as exc:
        raise RuntimeError(f"Error parsing TOML document: {exc}") from exc

    keyed: list[int] = [i for i, (key, _) in enumerate(doc.body) if key is not None]
    first: int = keyed[0] if keyed else 0
    last: int = keyed[-1] if keyed else -1

    nested: tomlkit.TOMLDocument = tomlkit.document()
    nested.body.extend(doc.body[:first])

    target: Table = tomlkit.table()
    for key, value in doc.items():
        target.add(key, value)

    # Build the path inside-out so only the leaf table carries content.
    for key in reversed(keys[1:]):
        parent: Table = tomlkit.table(is_super_table=True)
        parent.add(key, target)
        target = parent
    nested.add(keys[0], target)

    nested.body.extend(doc.body[last + 1 :])
    return nested.as_string()
