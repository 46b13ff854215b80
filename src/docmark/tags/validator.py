# topmark:header:start
#
#   project      : DocMark
#   file         : validator.py
#   file_relpath : src/docmark/tags/validator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Validation of annotation tag names.

Annotation keys come from user configuration (TOML, CLI options, manifest
derivation). They are validated once, while the configuration is frozen, so
that scanning never fails half-way through a file because of a typo in a tag
name. Only the *names* are checked; values are free text.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from docmark.config.logging import get_logger
from docmark.errors import InvalidTagError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from docmark.config.logging import DocmarkLogger

logger: DocmarkLogger = get_logger(__name__)

TAG_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")

# Order matters: it is the order shown to users in error messages and `docmark tags`.
ALLOWED_TAGS: Final[tuple[str, ...]] = (
    "author",
    "copyright",
    "license",
    "version",
    "since",
    "package",
    "subpackage",
    "see",
    "link",
    "todo",
    "fixme",
    "deprecated",
    "internal",
    "api",
    "category",
    "example",
    "ignore",
    "uses",
    "used-by",
    "throws",
    "method",
    "property",
    "property-read",
    "property-write",
    "param",
    "return",
    "var",
    "global",
    "static",
    "final",
    "abstract",
)


def validate_tag_name(key: object) -> None:
    """Validate a single annotation key.

    Args:
        key (object): The key to check; anything other than ``str`` is rejected.

    Raises:
        InvalidTagError: If the key is not a string, is blank, has an invalid
            shape, or is not allow-listed.
    """
    if not isinstance(key, str):
        raise InvalidTagError(
            f"Annotation key must be a string, {type(key).__name__} given",
            key=key,
        )
    if not key.strip():
        raise InvalidTagError("Annotation key cannot be empty", key=key)
    if not TAG_NAME_PATTERN.fullmatch(key):
        raise InvalidTagError(
            f'Invalid annotation key "{key}". Must start with letter and contain only '
            "letters, numbers, underscore, or dash.",
            key=key,
        )
    if key not in ALLOWED_TAGS:
        raise InvalidTagError(
            f'Unknown annotation "{key}". Allowed annotations: {", ".join(ALLOWED_TAGS)}',
            key=key,
            allowed=ALLOWED_TAGS,
        )


def validate_tags(tags: Mapping[object, object]) -> None:
    """Validate every key of an annotation mapping.

    Validation is pure: the mapping is never modified and values are not inspected.

    Args:
        tags (Mapping[object, object]): Annotation mapping (plain dict or `TagSet`).

    Raises:
        InvalidTagError: On the first offending key, in mapping order.
    """
    for key in tags:
        validate_tag_name(key)
    logger.trace("Validated %d annotation key(s)", len(tags))
