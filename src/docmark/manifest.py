# topmark:header:start
#
#   project      : DocMark
#   file         : manifest.py
#   file_relpath : src/docmark/manifest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Project manifest reader.

Derives default ``author`` and ``license`` annotations from a package
manifest. JSON manifests (``composer.json``, ``package.json``) are decoded
with `json`; ``pyproject.toml`` is read with ``toml`` and its PEP 621
``[project]`` table is mapped onto the same shape:

    {"authors": [{"name": ..., "email": ...}, ...], "license": ...}

All failures raise a `docmark.errors.ManifestError` subclass; derivation
never returns a partial result.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import toml

from docmark.config.logging import get_logger
from docmark.constants import DEFAULT_MANIFEST_NAME, PYPROJECT_TOML_NAME
from docmark.errors import ManifestDecodeError, ManifestNotFoundError, ManifestReadError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from docmark.config.logging import DocmarkLogger

logger: DocmarkLogger = get_logger(__name__)

ManifestData = dict[str, Any]
Author = dict[str, Any]


def read_manifest(path: Path | str = DEFAULT_MANIFEST_NAME) -> ManifestData:
    """Read and decode a manifest file.

    Args:
        path (Path | str): Manifest path; ``pyproject.toml`` files are read as TOML,
            anything else as JSON.

    Returns:
        ManifestData: The decoded top-level table.

    Raises:
        ManifestNotFoundError: If the file does not exist.
        ManifestReadError: If the file cannot be read.
        ManifestDecodeError: If the content does not decode to a table.
    """
    path = Path(path)
    if not path.is_file():
        raise ManifestNotFoundError(f'The file "{path}" does not exist.', path=path)

    try:
        contents: str = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestReadError(f'Unable to read file "{path}".', path=path) from exc

    if path.name == PYPROJECT_TOML_NAME:
        return _decode_pyproject(contents, path)

    try:
        data: Any = json.loads(contents)
    except json.JSONDecodeError as exc:
        raise ManifestDecodeError(f'Unable to decode JSON from file "{path}".', path=path) from exc
    if not isinstance(data, dict):
        raise ManifestDecodeError(f'Unable to decode JSON from file "{path}".', path=path)
    logger.debug("Read manifest %s", path)
    return data  # pyright: ignore[reportUnknownVariableType]


def _decode_pyproject(contents: str, path: Path) -> ManifestData:
    try:
        document: dict[str, Any] = toml.loads(contents)
    except toml.TomlDecodeError as exc:
        raise ManifestDecodeError(f'Unable to decode TOML from file "{path}".', path=path) from exc

    project: Any = document.get("project")
    if not isinstance(project, dict):
        logger.debug("No [project] table in %s", path)
        return {}

    data: ManifestData = {}
    if "authors" in project:
        data["authors"] = project["authors"]
    license_value: Any = project.get("license")
    if isinstance(license_value, dict):
        license_value = license_value.get("text")  # pyright: ignore[reportUnknownMemberType]
    if license_value is not None:
        data["license"] = license_value
    logger.debug("Read manifest %s", path)
    return data


def extract_license(data: Mapping[str, Any]) -> str | None:
    """Return the manifest license.

    A list of licenses yields its first entry; an empty list or a missing
    key yields None.
    """
    value: Any = data.get("license")
    if value is None:
        return None
    if isinstance(value, list):
        return str(value[0]) if value else None  # pyright: ignore[reportUnknownArgumentType]
    return str(value)


def extract_authors(data: Mapping[str, Any]) -> list[Author]:
    """Return the author entries that are mappings carrying a ``name``."""
    authors: Any = data.get("authors")
    if not isinstance(authors, list):
        return []
    return [
        author  # pyright: ignore[reportUnknownVariableType]
        for author in authors  # pyright: ignore[reportUnknownVariableType]
        if isinstance(author, dict) and "name" in author
    ]


def get_primary_author(data: Mapping[str, Any]) -> Author | None:
    """Return the first valid author entry, or None."""
    authors: list[Author] = extract_authors(data)
    return authors[0] if authors else None


def format_author(author: Mapping[str, Any]) -> str:
    """Format an author entry as ``"Name <email>"`` (or ``"Name"`` without email)."""
    text: str = str(author["name"])
    email: Any = author.get("email")
    if email:
        text += f" <{email}>"
    return text


def annotations_from_manifest(
    path: Path | str = DEFAULT_MANIFEST_NAME,
    additional: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Derive annotations from a manifest.

    ``author`` is a string for a single author and a list for several;
    ``license`` follows. Entries of ``additional`` are applied last and win
    over derived ones.

    Args:
        path (Path | str): Manifest path.
        additional (Mapping[str, Any] | None): Annotations overriding derived values.

    Returns:
        dict[str, Any]: Plain annotations, ready for `docmark.tags.model.TagSet.from_mapping`.

    Raises:
        ManifestError: Propagated from `read_manifest`.
    """
    data: ManifestData = read_manifest(path)
    annotations: dict[str, Any] = {}

    authors: list[str] = [format_author(author) for author in extract_authors(data)]
    if len(authors) == 1:
        annotations["author"] = authors[0]
    elif authors:
        annotations["author"] = authors

    license_text: str | None = extract_license(data)
    if license_text is not None:
        annotations["license"] = license_text

    annotations.update(additional or {})
    logger.debug("Manifest annotations from %s: %s", path, annotations)
    return annotations
