# topmark:header:start
#
#   project      : DocMark
#   file         : test_manifest.py
#   file_relpath : tests/manifest/test_manifest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for manifest reading and annotation derivation (`docmark.manifest`)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from docmark.errors import ManifestDecodeError, ManifestNotFoundError, ManifestReadError
from docmark.manifest import (
    annotations_from_manifest,
    extract_authors,
    extract_license,
    format_author,
    get_primary_author,
    read_manifest,
)

if TYPE_CHECKING:
    from pathlib import Path

pytestmark: pytest.MarkDecorator = pytest.mark.manifest


def write_json(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_single_author_is_a_scalar(tmp_path: Path) -> None:
    manifest = write_json(
        tmp_path / "composer.json",
        {"authors": [{"name": "Jane Doe", "email": "jane@example.com"}], "license": "MIT"},
    )

    assert annotations_from_manifest(manifest) == {
        "author": "Jane Doe <jane@example.com>",
        "license": "MIT",
    }


def test_several_authors_become_a_list(tmp_path: Path) -> None:
    manifest = write_json(
        tmp_path / "composer.json",
        {"authors": [{"name": "A"}, {"email": "nobody@example.com"}, {"name": "B", "email": ""}]},
    )

    assert annotations_from_manifest(manifest) == {"author": ["A", "B"]}


def test_license_list_uses_the_first_entry(tmp_path: Path) -> None:
    manifest = write_json(tmp_path / "composer.json", {"license": ["GPL-3.0-only", "MIT"]})

    assert annotations_from_manifest(manifest) == {"license": "GPL-3.0-only"}


def test_additional_annotations_win(tmp_path: Path) -> None:
    manifest = write_json(
        tmp_path / "composer.json", {"authors": [{"name": "A"}], "license": "MIT"}
    )

    result = annotations_from_manifest(manifest, {"license": "Proprietary", "version": "2.0"})

    assert result == {"author": "A", "license": "Proprietary", "version": "2.0"}


def test_empty_manifest_derives_nothing(tmp_path: Path) -> None:
    assert annotations_from_manifest(write_json(tmp_path / "composer.json", {})) == {}


def test_pyproject_manifest(tmp_path: Path) -> None:
    manifest = tmp_path / "pyproject.toml"
    manifest.write_text(
        '[project]\nname = "x"\nlicense = { text = "MIT" }\n'
        'authors = [{ name = "Jane", email = "jane@example.com" }]\n',
        encoding="utf-8",
    )

    assert annotations_from_manifest(manifest) == {
        "author": "Jane <jane@example.com>",
        "license": "MIT",
    }


def test_pyproject_without_project_table(tmp_path: Path) -> None:
    manifest = tmp_path / "pyproject.toml"
    manifest.write_text("[tool.other]\nx = 1\n", encoding="utf-8")

    assert read_manifest(manifest) == {}


def test_missing_manifest(tmp_path: Path) -> None:
    path = tmp_path / "composer.json"

    with pytest.raises(ManifestNotFoundError) as excinfo:
        read_manifest(path)

    assert str(excinfo.value) == f'The file "{path}" does not exist.'
    assert excinfo.value.path == path


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '"text"'])
def test_undecodable_manifest(tmp_path: Path, content: str) -> None:
    path = tmp_path / "composer.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ManifestDecodeError, match="Unable to decode JSON"):
        read_manifest(path)


def test_unreadable_manifest(tmp_path: Path) -> None:
    path = tmp_path / "composer.json"
    path.write_bytes(b"\xff\xfe\x00 not utf-8")

    with pytest.raises(ManifestReadError, match="Unable to read file"):
        read_manifest(path)


def test_author_helpers() -> None:
    data: dict[str, Any] = {"authors": ["not a mapping", {"name": "A", "email": "a@x.org"}]}

    assert extract_authors(data) == [{"name": "A", "email": "a@x.org"}]
    assert get_primary_author(data) == {"name": "A", "email": "a@x.org"}
    assert get_primary_author({}) is None
    assert format_author({"name": "A", "email": "a@x.org"}) == "A <a@x.org>"
    assert format_author({"name": "A"}) == "A"


def test_license_helper() -> None:
    assert extract_license({}) is None
    assert extract_license({"license": []}) is None
    assert extract_license({"license": "MIT"}) == "MIT"
