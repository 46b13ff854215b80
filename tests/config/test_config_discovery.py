# topmark:header:start
#
#   project      : DocMark
#   file         : test_config_discovery.py
#   file_relpath : tests/config/test_config_discovery.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for project config discovery and layered merging."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from docmark.config.model import MutableConfig
from docmark.config.types import Separate
from docmark.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

pytestmark: pytest.MarkDecorator = pytest.mark.config


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_discovery_orders_root_most_first(tmp_path: Path) -> None:
    outer = write(tmp_path / "docmark.toml", "root = true\n[annotations]\nauthor = \"Outer\"\n")
    pyproject = write(
        tmp_path / "pkg" / "pyproject.toml", "[tool.docmark.annotations]\nlicense = \"MIT\"\n"
    )
    inner = write(tmp_path / "pkg" / "docmark.toml", "[annotations]\nauthor = \"Inner\"\n")
    (tmp_path / "pkg" / "src").mkdir()

    found = MutableConfig.discover_local_config_files(tmp_path / "pkg" / "src")

    assert found == [outer.resolve(), pyproject.resolve(), inner.resolve()]


def test_root_true_stops_discovery(tmp_path: Path) -> None:
    write(tmp_path / "docmark.toml", "[annotations]\nauthor = \"Outer\"\n")
    inner = write(tmp_path / "pkg" / "docmark.toml", "root = true\n")

    assert MutableConfig.discover_local_config_files(tmp_path / "pkg") == [inner.resolve()]


def test_pyproject_without_section_is_skipped(tmp_path: Path) -> None:
    write(tmp_path / "docmark.toml", "root = true\n")
    write(tmp_path / "pyproject.toml", "[project]\nname = \"x\"\n")

    assert MutableConfig.from_toml_file(tmp_path / "pyproject.toml") is None
    assert MutableConfig.discover_local_config_files(tmp_path) == [
        (tmp_path / "docmark.toml").resolve()
    ]


def test_unreadable_config_is_skipped_during_discovery(tmp_path: Path) -> None:
    write(tmp_path / "pyproject.toml", "[tool.docmark\n")
    good = write(tmp_path / "docmark.toml", "root = true\n")

    assert MutableConfig.discover_local_config_files(tmp_path) == [good.resolve()]


def test_discovery_from_a_file_anchor(tmp_path: Path) -> None:
    cfg = write(tmp_path / "docmark.toml", "root = true\n")
    source = write(tmp_path / "src" / "Foo.php", "<?php\n")

    assert MutableConfig.discover_local_config_files(source) == [cfg.resolve()]


def test_load_merged_layers(tmp_path: Path) -> None:
    write(
        tmp_path / "docmark.toml",
        "root = true\n"
        "[annotations]\nauthor = \"Jane\"\nlicense = \"MIT\"\n"
        "[docblock]\nseparate = \"both\"\n",
    )
    extra = write(
        tmp_path / "extra.toml",
        "[annotations]\nlicense = \"Apache-2.0\"\n[docblock]\nadd_structure_name = true\n",
    )

    config = MutableConfig.load_merged(input_paths=[tmp_path], extra_config_files=[extra]).freeze()

    assert config.annotations.to_plain() == {"author": "Jane", "license": "Apache-2.0"}
    assert config.separate is Separate.BOTH
    assert config.add_structure_name is True
    assert config.preserve_existing is True
    assert config.include_patterns == ("**/*.php",)
    assert config.config_files == (
        "<defaults>",
        (tmp_path / "docmark.toml").resolve(),
        extra,
    )


def test_load_merged_no_config_skips_discovery(tmp_path: Path) -> None:
    write(tmp_path / "docmark.toml", "root = true\n[annotations]\nauthor = \"Jane\"\n")

    config = MutableConfig.load_merged(input_paths=[tmp_path], no_config=True).freeze()

    assert not config.annotations


def test_explicit_pyproject_without_section_is_an_error(tmp_path: Path) -> None:
    pyproject = write(tmp_path / "pyproject.toml", "[project]\nname = \"x\"\n")

    with pytest.raises(ConfigError, match="No \\[tool.docmark\\] section"):
        MutableConfig.load_merged(
            input_paths=[tmp_path], extra_config_files=[pyproject], no_config=True
        )


def test_relative_manifest_path_follows_the_config_file(tmp_path: Path) -> None:
    write(tmp_path / "proj" / "docmark.toml", "root = true\n[manifest]\npath = \"composer.json\"\n")

    draft = MutableConfig.load_merged(input_paths=[tmp_path / "proj"])

    assert draft.manifest_path == (tmp_path / "proj" / "composer.json").resolve()
