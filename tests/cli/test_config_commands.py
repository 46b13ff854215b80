# topmark:header:start
#
#   project      : DocMark
#   file         : test_config_commands.py
#   file_relpath : tests/cli/test_config_commands.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for ``docmark config dump`` and ``docmark config init``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import toml

from docmark.cli.exit_codes import ExitCode
from tests.cli.conftest import assert_SUCCESS, run_cli, run_cli_in, write_project
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path


@mark_cli
def test_dump_defaults(tmp_path: Path) -> None:
    result = run_cli_in(tmp_path, ["--no-color", "config", "dump", "--no-config"])

    assert_SUCCESS(result)
    data: dict[str, Any] = toml.loads(result.output)
    assert data["annotations"] == {}
    assert data["docblock"] == {
        "preserve_existing": True,
        "separate": "none",
        "add_structure_name": False,
        "ensure_spacing": True,
        "structures": ["class", "interface", "trait", "enum"],
    }
    assert data["files"] == {"include_patterns": ["**/*.php"], "exclude_patterns": ["vendor/"]}


@mark_cli
def test_dump_merges_project_file_and_overrides(tmp_path: Path) -> None:
    write_project(tmp_path, '[annotations]\nauthor = ["A", "B"]\n[docblock]\nseparate = "top"\n')

    result = run_cli_in(
        tmp_path,
        [
            "--no-color",
            "config",
            "dump",
            "-a",
            "license=MIT",
            "--structure",
            "trait",
            "--exclude",
            "tests/",
            "src",
        ],
    )

    assert_SUCCESS(result)
    data: dict[str, Any] = toml.loads(result.output)
    assert data["annotations"] == {"author": ["A", "B"], "license": "MIT"}
    assert data["docblock"]["separate"] == "top"
    assert data["docblock"]["structures"] == ["trait"]
    assert data["files"]["exclude_patterns"] == ["vendor/", "tests/"]


@mark_cli
def test_dump_reports_invalid_annotations(tmp_path: Path) -> None:
    result = run_cli_in(tmp_path, ["--no-color", "config", "dump", "--no-config", "-a", "x=1"])

    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
    assert 'Unknown annotation "x"' in result.output


@mark_cli
def test_init_prints_the_commented_defaults() -> None:
    result = run_cli(["--no-color", "config", "init"])

    assert_SUCCESS(result)
    assert result.output.startswith("# DocMark default configuration.")
    data: dict[str, Any] = toml.loads(result.output)
    assert data["root"] is False
    assert data["docblock"]["separate"] == "none"


@mark_cli
def test_init_pyproject_nests_under_tool_docmark() -> None:
    result = run_cli(["--no-color", "config", "init", "--pyproject"])

    assert_SUCCESS(result)
    assert "[tool.docmark]" in result.output
    data: dict[str, Any] = toml.loads(result.output)
    assert data["tool"]["docmark"]["docblock"]["ensure_spacing"] is True
    assert data["tool"]["docmark"]["files"]["exclude_patterns"] == ["vendor/"]
