# topmark:header:start
#
#   project      : DocMark
#   file         : test_check_command.py
#   file_relpath : tests/cli/test_check_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for ``docmark check``: dry runs, ``--apply`` and exit codes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docmark.cli.exit_codes import ExitCode
from tests.cli.conftest import (
    PHP_CLASS,
    assert_SUCCESS,
    assert_WOULD_CHANGE,
    run_cli_in,
    write_project,
)
from tests.conftest import mark_cli, parametrize

if TYPE_CHECKING:
    from pathlib import Path

FIXED_CLASS = "<?php\n\n/**\n * @author Jane\n */\nclass Foo {}\n"

CHECK = ["--no-color", "check", "--no-config"]


@mark_cli
def test_dry_run_reports_and_leaves_files(tmp_path: Path) -> None:
    source = write_project(tmp_path)

    result = run_cli_in(tmp_path, [*CHECK, "-a", "author=Jane", "src"])

    assert_WOULD_CHANGE(result)
    assert "src/Foo.php: would change (1 inserted)" in result.output
    assert source.read_text(encoding="utf-8") == PHP_CLASS


@mark_cli
def test_apply_writes_and_second_run_is_clean(tmp_path: Path) -> None:
    source = write_project(tmp_path)

    result = run_cli_in(tmp_path, [*CHECK, "--apply", "-a", "author=Jane", "src"])

    assert_SUCCESS(result)
    assert "src/Foo.php: updated (1 inserted)" in result.output
    assert "Applied changes to 1 file(s)." in result.output
    assert source.read_text(encoding="utf-8") == FIXED_CLASS

    again = run_cli_in(
        tmp_path, ["--no-color", "-v", "check", "--no-config", "-a", "author=Jane"]
    )

    assert_SUCCESS(again)
    assert "src/Foo.php: up to date" in again.output


@mark_cli
def test_apply_without_changes(tmp_path: Path) -> None:
    source = write_project(tmp_path)
    source.write_text(FIXED_CLASS, encoding="utf-8")

    result = run_cli_in(tmp_path, [*CHECK, "--apply", "-a", "author=Jane", "src"])

    assert_SUCCESS(result)
    assert "No changes to apply." in result.output


@mark_cli
def test_diff_output(tmp_path: Path) -> None:
    write_project(tmp_path)

    result = run_cli_in(tmp_path, [*CHECK, "--diff", "-a", "license=MIT", "src/Foo.php"])

    assert_WOULD_CHANGE(result)
    assert "--- src/Foo.php (current)" in result.output
    assert "+ * @license MIT" in result.output


@mark_cli
def test_rendering_options(tmp_path: Path) -> None:
    source = write_project(tmp_path)

    result = run_cli_in(
        tmp_path,
        [
            *CHECK,
            "--apply",
            "--separate",
            "both",
            "--add-structure-name",
            "-a",
            "author=A",
            "-a",
            "author=B",
            "-a",
            "internal",
            "src",
        ],
    )

    assert_SUCCESS(result)
    assert source.read_text(encoding="utf-8") == (
        "<?php\n\n\n/**\n * Foo.\n *\n"
        " * @author A\n * @author B\n * @internal\n */\n\nclass Foo {}\n"
    )


@mark_cli
def test_structure_filter(tmp_path: Path) -> None:
    source = write_project(tmp_path)

    result = run_cli_in(
        tmp_path, [*CHECK, "--apply", "--structure", "interface", "-a", "author=Jane", "src"]
    )

    assert_SUCCESS(result)
    assert source.read_text(encoding="utf-8") == PHP_CLASS


@mark_cli
def test_project_config_is_discovered(tmp_path: Path) -> None:
    write_project(tmp_path, '[annotations]\nauthor = "Jane"\n')

    result = run_cli_in(tmp_path, ["--no-color", "check", "src"])

    assert_WOULD_CHANGE(result)


@mark_cli
def test_explicit_config_file(tmp_path: Path) -> None:
    write_project(tmp_path)
    (tmp_path / "team.toml").write_text('[annotations]\nlicense = "MIT"\n', encoding="utf-8")

    result = run_cli_in(tmp_path, [*CHECK, "--config", "team.toml", "--apply", "src"])

    assert_SUCCESS(result)
    assert "@license MIT" in (tmp_path / "src" / "Foo.php").read_text(encoding="utf-8")


@mark_cli
def test_manifest_option(tmp_path: Path) -> None:
    source = write_project(tmp_path)
    (tmp_path / "composer.json").write_text(
        '{"authors": [{"name": "Jane", "email": "jane@example.com"}], "license": "MIT"}',
        encoding="utf-8",
    )

    result = run_cli_in(tmp_path, [*CHECK, "--apply", "--manifest", "composer.json", "src"])

    assert_SUCCESS(result)
    assert source.read_text(encoding="utf-8") == (
        "<?php\n\n/**\n * @author Jane <jane@example.com>\n * @license MIT\n */\nclass Foo {}\n"
    )


@mark_cli
def test_no_annotations_is_a_warning(tmp_path: Path) -> None:
    write_project(tmp_path)

    result = run_cli_in(tmp_path, [*CHECK, "src"])

    assert_SUCCESS(result)
    assert "No annotations configured; nothing to do." in result.output


@mark_cli
def test_no_files(tmp_path: Path) -> None:
    write_project(tmp_path)

    result = run_cli_in(tmp_path, [*CHECK, "-a", "author=Jane", "--exclude", "src/", "."])

    assert_SUCCESS(result)
    assert "No files to process." in result.output


@mark_cli
def test_summary(tmp_path: Path) -> None:
    write_project(tmp_path)
    (tmp_path / "src" / "Done.php").write_text(
        FIXED_CLASS.replace("Foo", "Done"), encoding="utf-8"
    )

    result = run_cli_in(tmp_path, [*CHECK, "--summary", "-a", "author=Jane", "src"])

    assert_WOULD_CHANGE(result)
    assert "Summary by outcome:" in result.output
    assert "would change " in result.output
    assert "unchanged" in result.output


@mark_cli
def test_undecodable_file_sets_the_exit_code(tmp_path: Path) -> None:
    source = write_project(tmp_path)
    (tmp_path / "src" / "Bad.php").write_bytes(b"<?php \xff class Bad {}")

    result = run_cli_in(tmp_path, [*CHECK, "--apply", "-a", "author=Jane", "src"])

    assert result.exit_code == ExitCode.ENCODING_ERROR, result.output
    assert "not valid UTF-8" in result.output
    assert source.read_text(encoding="utf-8") == FIXED_CLASS


@mark_cli
@parametrize(
    "argv, exit_code, message",
    [
        (["-a", "nope=1", "src"], ExitCode.CONFIG_ERROR, 'Unknown annotation "nope"'),
        (["-a", "1bad=1", "src"], ExitCode.CONFIG_ERROR, 'Invalid annotation key "1bad"'),
        (["-a", "author=J", "missing.php"], ExitCode.FILE_NOT_FOUND, "missing.php"),
        (["--config", "nope.toml", "src"], ExitCode.FILE_NOT_FOUND, "nope.toml"),
        (["--manifest", "composer.json", "src"], ExitCode.FILE_NOT_FOUND, "does not exist"),
    ],
)
def test_error_exit_codes(
    tmp_path: Path, argv: list[str], exit_code: ExitCode, message: str
) -> None:
    write_project(tmp_path)

    result = run_cli_in(tmp_path, [*CHECK, *argv])

    assert result.exit_code == exit_code, result.output
    assert message in result.output


@mark_cli
def test_undecodable_manifest(tmp_path: Path) -> None:
    write_project(tmp_path)
    (tmp_path / "composer.json").write_text("{broken", encoding="utf-8")

    result = run_cli_in(tmp_path, [*CHECK, "--manifest", "composer.json", "src"])

    assert result.exit_code == ExitCode.ENCODING_ERROR, result.output
    assert "Unable to decode JSON" in result.output


@mark_cli
def test_invalid_config_value(tmp_path: Path) -> None:
    write_project(tmp_path, '[docblock]\nseparate = "sideways"\n')

    result = run_cli_in(tmp_path, ["--no-color", "check", "src"])

    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
    assert "Invalid separate mode" in result.output


@mark_cli
def test_verbose_and_quiet_conflict(tmp_path: Path) -> None:
    result = run_cli_in(tmp_path, ["-v", "-q", "check"])

    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


@mark_cli
def test_quiet_hides_per_file_lines(tmp_path: Path) -> None:
    write_project(tmp_path)

    result = run_cli_in(tmp_path, ["--no-color", "-q", "check", "--no-config", "-a", "author=J"])

    assert_WOULD_CHANGE(result)
    assert "would change" not in result.output
