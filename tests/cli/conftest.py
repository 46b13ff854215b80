# topmark:header:start
#
#   project      : DocMark
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running DocMark in a controlled working directory.

`run_cli_in()` changes the process working directory to the given
`tmp_path` before invoking the Click CLI, so that **relative** paths, globs
and upward config discovery are resolved against the temporary test
directory rather than the repository.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from click.testing import CliRunner, Result

from docmark.cli.exit_codes import ExitCode
from docmark.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

PHP_CLASS = "<?php\n\nclass Foo {}\n"


def run_cli_in(tmp_path: Path, argv: Sequence[str]) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Directory used as the CWD for the command invocation.
        argv (Sequence[str]): CLI argument vector, e.g. ``["check", "src"]``.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, list(argv))
    finally:
        os.chdir(cwd)


def run_cli(argv: Sequence[str]) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper for commands that do not touch the filesystem
    (``--help``, ``version``, ``tags``).
    """
    return CliRunner().invoke(cli, list(argv))


def write_project(tmp_path: Path, config: str | None = None) -> Path:
    """Create ``src/Foo.php`` and, optionally, a ``docmark.toml`` marked as root.

    Returns:
        Path: The PHP source file.
    """
    if config is not None:
        (tmp_path / "docmark.toml").write_text("root = true\n" + config, encoding="utf-8")
    source: Path = tmp_path / "src" / "Foo.php"
    source.parent.mkdir(parents=True, exist_ok=True)
    source.write_text(PHP_CLASS, encoding="utf-8")
    return source


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_WOULD_CHANGE(result: Result) -> None:
    """Assert that a dry run found changes (code 2)."""
    assert result.exit_code == ExitCode.WOULD_CHANGE, result.output
