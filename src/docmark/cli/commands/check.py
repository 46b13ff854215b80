# topmark:header:start
#
#   project      : DocMark
#   file         : check.py
#   file_relpath : src/docmark/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocMark ``check`` command.

Reports which files would get new or updated doc blocks (dry run) and writes
them with ``--apply``.

Examples:
  Preview which files would change:

    $ docmark check src

  Apply with annotations given on the command line and show diffs:

    $ docmark check --apply --diff -a author="Jane Doe" -a license=MIT src

  Derive author/license from composer.json:

    $ docmark check --manifest composer.json src
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from docmark import api
from docmark.api import FileResult, FileStatus
from docmark.cli.commands.common import build_args_namespace, get_console, get_verbosity
from docmark.cli.config_resolver import resolve_config_from_click
from docmark.cli.errors import (
    DocmarkEncodingError,
    DocmarkFileNotFoundError,
    DocmarkIOError,
    DocmarkPermissionDeniedError,
)
from docmark.cli.exit_codes import ExitCode
from docmark.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_docblock_options,
    common_file_filtering_options,
)
from docmark.config.logging import get_logger
from docmark.engine.types import FixAction
from docmark.utils.diff import render_patch

if TYPE_CHECKING:
    from docmark.cli.cli_types import ArgsNamespace
    from docmark.cli.console import ClickConsole
    from docmark.cli.errors import DocmarkCliError
    from docmark.config.logging import DocmarkLogger
    from docmark.config.model import Config
    from docmark.config.types import Separate, StructureKind

logger: DocmarkLogger = get_logger(__name__)

_GLOB_CHARS = "*?["


def _describe(result: FileResult) -> str:
    if result.result is None:
        return ""
    report = result.result.report
    parts: list[str] = [
        f"{report.count(action)} {action.value}"
        for action in (FixAction.INSERTED, FixAction.MERGED, FixAction.REPLACED)
        if report.count(action)
    ]
    return ", ".join(parts)


def _cli_error(result: FileResult) -> DocmarkCliError:
    """Return the CLI error matching the failure recorded in ``result``."""
    error_cls: type[DocmarkCliError] = DocmarkIOError
    if isinstance(result.exception, UnicodeDecodeError):
        error_cls = DocmarkEncodingError
    elif isinstance(result.exception, PermissionError):
        error_cls = DocmarkPermissionDeniedError
    return error_cls(f"{result.path}: {result.error}")


def _render_result(console: ClickConsole, result: FileResult, *, vlevel: int) -> None:
    if result.status is FileStatus.UNCHANGED:
        if vlevel > 0:
            console.print(f"{console.styled('✓', fg='green')} {result.path}: up to date")
        return
    if result.status is FileStatus.ERROR:
        console.print(f"{console.styled('✗', fg='red')} {result.path}: {result.error}")
        return

    detail: str = _describe(result)
    if result.status is FileStatus.CHANGED:
        console.print(f"{console.styled('✎', fg='green')} {result.path}: updated ({detail})")
    else:
        console.print(f"{console.styled('!', fg='yellow')} {result.path}: would change ({detail})")
        if vlevel > 0:
            hint: str = f"   Run `docmark check --apply {result.path}` to update it."
            console.print(console.styled(hint, fg="yellow"))


def _render_summary(console: ClickConsole, results: list[FileResult]) -> None:
    console.print(console.styled("Summary by outcome:", bold=True, underline=True))
    width: int = max(len(status.value) for status in FileStatus) + 1
    for status in FileStatus:
        n: int = sum(1 for r in results if r.status is status)
        if n:
            console.print(f"  {status.value:<{width}}: {n}")


@click.command(
    name="check",
    help="Check class-level doc blocks (dry run). Use --apply to write changes.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("paths", nargs=-1, type=click.Path(path_type=str))
@common_config_options
@common_file_filtering_options
@common_docblock_options
@click.option(
    "--apply", "apply_changes", is_flag=True, help="Write changes to files (off by default)."
)
@click.option("--diff", is_flag=True, help="Show unified diffs of the changes.")
@click.option(
    "--summary", "summary_mode", is_flag=True, help="Show outcome counts instead of per-file lines."
)
def check_command(
    *,
    paths: tuple[str, ...],
    config_paths: tuple[str, ...],
    no_config: bool,
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    annotation_pairs: tuple[tuple[str, str], ...],
    manifest_path: str | None,
    preserve_existing: bool | None,
    separate: Separate | None,
    add_structure_name: bool | None,
    ensure_spacing: bool | None,
    structures: tuple[StructureKind, ...],
    apply_changes: bool,
    diff: bool,
    summary_mode: bool,
) -> None:
    """Check (and optionally fix) the doc blocks of the selected files.

    Exit Status:
        SUCCESS (0): Nothing to change, or all changes were written.
        WOULD_CHANGE (2): Dry run found files that ``--apply`` would change.
        USAGE_ERROR (64): Invalid invocation.
        ENCODING_ERROR (65): A file (or the manifest) could not be decoded.
        FILE_NOT_FOUND (66): An input path, config file or manifest is missing.
        IO_ERROR (74): Reading or writing a file failed.
        PERMISSION_DENIED (77): A file could not be read or written.
        CONFIG_ERROR (78): Invalid configuration or annotation.
    """
    ctx: click.Context = click.get_current_context()
    console: ClickConsole = get_console(ctx)
    vlevel: int = get_verbosity(ctx)

    for raw in paths:
        if not any(ch in raw for ch in _GLOB_CHARS) and not Path(raw).exists():
            raise DocmarkFileNotFoundError(f"No such file or directory: {raw}")

    args: ArgsNamespace = build_args_namespace(
        annotation_pairs=annotation_pairs,
        manifest_path=manifest_path,
        preserve_existing=preserve_existing,
        separate=separate,
        add_structure_name=add_structure_name,
        ensure_spacing=ensure_spacing,
        structures=structures,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
    )
    config: Config = resolve_config_from_click(
        paths=paths, no_config=no_config, config_paths=config_paths, args=args
    )

    if not config.annotations:
        console.warn("No annotations configured; nothing to do.")
        return

    results: list[FileResult] = api.check(paths, config, apply=apply_changes)
    logger.debug("Checked %d file(s) (apply=%s)", len(results), apply_changes)
    if not results:
        if vlevel >= 0:
            console.print("No files to process.")
        return

    if vlevel >= 0:
        if summary_mode:
            _render_summary(console, results)
        else:
            for result in results:
                _render_result(console, result, vlevel=vlevel)

    if diff:
        for result in results:
            if result.diff:
                patch: str = render_patch(result.diff) if console.enable_color else result.diff
                console.print(patch, nl=False)

    failed: FileResult | None = next(
        (r for r in results if r.status is FileStatus.ERROR), None
    )
    if failed is not None:
        raise _cli_error(failed)

    if apply_changes:
        written: int = sum(1 for r in results if r.status is FileStatus.CHANGED)
        if vlevel >= 0:
            msg: str = (
                f"Applied changes to {written} file(s)." if written else "No changes to apply."
            )
            console.print(console.styled(msg, fg="green", bold=True))
        return

    if any(r.status is FileStatus.WOULD_CHANGE for r in results):
        ctx.exit(ExitCode.WOULD_CHANGE)
