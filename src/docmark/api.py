# topmark:header:start
#
#   project      : DocMark
#   file         : api.py
#   file_relpath : src/docmark/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public DocMark API (stable surface).

A small, typed API for running DocMark programmatically without the CLI:

```python
from docmark import api
from docmark.config.model import Config

config = Config.create({"author": "Jane Doe", "license": "MIT"})
result = api.fix_source("<?php\\nclass Foo {}\\n", config)
print(result.updated)
```

Functions accept a frozen `Config`, a plain mapping shaped like the TOML
configuration (merged over the bundled defaults), or None to discover the
configuration the same way the CLI does.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from docmark.config.logging import get_logger
from docmark.config.model import Config, MutableConfig
from docmark.engine.runner import fix_tokens
from docmark.engine.types import FixReport
from docmark.file_resolver import resolve_file_list
from docmark.tokens.lexer import tokenize
from docmark.tokens.model import TokenStream
from docmark.utils.diff import unified_patch

if TYPE_CHECKING:
    from docmark.config.logging import DocmarkLogger

logger: DocmarkLogger = get_logger(__name__)

ConfigLike = Config | Mapping[str, Any] | None

__all__: list[str] = [
    "FileResult",
    "FileStatus",
    "FixResult",
    "check",
    "fix_file",
    "fix_source",
    "resolve_config",
]


@dataclass(frozen=True)
class FixResult:
    """Result of fixing one source text.

    Attributes:
        original (str): The input text.
        updated (str): The text after the fix.
        report (FixReport): Per-declaration outcomes.
    """

    original: str
    updated: str
    report: FixReport

    @property
    def changed(self) -> bool:
        """True when the fix altered the text."""
        return self.updated != self.original


class FileStatus(Enum):
    """Per-file status reported by `fix_file` and `check`."""

    UNCHANGED = "unchanged"
    WOULD_CHANGE = "would change"
    CHANGED = "changed"
    ERROR = "error"


@dataclass
class FileResult:
    """Result for one file.

    Attributes:
        path (Path): The processed file.
        status (FileStatus): What happened (or would happen) to the file.
        result (FixResult | None): The fix result; None when the file could not be read.
        diff (str): Unified diff of the change; empty when unchanged.
        error (str | None): Short reason for `FileStatus.ERROR`.
        exception (Exception | None): The exception behind `FileStatus.ERROR`.
    """

    path: Path
    status: FileStatus
    result: FixResult | None = None
    diff: str = ""
    error: str | None = field(default=None)
    exception: Exception | None = field(default=None, repr=False, compare=False)


def resolve_config(config: ConfigLike = None, *, anchor: Path | None = None) -> Config:
    """Return a frozen `Config` from any accepted configuration shape.

    Args:
        config (ConfigLike): A `Config` (returned as is), a TOML-shaped mapping
            layered over the bundled defaults, or None for project discovery.
        anchor (Path | None): Discovery anchor used when ``config`` is None.

    Returns:
        Config: The frozen configuration.
    """
    if isinstance(config, Config):
        return config
    if config is None:
        draft: MutableConfig = MutableConfig.load_merged(
            input_paths=[anchor] if anchor is not None else None
        )
    else:
        draft = MutableConfig.from_defaults().merge_with(MutableConfig.from_toml_dict(dict(config)))
    return draft.freeze()


def fix_source(text: str, config: ConfigLike, *, start_in_code: bool = False) -> FixResult:
    """Fix the doc blocks of one source text.

    Args:
        text (str): Source text (normally starting with ``<?php``).
        config (ConfigLike): Configuration, see `resolve_config`.
        start_in_code (bool): Treat ``text`` as code even without an open tag.

    Returns:
        FixResult: Original and updated text plus the per-declaration report.
    """
    cfg: Config = resolve_config(config)
    stream: TokenStream = tokenize(text, start_in_code=start_in_code)
    report: FixReport = fix_tokens(stream, cfg)
    return FixResult(original=text, updated=stream.render(), report=report)


def fix_file(path: Path | str, config: ConfigLike, *, apply: bool = False) -> FileResult:
    """Fix one file, writing it back only when ``apply`` is set.

    Line endings are preserved: the file is read and written without newline
    translation.

    Args:
        path (Path | str): File to process.
        config (ConfigLike): Configuration, see `resolve_config`.
        apply (bool): Write the updated content back to ``path``.

    Returns:
        FileResult: The outcome for ``path``.

    Raises:
        OSError: If the file cannot be read or written.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    path = Path(path)
    cfg: Config = resolve_config(config, anchor=path)
    with path.open("r", encoding="utf-8", newline="") as f:
        text: str = f.read()

    result: FixResult = fix_source(text, cfg)
    if not result.changed:
        logger.debug("Unchanged: %s", path)
        return FileResult(path=path, status=FileStatus.UNCHANGED, result=result)

    diff: str = unified_patch(result.original, result.updated, str(path))
    if not apply:
        logger.info("Would change: %s", path)
        return FileResult(path=path, status=FileStatus.WOULD_CHANGE, result=result, diff=diff)

    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(result.updated)
    logger.info("Changed: %s", path)
    return FileResult(path=path, status=FileStatus.CHANGED, result=result, diff=diff)


def check(
    paths: Iterable[Path | str],
    config: ConfigLike = None,
    *,
    apply: bool = False,
) -> list[FileResult]:
    """Process every file selected by ``paths`` and the configured patterns.

    Files that cannot be read or decoded are reported with
    `FileStatus.ERROR`; processing continues with the next file.

    Args:
        paths (Iterable[Path | str]): Files, directories or globs.
        config (ConfigLike): Configuration, see `resolve_config`.
        apply (bool): Write changes back to disk.

    Returns:
        list[FileResult]: One result per selected file, sorted by path.
    """
    inputs: list[Path] = [Path(p) for p in paths]
    cfg: Config = resolve_config(config, anchor=inputs[0] if inputs else None)

    results: list[FileResult] = []
    for file_path in resolve_file_list(inputs, cfg):
        reason: str
        error: Exception
        try:
            results.append(fix_file(file_path, cfg, apply=apply))
            continue
        except UnicodeDecodeError as exc:
            logger.error("Cannot decode %s as UTF-8: %s", file_path, exc)
            reason, error = "not valid UTF-8", exc
        except PermissionError as exc:
            logger.error("Permission denied for %s: %s", file_path, exc)
            reason, error = "permission denied", exc
        except OSError as exc:
            logger.error("I/O error for %s: %s", file_path, exc)
            reason, error = str(exc.strerror or exc), exc
        results.append(
            FileResult(path=file_path, status=FileStatus.ERROR, error=reason, exception=error)
        )
    return results
