# topmark:header:start
#
#   project      : DocMark
#   file         : file_resolver.py
#   file_relpath : src/docmark/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the files DocMark should process.

Positional paths are expanded (directories recursively, globs relative to
the working directory), reduced to regular files, then filtered with the
configured include and exclude patterns. Patterns use ``.gitignore``
semantics through ``pathspec`` and are matched against paths relative to
the base directory (the working directory by default). The result is sorted
for deterministic output.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from docmark.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from docmark.config.logging import DocmarkLogger
    from docmark.config.model import Config

logger: DocmarkLogger = get_logger(__name__)


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX path relative to ``base``, or the absolute path outside it."""
    resolved: Path = path.resolve()
    try:
        return resolved.relative_to(base.resolve()).as_posix()
    except ValueError:
        return resolved.as_posix()


def expand_path(path: Path) -> list[Path]:
    """Expand one positional argument into candidate paths.

    Globs are expanded relative to the working directory, directories
    recursively; a missing path expands to nothing.
    """
    if any(ch in str(path) for ch in "*?["):
        return sorted(Path(".").glob(str(path)))
    if path.is_dir():
        return sorted(path.rglob("*"))
    if path.is_file():
        return [path]
    return []


def resolve_file_list(
    paths: Iterable[Path | str],
    config: Config,
    *,
    base: Path | None = None,
) -> list[Path]:
    """Return the sorted list of files to process.

    Steps:
      1. Expand ``paths`` (the working directory when empty).
      2. Keep regular files only.
      3. Keep files matching any include pattern (when patterns are set).
      4. Drop files matching any exclude pattern.

    Args:
        paths (Iterable[Path | str]): Positional paths from the caller.
        config (Config): Supplies ``include_patterns`` and ``exclude_patterns``.
        base (Path | None): Directory patterns are relative to (default: CWD).

    Returns:
        list[Path]: Deduplicated, sorted files.
    """
    root: Path = base if base is not None else Path.cwd()
    inputs: list[Path] = [Path(p) for p in paths] or [Path(".")]
    logger.debug("Resolving files from %s (base=%s)", inputs, root)

    candidates: set[Path] = set()
    for raw in inputs:
        expanded: list[Path] = expand_path(raw)
        if not expanded:
            logger.warning("No such file, directory or glob match: %s", raw)
        candidates.update(p for p in expanded if p.is_file())

    if config.include_patterns:
        include: PathSpec = PathSpec.from_lines(GitWildMatchPattern, config.include_patterns)
        candidates = {p for p in candidates if include.match_file(_rel_for_match(p, root))}

    if config.exclude_patterns:
        exclude: PathSpec = PathSpec.from_lines(GitWildMatchPattern, config.exclude_patterns)
        candidates = {p for p in candidates if not exclude.match_file(_rel_for_match(p, root))}

    files: list[Path] = sorted(candidates)
    logger.trace("Files to process: %d -- %s", len(files), files)
    return files
