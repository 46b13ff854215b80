# topmark:header:start
#
#   project      : DocMark
#   file         : config_resolver.py
#   file_relpath : src/docmark/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the DocMark configuration from Click parameters.

Bridges CLI parsing and the configuration layer: layers are merged by
`docmark.config.model.MutableConfig.load_merged`, CLI overrides are applied
last, and core exceptions are translated into CLI errors with dedicated exit
codes.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from docmark.cli.errors import (
    DocmarkConfigError,
    DocmarkEncodingError,
    DocmarkFileNotFoundError,
    DocmarkIOError,
)
from docmark.config.logging import get_logger
from docmark.config.model import MutableConfig
from docmark.errors import (
    ConfigError,
    InvalidTagError,
    ManifestDecodeError,
    ManifestNotFoundError,
    ManifestReadError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from docmark.cli.cli_types import ArgsNamespace
    from docmark.config.logging import DocmarkLogger
    from docmark.config.model import Config

logger: DocmarkLogger = get_logger(__name__)


@contextmanager
def translate_core_errors() -> Iterator[None]:
    """Re-raise core DocMark exceptions as CLI errors with matching exit codes."""
    try:
        yield
    except InvalidTagError as exc:
        raise DocmarkConfigError(str(exc)) from exc
    except ConfigError as exc:
        raise DocmarkConfigError(str(exc)) from exc
    except ManifestNotFoundError as exc:
        raise DocmarkFileNotFoundError(str(exc)) from exc
    except ManifestReadError as exc:
        raise DocmarkIOError(str(exc)) from exc
    except ManifestDecodeError as exc:
        raise DocmarkEncodingError(str(exc)) from exc


def resolve_config_from_click(
    *,
    paths: Sequence[str],
    no_config: bool,
    config_paths: Sequence[str],
    args: ArgsNamespace,
) -> Config:
    """Build the frozen `Config` for a CLI invocation.

    Resolution order (lowest to highest precedence): bundled defaults,
    discovered project files (unless ``no_config``), explicit ``--config``
    files, then ``args``. Discovery is anchored at the first path.

    Raises:
        DocmarkFileNotFoundError: If a ``--config`` file or the manifest is missing.
        DocmarkConfigError: If a layer or override holds an invalid value.
    """
    for entry in config_paths:
        if not Path(entry).is_file():
            raise DocmarkFileNotFoundError(f"Config file not found: {entry}")

    anchor: Path = Path(paths[0]) if paths else Path.cwd()
    logger.debug("Config discovery anchor: %s", anchor)

    with translate_core_errors():
        draft: MutableConfig = MutableConfig.load_merged(
            input_paths=[anchor],
            extra_config_files=[Path(p) for p in config_paths],
            no_config=no_config,
        )
        draft.apply_cli_args(args)
        config: Config = draft.freeze()

    logger.trace("Resolved config: %s", config)
    return config
