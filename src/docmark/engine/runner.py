# topmark:header:start
#
#   project      : DocMark
#   file         : runner.py
#   file_relpath : src/docmark/engine/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scan-and-apply loop over one token stream."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docmark.config.logging import get_logger
from docmark.engine.mutator import apply_docblock
from docmark.engine.scanner import iter_declaration_sites
from docmark.engine.types import FixReport

if TYPE_CHECKING:
    from docmark.config.logging import DocmarkLogger
    from docmark.config.model import Config
    from docmark.tokens.model import TokenStream

logger: DocmarkLogger = get_logger(__name__)


def fix_tokens(stream: TokenStream, config: Config) -> FixReport:
    """Document every structural declaration of ``stream`` in place.

    Without configured annotations the pass is a no-op: the stream is not
    even scanned.

    Args:
        stream (TokenStream): Stream owned by the caller for the duration of the call.
        config (Config): Frozen configuration for this run.

    Returns:
        FixReport: Per-declaration outcomes, in source order.
    """
    report = FixReport()
    if not config.annotations:
        logger.debug("No annotations configured; nothing to do")
        return report

    for site in iter_declaration_sites(stream, config.structure_kinds):
        report.outcomes.append(apply_docblock(stream, site, config))

    summary: str = ", ".join(
        f"{o.site.kind.value} {o.site.name or '?'}: {o.action.value}" for o in report.outcomes
    )
    logger.info("Processed %d declaration(s): %s", len(report.outcomes), summary or "none")
    return report
