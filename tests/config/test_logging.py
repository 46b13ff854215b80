# topmark:header:start
#
#   project      : DocMark
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TRACE-aware logger (`docmark.config.logging`)."""

from __future__ import annotations

import importlib

import pytest

from docmark.config.logging import TRACE_LEVEL, DocmarkLogger, resolve_env_log_level
from docmark.tokens.lexer import tokenize

pytestmark: pytest.MarkDecorator = pytest.mark.config


@pytest.mark.parametrize(
    "module_name",
    [
        "docmark.api",
        "docmark.cli.main",
        "docmark.cli.commands.check",
        "docmark.engine.runner",
        "docmark.tokens.lexer",
    ],
)
def test_module_loggers_support_trace(module_name: str) -> None:
    module_logger = importlib.import_module(module_name).logger

    assert isinstance(module_logger, DocmarkLogger)
    assert module_logger.name == module_name


def test_lexer_traces_at_trace_level(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(TRACE_LEVEL, logger="docmark.tokens.lexer"):
        tokenize("<?php class A {}")

    assert any(record.levelname == "TRACE" for record in caplog.records)


@pytest.mark.parametrize(
    "value, expected",
    [("trace", TRACE_LEVEL), ("DEBUG", 10), ("20", 20), ("bogus", None), ("", None)],
)
def test_env_log_level(monkeypatch: pytest.MonkeyPatch, value: str, expected: int | None) -> None:
    monkeypatch.setenv("DOCMARK_LOG_LEVEL", value)

    assert resolve_env_log_level() == expected
