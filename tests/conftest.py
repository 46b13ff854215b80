# topmark:header:start
#
#   project      : DocMark
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the DocMark test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs with `docmark.config.model.Config.create` (or
      `MutableConfig` followed by `freeze()`) and pass the frozen `Config`
      to the engine and to the public API.
    - Do **not** mutate a frozen `Config`. If you need to tweak one,
      call `Config.thaw()`, edit the returned `MutableConfig`,
      then `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from docmark.config import logging
from docmark.config.model import Config
from docmark.config.types import Separate
from docmark.tokens.lexer import tokenize

if TYPE_CHECKING:
    from collections.abc import Mapping

    from docmark.tokens.model import TokenStream

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.engine`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_engine: DecoratorType[Any] = as_typed_mark(pytest.mark.engine)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_docmark_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure DocMark's runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise when the developer has exported
    DOCMARK_LOG_LEVEL in their shell.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so engine decisions show up in failure reports.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_config(annotations: Mapping[str, Any] | None = None, **overrides: Any) -> Config:
    """Return a frozen fixer-profile `Config` with exact-output friendly defaults.

    ``ensure_spacing`` is off and ``separate`` is ``none`` unless overridden, so
    the rendered block is glued to the declaration exactly as inserted.

    Args:
        annotations (Mapping[str, Any] | None): Plain annotations.
        **overrides (Any): Keyword arguments forwarded to `Config.create`.

    Returns:
        Config: The frozen configuration.
    """
    options: dict[str, Any] = {
        "separate": Separate.NONE,
        "add_structure_name": False,
        "ensure_spacing": False,
    }
    options.update(overrides)
    return Config.create(dict(annotations or {}), **options)


def lex(code: str) -> TokenStream:
    """Tokenize a snippet without a ``<?php`` open tag."""
    return tokenize(code, start_in_code=True)
