"""Shared test fixtures for tidylog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tidylog.config import DEFAULT_LOGGER_TYPE, Settings
from tidylog.suppression.engine import SuppressionEngine
from tidylog.tree.build import (
    call,
    class_decl,
    compilation_unit,
    identifier,
    method_decl,
    statement,
    typed,
)
from tidylog.tree.nodes import NodeKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from tidylog.tree.nodes import Comment, Node, TypeInfo

LOGGER_TYPE = typed(DEFAULT_LOGGER_TYPE)
RECORD_TYPE = typed("de.cuioss.tools.logging.LogRecord")
ILLEGAL_STATE = typed(
    "java.lang.IllegalStateException",
    "java.lang.RuntimeException",
    "java.lang.Exception",
    "java.lang.Throwable",
)

_EXPRESSION_KINDS = frozenset({NodeKind.CALL_EXPR, NodeKind.NEW_INSTANCE_EXPR, NodeKind.BINARY_EXPR})


@pytest.fixture()
def settings() -> Settings:
    """Default settings (CuiLogger, LogRecord, java.lang.Throwable)."""
    return Settings()


@pytest.fixture()
def engine(settings: Settings) -> SuppressionEngine:
    return SuppressionEngine(settings.marker)


@pytest.fixture()
def log_call() -> Callable[..., Node]:
    """``log_call("info", *args)`` -> ``LOGGER.info(args...)``."""

    def _log_call(level: str, *args: Node) -> Node:
        return call(identifier("LOGGER", LOGGER_TYPE), level, *args)

    return _log_call


@pytest.fixture()
def record_ref() -> Callable[..., Node]:
    """``record_ref("MSG")`` -> identifier typed as a structured record."""

    def _record_ref(name: str = "MSG", *, prefix: str = "") -> Node:
        return identifier(name, RECORD_TYPE, prefix=prefix)

    return _record_ref


@pytest.fixture()
def exception_ref() -> Callable[..., Node]:
    """``exception_ref("e")`` -> identifier typed as IllegalStateException."""

    def _exception_ref(name: str = "e", *, prefix: str = "", type_info: TypeInfo = ILLEGAL_STATE) -> Node:
        return identifier(name, type_info, prefix=prefix)

    return _exception_ref


@pytest.fixture()
def in_method() -> Callable[..., Node]:
    """Put nodes into ``class Service { void run() { ... } }``; expressions become statements."""

    def _in_method(
        *expressions: Node,
        class_comments: tuple[Comment, ...] = (),
        method_comments: tuple[Comment, ...] = (),
    ) -> Node:
        method = method_decl(
            "run",
            *(statement(expr) if expr.kind in _EXPRESSION_KINDS else expr for expr in expressions),
            comments=method_comments,
        )
        return compilation_unit(class_decl("Service", method, comments=class_comments))

    return _in_method
