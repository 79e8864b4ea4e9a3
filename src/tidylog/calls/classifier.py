"""Pattern classifier for logging calls.

Recognized argument shapes (``MSG`` is a structured record)::

    LOGGER.info(MSG::format)            METHOD_REF
    LOGGER.info(MSG.format(a, b))       INVOKE
    LOGGER.warn(e, MSG.format(a))       INVOKE, exception first
    LOGGER.info(MSG, a, b)              DIRECT (canonical)
    LOGGER.info("text %s", a)           NO_RECORD
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tidylog.tree.nodes import NodeKind, is_assignable, is_assignable_to_any

if TYPE_CHECKING:
    from tidylog.config import Settings
    from tidylog.tree.nodes import Node


class LogLevel(enum.Enum):
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"

    @classmethod
    def from_method_name(cls, method_name: str | None) -> LogLevel | None:
        """``"info"`` -> ``LogLevel.INFO``; unknown names -> None."""
        if not method_name:
            return None
        try:
            return cls(method_name.lower())
        except ValueError:
            return None


class RecordPattern(enum.Enum):
    METHOD_REF = "method_ref"
    INVOKE = "invoke"
    DIRECT = "direct"
    NO_RECORD = "no_record"


@dataclass(frozen=True)
class LoggingCall:
    """Transient view of a call on a logger receiver."""

    level_name: str
    arguments: tuple[Node, ...]
    has_leading_exception: bool

    @property
    def level(self) -> LogLevel | None:
        return LogLevel.from_method_name(self.level_name)


@dataclass(frozen=True)
class Classification:
    pattern: RecordPattern
    record_index: int
    has_exception: bool = False
    record: Node | None = None
    format_args: tuple[Node, ...] = ()

    @property
    def has_record(self) -> bool:
        return self.pattern is not RecordPattern.NO_RECORD

    @property
    def needs_rewrite(self) -> bool:
        return self.pattern in (RecordPattern.METHOD_REF, RecordPattern.INVOKE)


# ---------------------------------------------------------------------------
# Type predicates
# ---------------------------------------------------------------------------


def is_exception(expr: Node, settings: Settings) -> bool:
    return is_assignable(expr.type, settings.exception_type)


def is_record_ref(expr: Node | None, settings: Settings) -> bool:
    """Identifier or member access statically typed as a structured record."""
    if expr is None or expr.kind not in (NodeKind.IDENTIFIER, NodeKind.MEMBER_ACCESS):
        return False
    return is_assignable_to_any(expr.type, settings.record_types)


def is_record_builder(expr: Node | None, settings: Settings) -> bool:
    return expr is not None and is_assignable_to_any(expr.type, settings.record_builder_types)


def is_logger_call(call: Node, settings: Settings) -> bool:
    """A call whose receiver is statically typed as the logger type."""
    if call.kind is not NodeKind.CALL_EXPR or call.target is None:
        return False
    return is_assignable(call.target.type, settings.logger_type)


def as_logging_call(call: Node, settings: Settings) -> LoggingCall | None:
    """View *call* as a logging call; None for other calls and unknown level names."""
    if not is_logger_call(call, settings) or LogLevel.from_method_name(call.name) is None:
        return None
    assert call.name is not None
    leading = bool(call.args) and is_exception(call.args[0], settings)
    return LoggingCall(level_name=call.name, arguments=call.args, has_leading_exception=leading)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _format_pattern(arg: Node, index: int, has_exception: bool, settings: Settings) -> Classification | None:
    """Rules (a) and (b): format method reference or invocation on a record."""
    if arg.name != settings.format_method or not is_record_ref(arg.target, settings):
        return None
    if arg.kind is NodeKind.METHOD_REF:
        return Classification(
            pattern=RecordPattern.METHOD_REF,
            record_index=index,
            has_exception=has_exception,
            record=arg.target,
        )
    if arg.kind is NodeKind.CALL_EXPR:
        return Classification(
            pattern=RecordPattern.INVOKE,
            record_index=index,
            has_exception=has_exception,
            record=arg.target,
            format_args=tuple(a for a in arg.args if a.kind is not NodeKind.EMPTY),
        )
    return None


def classify(args: tuple[Node, ...], settings: Settings) -> Classification | None:
    """Classify the argument list of a logging call; None when there are no arguments.

    The exception-first check runs before the bare-record check so that
    ``error(e, RECORD)`` is seen as a record at index 1.
    """
    if not args:
        return None

    found = _format_pattern(args[0], 0, False, settings)
    if found is not None:
        return found

    has_exception = is_exception(args[0], settings) and len(args) > 1
    if has_exception:
        found = _format_pattern(args[1], 1, True, settings)
        if found is not None:
            return found

    record_index = 1 if has_exception else 0
    if is_record_ref(args[record_index], settings):
        return Classification(
            pattern=RecordPattern.DIRECT,
            record_index=record_index,
            has_exception=has_exception,
            record=args[record_index],
        )
    return Classification(
        pattern=RecordPattern.NO_RECORD,
        record_index=record_index,
        has_exception=has_exception,
    )
