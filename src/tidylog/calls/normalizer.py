"""Call normalizer: canonical rewrites and level policy for classified logging calls."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tidylog.calls.classifier import LogLevel, is_exception
from tidylog.tree.nodes import NodeKind, is_assignable

if TYPE_CHECKING:
    from tidylog.calls.classifier import Classification
    from tidylog.config import Settings
    from tidylog.tree.nodes import Node

RECORD_REQUIRED_LEVELS: frozenset[LogLevel] = frozenset(
    {LogLevel.INFO, LogLevel.WARN, LogLevel.ERROR, LogLevel.FATAL}
)
RECORD_FORBIDDEN_LEVELS: frozenset[LogLevel] = frozenset({LogLevel.DEBUG, LogLevel.TRACE})
EXCEPTION_FIRST_LEVELS: frozenset[LogLevel] = frozenset({LogLevel.ERROR, LogLevel.WARN})

CONCATENATION_MESSAGE = "string concatenation with structured record is always wrong"


def needs_record_message(level: LogLevel) -> str:
    return f"{level.name} needs structured record"


def forbids_record_message(level: LogLevel) -> str:
    return f"{level.name} forbids structured record"


# ---------------------------------------------------------------------------
# Rewrites
# ---------------------------------------------------------------------------


def collapse_record_call(call: Node, classification: Classification) -> Node:
    """Rewrite a METHOD_REF / INVOKE classified call into the canonical shape.

    ``info(MSG::format)`` -> ``info(MSG)`` and ``info(MSG.format(a, b))`` ->
    ``info(MSG, a, b)``.  The record keeps the prefix of the argument it
    replaces; the first spliced argument gets a single leading space.
    Already canonical calls are returned unchanged.
    """
    if not classification.needs_rewrite or classification.record is None:
        return call

    index = classification.record_index
    replaced = call.args[index]
    record = classification.record.replace(prefix=replaced.prefix)

    spliced = list(classification.format_args)
    if spliced:
        spliced[0] = spliced[0].replace(prefix=" ")

    args = (*call.args[:index], record, *spliced, *call.args[index + 1 :])
    return call.replace(args=args)


def exception_index(args: tuple[Node, ...], settings: Settings) -> int:
    """Index of the first exception-typed argument, -1 when there is none."""
    for idx, arg in enumerate(args):
        if is_exception(arg, settings):
            return idx
    return -1


def move_exception_first(call: Node, level: LogLevel | None, settings: Settings) -> Node:
    """For ERROR / WARN calls, move the first exception argument to index 0.

    The moved argument loses its leading whitespace; every other argument
    gets a single space unless it already starts with one.
    """
    if level not in EXCEPTION_FIRST_LEVELS or len(call.args) <= 1:
        return call
    index = exception_index(call.args, settings)
    if index <= 0:
        return call

    exception = call.args[index]
    if exception.prefix.startswith(" "):
        exception = exception.replace(prefix="")

    rest = [
        arg if arg.prefix.startswith(" ") else arg.replace(prefix=" ")
        for idx, arg in enumerate(call.args)
        if idx != index
    ]
    return call.replace(args=(exception, *rest))


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------


def level_policy_violation(level: LogLevel | None, classification: Classification) -> str | None:
    """Marker message when the record usage does not fit *level*; None otherwise."""
    if level in RECORD_REQUIRED_LEVELS and not classification.has_record:
        return needs_record_message(level)
    if level in RECORD_FORBIDDEN_LEVELS and classification.has_record:
        return forbids_record_message(level)
    return None


def is_string_concatenation(expr: Node, settings: Settings) -> bool:
    """``+`` with a string-typed operand, looking through nested binaries."""
    if expr.kind is not NodeKind.BINARY_EXPR:
        return False
    if expr.operator == "+" and any(
        is_assignable(operand.type, settings.string_type) for operand in expr.args
    ):
        return True
    return any(is_string_concatenation(operand, settings) for operand in expr.args)


def has_string_concatenation(args: tuple[Node, ...], settings: Settings) -> bool:
    return any(is_string_concatenation(arg, settings) for arg in args)


def record_policy_message(
    level: LogLevel | None,
    classification: Classification,
    args: tuple[Node, ...],
    settings: Settings,
) -> str | None:
    """Concatenation after a record wins over the level policy message."""
    if classification.has_record and has_string_concatenation(
        args[classification.record_index + 1 :], settings
    ):
        return CONCATENATION_MESSAGE
    return level_policy_violation(level, classification)
