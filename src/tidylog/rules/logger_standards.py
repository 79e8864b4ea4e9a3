"""LoggerStandards: placeholder hygiene, parameter counts, exception position, print streams."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tidylog.calls import placeholders
from tidylog.calls.classifier import as_logging_call, is_exception
from tidylog.calls.normalizer import move_exception_first
from tidylog.rules.base import Rule
from tidylog.tree.nodes import NodeKind

if TYPE_CHECKING:
    from tidylog.calls.classifier import LoggingCall
    from tidylog.tree.nodes import Node
    from tidylog.tree.position import Position

RULE_ID = "LoggerStandards"

SYSTEM_STREAMS: frozenset[str] = frozenset({"out", "err"})
PRINT_METHODS: frozenset[str] = frozenset({"print", "println", "printf", "format"})


def system_stream(call: Node) -> str | None:
    """``System.out.println(...)`` -> ``"out"``; None for anything else."""
    receiver = call.target
    if call.name not in PRINT_METHODS or receiver is None:
        return None
    if receiver.kind is not NodeKind.MEMBER_ACCESS or receiver.name not in SYSTEM_STREAMS:
        return None
    qualifier = receiver.target
    if qualifier is None or qualifier.kind is not NodeKind.IDENTIFIER or qualifier.name != "System":
        return None
    return receiver.name


def parameter_count_message(placeholder_count: int, param_count: int) -> str:
    return f"{placeholder_count} placeholders, {param_count} params"


class LoggerStandardsRule(Rule):
    rule_id = RULE_ID
    description = (
        "Use %s placeholders matching the parameters, pass exceptions first "
        "to error/warn and log instead of printing to System.out/err."
    )

    def visit_call_expr(self, position: Position) -> Node:
        call = position.node
        if self.is_suppressed(position):
            return call

        stream = system_stream(call)
        if stream is not None:
            return self.mark(position, f"Use logger instead of System.{stream}")

        logging_call = as_logging_call(call, self.settings)
        if logging_call is None or not logging_call.arguments:
            return call

        message_index = 1 if logging_call.has_leading_exception else 0
        if message_index >= len(call.args):
            return call

        call = self._correct_placeholders(call, message_index)
        mismatch = self._parameter_mismatch(call, message_index)
        if mismatch is not None:
            return self.mark(position.replace(call), mismatch)
        return self._exception_first(call, logging_call)

    def _correct_placeholders(self, call: Node, message_index: int) -> Node:
        message = call.args[message_index]
        text = placeholders.string_value(message)
        if text is None or not placeholders.has_incorrect(text):
            return call
        self.fixed(call, "message placeholders corrected")
        args = list(call.args)
        args[message_index] = message.replace(value=placeholders.correct(text))
        return call.replace(args=tuple(args))

    def _parameter_mismatch(self, call: Node, message_index: int) -> str | None:
        text = placeholders.string_value(call.args[message_index])
        if text is None:
            return None
        expected = placeholders.count(text)
        actual = placeholders.substitution_count(
            call.args, message_index, lambda arg: is_exception(arg, self.settings)
        )
        if expected == actual:
            return None
        return parameter_count_message(expected, actual)

    def _exception_first(self, call: Node, logging_call: LoggingCall) -> Node:
        moved = move_exception_first(call, logging_call.level, self.settings)
        if moved is not call:
            self.fixed(call, "exception moved to first argument")
        return moved
