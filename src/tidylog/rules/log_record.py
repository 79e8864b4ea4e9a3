"""LogRecordPattern: canonical structured-record logging calls and level policy.

Rewrites ``LOGGER.info(MSG::format)`` and ``LOGGER.info(MSG.format(a))`` into
``LOGGER.info(MSG)`` / ``LOGGER.info(MSG, a)``, marks levels that use records
the wrong way, and corrects placeholders in record templates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tidylog.calls import placeholders
from tidylog.calls.classifier import as_logging_call, classify, is_record_builder
from tidylog.calls.normalizer import collapse_record_call, record_policy_message
from tidylog.rules.base import Rule

if TYPE_CHECKING:
    from tidylog.tree.nodes import Node
    from tidylog.tree.position import Position

RULE_ID = "LogRecordPattern"


class LogRecordPatternRule(Rule):
    rule_id = RULE_ID
    description = (
        "Use structured log records directly for INFO and above, never for "
        "DEBUG/TRACE; fix record template placeholders."
    )

    def visit_call_expr(self, position: Position) -> Node:
        call = position.node
        if self.is_suppressed(position):
            return call

        if self._is_template_call(call):
            return self._fix_template(call)

        logging_call = as_logging_call(call, self.settings)
        if logging_call is None:
            return call
        classification = classify(logging_call.arguments, self.settings)
        if classification is None:
            return call

        rewritten = collapse_record_call(call, classification)
        if rewritten is not call:
            self.fixed(call, f"{classification.pattern.value} record call collapsed")

        message = record_policy_message(
            logging_call.level, classification, rewritten.args, self.settings
        )
        if message is None:
            return rewritten
        return self.mark(position.replace(rewritten), message)

    # -- templates -----------------------------------------------------------

    def _is_template_call(self, call: Node) -> bool:
        return (
            call.name == self.settings.template_method
            and len(call.args) == 1
            and is_record_builder(call.target, self.settings)
        )

    def _fix_template(self, call: Node) -> Node:
        template = call.args[0]
        text = placeholders.string_value(template)
        if text is None or not placeholders.has_incorrect(text):
            return call
        self.fixed(call, "template placeholders corrected")
        return call.replace(args=(template.replace(value=placeholders.correct(text)),))
