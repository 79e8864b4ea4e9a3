"""InvalidExceptionUsage: flag catching, throwing and creating generic exception types.

No automatic fix exists; the right specific type depends on the code at hand,
so every finding is a marker.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tidylog.rules.base import Rule
from tidylog.tree.nodes import NodeKind

if TYPE_CHECKING:
    from tidylog.tree.nodes import Node, TypeInfo
    from tidylog.tree.position import Position

RULE_ID = "InvalidExceptionUsage"


def usage_message(action: str, simple_type: str) -> str:
    """``usage_message("Catch", "Exception")`` -> ``"Catch specific not Exception"``"""
    return f"{action} specific not {simple_type}"


class InvalidExceptionUsageRule(Rule):
    rule_id = RULE_ID
    description = "Catch, throw and create specific exception types instead of generic ones."

    def _generic(self, type_info: TypeInfo | None) -> str | None:
        """Simple name of *type_info* when it is one of the generic exception types."""
        if type_info is None or type_info.name not in self.settings.generic_exceptions:
            return None
        return type_info.simple_name

    # -- catch ---------------------------------------------------------------

    def visit_catch_clause(self, position: Position) -> Node:
        clause = position.node
        if self.is_suppressed(position) or self._suppressed_by_try_body(position):
            return clause
        simple = self._generic(clause.type)
        if simple is None:
            return clause
        return self.mark(position, usage_message("Catch", simple))

    def _suppressed_by_try_body(self, position: Position) -> bool:
        """A directive before the closing brace of the try body covers its catch clauses."""
        parent = position.parent_node
        if parent is None or parent.kind is not NodeKind.TRY or not parent.children:
            return False
        body = parent.children[0]
        if body.kind is not NodeKind.BLOCK:
            return False
        if self.engine.has_directive(body.end_comments, position, self.rule_id):
            return True
        if body.children:
            last = body.children[-1]
            return self.engine.has_directive(last.comments, position, self.rule_id)
        return False

    # -- throw / new ---------------------------------------------------------

    def visit_throw_stmt(self, position: Position) -> Node:
        thrown = position.node
        if self.is_suppressed(position):
            return thrown
        expression = thrown.target
        if expression is None or expression.kind is not NodeKind.NEW_INSTANCE_EXPR:
            return thrown
        simple = self._generic(expression.type)
        if simple is None:
            return thrown
        return self.mark(position, usage_message("Throw", simple))

    def visit_new_instance_expr(self, position: Position) -> Node:
        created = position.node
        parent = position.parent_node
        if parent is not None and parent.kind is NodeKind.THROW_STMT:
            return created
        if self.is_suppressed(position):
            return created
        simple = self._generic(created.type)
        if simple is None:
            return created
        return self.mark(position, usage_message("Use", simple))
