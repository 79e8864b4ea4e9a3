"""Scope resolver: decide whether an enclosing node suppresses a position.

Two escalations run for every query and either one suppresses:

1. A kind-specific short-range walk described by :data:`SCOPE_RULES`.
   Checkpoint ancestors found on the walk are asked the full suppression
   question recursively.
2. A class-wide walk from the node itself up to the root: a directive on
   any enclosing class (own comments, any annotation, body prefix)
   suppresses every descendant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tidylog.suppression.locator import class_attachment_points
from tidylog.tree.nodes import NodeKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from tidylog.tree.nodes import Comment
    from tidylog.tree.position import Position

    SuppressedFn = Callable[[Position, "str | None"], bool]
    DirectiveFn = Callable[[tuple[Comment, ...], Position, "str | None"], bool]


@dataclass(frozen=True)
class ScopeRule:
    """How far up the tree a node kind looks for an enclosing suppression.

    *checkpoints* are the ancestor kinds that are asked.  With
    *first_match_only* only the nearest checkpoint ancestor is asked;
    otherwise every checkpoint ancestor is asked until the walk passes an
    ancestor whose kind is in *boundary*.  The rule does not apply at all when
    the direct parent's kind is in *skip_under*.
    """

    checkpoints: frozenset[NodeKind]
    boundary: frozenset[NodeKind] = frozenset()
    first_match_only: bool = False
    skip_under: frozenset[NodeKind] = frozenset()


_WITHIN_METHOD = ScopeRule(
    checkpoints=frozenset({NodeKind.TRY, NodeKind.METHOD_DECL}),
    boundary=frozenset({NodeKind.METHOD_DECL}),
)

SCOPE_RULES: dict[NodeKind, ScopeRule] = {
    NodeKind.CATCH_CLAUSE: _WITHIN_METHOD,
    NodeKind.THROW_STMT: _WITHIN_METHOD,
    NodeKind.NEW_INSTANCE_EXPR: ScopeRule(
        checkpoints=frozenset({NodeKind.FIELD_DECL, NodeKind.METHOD_DECL}),
        first_match_only=True,
        skip_under=frozenset({NodeKind.THROW_STMT}),
    ),
    NodeKind.CALL_EXPR: ScopeRule(
        checkpoints=frozenset({NodeKind.METHOD_DECL, NodeKind.CLASS_DECL}),
        first_match_only=True,
    ),
}


class ScopeResolver:
    """Evaluate both escalation rules for a position.

    *is_suppressed* answers the full question for an ancestor (direct
    attachment points plus this resolver); *has_directive* tells whether a
    comment list carries a directive matching a rule id.
    """

    def __init__(self, is_suppressed: SuppressedFn, has_directive: DirectiveFn) -> None:
        self._is_suppressed = is_suppressed
        self._has_directive = has_directive

    def resolve(self, position: Position, rule_id: str | None) -> bool:
        if self.escalates(position, rule_id):
            return True
        return self.class_suppresses(position, rule_id)

    def escalates(self, position: Position, rule_id: str | None) -> bool:
        """Kind-specific short-range escalation."""
        rule = SCOPE_RULES.get(position.node.kind)
        if rule is None:
            return False

        parent = position.parent_node
        if parent is not None and parent.kind in rule.skip_under:
            return False

        if rule.first_match_only:
            checkpoint = position.find_ancestor(rule.checkpoints)
            return checkpoint is not None and self._is_suppressed(checkpoint, rule_id)

        for ancestor in position.ancestors():
            kind = ancestor.node.kind
            if kind in rule.checkpoints and self._is_suppressed(ancestor, rule_id):
                return True
            if kind in rule.boundary:
                return False
        return False

    def class_suppresses(self, position: Position, rule_id: str | None) -> bool:
        """Class-wide escalation, walking from *position* itself to the root."""
        for current in position.path():
            node = current.node
            if node.kind is not NodeKind.CLASS_DECL:
                continue
            for comments in class_attachment_points(node):
                if self._has_directive(comments, position, rule_id):
                    return True
        return False
