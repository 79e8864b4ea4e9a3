"""Rule base class: a suppression-aware rewriting visitor."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from tidylog.markers import attach_marker, has_marker
from tidylog.suppression.engine import SuppressionEngine
from tidylog.tree.nodes import NodeKind
from tidylog.tree.visitor import TreeVisitor

if TYPE_CHECKING:
    from tidylog.config import Settings
    from tidylog.tree.nodes import Node
    from tidylog.tree.position import Position

logger = logging.getLogger(__name__)

_SKIPPABLE_KINDS: frozenset[NodeKind] = frozenset({NodeKind.CLASS_DECL, NodeKind.METHOD_DECL})


@dataclass(frozen=True)
class Fix:
    """An automatic rewrite applied by a rule."""

    rule_id: str
    description: str
    line: int | None = None


class Rule(TreeVisitor):
    """Base class for all rules.

    Subclasses set :attr:`rule_id` and :attr:`description` and implement
    ``visit_<kind>`` hooks.  Suppressed classes and methods are skipped as a
    whole; hooks call :meth:`is_suppressed` for the node they inspect.
    """

    rule_id: ClassVar[str] = ""
    description: ClassVar[str] = ""

    def __init__(self, settings: Settings, engine: SuppressionEngine | None = None) -> None:
        self.settings = settings
        self.engine = engine if engine is not None else SuppressionEngine(settings.marker)
        self.fixes: list[Fix] = []

    def is_suppressed(self, position: Position) -> bool:
        return self.engine.is_suppressed(position, self.rule_id)

    def enter(self, position: Position) -> bool:
        if position.node.kind in _SKIPPABLE_KINDS:
            return not self.is_suppressed(position)
        return True

    def mark(self, position: Position, message: str) -> Node:
        """Attach a marker to the node at *position* unless an identical one exists."""
        node = position.node
        if has_marker(node, message, position):
            return node
        logger.debug("%s: %s at %s '%s'", self.rule_id, message, node.kind_label, node.label)
        return attach_marker(node, self.rule_id, message)

    def fixed(self, node: Node, description: str) -> None:
        self.fixes.append(Fix(self.rule_id, description, node.line))
