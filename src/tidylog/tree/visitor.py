"""Depth-first rewriting traversal.

A visit returns a replacement node instead of mutating the tree: children are
visited first, the node is rebuilt from the new children when any of them
changed, and finally the ``visit_<kind>`` hook of the visitor (if defined)
gets the rebuilt node at its position.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tidylog.tree.position import Position

if TYPE_CHECKING:
    from tidylog.tree.nodes import Node


class TreeVisitor:
    """Base class for rewriting visitors.

    Subclasses implement hooks named after :class:`~tidylog.tree.nodes.NodeKind`
    values, for example ``visit_call_expr(self, position) -> Node``.
    """

    def visit(self, node: Node, parent: Position | None = None) -> Node:
        position = Position(node, parent)
        if not self.enter(position):
            return node
        rebuilt = self._visit_children(position)
        hook = getattr(self, f"visit_{rebuilt.kind.value}", None)
        if hook is None:
            return rebuilt
        result: Node = hook(position.replace(rebuilt))
        return result

    def enter(self, position: Position) -> bool:
        """Return False to leave the node and its whole subtree untouched."""
        return True

    def _visit_children(self, position: Position) -> Node:
        node = position.node
        changes: dict[str, object] = {}

        if node.target is not None:
            target = self.visit(node.target, position)
            if target is not node.target:
                changes["target"] = target

        args = self._visit_all(node.args, position)
        if args is not None:
            changes["args"] = args

        children = self._visit_all(node.children, position)
        if children is not None:
            changes["children"] = children

        return node.replace(**changes) if changes else node

    def _visit_all(self, nodes: tuple[Node, ...], position: Position) -> tuple[Node, ...] | None:
        """Visit *nodes*; None when every node came back unchanged."""
        visited = tuple(self.visit(n, position) for n in nodes)
        if all(new is old for new, old in zip(visited, nodes)):
            return None
        return visited
