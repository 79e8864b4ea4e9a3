"""Immutable ancestor path from the tree root to a node."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from tidylog.tree.nodes import Node, NodeKind


@dataclass(frozen=True, eq=False)
class Position:
    """A node together with the chain of positions above it.

    Positions are persistent: :meth:`child` and :meth:`replace` return new
    positions that share the ancestor chain with this one.
    """

    node: Node
    outer: Position | None = None

    def parent(self) -> Position | None:
        return self.outer

    @property
    def parent_node(self) -> Node | None:
        return self.outer.node if self.outer is not None else None

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.ancestors())

    def child(self, node: Node) -> Position:
        return Position(node, self)

    def replace(self, node: Node) -> Position:
        """Same place in the tree, different node value."""
        return Position(node, self.outer)

    def ancestors(self) -> Iterator[Position]:
        """Yield enclosing positions, nearest first, excluding this one."""
        current = self.outer
        while current is not None:
            yield current
            current = current.outer

    def path(self) -> Iterator[Position]:
        """Yield this position followed by all ancestors."""
        yield self
        yield from self.ancestors()

    def find_ancestor(
        self,
        kinds: Iterable[NodeKind],
        *,
        boundary: Iterable[NodeKind] = (),
    ) -> Position | None:
        """Return the nearest ancestor whose kind is in *kinds*.

        The search gives up at the first ancestor whose kind is in *boundary*
        (after testing it against *kinds*), so a boundary kind listed in both
        sets is still found.
        """
        wanted = frozenset(kinds)
        stop = frozenset(boundary)
        for ancestor in self.ancestors():
            if ancestor.node.kind in wanted:
                return ancestor
            if ancestor.node.kind in stop:
                return None
        return None
