"""Markers: attach "needs manual fix" notes to nodes without duplicating them.

A marker may also already be present in the source as a rendered task
comment ``/*~~(message)~~>*/`` left behind by an earlier run; such comments
count as an existing marker.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tidylog.suppression.directive import DEFAULT_MARKER
from tidylog.tree.nodes import Marker, NodeKind, render_comment

if TYPE_CHECKING:
    from collections.abc import Callable

    from tidylog.tree.nodes import Comment, Node
    from tidylog.tree.position import Position


def task_comment(message: str) -> str:
    """Rendered form of a marker in source text."""
    return f"/*~~({message})~~>*/"


def suppression_hint(rule_id: str, marker: str = DEFAULT_MARKER) -> str:
    """The comment that silences *rule_id* at a node."""
    return f"// {marker} {rule_id}"


def marker_points(node: Node) -> list[tuple[Comment, ...]]:
    """Comment lists that may carry a rendered marker for *node*."""
    points: list[tuple[Comment, ...]] = [node.comments]
    if node.kind is NodeKind.CATCH_CLAUSE:
        points.append(node.body_comments)
    elif node.kind is NodeKind.THROW_STMT and node.target is not None:
        if node.target.kind is NodeKind.NEW_INSTANCE_EXPR:
            points.append(node.target.comments)
    return points


def has_marker(
    node: Node,
    message: str,
    position: Position | None = None,
    render: Callable[[Comment, Position | None], str] = render_comment,
) -> bool:
    """Return True if *node* already carries a marker with *message*."""
    if any(marker.message == message for marker in node.markers):
        return True
    rendered = task_comment(message)
    for comments in marker_points(node):
        for comment in comments:
            if comment.multiline and rendered in render(comment, position):
                return True
    return False


def attach_marker(node: Node, rule_id: str, message: str) -> Node:
    """Return *node* with a new marker, or *node* itself if one with *message* exists."""
    if has_marker(node, message):
        return node
    return node.replace(markers=(*node.markers, Marker(rule_id, message)))
