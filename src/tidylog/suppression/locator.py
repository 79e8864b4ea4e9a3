"""Attachment locator: where a directive may sit for a given node kind.

Parsers attach a comment written between ``disable`` and an annotated
declaration to the first annotation rather than to the declaration, and a
trailing comment after a class header to the class body.  Both places are
probed in addition to the node's own leading comments.

Same-line trailing comments after other declarations end up wherever the
parser put them; they are not searched for.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tidylog.tree.nodes import NodeKind

if TYPE_CHECKING:
    from tidylog.tree.nodes import Comment, Node


def attachment_points(node: Node) -> list[tuple[Comment, ...]]:
    """Comment lists to probe for a directive on *node*, most specific first."""
    points: list[tuple[Comment, ...]] = [node.comments]
    match node.kind:
        case NodeKind.CLASS_DECL:
            if node.annotations:
                points.append(node.annotations[0].comments)
            points.append(node.body_comments)
        case NodeKind.METHOD_DECL | NodeKind.FIELD_DECL:
            if node.annotations:
                points.append(node.annotations[0].comments)
        case _:
            pass
    return points


def class_attachment_points(node: Node) -> list[tuple[Comment, ...]]:
    """Every place a class-wide directive may sit: own, each annotation, body."""
    return [
        node.comments,
        *(annotation.comments for annotation in node.annotations),
        node.body_comments,
    ]
