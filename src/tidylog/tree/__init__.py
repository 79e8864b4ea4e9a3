"""Tree domain: node model, positions, traversal, YAML tree documents."""

from tidylog.tree.loader import (
    TreeDocument,
    TreeFormatError,
    dump_tree,
    dump_tree_document,
    load_tree_document,
    parse_node,
    parse_tree_document,
    resolve_type,
)
from tidylog.tree.nodes import (
    Annotation,
    Comment,
    Marker,
    Node,
    NodeKind,
    TypeInfo,
    is_assignable,
    iter_tree,
    render_comment,
)
from tidylog.tree.position import Position
from tidylog.tree.visitor import TreeVisitor

__all__ = [
    "Annotation",
    "Comment",
    "Marker",
    "Node",
    "NodeKind",
    "Position",
    "TreeDocument",
    "TreeFormatError",
    "TreeVisitor",
    "TypeInfo",
    "dump_tree",
    "dump_tree_document",
    "is_assignable",
    "iter_tree",
    "load_tree_document",
    "parse_node",
    "parse_tree_document",
    "render_comment",
    "resolve_type",
]
