"""Tests for tidylog.tree: nodes, positions and the rewriting visitor."""

from __future__ import annotations

from tidylog.tree.build import (
    block,
    call,
    class_decl,
    compilation_unit,
    field_decl,
    identifier,
    literal,
    method_decl,
    statement,
    try_stmt,
    typed,
)
from tidylog.tree.nodes import Comment, Node, NodeKind, TypeInfo, is_assignable, iter_tree, render_comment
from tidylog.tree.position import Position
from tidylog.tree.visitor import TreeVisitor


class TestTypeInfo:
    """Tests for TypeInfo and is_assignable()."""

    def test_simple_name(self) -> None:
        assert TypeInfo("java.lang.RuntimeException").simple_name == "RuntimeException"
        assert TypeInfo("de.cuioss.tools.logging.LogRecordModel$Builder").simple_name == "Builder"
        assert TypeInfo("int").simple_name == "int"

    def test_assignable(self) -> None:
        info = typed("java.io.IOException", "java.lang.Exception", "java.lang.Throwable")
        assert is_assignable(info, "java.io.IOException")
        assert is_assignable(info, "java.lang.Throwable")
        assert not is_assignable(info, "java.lang.RuntimeException")

    def test_missing_type_never_matches(self) -> None:
        assert not is_assignable(None, "java.lang.Throwable")


class TestNode:
    """Tests for Node helpers."""

    def test_replace_keeps_id(self) -> None:
        node = literal("a")
        changed = node.replace(value="b")
        assert changed.id == node.id
        assert changed.value == "b"
        assert node.value == "a"

    def test_structural_equality_ignores_id(self) -> None:
        assert literal("a") == literal("a")
        assert literal("a") != literal("b")

    def test_child_order(self) -> None:
        receiver = identifier("LOGGER")
        arg = literal("x")
        node = call(receiver, "info", arg)
        assert list(node.child_nodes()) == [receiver, arg]

    def test_labels(self) -> None:
        assert class_decl("Service").label == "Service"
        assert class_decl("Service").kind_label == "class"
        assert method_decl("run").kind_label == "method"
        assert field_decl("LOGGER", "OTHER").label == "LOGGER"
        assert field_decl().label == "field"
        assert call(None, "info").kind_label == "call expr"
        assert literal(1).label == "unknown"

    def test_iter_tree_pre_order(self) -> None:
        tree = compilation_unit(class_decl("A", method_decl("run", statement(literal("x")))))
        kinds = [n.kind for n in iter_tree(tree)]
        assert kinds == [
            NodeKind.COMPILATION_UNIT,
            NodeKind.CLASS_DECL,
            NodeKind.METHOD_DECL,
            NodeKind.STATEMENT,
            NodeKind.LITERAL,
        ]

    def test_render_comment(self) -> None:
        assert render_comment(Comment(" note")) == "// note"
        assert render_comment(Comment(" note ", multiline=True)) == "/* note */"


class TestPosition:
    """Tests for Position."""

    def test_ancestors_nearest_first(self) -> None:
        method = method_decl("run")
        cls = class_decl("A", method)
        root = compilation_unit(cls)
        position = Position(root).child(cls).child(method)
        assert [p.node for p in position.ancestors()] == [cls, root]
        assert position.parent_node is cls
        assert position.depth == 2
        assert Position(root).parent() is None

    def test_find_ancestor_with_boundary(self) -> None:
        inner = statement(literal("x"))
        body = block(inner)
        guarded = try_stmt(body)
        method = method_decl("run", guarded)
        cls = class_decl("A", method)
        position = Position(cls).child(method).child(guarded).child(body).child(inner)

        assert position.find_ancestor({NodeKind.TRY}) is not None
        assert position.find_ancestor({NodeKind.CLASS_DECL}, boundary={NodeKind.METHOD_DECL}) is None
        found = position.find_ancestor({NodeKind.METHOD_DECL}, boundary={NodeKind.METHOD_DECL})
        assert found is not None
        assert found.node is method

    def test_replace_shares_ancestors(self) -> None:
        root = compilation_unit()
        position = Position(root).child(literal("a"))
        swapped = position.replace(literal("b"))
        assert swapped.outer is position.outer
        assert swapped.node.value == "b"


class _Uppercase(TreeVisitor):
    """Uppercase every string literal, never entering method 'skip'."""

    def __init__(self) -> None:
        self.seen: list[NodeKind] = []

    def enter(self, position: Position) -> bool:
        return position.node.name != "skip"

    def visit_literal(self, position: Position) -> Node:
        self.seen.append(position.parent_node.kind if position.parent_node else NodeKind.EMPTY)
        node = position.node
        if isinstance(node.value, str) and not node.value.isupper():
            return node.replace(value=node.value.upper())
        return node


class TestTreeVisitor:
    """Tests for TreeVisitor."""

    def test_rewrites_bottom_up(self) -> None:
        tree = compilation_unit(class_decl("A", method_decl("run", statement(literal("x")))))
        result = _Uppercase().visit(tree)
        assert [n.value for n in iter_tree(result) if n.kind is NodeKind.LITERAL] == ["X"]
        assert result.id == tree.id

    def test_unchanged_tree_is_same_object(self) -> None:
        tree = compilation_unit(class_decl("A", method_decl("run", statement(literal("X")))))
        assert _Uppercase().visit(tree) is tree

    def test_enter_false_skips_subtree(self) -> None:
        tree = compilation_unit(
            class_decl(
                "A",
                method_decl("skip", statement(literal("x"))),
                method_decl("run", statement(literal("y"))),
            )
        )
        visitor = _Uppercase()
        result = visitor.visit(tree)
        assert [n.value for n in iter_tree(result) if n.kind is NodeKind.LITERAL] == ["x", "Y"]
        assert visitor.seen == [NodeKind.STATEMENT]
