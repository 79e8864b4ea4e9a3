"""Tests for tidylog.markers: marker idempotence."""

from __future__ import annotations

from tidylog.markers import attach_marker, has_marker, marker_points, suppression_hint, task_comment
from tidylog.tree.build import catch_clause, literal, new_instance, throw_stmt, typed
from tidylog.tree.nodes import Comment, Marker

RUNTIME = typed("java.lang.RuntimeException")


def _task(message: str) -> Comment:
    return Comment(f"~~({message})~~>", multiline=True)


class TestMarkers:
    """Tests for has_marker() and attach_marker()."""

    def test_attach_once(self) -> None:
        node = attach_marker(literal("x"), "Rule", "fix me")
        again = attach_marker(node, "Rule", "fix me")
        assert again is node
        assert node.markers == (Marker("Rule", "fix me"),)

    def test_different_messages_accumulate(self) -> None:
        node = attach_marker(attach_marker(literal("x"), "A", "one"), "B", "two")
        assert [m.message for m in node.markers] == ["one", "two"]

    def test_rendered_task_comment(self) -> None:
        node = literal("x").replace(comments=(_task("fix me"),))
        assert has_marker(node, "fix me")
        assert not has_marker(node, "other")

    def test_line_comment_is_not_a_marker(self) -> None:
        node = literal("x").replace(comments=(Comment("~~(fix me)~~>"),))
        assert not has_marker(node, "fix me")

    def test_catch_body_comments(self) -> None:
        clause = catch_clause(RUNTIME, body_comments=(_task("Catch specific not Exception"),))
        assert has_marker(clause, "Catch specific not Exception")
        assert len(marker_points(clause)) == 2

    def test_thrown_instance_comments(self) -> None:
        thrown = throw_stmt(new_instance(RUNTIME, comments=(_task("Throw specific not X"),)))
        assert has_marker(thrown, "Throw specific not X")

    def test_task_comment_and_hint(self) -> None:
        assert task_comment("m") == "/*~~(m)~~>*/"
        assert suppression_hint("LoggerStandards") == "// tidylog:disable LoggerStandards"
        assert suppression_hint("Foo", "acme:off") == "// acme:off Foo"
