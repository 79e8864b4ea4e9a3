"""Typed tree model: node kinds, resolved types, comments, annotations and markers."""

from __future__ import annotations

import dataclasses
import enum
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tidylog.tree.position import Position


class NodeKind(enum.Enum):
    """Closed set of node kinds understood by the rewrite core."""

    COMPILATION_UNIT = "compilation_unit"
    CLASS_DECL = "class_decl"
    METHOD_DECL = "method_decl"
    FIELD_DECL = "field_decl"
    BLOCK = "block"
    TRY = "try"
    CATCH_CLAUSE = "catch_clause"
    THROW_STMT = "throw_stmt"
    STATEMENT = "statement"
    NEW_INSTANCE_EXPR = "new_instance_expr"
    CALL_EXPR = "call_expr"
    BINARY_EXPR = "binary_expr"
    LITERAL = "literal"
    IDENTIFIER = "identifier"
    MEMBER_ACCESS = "member_access"
    METHOD_REF = "method_ref"
    EMPTY = "empty"


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypeInfo:
    """Resolved static type with its (already flattened) supertypes."""

    name: str
    supertypes: tuple[str, ...] = ()

    @property
    def simple_name(self) -> str:
        """Rightmost component of the type name (``$`` and ``.`` delimited)."""
        return self.name.replace("$", ".").rsplit(".", 1)[-1]

    def is_assignable_to(self, type_name: str) -> bool:
        """Return True if a value of this type can be used where *type_name* is expected."""
        return type_name == self.name or type_name in self.supertypes


def is_assignable(type_info: TypeInfo | None, type_name: str) -> bool:
    """Type-less expressions never match."""
    return type_info is not None and type_info.is_assignable_to(type_name)


def is_assignable_to_any(type_info: TypeInfo | None, type_names: tuple[str, ...]) -> bool:
    return any(is_assignable(type_info, name) for name in type_names)


# ---------------------------------------------------------------------------
# Comments, annotations, markers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Comment:
    """A single source comment; *text* excludes the ``//`` or ``/* */`` delimiters."""

    text: str
    multiline: bool = False


def render_comment(comment: Comment, position: Position | None = None) -> str:
    """Render a comment back to its source form.

    *position* is accepted so that renderers which rebuild whitespace from the
    surrounding tree can be plugged in; the default rendering ignores it.
    """
    if comment.multiline:
        return f"/*{comment.text}*/"
    return f"//{comment.text}"


@dataclass(frozen=True)
class Annotation:
    """A leading annotation such as ``@Override`` together with its own comments."""

    name: str
    comments: tuple[Comment, ...] = ()


@dataclass(frozen=True)
class Marker:
    """Attached note that a node needs a manual fix."""

    rule_id: str
    message: str


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Node:
    """One tree node.

    Fields are shared across kinds; which of them carry meaning depends on
    :attr:`kind`:

    - ``CLASS_DECL`` / ``METHOD_DECL``: *name*, *annotations*, *children*
      (members or statements); classes use *body_comments* for comments in
      front of the opening brace.
    - ``FIELD_DECL``: *variables* (declared names), *type*, *children*
      (initializers).
    - ``TRY``: *children* is the body ``BLOCK`` followed by catch clauses.
    - ``BLOCK``: *children* statements, *end_comments* before the closing brace.
    - ``CATCH_CLAUSE``: *type* is the caught type, *name* the parameter,
      *children* the body statements, *body_comments* the body prefix.
    - ``THROW_STMT``: *target* is the thrown expression.
    - ``NEW_INSTANCE_EXPR``: *type* is the constructed type, *args* the
      constructor arguments.
    - ``CALL_EXPR``: *target* is the receiver, *name* the method, *args*.
    - ``METHOD_REF``: *target* is the containing expression, *name* the method.
    - ``MEMBER_ACCESS``: *target* is the qualifier, *name* the member.
    - ``BINARY_EXPR``: *operator*, *args* are the two operands.
    - ``LITERAL``: *value*.

    Equality is structural; *id* only identifies a node across rewrites.
    """

    kind: NodeKind
    name: str | None = None
    type: TypeInfo | None = None
    target: Node | None = None
    args: tuple[Node, ...] = ()
    children: tuple[Node, ...] = ()
    value: str | int | float | bool | None = None
    operator: str | None = None
    variables: tuple[str, ...] = ()
    comments: tuple[Comment, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    body_comments: tuple[Comment, ...] = ()
    end_comments: tuple[Comment, ...] = ()
    markers: tuple[Marker, ...] = ()
    prefix: str = ""
    line: int | None = None
    id: str = field(default_factory=_new_id, compare=False)

    def replace(self, **changes: object) -> Node:
        """Return a copy with *changes* applied; the id is kept."""
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]

    def child_nodes(self) -> Iterator[Node]:
        """Yield direct sub-nodes in source order: target, args, children."""
        if self.target is not None:
            yield self.target
        yield from self.args
        yield from self.children

    @property
    def label(self) -> str:
        """Human-readable name used in log lines and reports."""
        if self.kind in (NodeKind.CLASS_DECL, NodeKind.METHOD_DECL):
            return self.name or "unknown"
        if self.kind is NodeKind.FIELD_DECL:
            return self.variables[0] if self.variables else "field"
        if self.name:
            return self.name
        return "unknown"

    @property
    def kind_label(self) -> str:
        if self.kind is NodeKind.CLASS_DECL:
            return "class"
        if self.kind is NodeKind.METHOD_DECL:
            return "method"
        if self.kind is NodeKind.FIELD_DECL:
            return "field"
        return self.kind.value.replace("_", " ")


def iter_tree(node: Node) -> Iterator[Node]:
    """Depth-first pre-order walk over *node* and all descendants."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(current.child_nodes())))
