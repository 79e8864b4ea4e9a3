"""Small factories for assembling trees by hand (fixtures, embedding callers)."""

from __future__ import annotations

from tidylog.tree.nodes import Annotation, Comment, Node, NodeKind, TypeInfo

STRING_TYPE = "java.lang.String"


def typed(name: str, *supertypes: str) -> TypeInfo:
    return TypeInfo(name=name, supertypes=tuple(supertypes))


def line_comment(text: str) -> Comment:
    """``// text``"""
    return Comment(text=f" {text}")


def block_comment(text: str) -> Comment:
    """``/* text */``"""
    return Comment(text=f" {text} ", multiline=True)


def annotation(name: str, *comments: Comment) -> Annotation:
    return Annotation(name=name, comments=tuple(comments))


def compilation_unit(*classes: Node) -> Node:
    return Node(kind=NodeKind.COMPILATION_UNIT, children=tuple(classes))


def class_decl(
    name: str,
    *members: Node,
    comments: tuple[Comment, ...] = (),
    annotations: tuple[Annotation, ...] = (),
    body_comments: tuple[Comment, ...] = (),
) -> Node:
    return Node(
        kind=NodeKind.CLASS_DECL,
        name=name,
        children=tuple(members),
        comments=comments,
        annotations=annotations,
        body_comments=body_comments,
    )


def method_decl(
    name: str,
    *statements: Node,
    comments: tuple[Comment, ...] = (),
    annotations: tuple[Annotation, ...] = (),
) -> Node:
    return Node(
        kind=NodeKind.METHOD_DECL,
        name=name,
        children=tuple(statements),
        comments=comments,
        annotations=annotations,
    )


def field_decl(
    *variables: str,
    type_info: TypeInfo | None = None,
    initializer: Node | None = None,
    comments: tuple[Comment, ...] = (),
    annotations: tuple[Annotation, ...] = (),
) -> Node:
    return Node(
        kind=NodeKind.FIELD_DECL,
        variables=tuple(variables),
        type=type_info,
        children=(initializer,) if initializer is not None else (),
        comments=comments,
        annotations=annotations,
    )


def block(*statements: Node, end_comments: tuple[Comment, ...] = ()) -> Node:
    return Node(kind=NodeKind.BLOCK, children=tuple(statements), end_comments=end_comments)


def try_stmt(body: Node, *catches: Node, comments: tuple[Comment, ...] = ()) -> Node:
    return Node(kind=NodeKind.TRY, children=(body, *catches), comments=comments)


def catch_clause(
    caught: TypeInfo | None,
    *statements: Node,
    parameter: str = "e",
    comments: tuple[Comment, ...] = (),
    body_comments: tuple[Comment, ...] = (),
) -> Node:
    return Node(
        kind=NodeKind.CATCH_CLAUSE,
        name=parameter,
        type=caught,
        children=tuple(statements),
        comments=comments,
        body_comments=body_comments,
    )


def throw_stmt(expression: Node, *, comments: tuple[Comment, ...] = ()) -> Node:
    return Node(kind=NodeKind.THROW_STMT, target=expression, comments=comments)


def statement(*parts: Node, comments: tuple[Comment, ...] = ()) -> Node:
    """Expression statement or any other statement the rules do not inspect."""
    return Node(kind=NodeKind.STATEMENT, children=tuple(parts), comments=comments)


def new_instance(
    type_info: TypeInfo | None, *args: Node, comments: tuple[Comment, ...] = ()
) -> Node:
    return Node(kind=NodeKind.NEW_INSTANCE_EXPR, type=type_info, args=tuple(args), comments=comments)


def call(
    receiver: Node | None,
    method: str,
    *args: Node,
    type_info: TypeInfo | None = None,
    comments: tuple[Comment, ...] = (),
) -> Node:
    return Node(
        kind=NodeKind.CALL_EXPR,
        target=receiver,
        name=method,
        args=tuple(args),
        type=type_info,
        comments=comments,
    )


def method_ref(containing: Node, method: str) -> Node:
    return Node(kind=NodeKind.METHOD_REF, target=containing, name=method)


def identifier(name: str, type_info: TypeInfo | None = None, *, prefix: str = "") -> Node:
    return Node(kind=NodeKind.IDENTIFIER, name=name, type=type_info, prefix=prefix)


def member(
    qualifier: Node, name: str, type_info: TypeInfo | None = None, *, prefix: str = ""
) -> Node:
    return Node(kind=NodeKind.MEMBER_ACCESS, target=qualifier, name=name, type=type_info, prefix=prefix)


def literal(value: str | int | float | bool | None, *, prefix: str = "") -> Node:
    type_info = TypeInfo(STRING_TYPE) if isinstance(value, str) else None
    return Node(kind=NodeKind.LITERAL, value=value, type=type_info, prefix=prefix)


def binary(left: Node, operator: str, right: Node, type_info: TypeInfo | None = None) -> Node:
    return Node(kind=NodeKind.BINARY_EXPR, operator=operator, args=(left, right), type=type_info)


def empty() -> Node:
    return Node(kind=NodeKind.EMPTY)
