"""YAML tree documents: load typed trees produced by a front end, dump rewritten ones.

Document layout::

    source: src/main/java/com/acme/Billing.java
    types:                       # optional, direct supertypes per type
      com.acme.BillingException: [java.lang.RuntimeException]
    tree:
      kind: compilation_unit
      children:
        - kind: class_decl
          name: Billing
          comments: ["// tidylog:disable InvalidExceptionUsage"]
          children: [...]

Every node mapping has a ``kind`` plus any of the :class:`~tidylog.tree.nodes.Node`
fields.  Comments are written in source form (``// ...`` or ``/* ... */``).
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import yaml

from tidylog.tree.build import STRING_TYPE
from tidylog.tree.nodes import Annotation, Comment, Marker, Node, NodeKind, TypeInfo, render_comment

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

_KINDS_BY_NAME: dict[str, NodeKind] = {kind.value: kind for kind in NodeKind}

_NODE_KEYS: frozenset[str] = frozenset(
    {
        "kind",
        "id",
        "name",
        "type",
        "target",
        "args",
        "children",
        "value",
        "operator",
        "variables",
        "comments",
        "annotations",
        "body_comments",
        "end_comments",
        "markers",
        "prefix",
        "line",
    }
)


class TreeFormatError(ValueError):
    """Raised when a tree document does not describe a valid tree."""


@dataclass(frozen=True)
class TreeDocument:
    """A tree plus the path of the source file it was built from."""

    source: str | None
    tree: Node


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def resolve_type(name: str, hierarchy: Mapping[str, tuple[str, ...]]) -> TypeInfo:
    """Build a :class:`TypeInfo` whose supertypes are the transitive closure in *hierarchy*."""
    seen: list[str] = []
    queue: deque[str] = deque(hierarchy.get(name, ()))
    while queue:
        current = queue.popleft()
        if current == name or current in seen:
            continue
        seen.append(current)
        queue.extend(hierarchy.get(current, ()))
    return TypeInfo(name=name, supertypes=tuple(seen))


def _parse_hierarchy(data: object, context: str) -> dict[str, tuple[str, ...]]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"{context}: 'types' must be a mapping of type name to supertypes"
        raise TreeFormatError(msg)
    hierarchy: dict[str, tuple[str, ...]] = {}
    for type_name, supers in data.items():
        if isinstance(supers, str):
            hierarchy[str(type_name)] = (supers,)
        elif isinstance(supers, list):
            hierarchy[str(type_name)] = tuple(str(s) for s in supers)
        else:
            msg = f"{context}: supertypes of '{type_name}' must be a string or list"
            raise TreeFormatError(msg)
    return hierarchy


def _parse_type(
    data: object, hierarchy: Mapping[str, tuple[str, ...]], context: str
) -> TypeInfo | None:
    if data is None:
        return None
    if isinstance(data, str):
        return resolve_type(data, hierarchy)
    if isinstance(data, dict):
        name = data.get("name")
        if not isinstance(name, str) or not name:
            msg = f"{context}: type mapping requires a non-empty 'name'"
            raise TreeFormatError(msg)
        resolved = resolve_type(name, hierarchy)
        extra = data.get("supertypes", [])
        if not isinstance(extra, list):
            msg = f"{context}: type 'supertypes' must be a list"
            raise TreeFormatError(msg)
        merged = list(resolved.supertypes)
        for super_name in (str(s) for s in extra):
            for candidate in (super_name, *resolve_type(super_name, hierarchy).supertypes):
                if candidate not in merged and candidate != name:
                    merged.append(candidate)
        return TypeInfo(name=name, supertypes=tuple(merged))
    msg = f"{context}: 'type' must be a string or mapping"
    raise TreeFormatError(msg)


# ---------------------------------------------------------------------------
# Comments, annotations, markers
# ---------------------------------------------------------------------------


def parse_comment(raw: object, context: str) -> Comment:
    """``"// text"`` -> line comment, ``"/* text */"`` -> block comment.

    Text without delimiters is taken as a line comment body.
    """
    if not isinstance(raw, str):
        msg = f"{context}: comment must be a string"
        raise TreeFormatError(msg)
    if raw.startswith("/*") and raw.endswith("*/") and len(raw) >= 4:
        return Comment(text=raw[2:-2], multiline=True)
    if raw.startswith("//"):
        return Comment(text=raw[2:])
    return Comment(text=raw)


def _parse_comments(data: object, context: str) -> tuple[Comment, ...]:
    if data is None:
        return ()
    if isinstance(data, str):
        return (parse_comment(data, context),)
    if not isinstance(data, list):
        msg = f"{context}: comments must be a list"
        raise TreeFormatError(msg)
    return tuple(parse_comment(item, f"{context}[{idx}]") for idx, item in enumerate(data))


def _parse_annotations(data: object, context: str) -> tuple[Annotation, ...]:
    if data is None:
        return ()
    if not isinstance(data, list):
        msg = f"{context}: annotations must be a list"
        raise TreeFormatError(msg)
    annotations: list[Annotation] = []
    for idx, item in enumerate(data):
        item_context = f"{context}[{idx}]"
        if isinstance(item, str):
            annotations.append(Annotation(name=item))
            continue
        if not isinstance(item, dict) or not isinstance(item.get("name"), str):
            msg = f"{item_context}: annotation must be a name or a mapping with 'name'"
            raise TreeFormatError(msg)
        annotations.append(
            Annotation(
                name=item["name"],
                comments=_parse_comments(item.get("comments"), f"{item_context}.comments"),
            )
        )
    return tuple(annotations)


def _parse_markers(data: object, context: str) -> tuple[Marker, ...]:
    if data is None:
        return ()
    if not isinstance(data, list):
        msg = f"{context}: markers must be a list"
        raise TreeFormatError(msg)
    markers: list[Marker] = []
    for idx, item in enumerate(data):
        if not isinstance(item, dict) or "message" not in item:
            msg = f"{context}[{idx}]: marker must be a mapping with 'message'"
            raise TreeFormatError(msg)
        markers.append(Marker(rule_id=str(item.get("rule", "")), message=str(item["message"])))
    return tuple(markers)


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


def _parse_node_list(
    data: object, hierarchy: Mapping[str, tuple[str, ...]], context: str
) -> tuple[Node, ...]:
    if data is None:
        return ()
    if not isinstance(data, list):
        msg = f"{context}: must be a list of nodes"
        raise TreeFormatError(msg)
    return tuple(
        parse_node(item, hierarchy, context=f"{context}[{idx}]") for idx, item in enumerate(data)
    )


def _parse_str_list(data: object, context: str) -> tuple[str, ...]:
    if data is None:
        return ()
    if isinstance(data, str):
        return (data,)
    if not isinstance(data, list):
        msg = f"{context}: must be a string or list of strings"
        raise TreeFormatError(msg)
    return tuple(str(item) for item in data)


def parse_node(
    data: object,
    hierarchy: Mapping[str, tuple[str, ...]] | None = None,
    *,
    context: str = "tree",
) -> Node:
    """Parse one node mapping (recursively) into a :class:`Node`."""
    hierarchy = hierarchy or {}
    if not isinstance(data, dict):
        msg = f"{context}: node must be a mapping"
        raise TreeFormatError(msg)

    unknown = sorted(set(data) - _NODE_KEYS)
    if unknown:
        msg = f"{context}: unknown node keys {unknown}"
        raise TreeFormatError(msg)

    kind_raw = data.get("kind")
    kind = _KINDS_BY_NAME.get(str(kind_raw)) if kind_raw is not None else None
    if kind is None:
        msg = f"{context}: invalid kind '{kind_raw}', must be one of {sorted(_KINDS_BY_NAME)}"
        raise TreeFormatError(msg)

    target_raw = data.get("target")
    target = (
        parse_node(target_raw, hierarchy, context=f"{context}.target")
        if target_raw is not None
        else None
    )

    value = data.get("value")
    if value is not None and not isinstance(value, (str, int, float, bool)):
        msg = f"{context}: literal value must be a scalar"
        raise TreeFormatError(msg)

    type_info = _parse_type(data.get("type"), hierarchy, f"{context}.type")
    if type_info is None and kind is NodeKind.LITERAL and isinstance(value, str):
        type_info = TypeInfo(STRING_TYPE)

    line_raw = data.get("line")
    if line_raw is not None and not isinstance(line_raw, int):
        msg = f"{context}: line must be an integer"
        raise TreeFormatError(msg)

    fields: dict[str, Any] = {
        "kind": kind,
        "name": str(data["name"]) if data.get("name") is not None else None,
        "type": type_info,
        "target": target,
        "args": _parse_node_list(data.get("args"), hierarchy, f"{context}.args"),
        "children": _parse_node_list(data.get("children"), hierarchy, f"{context}.children"),
        "value": value,
        "operator": str(data["operator"]) if data.get("operator") is not None else None,
        "variables": _parse_str_list(data.get("variables"), f"{context}.variables"),
        "comments": _parse_comments(data.get("comments"), f"{context}.comments"),
        "annotations": _parse_annotations(data.get("annotations"), f"{context}.annotations"),
        "body_comments": _parse_comments(data.get("body_comments"), f"{context}.body_comments"),
        "end_comments": _parse_comments(data.get("end_comments"), f"{context}.end_comments"),
        "markers": _parse_markers(data.get("markers"), f"{context}.markers"),
        "prefix": str(data.get("prefix", "")),
        "line": line_raw,
    }
    if data.get("id") is not None:
        fields["id"] = str(data["id"])
    return Node(**fields)


def parse_tree_document(
    data: object, hierarchy: Mapping[str, tuple[str, ...]] | None = None
) -> TreeDocument:
    """Parse a loaded YAML document; document ``types`` extend *hierarchy*."""
    if not isinstance(data, dict):
        msg = "tree document must be a YAML mapping"
        raise TreeFormatError(msg)
    if "tree" not in data:
        msg = "tree document: missing required 'tree' field"
        raise TreeFormatError(msg)

    merged = dict(hierarchy or {})
    merged.update(_parse_hierarchy(data.get("types"), "tree document"))

    source = data.get("source")
    return TreeDocument(
        source=str(source) if source is not None else None,
        tree=parse_node(data["tree"], merged),
    )


def load_tree_document(
    path: Path, hierarchy: Mapping[str, tuple[str, ...]] | None = None
) -> TreeDocument:
    """Read a YAML tree document from *path*.

    Raises :class:`TreeFormatError` on YAML syntax or schema errors.
    """
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        msg = f"{path}: invalid YAML: {exc}"
        raise TreeFormatError(msg) from exc
    try:
        return parse_tree_document(data, hierarchy)
    except TreeFormatError as exc:
        msg = f"{path}: {exc}"
        raise TreeFormatError(msg) from exc


# ---------------------------------------------------------------------------
# Dumping
# ---------------------------------------------------------------------------


def _dump_type(type_info: TypeInfo) -> str | dict[str, object]:
    if not type_info.supertypes:
        return type_info.name
    return {"name": type_info.name, "supertypes": list(type_info.supertypes)}


def _dump_comments(comments: tuple[Comment, ...]) -> list[str]:
    return [render_comment(c) for c in comments]


def dump_tree(node: Node) -> dict[str, object]:
    """Serialize *node* to plain data, omitting empty fields."""
    out: dict[str, object] = {"kind": node.kind.value}
    if node.name is not None:
        out["name"] = node.name
    if node.type is not None:
        out["type"] = _dump_type(node.type)
    if node.value is not None:
        out["value"] = node.value
    if node.operator is not None:
        out["operator"] = node.operator
    if node.variables:
        out["variables"] = list(node.variables)
    if node.prefix:
        out["prefix"] = node.prefix
    if node.line is not None:
        out["line"] = node.line
    if node.comments:
        out["comments"] = _dump_comments(node.comments)
    if node.annotations:
        out["annotations"] = [
            {"name": a.name, "comments": _dump_comments(a.comments)} if a.comments else a.name
            for a in node.annotations
        ]
    if node.body_comments:
        out["body_comments"] = _dump_comments(node.body_comments)
    if node.end_comments:
        out["end_comments"] = _dump_comments(node.end_comments)
    if node.markers:
        out["markers"] = [{"rule": m.rule_id, "message": m.message} for m in node.markers]
    if node.target is not None:
        out["target"] = dump_tree(node.target)
    if node.args:
        out["args"] = [dump_tree(a) for a in node.args]
    if node.children:
        out["children"] = [dump_tree(c) for c in node.children]
    return out


def dump_tree_document(document: TreeDocument) -> str:
    """Render *document* as YAML text."""
    data: dict[str, object] = {}
    if document.source is not None:
        data["source"] = document.source
    data["tree"] = dump_tree(document.tree)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
