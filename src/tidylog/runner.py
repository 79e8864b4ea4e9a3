"""Pass runner: apply rules to a tree until it stops changing."""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tidylog.tree.nodes import iter_tree

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from tidylog.config import Settings
    from tidylog.rules.base import Fix, Rule
    from tidylog.tree.nodes import Node

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Finding:
    """A marker left in the final tree."""

    rule_id: str
    message: str
    source: str | None
    line: int | None
    node_kind: str
    label: str


@dataclass
class RunResult:
    """Outcome of running all rules over one tree."""

    source: str | None
    tree: Node
    findings: list[Finding] = field(default_factory=list)
    fixes: list[Fix] = field(default_factory=list)
    passes: int = 0
    excluded: bool = False


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_excluded(source: str | None, patterns: Iterable[str]) -> bool:
    """Return True if *source* matches any exclusion glob.

    The path is also tried with a leading ``/`` so that ``**/target/**``
    matches relative paths starting with ``target/``.
    """
    if not source:
        return False
    path = source.replace("\\", "/")
    candidates = (path, path if path.startswith("/") else f"/{path}")
    return any(fnmatch.fnmatch(c, pattern) for c in candidates for pattern in patterns)


def collect_findings(tree: Node, source: str | None = None) -> list[Finding]:
    """All markers in *tree*, in pre-order."""
    return [
        Finding(
            rule_id=marker.rule_id,
            message=marker.message,
            source=source,
            line=node.line,
            node_kind=node.kind_label,
            label=node.label,
        )
        for node in iter_tree(tree)
        for marker in node.markers
    ]


# ---------------------------------------------------------------------------
# Passes
# ---------------------------------------------------------------------------


def run_pass(tree: Node, rules: Sequence[Rule]) -> Node:
    """One full traversal per rule, in order."""
    for rule in rules:
        tree = rule.visit(tree)
    return tree


def run(
    tree: Node,
    rules: Sequence[Rule],
    settings: Settings,
    source: str | None = None,
) -> RunResult:
    """Run passes until the tree is stable or ``settings.max_passes`` is reached."""
    if is_excluded(source, settings.exclude):
        logger.debug("Skipping %s: matches an exclusion pattern", source)
        return RunResult(source=source, tree=tree, excluded=True)

    for rule in rules:
        rule.fixes.clear()

    passes = 0
    while passes < settings.max_passes:
        passes += 1
        rewritten = run_pass(tree, rules)
        if rewritten == tree:
            break
        tree = rewritten
    else:
        logger.warning("%s: no fix point after %d passes", source or "<tree>", passes)

    fixes = [fix for rule in rules for fix in rule.fixes]
    return RunResult(
        source=source,
        tree=tree,
        findings=collect_findings(tree, source),
        fixes=fixes,
        passes=passes,
    )
