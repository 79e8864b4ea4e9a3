"""Checker orchestrator: load settings and tree documents, run rules, format results."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from tidylog.config import DEFAULT_CONFIG_NAME, load_settings
from tidylog.markers import suppression_hint
from tidylog.rules import build_rules
from tidylog.runner import run
from tidylog.suppression.directive import DEFAULT_MARKER
from tidylog.tree.loader import TreeDocument, TreeFormatError, dump_tree_document, load_tree_document

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tidylog.runner import Finding, RunResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CheckError(Exception):
    """Raised when the configuration or a tree document cannot be used."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CheckedDocument:
    path: Path
    result: RunResult


@dataclass
class CheckResult:
    """Result of a check run over several tree documents."""

    documents: list[CheckedDocument] = field(default_factory=list)
    rules: list[str] = field(default_factory=list)
    marker: str = DEFAULT_MARKER
    elapsed_ms: float = 0.0

    @property
    def findings(self) -> list[Finding]:
        return [f for doc in self.documents for f in doc.result.findings]

    @property
    def fix_count(self) -> int:
        return sum(len(doc.result.fixes) for doc in self.documents)

    @property
    def excluded_count(self) -> int:
        return sum(1 for doc in self.documents if doc.result.excluded)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def check(paths: Sequence[Path], *, config_path: Path | None = None) -> CheckResult:
    """Run every enabled rule to a fix point over each tree document.

    Parameters
    ----------
    paths:
        YAML tree documents to check.
    config_path:
        Optional explicit path to ``tidylog.yml``.  When *None* the file in
        the current directory is used if present, defaults otherwise.

    Raises
    ------
    CheckError
        When the configuration is invalid or a document cannot be loaded.
    """
    start = time.monotonic()

    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME
    try:
        settings = load_settings(config_path)
    except ValueError as exc:
        msg = f"Invalid configuration: {exc}"
        raise CheckError(msg) from exc

    rules = build_rules(settings)
    documents: list[CheckedDocument] = []
    for path in paths:
        try:
            document = load_tree_document(path, settings.hierarchy)
        except TreeFormatError as exc:
            msg = f"Invalid tree document: {exc}"
            raise CheckError(msg) from exc
        except OSError as exc:
            msg = f"Cannot read {path}: {exc}"
            raise CheckError(msg) from exc

        source = document.source or str(path)
        result = run(document.tree, rules, settings, source)
        logger.debug(
            "%s: %d findings, %d fixes in %d passes",
            source,
            len(result.findings),
            len(result.fixes),
            result.passes,
        )
        documents.append(CheckedDocument(path=path, result=result))

    elapsed = (time.monotonic() - start) * 1000
    return CheckResult(
        documents=documents,
        rules=[rule.rule_id for rule in rules],
        marker=settings.marker,
        elapsed_ms=elapsed,
    )


def write_outputs(result: CheckResult, output_dir: Path) -> list[Path]:
    """Write each rewritten tree, markers included, to *output_dir*."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for doc in result.documents:
        target = output_dir / doc.path.name
        text = dump_tree_document(TreeDocument(source=doc.result.source, tree=doc.result.tree))
        target.write_text(text, encoding="utf-8")
        written.append(target)
    return written


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def _location(finding: Finding) -> str:
    loc = finding.source or "<tree>"
    if finding.line is not None:
        loc += f":{finding.line}"
    return loc


def format_rich(result: CheckResult) -> str:
    """Format a CheckResult as human-readable text.

    Example output with findings::

        Rules: 3 enabled
        Trees: 2 checked, 0 excluded, 1 fixes applied

        x LogRecordPattern
          INFO needs structured record
          src/Billing.java:12 -> call expr 'info'
          suppress: // tidylog:disable LogRecordPattern

        1 findings (3 rules, 0.0s)
    """
    lines: list[str] = [
        f"Rules: {len(result.rules)} enabled",
        f"Trees: {len(result.documents)} checked, {result.excluded_count} excluded, "
        f"{result.fix_count} fixes applied",
        "",
    ]

    elapsed_str = f"{result.elapsed_ms / 1000:.1f}s"
    findings = result.findings
    if findings:
        for f in findings:
            lines.append(f"✗ {f.rule_id}")
            lines.append(f"  {f.message}")
            lines.append(f"  {_location(f)} → {f.node_kind} '{f.label}'")
            lines.append(f"  suppress: {suppression_hint(f.rule_id, result.marker)}")
            lines.append("")
        lines.append(f"{len(findings)} findings ({len(result.rules)} rules, {elapsed_str})")
    else:
        lines.append(f"✓ No findings ({len(result.rules)} rules, {elapsed_str})")

    return "\n".join(lines)


def format_json(result: CheckResult) -> str:
    """Format a CheckResult as JSON with ``findings`` and ``summary``."""
    findings_list: list[dict[str, object]] = [
        {
            "rule_id": f.rule_id,
            "message": f.message,
            "source": f.source,
            "line": f.line,
            "node_kind": f.node_kind,
            "label": f.label,
            "suppress": suppression_hint(f.rule_id, result.marker),
        }
        for f in result.findings
    ]

    output: dict[str, object] = {
        "findings": findings_list,
        "summary": {
            "rules": list(result.rules),
            "trees_checked": len(result.documents),
            "trees_excluded": result.excluded_count,
            "findings_count": len(findings_list),
            "fixes_applied": result.fix_count,
            "elapsed_ms": result.elapsed_ms,
        },
    }

    return json.dumps(output, indent=2)


def format_porcelain(result: CheckResult) -> str:
    """One line per finding: ``rule_id:source:line:message``.

    Empty source/line are represented as empty strings.  Returns an empty
    string when there are no findings.
    """
    lines: list[str] = []
    for f in result.findings:
        source = f.source if f.source is not None else ""
        line = str(f.line) if f.line is not None else ""
        lines.append(f"{f.rule_id}:{source}:{line}:{f.message}")
    return "\n".join(lines)
