"""Tests for tidylog.checker: orchestration and output formats."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
import yaml

from tidylog.checker import (
    CheckError,
    check,
    format_json,
    format_porcelain,
    format_rich,
    write_outputs,
)
from tidylog.tree.loader import load_tree_document
from tidylog.tree.nodes import Marker, NodeKind, iter_tree

if TYPE_CHECKING:
    from pathlib import Path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_INFO_TREE = """\
source: src/main/java/com/acme/Billing.java
tree:
  kind: compilation_unit
  children:
    - kind: class_decl
      name: Billing
      children:
        - kind: method_decl
          name: charge
          children:
            - kind: statement
              children:
                - kind: call_expr
                  name: info
                  line: 12
                  target: {kind: identifier, name: LOGGER, type: de.cuioss.tools.logging.CuiLogger}
                  args:
                    - {kind: literal, value: "User {} logged in"}
                    - {kind: identifier, name: user, prefix: " "}
"""

_CLEAN_TREE = """\
source: src/main/java/com/acme/Clean.java
tree:
  kind: compilation_unit
  children:
    - kind: class_decl
      name: Clean
      children:
        - kind: method_decl
          name: run
          children:
            - kind: statement
              children:
                - kind: call_expr
                  name: debug
                  target: {kind: identifier, name: LOGGER, type: de.cuioss.tools.logging.CuiLogger}
                  args:
                    - {kind: literal, value: "starting"}
"""


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text)
    return path


def _info_tree(tmp_path: Path, source: str | None = None) -> Path:
    text = _INFO_TREE
    if source is not None:
        text = text.replace("src/main/java/com/acme/Billing.java", source)
    return _write(tmp_path, "billing.yml", text)


# ---------------------------------------------------------------------------
# check()
# ---------------------------------------------------------------------------


class TestCheck:
    """Tests for check()."""

    def test_findings_and_fixes(self, tmp_path: Path) -> None:
        result = check([_info_tree(tmp_path)], config_path=tmp_path / "tidylog.yml")
        (finding,) = result.findings
        assert finding.rule_id == "LogRecordPattern"
        assert finding.message == "INFO needs structured record"
        assert finding.source == "src/main/java/com/acme/Billing.java"
        assert finding.line == 12
        assert result.fix_count == 1
        assert result.rules == ["LoggerStandards", "LogRecordPattern", "InvalidExceptionUsage"]

    def test_clean_tree(self, tmp_path: Path) -> None:
        result = check([_write(tmp_path, "clean.yml", _CLEAN_TREE)], config_path=tmp_path / "none.yml")
        assert result.findings == []
        assert result.fix_count == 0

    def test_config_disables_rule(self, tmp_path: Path) -> None:
        config = _write(tmp_path, "tidylog.yml", "version: 1\nrules:\n  disabled: [LogRecordPattern]\n")
        result = check([_info_tree(tmp_path)], config_path=config)
        assert result.findings == []
        assert "LogRecordPattern" not in result.rules

    def test_excluded_source(self, tmp_path: Path) -> None:
        result = check(
            [_info_tree(tmp_path, source="module/target/generated/Billing.java")],
            config_path=tmp_path / "tidylog.yml",
        )
        assert result.excluded_count == 1
        assert result.findings == []

    def test_source_defaults_to_path(self, tmp_path: Path) -> None:
        text = _INFO_TREE.replace("source: src/main/java/com/acme/Billing.java\n", "")
        path = _write(tmp_path, "nosource.yml", text)
        result = check([path], config_path=tmp_path / "tidylog.yml")
        assert result.findings[0].source == str(path)

    def test_invalid_config(self, tmp_path: Path) -> None:
        config = _write(tmp_path, "tidylog.yml", "version: 7\n")
        with pytest.raises(CheckError, match="Invalid configuration"):
            check([_info_tree(tmp_path)], config_path=config)

    def test_invalid_tree(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "bad.yml", "tree:\n  kind: lambda\n")
        with pytest.raises(CheckError, match="Invalid tree document"):
            check([path], config_path=tmp_path / "tidylog.yml")

    def test_missing_tree(self, tmp_path: Path) -> None:
        with pytest.raises(CheckError, match="Cannot read"):
            check([tmp_path / "missing.yml"], config_path=tmp_path / "tidylog.yml")


class TestWriteOutputs:
    """Tests for write_outputs()."""

    def test_rewritten_tree_written(self, tmp_path: Path) -> None:
        result = check([_info_tree(tmp_path)], config_path=tmp_path / "tidylog.yml")
        written = write_outputs(result, tmp_path / "out")
        assert written == [tmp_path / "out" / "billing.yml"]

        document = load_tree_document(written[0])
        assert document.source == "src/main/java/com/acme/Billing.java"
        (logged,) = [n for n in iter_tree(document.tree) if n.kind is NodeKind.CALL_EXPR]
        assert logged.args[0].value == "User %s logged in"
        assert logged.markers == (Marker("LogRecordPattern", "INFO needs structured record"),)

    def test_written_tree_is_stable(self, tmp_path: Path) -> None:
        first = check([_info_tree(tmp_path)], config_path=tmp_path / "tidylog.yml")
        (out,) = write_outputs(first, tmp_path / "out")
        second = check([out], config_path=tmp_path / "tidylog.yml")
        assert second.fix_count == 0
        assert len(second.findings) == 1
        assert second.documents[0].result.tree == first.documents[0].result.tree


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


class TestFormatters:
    """Tests for format_rich(), format_json() and format_porcelain()."""

    def test_rich_with_findings(self, tmp_path: Path) -> None:
        output = format_rich(check([_info_tree(tmp_path)], config_path=tmp_path / "tidylog.yml"))
        assert "Rules: 3 enabled" in output
        assert "Trees: 1 checked, 0 excluded, 1 fixes applied" in output
        assert "✗ LogRecordPattern" in output
        assert "src/main/java/com/acme/Billing.java:12 → call expr 'info'" in output
        assert "suppress: // tidylog:disable LogRecordPattern" in output
        assert "1 findings (3 rules" in output

    def test_rich_clean(self, tmp_path: Path) -> None:
        result = check([_write(tmp_path, "clean.yml", _CLEAN_TREE)], config_path=tmp_path / "tidylog.yml")
        assert "✓ No findings (3 rules" in format_rich(result)

    def test_json(self, tmp_path: Path) -> None:
        result = check([_info_tree(tmp_path)], config_path=tmp_path / "tidylog.yml")
        data = json.loads(format_json(result))
        (finding,) = data["findings"]
        assert finding["rule_id"] == "LogRecordPattern"
        assert finding["line"] == 12
        assert finding["suppress"] == "// tidylog:disable LogRecordPattern"
        assert data["summary"]["findings_count"] == 1
        assert data["summary"]["fixes_applied"] == 1
        assert data["summary"]["trees_checked"] == 1

    def test_porcelain(self, tmp_path: Path) -> None:
        result = check([_info_tree(tmp_path)], config_path=tmp_path / "tidylog.yml")
        assert format_porcelain(result) == (
            "LogRecordPattern:src/main/java/com/acme/Billing.java:12:INFO needs structured record"
        )

    def test_porcelain_empty(self, tmp_path: Path) -> None:
        result = check([_write(tmp_path, "clean.yml", _CLEAN_TREE)], config_path=tmp_path / "tidylog.yml")
        assert format_porcelain(result) == ""

    def test_custom_marker_in_hint(self, tmp_path: Path) -> None:
        config = _write(tmp_path, "tidylog.yml", yaml.safe_dump({"version": 1, "marker": "acme:off"}))
        result = check([_info_tree(tmp_path)], config_path=config)
        assert "suppress: // acme:off LogRecordPattern" in format_rich(result)
