"""Tests for tidylog.config: tidylog.yml parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tidylog.config import (
    DEFAULT_EXCLUDES,
    DEFAULT_HIERARCHY,
    DEFAULT_LOGGER_TYPE,
    Settings,
    load_settings,
    parse_settings,
)
from tidylog.suppression.directive import DEFAULT_MARKER

if TYPE_CHECKING:
    from pathlib import Path


class TestParseSettings:
    """Tests for parse_settings()."""

    def test_minimal(self) -> None:
        settings = parse_settings({"version": 1})
        assert settings == Settings()
        assert settings.marker == DEFAULT_MARKER
        assert settings.logger_type == DEFAULT_LOGGER_TYPE
        assert settings.exclude == DEFAULT_EXCLUDES

    def test_full(self) -> None:
        settings = parse_settings(
            {
                "version": 1,
                "marker": "acme:off",
                "types": {
                    "logger": "com.acme.Log",
                    "record": "com.acme.Message",
                    "exception": "java.lang.Exception",
                },
                "format_method": "render",
                "generic_exceptions": ["java.lang.Exception"],
                "hierarchy": {"com.acme.Failure": "java.lang.RuntimeException"},
                "rules": {"disabled": ["InvalidExceptionUsage"]},
                "exclude": "**/generated/**",
                "max_passes": 5,
            }
        )
        assert settings.marker == "acme:off"
        assert settings.logger_type == "com.acme.Log"
        assert settings.record_types == ("com.acme.Message",)
        assert settings.exception_type == "java.lang.Exception"
        assert settings.format_method == "render"
        assert settings.generic_exceptions == ("java.lang.Exception",)
        assert settings.hierarchy["com.acme.Failure"] == ("java.lang.RuntimeException",)
        assert settings.hierarchy["java.lang.Exception"] == DEFAULT_HIERARCHY["java.lang.Exception"]
        assert settings.disabled_rules == ("InvalidExceptionUsage",)
        assert settings.exclude == ("**/generated/**",)
        assert settings.max_passes == 5

    @pytest.mark.parametrize(
        ("data", "message"),
        [
            ("version: 1", "must be a YAML mapping"),
            ({}, "missing required 'version'"),
            ({"version": 2}, "unsupported version 2"),
            ({"version": 1, "colour": "red"}, "unknown top-level keys"),
            ({"version": 1, "types": []}, "'types' must be a mapping"),
            ({"version": 1, "types": {"loggr": "x"}}, "unknown keys in 'types'"),
            ({"version": 1, "marker": ""}, "'marker' must be a non-empty string"),
            ({"version": 1, "exclude": [1]}, "'exclude' must be a string or a list"),
            ({"version": 1, "hierarchy": ["x"]}, "'hierarchy' must be a mapping"),
            ({"version": 1, "rules": ["x"]}, "'rules' must be a mapping"),
            ({"version": 1, "max_passes": 0}, "'max_passes' must be a positive integer"),
            ({"version": 1, "max_passes": True}, "'max_passes' must be a positive integer"),
        ],
    )
    def test_invalid(self, data: object, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            parse_settings(data)


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_settings(tmp_path / "tidylog.yml") == Settings()
        assert load_settings(None) == Settings()

    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / "tidylog.yml"
        path.write_text("version: 1\nrules:\n  disabled: [LoggerStandards]\n")
        assert load_settings(path).disabled_rules == ("LoggerStandards",)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "tidylog.yml"
        path.write_text("version: [1\n")
        with pytest.raises(ValueError, match="invalid YAML"):
            load_settings(path)
