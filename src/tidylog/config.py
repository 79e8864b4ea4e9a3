"""Configuration: parse ``tidylog.yml`` into :class:`Settings`.

Example::

    version: 1
    marker: "tidylog:disable"
    types:
      logger: de.cuioss.tools.logging.CuiLogger
      record: [de.cuioss.tools.logging.LogRecord]
      exception: java.lang.Throwable
      string: java.lang.String
    format_method: format
    generic_exceptions: [java.lang.Exception, java.lang.RuntimeException]
    hierarchy:
      com.acme.BillingException: [java.lang.RuntimeException]
    rules:
      disabled: [InvalidExceptionUsage]
    exclude: ["**/target/**", "**/generated/**"]
    max_passes: 3
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import yaml

from tidylog.suppression.directive import DEFAULT_MARKER

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SUPPORTED_CONFIG_VERSIONS: frozenset[int] = frozenset({1})
DEFAULT_CONFIG_NAME = "tidylog.yml"

DEFAULT_LOGGER_TYPE = "de.cuioss.tools.logging.CuiLogger"
DEFAULT_RECORD_TYPES: tuple[str, ...] = (
    "de.cuioss.tools.logging.LogRecord",
    "de.cuioss.tools.logging.LogRecordModel",
)
DEFAULT_RECORD_BUILDER_TYPES: tuple[str, ...] = (
    "de.cuioss.tools.logging.LogRecordModel$Builder",
    "de.cuioss.tools.logging.LogRecordModel.Builder",
)
DEFAULT_EXCEPTION_TYPE = "java.lang.Throwable"
DEFAULT_STRING_TYPE = "java.lang.String"
DEFAULT_GENERIC_EXCEPTIONS: tuple[str, ...] = (
    "java.lang.Exception",
    "java.lang.RuntimeException",
    "java.lang.Throwable",
)
DEFAULT_EXCLUDES: tuple[str, ...] = ("**/target/**", "**/build/**")
DEFAULT_MAX_PASSES = 3

# Direct supertypes of the platform types front ends commonly leave unresolved.
DEFAULT_HIERARCHY: dict[str, tuple[str, ...]] = {
    "java.lang.Exception": ("java.lang.Throwable",),
    "java.lang.Error": ("java.lang.Throwable",),
    "java.lang.RuntimeException": ("java.lang.Exception",),
    "java.io.IOException": ("java.lang.Exception",),
    "java.io.UncheckedIOException": ("java.lang.RuntimeException",),
    "java.lang.IllegalArgumentException": ("java.lang.RuntimeException",),
    "java.lang.IllegalStateException": ("java.lang.RuntimeException",),
    "java.lang.NullPointerException": ("java.lang.RuntimeException",),
    "java.lang.UnsupportedOperationException": ("java.lang.RuntimeException",),
    "de.cuioss.tools.logging.LogRecordModel": ("de.cuioss.tools.logging.LogRecord",),
}

_TOP_LEVEL_KEYS: frozenset[str] = frozenset(
    {
        "version",
        "marker",
        "types",
        "format_method",
        "template_method",
        "generic_exceptions",
        "hierarchy",
        "rules",
        "exclude",
        "max_passes",
    }
)
_TYPE_KEYS: frozenset[str] = frozenset({"logger", "record", "record_builder", "exception", "string"})


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Settings:
    """Everything the rules need to know about the target code base."""

    marker: str = DEFAULT_MARKER
    logger_type: str = DEFAULT_LOGGER_TYPE
    record_types: tuple[str, ...] = DEFAULT_RECORD_TYPES
    record_builder_types: tuple[str, ...] = DEFAULT_RECORD_BUILDER_TYPES
    exception_type: str = DEFAULT_EXCEPTION_TYPE
    string_type: str = DEFAULT_STRING_TYPE
    format_method: str = "format"
    template_method: str = "template"
    generic_exceptions: tuple[str, ...] = DEFAULT_GENERIC_EXCEPTIONS
    hierarchy: dict[str, tuple[str, ...]] = field(default_factory=lambda: dict(DEFAULT_HIERARCHY))
    disabled_rules: tuple[str, ...] = ()
    exclude: tuple[str, ...] = DEFAULT_EXCLUDES
    max_passes: int = DEFAULT_MAX_PASSES


# ---------------------------------------------------------------------------
# YAML parsing
# ---------------------------------------------------------------------------


def _str_value(data: dict[str, object], key: str, default: str, context: str) -> str:
    raw = data.get(key, default)
    if not isinstance(raw, str) or not raw.strip():
        msg = f"{context}: '{key}' must be a non-empty string"
        raise ValueError(msg)
    return raw.strip()


def _str_tuple(data: dict[str, object], key: str, default: tuple[str, ...], context: str) -> tuple[str, ...]:
    raw = data.get(key)
    if raw is None:
        return default
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not all(isinstance(item, str) and item for item in raw):
        msg = f"{context}: '{key}' must be a string or a list of non-empty strings"
        raise ValueError(msg)
    return tuple(raw)


def _parse_types(data: object) -> dict[str, object]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = "tidylog.yml: 'types' must be a mapping"
        raise ValueError(msg)
    unknown = sorted(set(data) - _TYPE_KEYS)
    if unknown:
        msg = f"tidylog.yml: unknown keys in 'types': {unknown}, expected {sorted(_TYPE_KEYS)}"
        raise ValueError(msg)
    return data


def _parse_hierarchy(data: object) -> dict[str, tuple[str, ...]]:
    hierarchy = dict(DEFAULT_HIERARCHY)
    if data is None:
        return hierarchy
    if not isinstance(data, dict):
        msg = "tidylog.yml: 'hierarchy' must be a mapping of type name to supertypes"
        raise ValueError(msg)
    for type_name, supers in data.items():
        if isinstance(supers, str):
            supers = [supers]
        if not isinstance(supers, list):
            msg = f"tidylog.yml: supertypes of '{type_name}' must be a string or list"
            raise ValueError(msg)
        hierarchy[str(type_name)] = tuple(str(s) for s in supers)
    return hierarchy


def _parse_disabled_rules(data: object) -> tuple[str, ...]:
    if data is None:
        return ()
    if not isinstance(data, dict):
        msg = "tidylog.yml: 'rules' must be a mapping"
        raise ValueError(msg)
    return _str_tuple(data, "disabled", (), "tidylog.yml: rules")


def parse_settings(data: object) -> Settings:
    """Validate a loaded YAML document and build :class:`Settings`.

    Raises ``ValueError`` on schema errors (missing version, wrong types, etc.).
    """
    if not isinstance(data, dict):
        msg = "tidylog.yml must be a YAML mapping"
        raise ValueError(msg)

    version = data.get("version")
    if version is None:
        msg = "tidylog.yml: missing required 'version' field"
        raise ValueError(msg)
    if version not in SUPPORTED_CONFIG_VERSIONS:
        expected = sorted(SUPPORTED_CONFIG_VERSIONS)
        msg = f"tidylog.yml: unsupported version {version}, expected one of {expected}"
        raise ValueError(msg)

    unknown = sorted(set(data) - _TOP_LEVEL_KEYS)
    if unknown:
        msg = f"tidylog.yml: unknown top-level keys {unknown}"
        raise ValueError(msg)

    types = _parse_types(data.get("types"))
    context = "tidylog.yml: types"

    max_passes = data.get("max_passes", DEFAULT_MAX_PASSES)
    if not isinstance(max_passes, int) or isinstance(max_passes, bool) or max_passes < 1:
        msg = "tidylog.yml: 'max_passes' must be a positive integer"
        raise ValueError(msg)

    return Settings(
        marker=_str_value(data, "marker", DEFAULT_MARKER, "tidylog.yml"),
        logger_type=_str_value(types, "logger", DEFAULT_LOGGER_TYPE, context),
        record_types=_str_tuple(types, "record", DEFAULT_RECORD_TYPES, context),
        record_builder_types=_str_tuple(
            types, "record_builder", DEFAULT_RECORD_BUILDER_TYPES, context
        ),
        exception_type=_str_value(types, "exception", DEFAULT_EXCEPTION_TYPE, context),
        string_type=_str_value(types, "string", DEFAULT_STRING_TYPE, context),
        format_method=_str_value(data, "format_method", "format", "tidylog.yml"),
        template_method=_str_value(data, "template_method", "template", "tidylog.yml"),
        generic_exceptions=_str_tuple(
            data, "generic_exceptions", DEFAULT_GENERIC_EXCEPTIONS, "tidylog.yml"
        ),
        hierarchy=_parse_hierarchy(data.get("hierarchy")),
        disabled_rules=_parse_disabled_rules(data.get("rules")),
        exclude=_str_tuple(data, "exclude", DEFAULT_EXCLUDES, "tidylog.yml"),
        max_passes=max_passes,
    )


def load_settings(config_path: Path | None) -> Settings:
    """Load settings from *config_path*; defaults when it is None or missing.

    Raises ``ValueError`` when the file exists but is not valid.
    """
    if config_path is None or not config_path.is_file():
        if config_path is not None:
            logger.debug("No config at %s, using defaults", config_path)
        return Settings()

    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        msg = f"{config_path}: invalid YAML: {exc}"
        raise ValueError(msg) from exc

    return parse_settings(data)
