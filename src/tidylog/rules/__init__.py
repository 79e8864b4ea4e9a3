"""Rules: suppression-aware visitors, applied in the order of :data:`ALL_RULES`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tidylog.rules.base import Fix, Rule
from tidylog.rules.exception_usage import InvalidExceptionUsageRule
from tidylog.rules.log_record import LogRecordPatternRule
from tidylog.rules.logger_standards import LoggerStandardsRule
from tidylog.suppression.directive import rule_ids_match
from tidylog.suppression.engine import SuppressionEngine

if TYPE_CHECKING:
    from tidylog.config import Settings

# Placeholders are corrected before record calls are collapsed and checked.
ALL_RULES: tuple[type[Rule], ...] = (
    LoggerStandardsRule,
    LogRecordPatternRule,
    InvalidExceptionUsageRule,
)


def is_disabled(rule_id: str, settings: Settings) -> bool:
    return any(rule_ids_match(rule_id, disabled) for disabled in settings.disabled_rules)


def build_rules(settings: Settings) -> list[Rule]:
    """Instantiate every enabled rule, sharing one suppression engine."""
    engine = SuppressionEngine(settings.marker)
    return [
        rule_cls(settings, engine)
        for rule_cls in ALL_RULES
        if not is_disabled(rule_cls.rule_id, settings)
    ]


__all__ = [
    "ALL_RULES",
    "Fix",
    "InvalidExceptionUsageRule",
    "LogRecordPatternRule",
    "LoggerStandardsRule",
    "Rule",
    "build_rules",
    "is_disabled",
]
