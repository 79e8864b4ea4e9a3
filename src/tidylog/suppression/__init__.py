"""Suppression domain: directive parsing, attachment points, scope resolution."""

from tidylog.suppression.directive import (
    DEFAULT_MARKER,
    Directive,
    DirectiveScope,
    parse_directive,
    rule_ids_match,
    simple_rule_id,
)
from tidylog.suppression.engine import SuppressionEngine
from tidylog.suppression.locator import attachment_points, class_attachment_points
from tidylog.suppression.scope import SCOPE_RULES, ScopeResolver, ScopeRule

__all__ = [
    "DEFAULT_MARKER",
    "SCOPE_RULES",
    "Directive",
    "DirectiveScope",
    "ScopeResolver",
    "ScopeRule",
    "SuppressionEngine",
    "attachment_points",
    "class_attachment_points",
    "parse_directive",
    "rule_ids_match",
    "simple_rule_id",
]
