"""Directive parser: ``<marker>`` optionally followed by a rule id inside one comment."""

from __future__ import annotations

import enum
from dataclasses import dataclass

DEFAULT_MARKER = "tidylog:disable"


class DirectiveScope(enum.Enum):
    ALL = "all"
    NAMED = "named"


@dataclass(frozen=True)
class Directive:
    """A parsed suppression instruction.

    ``ALL`` directives carry no rule id; ``NAMED`` directives always carry a
    non-empty one.  Any other combination is a programming error.
    """

    scope: DirectiveScope
    rule_id: str | None = None

    def __post_init__(self) -> None:
        if self.scope is DirectiveScope.ALL and self.rule_id is not None:
            msg = f"ALL directive must not name a rule, got {self.rule_id!r}"
            raise ValueError(msg)
        if self.scope is DirectiveScope.NAMED and not self.rule_id:
            msg = "NAMED directive requires a non-empty rule id"
            raise ValueError(msg)

    @classmethod
    def for_all(cls) -> Directive:
        return cls(DirectiveScope.ALL)

    @classmethod
    def for_rule(cls, rule_id: str) -> Directive:
        return cls(DirectiveScope.NAMED, rule_id)

    def applies_to(self, rule_id: str | None) -> bool:
        """Return True if this directive suppresses *rule_id*.

        A query without a rule id asks "is anything suppressed here" and is
        answered by every directive.
        """
        if rule_id is None or self.scope is DirectiveScope.ALL:
            return True
        assert self.rule_id is not None
        return rule_ids_match(rule_id, self.rule_id)


def simple_rule_id(rule_id: str) -> str:
    """``tidylog.rules.LogRecordPattern`` -> ``LogRecordPattern``"""
    return rule_id.rsplit(".", 1)[-1]


def rule_ids_match(left: str, right: str) -> bool:
    """Equal verbatim, or equal in their rightmost dot-delimited component."""
    return left == right or simple_rule_id(left) == simple_rule_id(right)


def parse_directive(text: str, marker: str = DEFAULT_MARKER) -> Directive | None:
    """Extract a directive from rendered comment *text*.

    Everything after the marker token, trimmed, is the rule id.  Trailing text
    is not validated: ``// tidylog:disable Foo bar`` names the rule ``Foo bar``.
    The block-comment terminator is not part of the rule id.
    """
    index = text.find(marker)
    if index < 0:
        return None
    rest = text[index + len(marker) :].strip()
    if rest.endswith("*/"):
        rest = rest[:-2].strip()
    if not rest:
        return Directive.for_all()
    return Directive.for_rule(rest)
