"""Suppression engine: one yes/no answer per (position, rule id) pair."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tidylog.suppression.directive import DEFAULT_MARKER, parse_directive
from tidylog.suppression.locator import attachment_points
from tidylog.suppression.scope import ScopeResolver
from tidylog.tree.nodes import render_comment

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from tidylog.tree.nodes import Comment
    from tidylog.tree.position import Position

    CommentRenderer = Callable[[Comment, "Position | None"], str]

logger = logging.getLogger(__name__)


class SuppressionEngine:
    """Compose locator, directive parser and scope resolver.

    Parameters
    ----------
    marker:
        Directive marker token searched for in rendered comments.
    render:
        ``render(comment, position) -> str``; defaults to
        :func:`tidylog.tree.nodes.render_comment`.
    """

    def __init__(
        self,
        marker: str = DEFAULT_MARKER,
        render: CommentRenderer = render_comment,
    ) -> None:
        self.marker = marker
        self._render = render
        self._resolver = ScopeResolver(self._suppressed, self.has_directive)

    def has_directive(
        self, comments: Iterable[Comment], position: Position, rule_id: str | None
    ) -> bool:
        """Return True if any comment parses to a directive that applies to *rule_id*."""
        for comment in comments:
            directive = parse_directive(self._render(comment, position), self.marker)
            if directive is not None and directive.applies_to(rule_id):
                return True
        return False

    def is_suppressed(self, position: Position, rule_id: str | None = None) -> bool:
        """Return True if processing of *rule_id* must be skipped at *position*.

        ``rule_id=None`` asks whether any directive applies at all.
        """
        if not self._suppressed(position, rule_id):
            return False
        node = position.node
        logger.debug(
            "Skipping %s '%s' for rule '%s' due to %s comment",
            node.kind_label,
            node.label,
            rule_id or "any",
            self.marker,
        )
        return True

    def _suppressed(self, position: Position, rule_id: str | None) -> bool:
        for comments in attachment_points(position.node):
            if self.has_directive(comments, position, rule_id):
                return True
        return self._resolver.resolve(position, rule_id)
