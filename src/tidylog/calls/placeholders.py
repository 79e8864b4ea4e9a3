"""Placeholder corrector for message and template string literals.

The only accepted substitution marker is ``%s``.  SLF4J-style ``{}`` and the
printf conversions ``%d %f %i %o %b %x %X %e %E %g %G`` are rewritten to
``%s``.  ``%%`` is an escaped percent sign and never starts a marker.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tidylog.tree.nodes import NodeKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from tidylog.tree.nodes import Node

CANONICAL_PLACEHOLDER = "%s"

# Scanning %% as its own token keeps "%%d" and "%%s" from being read as markers.
_TOKEN_RE = re.compile(r"%%|%s|\{\}|%[dfiobxXeEgG]")
_INCORRECT_TOKENS_RE = re.compile(r"\{\}|%[dfiobxXeEgG]")


def _tokens(text: str) -> list[str]:
    return _TOKEN_RE.findall(text)


def has_incorrect(text: str | None) -> bool:
    """Return True if *text* contains at least one non-canonical marker."""
    if text is None:
        return False
    return any(_INCORRECT_TOKENS_RE.fullmatch(token) for token in _tokens(text))


def count_incorrect(text: str | None) -> int:
    if text is None:
        return 0
    return sum(1 for token in _tokens(text) if _INCORRECT_TOKENS_RE.fullmatch(token))


def correct(text: str) -> str:
    """Replace every non-canonical marker in *text* with ``%s``."""

    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if _INCORRECT_TOKENS_RE.fullmatch(token):
            return CANONICAL_PLACEHOLDER
        return token

    return _TOKEN_RE.sub(_replace, text)


def count(text: str | None) -> int:
    """Number of canonical ``%s`` markers in *text*."""
    if text is None:
        return 0
    return sum(1 for token in _tokens(text) if token == CANONICAL_PLACEHOLDER)


def string_value(node: Node | None) -> str | None:
    """The value of a string literal node, else None."""
    if node is None or node.kind is not NodeKind.LITERAL:
        return None
    return node.value if isinstance(node.value, str) else None


def substitution_count(
    args: tuple[Node, ...], message_index: int, is_exception: Callable[[Node], bool]
) -> int:
    """Arguments that feed placeholders: all but the message and exception arguments."""
    return sum(
        1 for idx, arg in enumerate(args) if idx != message_index and not is_exception(arg)
    )
