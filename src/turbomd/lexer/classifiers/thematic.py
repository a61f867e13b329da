"""Horizontal rule classifier mixin."""

from __future__ import annotations

from turbomd.events import HorizontalRuleEvent
from turbomd.location import SourceLocation


class ThematicClassifierMixin:
    """Mixin providing horizontal rule classification."""

    def _location(self, lineno: int, indent: int) -> SourceLocation:
        """Build an event location. Implemented by Lexer."""
        raise NotImplementedError

    def _try_classify_horizontal_rule(
        self, content: str, lineno: int, indent: int
    ) -> HorizontalRuleEvent | None:
        """Three or more ``-`` on an unindented line, nothing else.

        Returns:
            Event if the line is a rule, None otherwise.
        """
        if indent:
            return None
        stripped = content.rstrip()
        if len(stripped) < 3 or stripped.strip("-"):
            return None
        return HorizontalRuleEvent(location=self._location(lineno, indent))
