"""Heading classifier mixin."""

from __future__ import annotations

from turbomd.errors import UnsupportedConstructError
from turbomd.events import HeadingEvent
from turbomd.location import SourceLocation
from turbomd.tokens import InlineToken

MAX_HEADING_LEVEL = 6


class HeadingClassifierMixin:
    """Mixin providing ``#`` heading classification."""

    def _location(self, lineno: int, indent: int) -> SourceLocation:
        """Build an event location. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_logical_line(self, content: str) -> tuple[InlineToken, ...]:
        """Scan inline content, joining broken lines. Implemented by Lexer."""
        raise NotImplementedError

    def _try_classify_heading(
        self, content: str, lineno: int, indent: int
    ) -> HeadingEvent | None:
        """Try to classify content as a heading.

        One to six ``#`` give the level; a single space after them is
        dropped. The heading text may continue over broken lines. A longer
        run of ``#`` is not clamped to level six; it aborts the document.

        Raises:
            UnsupportedConstructError: More than six ``#``.
        """
        level = len(content) - len(content.lstrip("#"))
        if level == 0:
            return None

        location = self._location(lineno, indent)
        if level > MAX_HEADING_LEVEL:
            raise UnsupportedConstructError.at(
                f"Heading level {level} exceeds {MAX_HEADING_LEVEL}", location
            )

        text = content[level:]
        if text.startswith(" "):
            text = text[1:]
        return HeadingEvent(
            indent=indent,
            level=level,
            tokens=self._scan_logical_line(text),
            location=location,
        )
