"""Code fence classifier mixin."""

from __future__ import annotations

from turbomd.events import CodeBlockEvent, CodeLang
from turbomd.location import SourceLocation

FENCE = ":::"


class FenceClassifierMixin:
    """Mixin providing ``::: lang`` code block classification."""

    def _location(self, lineno: int, indent: int) -> SourceLocation:
        """Build an event location. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_fence_body(self, location: SourceLocation) -> str:
        """Consume lines up to the closing fence. Implemented by Lexer."""
        raise NotImplementedError

    def _try_classify_fence(
        self, content: str, lineno: int, indent: int | None
    ) -> CodeBlockEvent | None:
        """Try to classify content as the opening line of a code block.

        The opening fence is ``:::`` followed by optional spaces and a
        non-empty language tag. Everything up to a line holding only ``:::``
        is the body, kept verbatim.

        Args:
            content: Line content with leading spaces stripped
            lineno: Line number of the opening fence
            indent: Leading spaces, or None for a fence on a list marker line

        Raises:
            UnterminatedConstructError: No closing fence before end of input.
        """
        if not content.startswith(FENCE):
            return None
        tag = content[len(FENCE) :].strip()
        if not tag:
            return None

        location = self._location(lineno, indent or 0)
        body = self._scan_fence_body(location)
        return CodeBlockEvent(
            indent=indent,
            lang=CodeLang.from_tag(tag),
            body=body,
            location=location,
        )
