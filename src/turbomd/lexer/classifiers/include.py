"""Include directive classifier mixin."""

from __future__ import annotations

from turbomd.events import IncludeEvent
from turbomd.location import SourceLocation


class IncludeClassifierMixin:
    """Mixin providing ``@[path]`` classification."""

    def _location(self, lineno: int, indent: int) -> SourceLocation:
        """Build an event location. Implemented by Lexer."""
        raise NotImplementedError

    def _try_classify_include(
        self, content: str, lineno: int, indent: int
    ) -> IncludeEvent | None:
        """Try to classify content as an include of another document.

        The path is taken verbatim; it is resolved by the include pass, not
        by the lexer.
        """
        stripped = content.rstrip()
        if not stripped.startswith("@[") or not stripped.endswith("]"):
            return None
        path = stripped[2:-1]
        if not path:
            return None
        return IncludeEvent(indent=indent, path=path, location=self._location(lineno, indent))
