"""Exception classes for turbomd.

Every failure aborts the document being processed; no partial tree or
partial HTML is ever returned.
"""

from __future__ import annotations

from turbomd.location import SourceLocation


class TurboError(Exception):
    """Base exception for all turbomd errors."""

    pass


class ParseError(TurboError):
    """Error while turning source text or block events into a tree.

    Carries an optional position so the CLI can point at the offending line.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")

    @classmethod
    def at(cls, message: str, location: SourceLocation | None) -> ParseError:
        """Build the error from an event's location (which may be missing)."""
        if location is None:
            return cls(message)
        return cls(
            message,
            lineno=location.lineno,
            col_offset=location.col_offset,
            source_file=location.source_file,
        )


class StructuralError(ParseError):
    """The event sequence violates an invariant the assembler relies on.

    Examples: a list item without any content, an indented text line that no
    enclosing list can own.
    """


class UnterminatedConstructError(ParseError):
    """A construct that must be closed was still open at end of input.

    Only code fences are affected; unterminated modifiers close silently.
    """


class UnsupportedConstructError(ParseError):
    """An unrecognised construct subtype, e.g. an unknown list marker."""


class IncludeError(TurboError):
    """An include could not be resolved (missing file, cycle, depth limit)."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Include '{path}': {message}")


class RenderError(TurboError):
    """Error during rendering.

    Raised when the renderer meets a node it must not render, such as an
    unresolved IncludeRef.
    """

    pass
