"""Source positions attached to block events.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Where a block event started in the source text.

    All positions are 1-indexed. The location only feeds error messages; the
    assembler never looks at it.

    Attributes:
        lineno: Line number of the event's first physical line
        col_offset: Column of the first non-indent character
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(lineno=3, col_offset=5, source_file="intro.tmd")
            >>> str(loc)
            'intro.tmd:3:5'

    """

    lineno: int
    col_offset: int = 1
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.tmd:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Placeholder for synthetic events."""
        return cls(lineno=0, col_offset=0)
