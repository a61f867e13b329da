"""Block events: the flat, indentation-annotated input of the assembler.

The lexer classifies every logical line into exactly one event. Events are
consumed once by ``turbomd.assembler.assemble`` and then discarded.

Indentation is the raw number of leading spaces. It is never normalised (no
tab width), and the assembler compares it by exact equality.

Thread Safety:
All events are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from turbomd.errors import UnsupportedConstructError
from turbomd.location import SourceLocation
from turbomd.tokens import InlineToken

# =============================================================================
# List kinds
# =============================================================================

#: Suffixes of the unordered list styles (the empty string is plain ``-``).
BULLET_MARKERS = frozenset({"", ".", "o", "*", "+"})


class ListStyle(Enum):
    """Marker subtypes of a list.

    The value is the marker suffix written after ``-`` (``"#"`` stands for a
    run of digits). Plain ``-`` leaves the bullet to the renderer; the other
    unordered styles pick one.
    """

    UNORDERED = ""
    NO_BULLET = "."
    CIRCLE = "o"
    DISC = "*"
    SQUARE = "+"
    NUMBERED = "#"
    ALPHA_LOWER = "a"
    ALPHA_UPPER = "A"
    ROMAN_LOWER = "i"
    ROMAN_UPPER = "I"

    @property
    def ordered(self) -> bool:
        return self.value not in BULLET_MARKERS


@dataclass(frozen=True, slots=True)
class ListKind:
    """Identity of a list: its style plus, for numbered lists, the start index.

    Two list items belong to the same list only if their kinds compare equal,
    so ``-1`` and ``-2`` open two separate numbered lists.
    """

    style: ListStyle
    start: int | None = None

    @classmethod
    def from_marker(cls, suffix: str) -> ListKind:
        """Build a kind from the text written between ``-`` and the space.

        Raises:
            UnsupportedConstructError: ``suffix`` names no known subtype.
        """
        if suffix.isascii() and suffix.isdigit():
            return cls(ListStyle.NUMBERED, int(suffix))
        try:
            style = ListStyle(suffix)
        except ValueError:
            msg = f"Unsupported list marker '-{suffix}'"
            raise UnsupportedConstructError(msg) from None
        if style is ListStyle.NUMBERED:
            msg = "Numbered list marker needs a start index"
            raise UnsupportedConstructError(msg)
        return cls(style)

    def __str__(self) -> str:
        if self.style is ListStyle.NUMBERED:
            return f"Numbered: {self.start}"
        return self.style.name.replace("_", " ").title()


UNORDERED = ListKind(ListStyle.UNORDERED)


# =============================================================================
# Code languages
# =============================================================================


class Lang(Enum):
    """Languages with dedicated handling; anything else is ``OTHER``."""

    TURBO = "turbo"
    KATEX = "katex"
    MERMAID = "mermaid"
    RUST = "rust"
    NIM = "nim"
    PYTHON = "python"
    C = "c"
    CPP = "cpp"
    OTHER = "other"


_LANG_ALIASES: dict[str, Lang] = {
    "turbo": Lang.TURBO,
    "katex": Lang.KATEX,
    "math": Lang.KATEX,
    "mermaid": Lang.MERMAID,
    "rust": Lang.RUST,
    "nim": Lang.NIM,
    "python": Lang.PYTHON,
    "c": Lang.C,
    "cpp": Lang.CPP,
    "c++": Lang.CPP,
}


@dataclass(frozen=True, slots=True)
class CodeLang:
    """Resolved language of a code block.

    ``tag`` keeps the text written on the fence, so ``OTHER`` languages can
    still be rendered with their own class name.
    """

    lang: Lang
    tag: str

    @classmethod
    def from_tag(cls, tag: str) -> CodeLang:
        tag = tag.strip()
        return cls(_LANG_ALIASES.get(tag, Lang.OTHER), tag)

    @property
    def css_class(self) -> str:
        if self.lang is Lang.OTHER:
            return self.tag
        return self.lang.value


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True, slots=True)
class HeadingEvent:
    indent: int
    level: int
    tokens: tuple[InlineToken, ...]
    location: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class TextLineEvent:
    indent: int
    tokens: tuple[InlineToken, ...]
    location: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class ListItemStartEvent:
    """Marker line of a list item.

    ``first_content`` holds the events written on the marker line itself,
    assembled in a fresh scope to form the item's first child.
    """

    indent: int
    kind: ListKind
    checked: bool | None
    first_content: tuple[BlockEvent, ...]
    location: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class CodeBlockEvent:
    """A fenced code block.

    ``indent`` is None for a fence that opens on a list marker line.
    """

    indent: int | None
    lang: CodeLang
    body: str
    location: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class IncludeEvent:
    indent: int
    path: str
    location: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class HorizontalRuleEvent:
    location: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class BlankEvent:
    location: SourceLocation | None = field(default=None, compare=False)


type BlockEvent = (
    HeadingEvent
    | TextLineEvent
    | ListItemStartEvent
    | CodeBlockEvent
    | IncludeEvent
    | HorizontalRuleEvent
    | BlankEvent
)


def text_line(indent: int, tokens: Sequence[InlineToken]) -> TextLineEvent:
    """Shorthand used by the lexer and by hand-built event streams."""
    return TextLineEvent(indent=indent, tokens=tuple(tokens))


__all__ = [
    "BULLET_MARKERS",
    "UNORDERED",
    "BlankEvent",
    "BlockEvent",
    "CodeBlockEvent",
    "CodeLang",
    "HeadingEvent",
    "HorizontalRuleEvent",
    "IncludeEvent",
    "Lang",
    "ListItemStartEvent",
    "ListKind",
    "ListStyle",
    "TextLineEvent",
    "text_line",
]
