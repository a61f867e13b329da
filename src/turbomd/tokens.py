"""Inline tokens produced by the lexer for text-bearing lines.

A text line is lexed into a flat run of inline tokens; the inline resolver
(``turbomd.inline``) turns the run into nested spans.

Thread Safety:
All tokens are frozen (immutable) and safe to share across threads.
ModifierKind is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ModifierKind(Enum):
    """Text modifiers; the value is the marker character."""

    BOLD = "*"
    CURSIVE = "_"
    STRIKE = "~"
    CODE = "`"


#: Characters that toggle a modifier.
MODIFIER_CHARS = frozenset(kind.value for kind in ModifierKind)


@dataclass(frozen=True, slots=True)
class TextToken:
    """A run of plain characters."""

    text: str


@dataclass(frozen=True, slots=True)
class BreakToken:
    """Explicit line break (backslash at end of line)."""


@dataclass(frozen=True, slots=True)
class ModifierFlag:
    """A modifier marker; toggles the modifier open or closed."""

    kind: ModifierKind


@dataclass(frozen=True, slots=True)
class LinkToken:
    """``[alias](target)``; an empty alias is stored as None."""

    alias: str | None
    target: str


type InlineToken = TextToken | BreakToken | ModifierFlag | LinkToken

#: Inserted between merged paragraph lines.
SPACE = TextToken(" ")


__all__ = [
    "MODIFIER_CHARS",
    "SPACE",
    "BreakToken",
    "InlineToken",
    "LinkToken",
    "ModifierFlag",
    "ModifierKind",
    "TextToken",
]
