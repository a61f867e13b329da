"""List marker classifier mixin."""

from __future__ import annotations

from turbomd.errors import UnsupportedConstructError
from turbomd.events import (
    BULLET_MARKERS,
    BlockEvent,
    CodeBlockEvent,
    ListItemStartEvent,
    ListKind,
    text_line,
)
from turbomd.location import SourceLocation
from turbomd.tokens import InlineToken

LIST_MARKER = "-"
CHECKED = "[x]"
UNCHECKED = "[ ]"


def is_marker_suffix(suffix: str) -> bool:
    """Whether ``suffix`` is shaped like a list subtype.

    Digits, a bullet marker or any single letter qualify; unknown letters
    are rejected later by ``ListKind.from_marker``.
    """
    if suffix in BULLET_MARKERS:
        return True
    if suffix.isascii() and suffix.isdigit():
        return True
    return len(suffix) == 1 and suffix.isalpha()


class ListClassifierMixin:
    """Mixin providing list item marker classification."""

    def _location(self, lineno: int, indent: int) -> SourceLocation:
        """Build an event location. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_logical_line(self, content: str) -> tuple[InlineToken, ...]:
        """Scan inline content, joining broken lines. Implemented by Lexer."""
        raise NotImplementedError

    def _try_classify_fence(
        self, content: str, lineno: int, indent: int | None
    ) -> CodeBlockEvent | None:
        """Classify a code fence. Implemented by FenceClassifierMixin."""
        raise NotImplementedError

    def _try_classify_list_item(
        self, content: str, lineno: int, indent: int
    ) -> ListItemStartEvent | None:
        """Try to classify content as a list item marker line.

        Markers: ``-`` unordered, ``-o``/``-*``/``-+``/``-.`` unordered with
        a circle, disc, square or no bullet, ``-N`` numbered from N,
        ``-a``/``-A`` alphabetic, ``-i``/``-I`` roman, each followed by a
        space or the end of the line. An optional ``[x]``/``[ ]`` check
        follows. The rest of the line is the item's first content: a code
        fence or a text line.

        Raises:
            UnsupportedConstructError: A one-letter subtype that is not known.
        """
        if not content.startswith(LIST_MARKER):
            return None

        space = content.find(" ")
        marker = content if space == -1 else content[:space]
        suffix = marker[len(LIST_MARKER) :].rstrip()
        if not is_marker_suffix(suffix):
            return None

        location = self._location(lineno, indent)
        try:
            kind = ListKind.from_marker(suffix)
        except UnsupportedConstructError as exc:
            raise UnsupportedConstructError.at(exc.message, location) from None

        rest = "" if space == -1 else content[space + 1 :]
        checked: bool | None = None
        if rest.startswith((CHECKED, UNCHECKED)):
            checked = rest.startswith(CHECKED)
            rest = rest[len(CHECKED) :]
            if rest.startswith(" "):
                rest = rest[1:]

        first: BlockEvent | None = self._try_classify_fence(rest, lineno, None)
        if first is None:
            first = text_line(0, self._scan_logical_line(rest))
        return ListItemStartEvent(
            indent=indent,
            kind=kind,
            checked=checked,
            first_content=(first,),
            location=location,
        )
