"""Line-oriented lexer producing block events.

Scans one line at a time, classifies it, then commits past it (plus any
continuation lines or code body it owns). Every line produces exactly one
event; the lexer never rewinds.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from turbomd.errors import UnterminatedConstructError
from turbomd.events import BlankEvent, BlockEvent, TextLineEvent
from turbomd.lexer.classifiers import (
    FenceClassifierMixin,
    HeadingClassifierMixin,
    IncludeClassifierMixin,
    ListClassifierMixin,
    ThematicClassifierMixin,
)
from turbomd.lexer.classifiers.fence import FENCE
from turbomd.lexer.inline import scan_inline
from turbomd.location import SourceLocation
from turbomd.tokens import InlineToken


class Lexer(
    # FenceClassifierMixin first: ListClassifierMixin only stubs _try_classify_fence.
    FenceClassifierMixin,
    ThematicClassifierMixin,
    HeadingClassifierMixin,
    IncludeClassifierMixin,
    ListClassifierMixin,
):
    """Classify ``.tmd`` source into block events.

    Classifiers are tried in order: blank, horizontal rule, code fence,
    heading, include, list item; anything else is a text line.

    Usage:
            >>> lexer = Lexer("# Hello\\n\\nWorld")
            >>> [type(event).__name__ for event in lexer.tokenize()]
            ['HeadingEvent', 'BlankEvent', 'TextLineEvent']

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = ("_lines", "_index", "_source_file")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize lexer with source text.

        Args:
            source: Document source text
            source_file: Optional source file path for error messages
        """
        self._lines = split_lines(source)
        self._index = 0
        self._source_file = source_file

    def tokenize(self) -> Iterator[BlockEvent]:
        """Yield one block event per logical line.

        Raises:
            UnterminatedConstructError: A code fence is never closed.
            UnsupportedConstructError: A construct subtype is not recognised.
        """
        while self._index < len(self._lines):
            yield self._classify_next_line()

    def _classify_next_line(self) -> BlockEvent:
        lineno = self._index + 1
        line = self._lines[self._index]
        self._index += 1

        if not line.strip():
            return BlankEvent(location=self._location(lineno, 0))

        content = line.lstrip(" ")
        indent = len(line) - len(content)

        classifiers: tuple[Callable[[str, int, int], BlockEvent | None], ...] = (
            self._try_classify_horizontal_rule,
            self._try_classify_fence,
            self._try_classify_heading,
            self._try_classify_include,
            self._try_classify_list_item,
        )
        for classify in classifiers:
            event = classify(content, lineno, indent)
            if event is not None:
                return event

        return TextLineEvent(
            indent=indent,
            tokens=self._scan_logical_line(content),
            location=self._location(lineno, indent),
        )

    # =========================================================================
    # Helpers used by the classifier mixins
    # =========================================================================

    def _location(self, lineno: int, indent: int) -> SourceLocation:
        return SourceLocation(
            lineno=lineno,
            col_offset=indent + 1,
            source_file=self._source_file,
        )

    def _scan_logical_line(self, content: str) -> tuple[InlineToken, ...]:
        """Scan ``content`` plus every physical line joined by a trailing ``\\``."""
        text = content
        while _ends_with_break(text) and self._index < len(self._lines):
            text = f"{text}\n{self._lines[self._index]}"
            self._index += 1
        return scan_inline(text)

    def _scan_fence_body(self, location: SourceLocation) -> str:
        """Consume body lines and the closing fence; return the body verbatim."""
        body: list[str] = []
        while self._index < len(self._lines):
            line = self._lines[self._index]
            self._index += 1
            if line.strip() == FENCE:
                return "".join(f"{body_line}\n" for body_line in body)
            body.append(line)
        raise UnterminatedConstructError.at(
            "Code block is never closed with ':::'", location
        )


def _ends_with_break(text: str) -> bool:
    """Whether ``text`` ends in an odd run of backslashes (a line break)."""
    trailing = len(text) - len(text.rstrip("\\"))
    return trailing % 2 == 1


def split_lines(source: str) -> list[str]:
    """Split ``source`` into physical lines at ``\\n`` only.

    Other Unicode line separators (form feed, U+2028, ...) are ordinary
    characters. One trailing ``\\r`` per line is dropped and a final newline
    is implied.

    Example:
        >>> split_lines("a\\r\\nb\\x0cc\\n")
        ['a', 'b\\x0cc']
    """
    lines = [line.removesuffix("\r") for line in source.split("\n")]
    if lines[-1] == "":
        lines.pop()
    return lines
