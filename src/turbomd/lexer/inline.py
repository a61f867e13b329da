"""Inline scanner: one logical line of text to a flat inline token run.

Grammar:
- ``*`` ``_`` ``~`` `````: modifier flags (bold, cursive, strike, code)
- ``[alias](target)``: link; an empty alias becomes None
- ``\\*`` ``\\_`` ``\\~`` ``\\``` ``\\-`` ``\\[`` ``\\\\``: the literal character
- ``\\{raw text}``: raw text, nothing inside is interpreted
- backslash at end of a physical line: line break
- anything else: plain text

Unmatched link brackets and unknown escapes are kept as plain text.
Adjacent plain text (escapes and raw runs included) is merged into one token.

Thread Safety:
``scan_inline`` is a pure function.

"""

from __future__ import annotations

from turbomd.tokens import (
    MODIFIER_CHARS,
    BreakToken,
    InlineToken,
    LinkToken,
    ModifierFlag,
    ModifierKind,
    TextToken,
)

ESCAPABLE_CHARS = frozenset("*_~`-[\\")


def scan_inline(text: str) -> tuple[InlineToken, ...]:
    """Scan inline text into tokens.

    Args:
        text: Logical line content; physical lines are joined by ``"\\n"``
            right after the breaking backslash

    Returns:
        Tuple of inline tokens

    Example:
        >>> scan_inline("a *b*")
        (TextToken(text='a '), ModifierFlag(kind=<ModifierKind.BOLD: '*'>), TextToken(text='b'), ModifierFlag(kind=<ModifierKind.BOLD: '*'>))
    """
    tokens: list[InlineToken] = []
    plain: list[str] = []

    def flush() -> None:
        if plain:
            tokens.append(TextToken("".join(plain)))
            plain.clear()

    pos = 0
    length = len(text)
    while pos < length:
        char = text[pos]

        if char in MODIFIER_CHARS:
            flush()
            tokens.append(ModifierFlag(ModifierKind(char)))
            pos += 1
            continue

        if char == "\\":
            nxt = text[pos + 1] if pos + 1 < length else "\n"
            if nxt == "\n":
                flush()
                tokens.append(BreakToken())
                pos += 2
            elif nxt == "{":
                close = text.find("}", pos + 2)
                newline = text.find("\n", pos + 2)
                if close == -1 or (newline != -1 and newline < close):
                    plain.append("\\{")
                    pos += 2
                else:
                    plain.append(text[pos + 2 : close])
                    pos = close + 1
            elif nxt in ESCAPABLE_CHARS:
                plain.append(nxt)
                pos += 2
            else:
                plain.append(char)
                pos += 1
            continue

        if char == "[":
            link = _scan_link(text, pos)
            if link is not None:
                token, pos = link
                flush()
                tokens.append(token)
                continue

        plain.append(char)
        pos += 1

    flush()
    return tuple(tokens)


def _scan_link(text: str, pos: int) -> tuple[LinkToken, int] | None:
    """Try ``[alias](target)`` at ``pos``; return the token and end position."""
    alias_end = _find_on_line(text, "]", pos + 1)
    if alias_end == -1 or not text.startswith("(", alias_end + 1):
        return None
    target_end = _find_on_line(text, ")", alias_end + 2)
    if target_end == -1:
        return None
    alias = text[pos + 1 : alias_end]
    target = text[alias_end + 2 : target_end]
    return LinkToken(alias=alias or None, target=target), target_end + 1


def _find_on_line(text: str, char: str, start: int) -> int:
    """Index of ``char`` before the next newline, or -1."""
    end = text.find(char, start)
    newline = text.find("\n", start)
    if newline != -1 and (end == -1 or newline < end):
        return -1
    return end


__all__ = ["ESCAPABLE_CHARS", "scan_inline"]
