"""Inline span resolution.

Turns the flat inline token run of a line (or of a merged paragraph) into a
tree of spans. Modifier flags toggle: a flag whose kind is not open opens a
nested ``Modifier``; a flag whose kind is already open closes the current
nesting level.

The set of open kinds is a frozenset handed down the recursion, never shared
state, so every call to ``resolve`` is independent. Recursion depth is
bounded by the number of modifier kinds.

Example:
    >>> from turbomd.tokens import ModifierFlag, ModifierKind, TextToken
    >>> bold = ModifierFlag(ModifierKind.BOLD)
    >>> resolve([bold, TextToken("bold"), bold])
    Container(children=(Modifier(kind=<ModifierKind.BOLD: '*'>, children=(Text(content='bold'),)),))

"""

from __future__ import annotations

from collections.abc import Sequence

from turbomd.nodes import Break, Container, Link, Modifier, Span, Text
from turbomd.tokens import (
    BreakToken,
    InlineToken,
    LinkToken,
    ModifierFlag,
    ModifierKind,
    TextToken,
)

_NOTHING_OPEN: frozenset[ModifierKind] = frozenset()


def resolve(tokens: Sequence[InlineToken]) -> Container:
    """Resolve an inline token run into a span tree.

    Unterminated modifiers close silently at end of input.

    Args:
        tokens: Inline tokens of one logical line or merged paragraph

    Returns:
        Container holding the top-level spans
    """
    children, _ = _resolve_level(tokens, 0, _NOTHING_OPEN)
    return Container(tuple(children))


def _resolve_level(
    tokens: Sequence[InlineToken],
    pos: int,
    open_kinds: frozenset[ModifierKind],
) -> tuple[list[Span], int]:
    """Collect spans from ``pos`` until a closing flag or end of input.

    Returns the collected spans and the position just past the closing flag
    (or ``len(tokens)``).
    """
    spans: list[Span] = []
    while pos < len(tokens):
        token = tokens[pos]
        match token:
            case TextToken(text=text):
                spans.append(Text(text))
            case BreakToken():
                spans.append(Break())
            case LinkToken(alias=alias, target=target):
                spans.append(Link(target=target, alias=alias))
            case ModifierFlag(kind=kind):
                if kind in open_kinds:
                    return spans, pos + 1
                inner, pos = _resolve_level(tokens, pos + 1, open_kinds | {kind})
                spans.append(Modifier(kind, tuple(inner)))
                continue
            case _:
                msg = f"Not an inline token: {token!r}"
                raise TypeError(msg)
        pos += 1
    return spans, pos


def flatten(span: Span) -> list[InlineToken]:
    """Turn a span tree back into an inline token run.

    Every modifier is emitted with an explicit closing flag, so
    ``resolve(flatten(resolve(tokens)))`` equals ``resolve(tokens)`` in shape
    and leaf text.
    """
    out: list[InlineToken] = []
    _flatten_into(span, out)
    return out


def _flatten_into(span: Span, out: list[InlineToken]) -> None:
    match span:
        case Container(children=children):
            for child in children:
                _flatten_into(child, out)
        case Modifier(kind=kind, children=children):
            out.append(ModifierFlag(kind))
            for child in children:
                _flatten_into(child, out)
            out.append(ModifierFlag(kind))
        case Text(content=content):
            out.append(TextToken(content))
        case Break():
            out.append(BreakToken())
        case Link(target=target, alias=alias):
            out.append(LinkToken(alias=alias, target=target))
        case _:
            msg = f"Not an inline span: {span!r}"
            raise TypeError(msg)


def plain_text(span: Span) -> str:
    """Concatenate the visible text of a span tree (link alias or target)."""
    match span:
        case Container(children=children) | Modifier(children=children):
            return "".join(plain_text(child) for child in children)
        case Text(content=content):
            return content
        case Link(target=target, alias=alias):
            return alias if alias is not None else target
        case _:
            return ""


__all__ = ["flatten", "plain_text", "resolve"]
