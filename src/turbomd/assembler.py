"""Block tree assembly.

Consumes the flat block-event stream and builds the nested document tree,
resolving indentation scopes and list nesting.

Every step looks at the event under the cursor inside a scope
``(governing indent, optional ListScope)`` and either consumes it, producing
one node and the next cursor, or declines it, leaving the cursor where it
was so the enclosing scope can deal with the event.

A list item marker opens a nested scope: the item collects following events
until one is declined, and sibling items of the same list are folded into
the scope at most ``_SIBLING_FOLD_LIMIT`` deep before the scope is forced to
hand them back. The enclosing call then splits the collected nodes into the
first item's children and the sibling items that followed it.

Nested scopes are suspended generators on an explicit work stack rather than
native recursion, so deeply nested lists do not hit the interpreter's
recursion limit.

Thread Safety:
``assemble`` keeps all state in local variables; independent documents can
be assembled concurrently.

"""

from __future__ import annotations

from collections.abc import Generator, Sequence
from dataclasses import dataclass
from typing import Final

from turbomd.errors import StructuralError
from turbomd.events import (
    BlankEvent,
    BlockEvent,
    CodeBlockEvent,
    HeadingEvent,
    HorizontalRuleEvent,
    IncludeEvent,
    ListItemStartEvent,
    ListKind,
    TextLineEvent,
)
from turbomd.inline import resolve
from turbomd.nodes import (
    Blank,
    Block,
    CodeBlock,
    Heading,
    HorizontalRule,
    IncludeRef,
    List,
    ListItem,
    Paragraph,
    Root,
)
from turbomd.tokens import SPACE, InlineToken
from turbomd.utils.logger import get_logger

logger = get_logger(__name__)

# A same-indent item seen by a scope whose counter exceeds this is handed back.
_SIBLING_FOLD_LIMIT: Final = 1


@dataclass(frozen=True, slots=True)
class ListScope:
    """Active list inside a scope: its kind and the sibling fold counter."""

    kind: ListKind
    depth_counter: int


@dataclass(frozen=True, slots=True)
class Consumed:
    """The event was taken: ``node`` was built and assembly resumes at ``end``."""

    node: Block
    end: int


@dataclass(frozen=True, slots=True)
class Declined:
    """The event belongs to an enclosing scope; the cursor did not move."""


DECLINED: Final = Declined()

type Step = Consumed | Declined


@dataclass(frozen=True, slots=True)
class _Scope:
    """A request to assemble ``events[cursor]`` inside a nested scope."""

    events: Sequence[BlockEvent]
    cursor: int
    governing: int
    list_scope: ListScope | None


type _Frame = Generator[_Scope, Step, Step]


def assemble(events: Sequence[BlockEvent]) -> Root:
    """Assemble block events into a document tree.

    Args:
        events: Block events in source order

    Returns:
        Root node whose children preserve source order

    Raises:
        StructuralError: The stream violates an assembly invariant, such as an
            indented text line that no enclosing list owns.

    Example:
        >>> assemble([])
        Root(children=())
    """
    children: list[Block] = []
    cursor = 0
    while cursor < len(events):
        step = _run(_Scope(events, cursor, 0, None))
        if not isinstance(step, Consumed):
            event = events[cursor]
            raise StructuralError.at(
                f"{type(event).__name__} at indent {_indent_of(event)} "
                "is not inside any list",
                event.location,
            )
        children.append(step.node)
        cursor = step.end

    logger.debug("Assembled %d events into %d top-level nodes", len(events), len(children))
    return Root(tuple(children))


def _run(request: _Scope) -> Step:
    """Evaluate a scope request, driving nested scopes on an explicit stack."""
    stack: list[_Frame] = [_step(request)]
    reply: Step | None = None
    while True:
        try:
            if reply is None:
                nested = next(stack[-1])
            else:
                nested = stack[-1].send(reply)
        except StopIteration as done:
            stack.pop()
            reply = done.value
            if not stack:
                return reply
            continue
        stack.append(_step(nested))
        reply = None


def _step(scope: _Scope) -> _Frame:
    """Assemble the event under the cursor; nested scopes are yielded."""
    events, cursor, governing, list_scope = (
        scope.events,
        scope.cursor,
        scope.governing,
        scope.list_scope,
    )
    event = events[cursor]
    in_list = list_scope is not None

    match event:
        case HeadingEvent(indent=indent, level=level, tokens=tokens):
            if in_list and indent <= governing:
                return DECLINED
            return Consumed(Heading(level, resolve(tokens)), cursor + 1)

        case TextLineEvent(indent=indent):
            if in_list:
                if indent <= governing:
                    return DECLINED
            elif indent != governing:
                return DECLINED
            return _merge_paragraph(events, cursor)

        case ListItemStartEvent():
            return (yield from _list_item(scope, event))

        case CodeBlockEvent(indent=indent, lang=lang, body=body):
            if in_list and indent is not None and indent <= governing:
                return DECLINED
            return Consumed(CodeBlock(lang, body), cursor + 1)

        case IncludeEvent(indent=indent, path=path):
            if in_list and indent <= governing:
                return DECLINED
            return Consumed(IncludeRef(path), cursor + 1)

        case HorizontalRuleEvent():
            return Consumed(HorizontalRule(), cursor + 1)

        case BlankEvent():
            return Consumed(Blank(), cursor + 1)

        case _:
            msg = f"Unknown block event: {event!r}"
            raise StructuralError(msg)


def _merge_paragraph(events: Sequence[BlockEvent], cursor: int) -> Consumed:
    """Merge the text line at ``cursor`` with every following same-indent line."""
    first = events[cursor]
    assert isinstance(first, TextLineEvent)
    tokens: list[InlineToken] = list(first.tokens)
    end = cursor + 1
    while end < len(events):
        following = events[end]
        if not isinstance(following, TextLineEvent) or following.indent != first.indent:
            break
        tokens.append(SPACE)
        tokens.extend(following.tokens)
        end += 1
    return Consumed(Paragraph(resolve(tokens)), end)


def _list_item(scope: _Scope, event: ListItemStartEvent) -> _Frame:
    """Assemble a list item marker and everything its scope owns."""
    indent, kind = event.indent, event.kind
    outer = scope.list_scope

    if outer is not None:
        if indent < scope.governing:
            return DECLINED
        if indent == scope.governing and (
            outer.depth_counter > _SIBLING_FOLD_LIMIT or outer.kind != kind
        ):
            return DECLINED

    if not event.first_content:
        raise StructuralError.at("List item without content", event.location)
    collected: list[Block] = []
    pos = 0
    while pos < len(event.first_content):
        first = yield _Scope(event.first_content, pos, 0, None)
        if not isinstance(first, Consumed):
            raise StructuralError.at("List item content was declined", event.location)
        collected.append(first.node)
        pos = first.end

    same_list = outer is not None and indent == scope.governing and outer.kind == kind
    counter = outer.depth_counter if same_list and outer is not None else 0
    inner = ListScope(kind, counter + 1)

    cursor = scope.cursor + 1
    while cursor < len(scope.events):
        step = yield _Scope(scope.events, cursor, indent, inner)
        if not isinstance(step, Consumed):
            break
        collected.append(step.node)
        cursor = step.end

    if outer is not None and indent == scope.governing:
        return Consumed(ListItem(event.checked, tuple(collected)), cursor)

    split = 0
    while split < len(collected) and not isinstance(collected[split], ListItem):
        split += 1
    first_item = ListItem(event.checked, tuple(collected[:split]))
    siblings = _sibling_items(collected[split:], event)
    return Consumed(List(kind, (first_item, *siblings)), cursor)


def _sibling_items(nodes: Sequence[Block], event: ListItemStartEvent) -> tuple[ListItem, ...]:
    """Check that everything after the first item is itself an item."""
    items: list[ListItem] = []
    for node in nodes:
        if not isinstance(node, ListItem):
            raise StructuralError.at(
                f"{type(node).__name__} between sibling list items", event.location
            )
        items.append(node)
    return tuple(items)


def _indent_of(event: BlockEvent) -> int | None:
    return getattr(event, "indent", None)


__all__ = [
    "DECLINED",
    "Consumed",
    "Declined",
    "ListScope",
    "Step",
    "assemble",
]
