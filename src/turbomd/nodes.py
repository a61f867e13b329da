"""Document tree: typed block nodes and inline spans.

All nodes are frozen dataclasses with slots, child sequences are tuples.
Once assembled, a tree is never mutated; rewriting passes (include
resolution, ``visitor.transform``) build new trees.

Node Hierarchy:
Block
├── Root
├── Paragraph
├── Heading
├── List
├── ListItem
├── CodeBlock
├── HorizontalRule
├── Blank
└── IncludeRef
Span
├── Container
├── Modifier
├── Link
├── Text
└── Break

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

from turbomd.events import CodeLang, ListKind
from turbomd.tokens import ModifierKind

# =============================================================================
# Inline spans
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text:
    """Plain text leaf."""

    content: str


@dataclass(frozen=True, slots=True)
class Break:
    """Explicit line break leaf."""


@dataclass(frozen=True, slots=True)
class Link:
    """Hyperlink leaf. The alias is plain text and is not resolved further."""

    target: str
    alias: str | None = None


@dataclass(frozen=True, slots=True)
class Modifier:
    """A formatted region opened and closed by the same marker."""

    kind: ModifierKind
    children: tuple[Span, ...]


@dataclass(frozen=True, slots=True)
class Container:
    """Top-level span of one resolved token run."""

    children: tuple[Span, ...] = ()


type Span = Container | Modifier | Link | Text | Break


# =============================================================================
# Blocks
# =============================================================================


@dataclass(frozen=True, slots=True)
class Paragraph:
    inline: Container


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    inline: Container


@dataclass(frozen=True, slots=True)
class ListItem:
    """One list entry.

    ``checked`` is None for a plain item and a bool for a checklist item.
    Children may contain nested lists next to any other block.
    """

    checked: bool | None
    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class List:
    kind: ListKind
    items: tuple[ListItem, ...]


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Verbatim code; the body never receives inline interpretation."""

    lang: CodeLang
    body: str


@dataclass(frozen=True, slots=True)
class HorizontalRule:
    pass


@dataclass(frozen=True, slots=True)
class Blank:
    pass


@dataclass(frozen=True, slots=True)
class IncludeRef:
    """Unresolved reference to another document.

    Must be substituted by ``turbomd.includes.resolve_includes`` before
    rendering; renderers refuse it.
    """

    path: str


@dataclass(frozen=True, slots=True)
class Root:
    children: tuple[Block, ...] = ()


type Block = (
    Root
    | Paragraph
    | Heading
    | List
    | ListItem
    | CodeBlock
    | HorizontalRule
    | Blank
    | IncludeRef
)

type Node = Block | Span

#: Classes of every block node, for isinstance checks.
BLOCK_TYPES: tuple[type, ...] = (
    Root,
    Paragraph,
    Heading,
    List,
    ListItem,
    CodeBlock,
    HorizontalRule,
    Blank,
    IncludeRef,
)

#: Classes of every inline span.
SPAN_TYPES: tuple[type, ...] = (Container, Modifier, Link, Text, Break)


__all__ = [
    "BLOCK_TYPES",
    "SPAN_TYPES",
    "Blank",
    "Block",
    "Break",
    "CodeBlock",
    "Container",
    "Heading",
    "HorizontalRule",
    "IncludeRef",
    "Link",
    "List",
    "ListItem",
    "Modifier",
    "Node",
    "Paragraph",
    "Root",
    "Span",
    "Text",
]
