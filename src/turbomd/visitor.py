"""Tree visitor and immutable transform for turbomd documents.

Example, collecting all headings:

    class HeadingCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.headings: list[Heading] = []

        def visit_heading(self, node: Heading) -> None:
            self.headings.append(node)

    collector = HeadingCollector()
    collector.visit(root)

Example, demoting headings:

    def demote(node: Node) -> Node:
        if isinstance(node, Heading):
            return dataclasses.replace(node, level=min(node.level + 1, 6))
        return node

    new_root = transform(root, demote)

Thread Safety:
    Visitors may accumulate state; create one per thread. ``transform`` is
    pure.

"""

import dataclasses
from collections.abc import Callable

from turbomd.nodes import (
    Blank,
    Break,
    CodeBlock,
    Container,
    Heading,
    HorizontalRule,
    IncludeRef,
    Link,
    List,
    ListItem,
    Modifier,
    Node,
    Paragraph,
    Root,
    Text,
)


class BaseVisitor[T]:
    """Base visitor with match-based dispatch.

    Override ``visit_*`` for the node types you care about; everything else
    goes to ``visit_default``. Children (block children, list items, and the
    inline spans of paragraphs and headings) are walked automatically after
    the ``visit_*`` call.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the matching ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_root(self, node: Root) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_list(self, node: List) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: ListItem) -> T:
        return self.visit_default(node)

    def visit_code_block(self, node: CodeBlock) -> T:
        return self.visit_default(node)

    def visit_horizontal_rule(self, node: HorizontalRule) -> T:
        return self.visit_default(node)

    def visit_blank(self, node: Blank) -> T:
        return self.visit_default(node)

    def visit_include_ref(self, node: IncludeRef) -> T:
        return self.visit_default(node)

    # -- Span visitors ---------------------------------------------------------

    def visit_container(self, node: Container) -> T:
        return self.visit_default(node)

    def visit_modifier(self, node: Modifier) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_break(self, node: Break) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        match node:
            case Root():
                return self.visit_root(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case Heading():
                return self.visit_heading(node)
            case List():
                return self.visit_list(node)
            case ListItem():
                return self.visit_list_item(node)
            case CodeBlock():
                return self.visit_code_block(node)
            case HorizontalRule():
                return self.visit_horizontal_rule(node)
            case Blank():
                return self.visit_blank(node)
            case IncludeRef():
                return self.visit_include_ref(node)
            case Container():
                return self.visit_container(node)
            case Modifier():
                return self.visit_modifier(node)
            case Link():
                return self.visit_link(node)
            case Text():
                return self.visit_text(node)
            case Break():
                return self.visit_break(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        for child in children_of(node):
            self.visit(child)


def children_of(node: Node) -> tuple[Node, ...]:
    """Direct children of ``node`` in document order (empty for leaves)."""
    match node:
        case Root(children=children) | ListItem(children=children):
            return children
        case List(items=items):
            return items
        case Paragraph(inline=inline) | Heading(inline=inline):
            return (inline,)
        case Container(children=children) | Modifier(children=children):
            return children
        case _:
            return ()


def transform(root: Root, fn: Callable[[Node], Node | None]) -> Root:
    """Apply ``fn`` to every node bottom-up, returning a new tree.

    ``fn`` receives each node after its children were transformed. Return
    ``None`` to remove a node. The root cannot be removed; returning None for
    it raises TypeError. Removing a paragraph's or heading's inline container
    is not possible either, since those nodes require one.

    Args:
        root: The document to transform.
        fn: Function returning a (possibly new) node, or None to drop it.

    Returns:
        A new Root with the transformation applied.

    """
    result = _transform_node(root, fn)
    if not isinstance(result, Root):
        msg = "transform fn must return a Root for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    return fn(_transform_children(node, fn))


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node:
    def _filtered(children: tuple[Node, ...]) -> tuple[Node, ...]:
        return tuple(
            result for c in children
            if (result := _transform_node(c, fn)) is not None
        )

    match node:
        case Root(children=children) | ListItem(children=children) | Container(
            children=children
        ) | Modifier(children=children):
            new_children = _filtered(children)
            if new_children != children:
                return dataclasses.replace(node, children=new_children)
        case List(items=items):
            new_items = _filtered(items)
            if new_items != items:
                return dataclasses.replace(node, items=new_items)
        case Paragraph(inline=inline) | Heading(inline=inline):
            new_inline = _transform_node(inline, fn)
            if new_inline is None:
                msg = f"Cannot remove the inline container of {type(node).__name__}"
                raise TypeError(msg)
            if new_inline != inline:
                return dataclasses.replace(node, inline=new_inline)
        case _:
            pass  # Leaf nodes: return as-is

    return node


__all__ = ["BaseVisitor", "children_of", "transform"]
