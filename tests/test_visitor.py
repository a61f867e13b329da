"""Tests for the tree visitor and transform utilities."""

import dataclasses

import pytest

from turbomd import parse
from turbomd.nodes import (
    Blank,
    Container,
    Heading,
    Link,
    List,
    Modifier,
    Node,
    Paragraph,
    Root,
    Text,
)
from turbomd.visitor import BaseVisitor, children_of, transform


class NodeCollector(BaseVisitor[None]):
    """Collects all visited node type names."""

    def __init__(self) -> None:
        self.visited: list[str] = []

    def visit_default(self, node) -> None:  # type: ignore[override]
        self.visited.append(type(node).__name__)


class TestVisitorDispatch:
    def test_walks_whole_tree_in_document_order(self) -> None:
        collector = NodeCollector()
        collector.visit(parse("# H\n- *a*\n---"))
        assert collector.visited == [
            "Root",
            "Heading",
            "Container",
            "Text",
            "List",
            "ListItem",
            "Paragraph",
            "Container",
            "Modifier",
            "Text",
            "HorizontalRule",
        ]

    def test_specific_visitor_overrides_default(self) -> None:
        class LinkCollector(BaseVisitor[None]):
            def __init__(self) -> None:
                self.targets: list[str] = []

            def visit_link(self, node: Link) -> None:
                self.targets.append(node.target)

        collector = LinkCollector()
        collector.visit(parse("[a](x)\n- [b](y)"))
        assert collector.targets == ["x", "y"]

    def test_visit_returns_dispatch_result(self) -> None:
        class Namer(BaseVisitor[str]):
            def visit_default(self, node: Node) -> str:
                return type(node).__name__

        assert Namer().visit(Blank()) == "Blank"

    def test_children_of_leaves(self) -> None:
        assert children_of(Text("x")) == ()
        assert children_of(Blank()) == ()


class TestTransform:
    def test_identity_returns_equal_tree(self) -> None:
        root = parse("# H\n- a\n  - b")
        assert transform(root, lambda node: node) == root

    def test_rewrite_text(self) -> None:
        def shout(node: Node) -> Node:
            if isinstance(node, Text):
                return Text(node.content.upper())
            return node

        root = transform(parse("- *quiet*"), shout)
        (lst,) = root.children
        assert isinstance(lst, List)
        paragraph = lst.items[0].children[0]
        assert paragraph == Paragraph(
            Container((Modifier(paragraph.inline.children[0].kind, (Text("QUIET"),)),))
        )

    def test_demote_headings(self) -> None:
        def demote(node: Node) -> Node:
            if isinstance(node, Heading):
                return dataclasses.replace(node, level=min(node.level + 1, 6))
            return node

        root = transform(parse("# a\n###### b"), demote)
        assert [node.level for node in root.children] == [2, 6]

    def test_remove_blocks(self) -> None:
        root = transform(parse("a\n\nb"), lambda node: None if isinstance(node, Blank) else node)
        assert [type(node) for node in root.children] == [Paragraph, Paragraph]

    def test_remove_list_items(self) -> None:
        def drop_checked(node: Node) -> Node | None:
            if getattr(node, "checked", None) is True:
                return None
            return node

        root = transform(parse("- [x] done\n- [ ] todo"), drop_checked)
        (lst,) = root.children
        assert [item.checked for item in lst.items] == [False]

    def test_removing_root_is_an_error(self) -> None:
        with pytest.raises(TypeError, match="cannot remove root"):
            transform(parse("x"), lambda node: None if isinstance(node, Root) else node)

    def test_removing_inline_container_is_an_error(self) -> None:
        with pytest.raises(TypeError, match="inline container"):
            transform(parse("x"), lambda node: None if isinstance(node, Container) else node)

    def test_input_tree_is_unchanged(self) -> None:
        root = parse("a")
        transform(root, lambda node: Text("changed") if isinstance(node, Text) else node)
        assert root.children[0] == Paragraph(Container((Text("a"),)))
