"""Tests for tree serialization and the indented dump."""

import json

import pytest

from turbomd import parse
from turbomd.events import CodeLang, Lang, ListKind, ListStyle
from turbomd.nodes import CodeBlock, Container, List, ListItem, Modifier, Paragraph, Root, Text
from turbomd.serialization import dump, from_dict, from_json, to_dict, to_json
from turbomd.tokens import ModifierKind

SOURCE = """# Title *bold*

-2 [x] first [link](https://x.org)
  - nested _cursive_\\
    more
-2 second
::: python
print("hi")
:::
---
@[other]
"""


class TestJsonRoundTrip:
    def test_round_trip_preserves_tree(self) -> None:
        root = parse(SOURCE)
        assert from_json(to_json(root)) == root

    def test_output_is_deterministic(self) -> None:
        root = parse(SOURCE)
        assert to_json(root) == to_json(parse(SOURCE))
        assert json.loads(to_json(root, indent=2)) == json.loads(to_json(root))

    def test_values_are_tagged(self) -> None:
        data = to_dict(List(ListKind(ListStyle.NUMBERED, 2), ()))
        assert data == {
            "_type": "List",
            "kind": {
                "_type": "ListKind",
                "style": {"_type": "ListStyle", "name": "NUMBERED"},
                "start": 2,
            },
            "items": [],
        }

    def test_modifier_kind(self) -> None:
        node = Modifier(ModifierKind.STRIKE, (Text("x"),))
        assert from_dict(to_dict(node)) == node

    def test_from_json_requires_root(self) -> None:
        with pytest.raises(ValueError, match="Expected Root"):
            from_json(json.dumps(to_dict(Text("x"))))

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="_type"):
            from_dict({"content": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type"):
            from_dict({"_type": "Table"})

    def test_unknown_enum_member(self) -> None:
        data = to_dict(Modifier(ModifierKind.BOLD, ()))
        data["kind"]["name"] = "UNDERLINE"
        with pytest.raises(ValueError, match="UNDERLINE"):
            from_dict(data)


class TestDump:
    def test_two_space_indent(self) -> None:
        root = Root((Paragraph(Container((Modifier(ModifierKind.BOLD, (Text("hi"),)),))),))
        assert dump(root) == (
            "Root\n"
            "  Paragraph\n"
            "    Container\n"
            "      Modifier BOLD\n"
            "        Text 'hi'\n"
        )

    def test_lists_and_code(self) -> None:
        lang = CodeLang(Lang.CPP, "c++")
        root = Root(
            (
                List(
                    ListKind(ListStyle.NUMBERED, 3),
                    (ListItem(False, (CodeBlock(lang, "int a;\nint b;\n"),)),),
                ),
            )
        )
        assert dump(root) == (
            "Root\n"
            "  List Numbered: 3\n"
            "    ListItem checked=False\n"
            "      CodeBlock c++\n"
            "        | int a;\n"
            "        | int b;\n"
        )

    def test_every_node_is_named(self) -> None:
        text = dump(parse(SOURCE))
        for name in ("Heading 1", "List Numbered: 2", "Link 'https://x.org' 'link'",
                     "Break", "CodeBlock python", "HorizontalRule", "Blank",
                     "IncludeRef 'other'", "Modifier CURSIVE"):
            assert name in text


def test_dump_handles_deep_nesting() -> None:
    depth = 1500
    source = "\n".join(" " * level + f"- level {level}" for level in range(depth))
    lines = dump(parse(source)).splitlines()
    assert lines[0] == "Root"
    assert lines[-1] == "  " * (2 * depth + 3) + f"Text 'level {depth - 1}'"
