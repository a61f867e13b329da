"""Tree serialization: JSON round-trip and a readable indented dump.

Converts typed tree nodes to/from JSON-compatible dicts. Useful for caching
parsed documents, comparing trees in tests, and the CLI's ``ast`` output.

All JSON output is deterministic (sorted keys).

Example:
    import turbomd
    from turbomd.serialization import to_json, from_json

    root = turbomd.parse("# Hello *World*")
    assert from_json(to_json(root)) == root

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

import json
from dataclasses import fields
from enum import Enum
from typing import Any

from turbomd.events import CodeLang, Lang, ListKind, ListStyle
from turbomd.lexer.core import split_lines
from turbomd.nodes import (
    BLOCK_TYPES,
    SPAN_TYPES,
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
from turbomd.stringbuilder import StringBuilder
from turbomd.tokens import ModifierKind
from turbomd.visitor import children_of

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {cls.__name__: cls for cls in (*BLOCK_TYPES, *SPAN_TYPES)}

_ENUM_TYPES: dict[str, type[Enum]] = {
    "ListStyle": ListStyle,
    "Lang": Lang,
    "ModifierKind": ModifierKind,
}

_DUMP_INDENT = "  "


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a tree node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Args:
        node: Any turbomd tree node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, BLOCK_TYPES + SPAN_TYPES):
        return to_dict(value)
    if isinstance(value, ListKind):
        return {
            "_type": "ListKind",
            "style": _serialize_value(value.style),
            "start": value.start,
        }
    if isinstance(value, CodeLang):
        return {"_type": "CodeLang", "lang": _serialize_value(value.lang), "tag": value.tag}
    if isinstance(value, Enum):
        return {"_type": type(value).__name__, "name": value.name}
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed tree node from a dict.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed tree node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs = {f.name: _deserialize_value(data[f.name]) for f in fields(node_cls) if f.name in data}
    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "ListKind":
            return ListKind(style=_deserialize_value(value["style"]), start=value.get("start"))
        if type_name == "CodeLang":
            return CodeLang(lang=_deserialize_value(value["lang"]), tag=value["tag"])
        if type_name in _ENUM_TYPES:
            try:
                return _ENUM_TYPES[type_name][value["name"]]
            except KeyError:
                msg = f"Unknown {type_name} member: {value.get('name')!r}"
                raise ValueError(msg) from None
        return from_dict(value)
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(root: Root, *, indent: int | None = None) -> str:
    """Serialize a document to a JSON string with sorted keys.

    Args:
        root: Document to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(root), sort_keys=True, indent=indent)


def from_json(data: str) -> Root:
    """Deserialize a document from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Root.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Root):
        msg = f"Expected Root, got {type(node).__name__}"
        raise ValueError(msg)
    return node


# =============================================================================
# Indented dump
# =============================================================================


def dump(node: Node) -> str:
    """Render ``node`` as an indented tree, two spaces per level.

    Example:
        >>> import turbomd
        >>> print(dump(turbomd.parse("- *hi*")), end="")
        Root
          List Unordered
            ListItem
              Paragraph
                Container
                  Modifier BOLD
                    Text 'hi'

    """
    sb = StringBuilder()
    stack: list[tuple[Node, int]] = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        pad = _DUMP_INDENT * depth
        sb.append_line(f"{pad}{_describe(current)}")
        if isinstance(current, CodeBlock):
            for line in split_lines(current.body):
                sb.append_line(f"{pad}{_DUMP_INDENT}| {line}")
            continue
        stack.extend((child, depth + 1) for child in reversed(children_of(current)))
    return sb.build()


def _describe(node: Node) -> str:
    match node:
        case Heading(level=level):
            return f"Heading {level}"
        case List(kind=kind):
            return f"List {kind}"
        case ListItem(checked=None):
            return "ListItem"
        case ListItem(checked=checked):
            return f"ListItem checked={checked}"
        case CodeBlock(lang=lang):
            return f"CodeBlock {lang.tag}"
        case IncludeRef(path=path):
            return f"IncludeRef {path!r}"
        case Modifier(kind=kind):
            return f"Modifier {kind.name}"
        case Text(content=content):
            return f"Text {content!r}"
        case Link(target=target, alias=None):
            return f"Link {target!r}"
        case Link(target=target, alias=alias):
            return f"Link {target!r} {alias!r}"
        case Root() | Paragraph() | Container() | Break() | HorizontalRule() | Blank():
            return type(node).__name__
        case _:
            msg = f"Not a tree node: {node!r}"
            raise TypeError(msg)


__all__ = ["dump", "from_dict", "from_json", "to_dict", "to_json"]
