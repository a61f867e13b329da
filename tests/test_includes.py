"""Tests for include resolution (turbomd.includes)."""

from pathlib import Path

import pytest

from turbomd import parse, parse_file
from turbomd.config import TurboConfig, config_context
from turbomd.errors import IncludeError
from turbomd.includes import (
    FileIncludeLoader,
    MappingIncludeLoader,
    find_includes,
    resolve_includes,
)
from turbomd.nodes import Heading, IncludeRef, List, Paragraph, Root


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestMappingLoader:
    def test_include_is_spliced_in_place(self) -> None:
        loader = MappingIncludeLoader({"intro": "# Intro\ntext"})
        root = resolve_includes(parse("before\n@[intro]\n---"), loader)
        assert [type(node).__name__ for node in root.children] == [
            "Paragraph",
            "Heading",
            "Paragraph",
            "HorizontalRule",
        ]

    def test_include_inside_list_item(self) -> None:
        loader = MappingIncludeLoader({"part": "detail"})
        root = resolve_includes(parse("- item\n  @[part]"), loader)
        (lst,) = root.children
        assert isinstance(lst, List)
        assert len(lst.items[0].children) == 2
        assert isinstance(lst.items[0].children[1], Paragraph)

    def test_nested_includes(self) -> None:
        loader = MappingIncludeLoader({"a": "@[b]", "b": "# Deep"})
        root = resolve_includes(parse("@[a]"), loader)
        assert isinstance(root.children[0], Heading)

    def test_assembled_documents_are_accepted(self) -> None:
        loader = MappingIncludeLoader({"x": Root((IncludeRef("y"),)), "y": "leaf"})
        root = resolve_includes(parse("@[x]"), loader)
        assert isinstance(root.children[0], Paragraph)

    def test_unknown_document(self) -> None:
        with pytest.raises(IncludeError, match="missing"):
            resolve_includes(parse("@[missing]"), MappingIncludeLoader({}))

    def test_cycle_is_detected(self) -> None:
        loader = MappingIncludeLoader({"a": "@[b]", "b": "@[a]"})
        with pytest.raises(IncludeError, match="cycle"):
            resolve_includes(parse("@[a]"), loader)

    def test_depth_limit(self) -> None:
        loader = MappingIncludeLoader({"a": "@[b]", "b": "text"})
        with pytest.raises(IncludeError, match="deeper than 1"):
            resolve_includes(parse("@[a]"), loader, max_depth=1)

    def test_depth_limit_from_config(self) -> None:
        loader = MappingIncludeLoader({"a": "@[b]", "b": "text"})
        with config_context(TurboConfig(max_include_depth=1)), pytest.raises(IncludeError):
            resolve_includes(parse("@[a]"), loader)

    def test_input_tree_is_unchanged(self) -> None:
        root = parse("@[a]")
        resolve_includes(root, MappingIncludeLoader({"a": "x"}))
        assert root.children == (IncludeRef("a"),)


class TestFileLoader:
    def test_suffix_is_appended(self, tmp_path: Path) -> None:
        _write(tmp_path / "chapter.tmd", "# Chapter")
        root = FileIncludeLoader(tmp_path).load("chapter")
        assert isinstance(root.children[0], Heading)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(IncludeError, match="no such file"):
            FileIncludeLoader(tmp_path).load("nope")

    def test_nested_paths_are_relative_to_including_file(self, tmp_path: Path) -> None:
        (tmp_path / "parts").mkdir()
        _write(tmp_path / "parts" / "one.tmd", "@[two]")
        _write(tmp_path / "parts" / "two.tmd", "leaf")
        root = resolve_includes(parse("@[parts/one]"), FileIncludeLoader(tmp_path))
        assert isinstance(root.children[0], Paragraph)

    def test_parse_file_resolves_includes(self, tmp_path: Path) -> None:
        _write(tmp_path / "main.tmd", "# Book\n@[chapter]")
        _write(tmp_path / "chapter.tmd", "Once upon a time")
        root = parse_file(tmp_path / "main")
        assert find_includes(root) == []
        assert isinstance(root.children[1], Paragraph)

    def test_parse_file_can_skip_includes(self, tmp_path: Path) -> None:
        _write(tmp_path / "main.tmd", "@[chapter]")
        with config_context(TurboConfig(resolve_includes=False)):
            root = parse_file(tmp_path / "main.tmd")
        assert root.children == (IncludeRef("chapter"),)

    def test_file_cycle(self, tmp_path: Path) -> None:
        _write(tmp_path / "a.tmd", "@[b]")
        _write(tmp_path / "b.tmd", "@[a]")
        with pytest.raises(IncludeError, match="cycle"):
            parse_file(tmp_path / "a.tmd")

    def test_custom_suffix(self, tmp_path: Path) -> None:
        _write(tmp_path / "note.txt", "plain")
        with config_context(TurboConfig(include_suffix=".txt")):
            root = resolve_includes(parse("@[note]"), FileIncludeLoader(tmp_path))
        assert isinstance(root.children[0], Paragraph)


class TestFindIncludes:
    def test_document_order(self) -> None:
        root = parse("@[a]\n- x\n  @[b]\n@[c]")
        assert find_includes(root) == ["a", "b", "c"]

    def test_none(self) -> None:
        assert find_includes(parse("text")) == []


class TestDeepDocuments:
    def test_include_under_deeply_nested_list(self) -> None:
        depth = 1500
        lines = [" " * level + f"- level {level}" for level in range(depth)]
        lines.append(" " * depth + "@[leaf]")
        root = resolve_includes(parse("\n".join(lines)), MappingIncludeLoader({"leaf": "end"}))

        node = root.children[0]
        levels = 0
        while isinstance(node, List):
            levels += 1
            node = node.items[0].children[-1]
        assert levels == depth
        assert node == parse("end").children[0]
