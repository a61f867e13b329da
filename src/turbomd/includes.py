"""Include resolution pass.

The assembler leaves every ``@[path]`` as an ``IncludeRef`` placeholder.
This pass builds a new tree in which each placeholder is replaced by the
children of the included document, spliced in place, at any nesting depth.
Included documents have their own includes resolved relative to their own
location.

Example:
    >>> loader = MappingIncludeLoader({"intro": "# Intro"})
    >>> root = assemble(list(Lexer("@[intro]").tokenize()))
    >>> resolve_includes(root, loader).children[0].level
    1

Thread Safety:
    The pass is pure apart from the loader's reads; loaders hold no
    per-resolution state.

"""

from __future__ import annotations

import dataclasses
from collections.abc import Generator, Mapping, Sequence
from pathlib import Path
from typing import Protocol

from turbomd.assembler import assemble
from turbomd.config import get_config
from turbomd.errors import IncludeError
from turbomd.lexer import Lexer
from turbomd.nodes import Block, IncludeRef, List, ListItem, Root
from turbomd.utils.logger import get_logger
from turbomd.visitor import BaseVisitor

logger = get_logger(__name__)


class IncludeLoader(Protocol):
    """Source of included documents."""

    def key(self, path: str) -> str:
        """Canonical identity of ``path``, used for cycle detection."""
        ...

    def load(self, path: str) -> Root:
        """Return the assembled (unresolved) document for ``path``.

        Raises:
            IncludeError: The document does not exist.
        """
        ...

    def nested(self, path: str) -> IncludeLoader:
        """Loader for includes written inside the document at ``path``."""
        ...


class FileIncludeLoader:
    """Load included documents from disk, relative to ``base_dir``.

    The configured include suffix (``.tmd`` by default) is appended to paths
    that lack it.
    """

    __slots__ = ("_base_dir", "_encoding")

    def __init__(self, base_dir: str | Path = ".", *, encoding: str = "utf-8") -> None:
        self._base_dir = Path(base_dir)
        self._encoding = encoding

    def _path(self, path: str) -> Path:
        return self._base_dir / get_config().with_suffix(path)

    def key(self, path: str) -> str:
        return str(self._path(path).resolve())

    def load(self, path: str) -> Root:
        file_path = self._path(path)
        try:
            source = file_path.read_text(encoding=self._encoding)
        except FileNotFoundError:
            raise IncludeError(path, f"no such file: {file_path}") from None
        except OSError as exc:
            raise IncludeError(path, f"cannot read {file_path}: {exc}") from exc
        return assemble(list(Lexer(source, source_file=str(file_path)).tokenize()))

    def nested(self, path: str) -> FileIncludeLoader:
        return FileIncludeLoader(self._path(path).parent, encoding=self._encoding)


class MappingIncludeLoader:
    """Serve included documents from memory (source text or assembled roots)."""

    __slots__ = ("_documents",)

    def __init__(self, documents: Mapping[str, str | Root]) -> None:
        self._documents = dict(documents)

    def key(self, path: str) -> str:
        return path

    def load(self, path: str) -> Root:
        try:
            document = self._documents[path]
        except KeyError:
            raise IncludeError(path, "unknown document") from None
        if isinstance(document, Root):
            return document
        return assemble(list(Lexer(document, source_file=path).tokenize()))

    def nested(self, path: str) -> MappingIncludeLoader:
        return self


def resolve_includes(
    root: Root,
    loader: IncludeLoader | None = None,
    *,
    max_depth: int | None = None,
) -> Root:
    """Return a new tree with every IncludeRef substituted.

    Args:
        root: Assembled document
        loader: Where included documents come from (defaults to files
            relative to the working directory)
        max_depth: Maximum include nesting (defaults to the configured
            ``max_include_depth``)

    Raises:
        IncludeError: Missing document, include cycle, or nesting too deep.
    """
    if loader is None:
        loader = FileIncludeLoader()
    limit = get_config().max_include_depth if max_depth is None else max_depth
    return Root(_splice(root.children, loader, (), limit))


type _Request = tuple[Sequence[Block], IncludeLoader, tuple[str, ...]]
type _Frame = Generator[_Request, tuple[Block, ...], tuple[Block, ...]]


def _splice(
    children: Sequence[Block],
    loader: IncludeLoader,
    chain: tuple[str, ...],
    limit: int,
) -> tuple[Block, ...]:
    """Splice ``children``, driving nested block sequences on an explicit stack."""
    stack: list[_Frame] = [_splice_frame(children, loader, chain, limit)]
    reply: tuple[Block, ...] | None = None
    while True:
        try:
            if reply is None:
                request = next(stack[-1])
            else:
                request = stack[-1].send(reply)
        except StopIteration as done:
            stack.pop()
            reply = done.value
            if not stack:
                return reply
            continue
        stack.append(_splice_frame(*request, limit))
        reply = None


def _splice_frame(
    children: Sequence[Block],
    loader: IncludeLoader,
    chain: tuple[str, ...],
    limit: int,
) -> _Frame:
    out: list[Block] = []
    for node in children:
        match node:
            case IncludeRef(path=path):
                key = loader.key(path)
                if key in chain:
                    cycle = " -> ".join((*chain, key))
                    raise IncludeError(path, f"include cycle: {cycle}")
                if len(chain) >= limit:
                    raise IncludeError(path, f"includes nested deeper than {limit}")
                included = loader.load(path)
                logger.debug("Including %s (%d blocks)", key, len(included.children))
                out.extend((yield (included.children, loader.nested(path), (*chain, key))))
            case ListItem(children=item_children):
                spliced = yield (item_children, loader, chain)
                out.append(dataclasses.replace(node, children=spliced))
            case List(items=items):
                new_items: list[ListItem] = []
                for item in items:
                    spliced = yield (item.children, loader, chain)
                    new_items.append(dataclasses.replace(item, children=spliced))
                out.append(dataclasses.replace(node, items=tuple(new_items)))
            case _:
                out.append(node)
    return tuple(out)


class _IncludeCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.paths: list[str] = []

    def visit_include_ref(self, node: IncludeRef) -> None:
        self.paths.append(node.path)


def find_includes(root: Root) -> list[str]:
    """Paths of all unresolved includes, in document order."""
    collector = _IncludeCollector()
    collector.visit(root)
    return collector.paths


__all__ = [
    "FileIncludeLoader",
    "IncludeLoader",
    "MappingIncludeLoader",
    "find_includes",
    "resolve_includes",
]
