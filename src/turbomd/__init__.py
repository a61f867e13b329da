"""
turbomd: a small markup language compiled to HTML.

Source text is lexed into block events, the events are assembled into an
immutable document tree, includes are spliced in, and the tree is rendered.

Quick Start:
    >>> from turbomd import parse, render
    >>> root = parse("# Hello, *World*")
    >>> print(render(root), end="")
    <h1>Hello, <b>World</b></h1>

    >>> # Or use the high-level TurboMarkdown class
    >>> from turbomd import TurboMarkdown
    >>> md = TurboMarkdown()
    >>> md("- [x] done")
    '<ul>\\n<li>\\n<input type="checkbox" id="checkbox1" checked="checked"/><label for="checkbox1">done</label>\\n</li>\\n</ul>\\n'

Pipeline:
    source --Lexer--> BlockEvents --assemble--> Root --resolve_includes--> Root
    --HtmlRenderer--> HTML
"""

from pathlib import Path

from turbomd.assembler import assemble
from turbomd.config import (
    TurboConfig,
    config_context,
    get_config,
    reset_config,
    set_config,
)
from turbomd.errors import (
    IncludeError,
    ParseError,
    RenderError,
    StructuralError,
    TurboError,
    UnsupportedConstructError,
    UnterminatedConstructError,
)
from turbomd.events import CodeLang, Lang, ListKind, ListStyle
from turbomd.includes import FileIncludeLoader, MappingIncludeLoader, find_includes, resolve_includes
from turbomd.inline import flatten, resolve
from turbomd.lexer import Lexer
from turbomd.location import SourceLocation
from turbomd.nodes import (
    Blank,
    Block,
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
    Span,
    Text,
)
from turbomd.renderers.html import HtmlDefaults, HtmlRenderer
from turbomd.renderers.protocol import TreeRenderer
from turbomd.serialization import dump, from_dict, from_json, to_dict, to_json
from turbomd.tokens import ModifierKind
from turbomd.utils.logger import get_logger
from turbomd.visitor import BaseVisitor, transform

__version__ = "0.1.0"

logger = get_logger(__name__)


def parse(source: str, *, source_file: str | None = None) -> Root:
    """Parse turbomd source into a document tree.

    Includes are left as ``IncludeRef`` nodes; see ``parse_file`` or
    ``resolve_includes``.

    Args:
        source: Document source text
        source_file: Optional source file path for error messages

    Raises:
        ParseError: The source is malformed (see its subclasses).

    Example:
        >>> parse("# Hello").children[0].level
        1
    """
    return assemble(list(Lexer(source, source_file=source_file).tokenize()))


def parse_file(path: str | Path, *, encoding: str = "utf-8") -> Root:
    """Read, parse and (when configured) include-resolve a document file.

    The configured include suffix is appended when ``path`` has none.
    Includes are resolved relative to the file's directory unless the active
    config sets ``resolve_includes=False``.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        ParseError: The file is malformed.
        IncludeError: An include cannot be resolved.
    """
    config = get_config()
    file_path = Path(config.with_suffix(str(path)))
    root = parse(file_path.read_text(encoding=encoding), source_file=str(file_path))
    if config.resolve_includes:
        root = resolve_includes(root, FileIncludeLoader(file_path.parent, encoding=encoding))
    logger.debug("Parsed %s: %d top-level blocks", file_path, len(root.children))
    return root


def render(root: Root, *, defaults: HtmlDefaults | None = None) -> str:
    """Render a document tree to HTML.

    Raises:
        RenderError: The tree still holds an unresolved include.

    Example:
        >>> render(parse("---"))
        '<hr/>\\n'
    """
    return HtmlRenderer(defaults).render(root)


class TurboMarkdown:
    """High-level processor combining lexer, assembler, include pass and renderer.

    Usage:
        >>> md = TurboMarkdown(includes={"intro": "# Intro"})
        >>> md("@[intro]")
        '<h1>Intro</h1>\\n'

        >>> # Access the tree
        >>> md.parse("# Heading").children[0].level
        1

    Thread Safety:
        Instances hold only immutable settings; configuration is applied
        through a ContextVar for the duration of each call.

    """

    __slots__ = ("_config", "_defaults", "_loader")

    def __init__(
        self,
        *,
        config: TurboConfig | None = None,
        defaults: HtmlDefaults | None = None,
        includes: dict[str, str | Root] | None = None,
        base_dir: str | Path | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            config: Configuration applied during each call (active config if None)
            defaults: Page wrapper for rendered HTML
            includes: In-memory documents to serve includes from
            base_dir: Directory to read included files from (ignored when
                ``includes`` is given)
        """
        self._config = config
        self._defaults = defaults
        if includes is not None:
            self._loader = MappingIncludeLoader(includes)
        elif base_dir is not None:
            self._loader = FileIncludeLoader(base_dir)
        else:
            self._loader = None

    def __call__(self, source: str) -> str:
        """Parse, resolve includes and render ``source`` in one call."""
        root = self.parse(source)
        with config_context(self._config or get_config()):
            return HtmlRenderer(self._defaults).render(root)

    def parse(self, source: str, *, source_file: str | None = None) -> Root:
        """Parse ``source``; includes are resolved when a loader is configured."""
        with config_context(self._config or get_config()) as config:
            root = parse(source, source_file=source_file)
            if self._loader is not None and config.resolve_includes:
                root = resolve_includes(root, self._loader)
            return root


__all__ = [
    "BaseVisitor",
    "Blank",
    "Block",
    "Break",
    "CodeBlock",
    "CodeLang",
    "Container",
    "FileIncludeLoader",
    "Heading",
    "HorizontalRule",
    "HtmlDefaults",
    "HtmlRenderer",
    "IncludeError",
    "IncludeRef",
    "Lang",
    "Lexer",
    "Link",
    "List",
    "ListItem",
    "ListKind",
    "ListStyle",
    "MappingIncludeLoader",
    "Modifier",
    "ModifierKind",
    "Node",
    "Paragraph",
    "ParseError",
    "RenderError",
    "Root",
    "SourceLocation",
    "Span",
    "StructuralError",
    "Text",
    "TreeRenderer",
    "TurboConfig",
    "TurboError",
    "TurboMarkdown",
    "UnsupportedConstructError",
    "UnterminatedConstructError",
    "__version__",
    "assemble",
    "config_context",
    "dump",
    "find_includes",
    "flatten",
    "from_dict",
    "from_json",
    "get_config",
    "parse",
    "parse_file",
    "render",
    "reset_config",
    "resolve",
    "resolve_includes",
    "set_config",
    "to_dict",
    "to_json",
    "transform",
]
