"""HTML renderer using StringBuilder pattern.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance
and call render() concurrently without synchronization.

Checklists:
A checklist item renders an ``<input type="checkbox">`` whose label is the
item's first paragraph or heading. Checkbox ids are numbered per render, so
the same tree always renders to the same HTML.
"""

from __future__ import annotations

import html
from dataclasses import dataclass

from turbomd.config import get_config
from turbomd.errors import RenderError
from turbomd.events import Lang, ListKind, ListStyle
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
    Paragraph,
    Root,
    Span,
    Text,
)
from turbomd.stringbuilder import StringBuilder
from turbomd.tokens import ModifierKind
from turbomd.utils.logger import get_logger

logger = get_logger(__name__)

_MODIFIER_TAGS: dict[ModifierKind, str] = {
    ModifierKind.BOLD: "b",
    ModifierKind.CURSIVE: "i",
    ModifierKind.STRIKE: "del",
    ModifierKind.CODE: "code",
}

_OL_TYPES: dict[ListStyle, str] = {
    ListStyle.NUMBERED: "1",
    ListStyle.ALPHA_LOWER: "a",
    ListStyle.ALPHA_UPPER: "A",
    ListStyle.ROMAN_LOWER: "i",
    ListStyle.ROMAN_UPPER: "I",
}

_BULLET_STYLES: dict[ListStyle, str] = {
    ListStyle.NO_BULLET: "none",
    ListStyle.CIRCLE: "circle",
    ListStyle.DISC: "disc",
    ListStyle.SQUARE: "square",
}


def html_escape(s: str) -> str:
    """Escape ``<``, ``>``, ``&`` and ``"`` (single quotes are left alone)."""
    return html.escape(s, quote=False).replace('"', "&quot;")


@dataclass(frozen=True, slots=True)
class HtmlDefaults:
    """Page wrapper settings.

    When given to the renderer, the body is wrapped in a complete HTML page
    with ``title`` and the raw ``head`` markup in its ``<head>``.
    """

    title: str
    head: str = ""


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render() call, ensuring thread safety when sharing
    HtmlRenderer instances across threads.
    """

    checkboxes: int = 0

    def next_checkbox_id(self) -> str:
        self.checkboxes += 1
        return f"checkbox{self.checkboxes}"


class HtmlRenderer:
    """Render a document tree to HTML.

    Usage:
        >>> import turbomd
        >>> HtmlRenderer().render(turbomd.parse("# Hello *World*"))
        '<h1>Hello <b>World</b></h1>\\n'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
    """

    __slots__ = ("_defaults",)

    def __init__(self, defaults: HtmlDefaults | None = None) -> None:
        """Initialize renderer.

        Args:
            defaults: Page wrapper settings. When None, a page is still
                produced if the active config sets ``html_title``.
        """
        self._defaults = defaults

    def render(self, root: Root) -> str:
        """Render ``root`` to an HTML string.

        Raises:
            RenderError: The tree still contains an IncludeRef, ``root`` is
                not a Root, or the tree is nested deeper than the interpreter
                can recurse.
        """
        if not isinstance(root, Root):
            msg = f"Expected Root, got {type(root).__name__}"
            raise RenderError(msg)

        ctx = RenderContext()
        sb = StringBuilder()
        defaults = self._defaults or _defaults_from_config()
        if defaults is not None:
            sb.append_line("<!DOCTYPE html>")
            sb.append_line("<html>")
            sb.append_line("<head>")
            sb.append_line('<meta charset="utf-8"/>')
            sb.append_line(f"<title>{html_escape(defaults.title)}</title>")
            if defaults.head:
                sb.append_line(defaults.head.rstrip("\n"))
            sb.append_line("</head>")
            sb.append_line("<body>")

        try:
            for child in root.children:
                self._render_block(child, sb, ctx)
        except RecursionError:
            msg = "Document is nested too deeply to render"
            raise RenderError(msg) from None

        if defaults is not None:
            sb.append_line("</body>")
            sb.append_line("</html>")

        logger.debug("Rendered %d blocks, %d checkboxes", len(root.children), ctx.checkboxes)
        return sb.build()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_block(self, block: Block, sb: StringBuilder, ctx: RenderContext) -> None:
        match block:
            case Paragraph(inline=inline):
                sb.append("<p>")
                self._render_span(inline, sb)
                sb.append_line("</p>")
            case Heading():
                self._render_heading(block, sb)
                sb.append_line()
            case List():
                self._render_list(block, sb, ctx)
            case ListItem():
                self._render_list_item(block, sb, ctx)
            case CodeBlock():
                self._render_code(block, sb)
            case HorizontalRule():
                sb.append_line("<hr/>")
            case Blank():
                pass
            case IncludeRef(path=path):
                msg = f"Unresolved include '{path}'; run resolve_includes() before rendering"
                raise RenderError(msg)
            case Root(children=children):
                for child in children:
                    self._render_block(child, sb, ctx)
            case _:
                msg = f"Cannot render {type(block).__name__}"
                raise RenderError(msg)

    def _render_heading(self, heading: Heading, sb: StringBuilder) -> None:
        sb.append(f"<h{heading.level}>")
        self._render_span(heading.inline, sb)
        sb.append(f"</h{heading.level}>")

    def _render_list(self, lst: List, sb: StringBuilder, ctx: RenderContext) -> None:
        tag = "ol" if lst.kind.style.ordered else "ul"
        sb.open_tag(tag, **_list_attrs(lst.kind)).append_line()
        for item in lst.items:
            self._render_list_item(item, sb, ctx)
        sb.close_tag(tag).append_line()

    def _render_list_item(self, item: ListItem, sb: StringBuilder, ctx: RenderContext) -> None:
        sb.append_line("<li>")
        children = item.children
        if item.checked is not None:
            checkbox_id = ctx.next_checkbox_id()
            checked = ' checked="checked"' if item.checked else ""
            sb.append(f'<input type="checkbox" id="{checkbox_id}"{checked}/>')
            sb.append(f'<label for="{checkbox_id}">')
            match children:
                case (Paragraph(inline=inline), *rest):
                    self._render_span(inline, sb)
                    children = tuple(rest)
                case (Heading() as heading, *rest):
                    self._render_heading(heading, sb)
                    children = tuple(rest)
            sb.append_line("</label>")
        for child in children:
            self._render_block(child, sb, ctx)
        sb.append_line("</li>")

    def _render_code(self, code: CodeBlock, sb: StringBuilder) -> None:
        body = html_escape(code.body)
        match code.lang.lang:
            case Lang.KATEX:
                sb.append_line('<div class="katex">')
                sb.append_line("$$")
                sb.append(body)
                sb.append_line("$$")
                sb.append_line("</div>")
            case Lang.MERMAID:
                sb.append_line('<div class="mermaid">')
                sb.append(body)
                sb.append_line("</div>")
            case _:
                css_class = html_escape(code.lang.css_class)
                if css_class:
                    sb.open_tag("pre").open_tag("code", **{"class": css_class})
                else:
                    sb.open_tag("pre").open_tag("code")
                sb.append(body)
                sb.close_tag("code").close_tag("pre").append_line()

    # =========================================================================
    # Span rendering
    # =========================================================================

    def _render_span(self, span: Span, sb: StringBuilder) -> None:
        match span:
            case Container(children=children):
                for child in children:
                    self._render_span(child, sb)
            case Modifier(kind=kind, children=children):
                tag = _MODIFIER_TAGS[kind]
                sb.open_tag(tag)
                for child in children:
                    self._render_span(child, sb)
                sb.close_tag(tag)
            case Text(content=content):
                sb.append(html_escape(content))
            case Link(target=target, alias=alias):
                sb.open_tag("a", href=html_escape(target))
                sb.append(html_escape(alias if alias is not None else target))
                sb.close_tag("a")
            case Break():
                sb.append("<br/>")
            case _:
                msg = f"Cannot render span {type(span).__name__}"
                raise RenderError(msg)


def _list_attrs(kind: ListKind) -> dict[str, str | int]:
    if not kind.style.ordered:
        bullet = _BULLET_STYLES.get(kind.style)
        return {} if bullet is None else {"style": f"list-style-type:{bullet}"}
    attrs: dict[str, str | int] = {"type": _OL_TYPES[kind.style]}
    if kind.start is not None:
        attrs["start"] = kind.start
    return attrs


def _defaults_from_config() -> HtmlDefaults | None:
    config = get_config()
    if config.html_title is None:
        return None
    return HtmlDefaults(title=config.html_title, head=config.html_head)


__all__ = ["HtmlDefaults", "HtmlRenderer", "RenderContext", "html_escape"]
