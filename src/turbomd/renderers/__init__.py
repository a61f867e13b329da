"""turbomd renderers.

Renderers turn an assembled document tree into an output format.

Available Renderers:
- HtmlRenderer: Renders the tree to HTML using the StringBuilder pattern

Thread Safety:
Renderers keep per-render state in a RenderContext created by each
render() call. Safe for concurrent use from multiple threads.

"""

from turbomd.renderers.html import HtmlDefaults, HtmlRenderer, RenderContext, html_escape
from turbomd.renderers.protocol import TreeRenderer

__all__ = ["HtmlDefaults", "HtmlRenderer", "RenderContext", "TreeRenderer", "html_escape"]
