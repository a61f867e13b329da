"""TreeRenderer protocol: the stable interface for document renderers.

Any object with ``render(root) -> str`` conforms. The built-in
``HtmlRenderer`` is the reference implementation.

Example:
    from turbomd.renderers.protocol import TreeRenderer

    def publish(renderer: TreeRenderer, root: Root) -> str:
        return renderer.render(root)

"""

from typing import Protocol

from turbomd.nodes import Root


class TreeRenderer(Protocol):
    """Protocol for document renderers.

    Implementations must refuse unresolved ``IncludeRef`` nodes rather than
    silently dropping them.

    """

    def render(self, root: Root) -> str:
        """Render a document tree to a string.

        Args:
            root: The assembled (and include-resolved) document.

        Returns:
            Rendered output.

        """
        ...
