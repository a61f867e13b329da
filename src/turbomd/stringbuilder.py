"""StringBuilder for HTML output.

Fragments are collected in a list and joined once in ``build()``, so
rendering a document is linear in the size of the output.

Thread Safety:
StringBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Append-only string accumulator with small helpers for HTML tags.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.open_tag("ol", type="a").append("...").close_tag("ol")
            StringBuilder(3 parts)
            >>> sb.build()
            '<ol type="a">...</ol>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append ``s``; empty strings are skipped."""
        if s:
            self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Append ``s`` followed by a newline."""
        if s:
            self._parts.append(s)
        self._parts.append("\n")
        return self

    def open_tag(self, name: str, /, **attrs: str | int) -> StringBuilder:
        """Append ``<name attr="value" ...>``.

        Attribute values must already be escaped; they are written in the
        order given.
        """
        rendered = "".join(f' {key}="{value}"' for key, value in attrs.items())
        self._parts.append(f"<{name}{rendered}>")
        return self

    def close_tag(self, name: str) -> StringBuilder:
        self._parts.append(f"</{name}>")
        return self

    def build(self) -> str:
        """Join all fragments into the final string."""
        return "".join(self._parts)

    def __len__(self) -> int:
        """Number of fragments, not characters."""
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)

    def __repr__(self) -> str:
        return f"StringBuilder({len(self._parts)} parts)"
