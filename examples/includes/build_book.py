"""Build a multi-file document: includes are resolved relative to each file.

Equivalent CLI: ``turbomd examples/includes/book --title "A Small Book"``
"""

from pathlib import Path

from turbomd import HtmlDefaults, parse_file, render

here = Path(__file__).parent
root = parse_file(here / "book")
print(render(root, defaults=HtmlDefaults(title="A Small Book")))
