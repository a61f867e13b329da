"""Line-oriented lexer for turbomd documents.

Turns ``.tmd`` source into the block events consumed by the assembler.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, scan_inline
├── core.py              # Lexer class (mixin composition + line navigation)
├── inline.py            # Inline token scanner
└── classifiers/         # Block-type classification mixins
    ├── fence.py         # ::: code fences
    ├── heading.py       # # headings
    ├── include.py       # @[path] includes
    ├── list.py          # - list item markers
    └── thematic.py      # --- horizontal rules

Usage:
    >>> from turbomd.lexer import Lexer
    >>> events = list(Lexer("- item\\n    nested").tokenize())
    >>> [type(event).__name__ for event in events]
    ['ListItemStartEvent', 'TextLineEvent']

"""

from turbomd.lexer.core import Lexer, split_lines
from turbomd.lexer.inline import scan_inline

__all__ = ["Lexer", "scan_inline", "split_lines"]
