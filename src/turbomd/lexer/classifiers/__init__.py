"""Block classifiers for the turbomd lexer.

Each classifier is a mixin that recognises one kind of line and builds the
matching block event, or returns None to let the next classifier try.
"""

from turbomd.lexer.classifiers.fence import FenceClassifierMixin
from turbomd.lexer.classifiers.heading import HeadingClassifierMixin
from turbomd.lexer.classifiers.include import IncludeClassifierMixin
from turbomd.lexer.classifiers.list import ListClassifierMixin
from turbomd.lexer.classifiers.thematic import ThematicClassifierMixin

__all__ = [
    "FenceClassifierMixin",
    "HeadingClassifierMixin",
    "IncludeClassifierMixin",
    "ListClassifierMixin",
    "ThematicClassifierMixin",
]
