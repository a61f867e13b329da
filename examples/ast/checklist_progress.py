"""Typed tree: count finished checklist items at any nesting depth."""

from turbomd import parse
from turbomd.inline import plain_text
from turbomd.nodes import ListItem, Paragraph
from turbomd.visitor import BaseVisitor


class ChecklistCounter(BaseVisitor[None]):
    def __init__(self) -> None:
        self.done: list[str] = []
        self.open: list[str] = []

    def visit_list_item(self, node: ListItem) -> None:
        if node.checked is None:
            return
        label = ""
        if node.children and isinstance(node.children[0], Paragraph):
            label = plain_text(node.children[0].inline)
        (self.done if node.checked else self.open).append(label)


source = """# Release

- [x] tag the build
- [ ] write notes
  - [x] collect changes
  - [ ] _proofread_
- [x] upload
"""

counter = ChecklistCounter()
counter.visit(parse(source))
total = len(counter.done) + len(counter.open)
print(f"{len(counter.done)}/{total} done")
for label in counter.open:
    print(f"  open: {label}")
