"""Parse and render turbomd in 3 lines."""

from turbomd import parse, render

root = parse("# Hello *World*\n- [x] write\n- [ ] publish")
print(render(root))
