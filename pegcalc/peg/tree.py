# pegcalc/peg/tree.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Hashable, Iterator, List, Optional, Tuple

# ---- Parse tree ----

@dataclass(frozen=True)
class ParseNode:
    """One node of a parse tree.

    - name    : label of the NonTerminal that produced it ("" for anonymous
                composite nodes and for leaves)
    - children: child nodes in source order (empty for leaves)
    - value   : matched character for leaves, None otherwise
    - start/end: [start, end) offsets into the input
    - matched : False only for the degenerate tree of a complete non-match
    """
    name: Hashable = ""
    children: Tuple["ParseNode", ...] = ()
    value: Optional[str] = None
    start: int = 0
    end: int = 0
    matched: bool = True

    @property
    def is_leaf(self) -> bool:
        return self.value is not None

    def leaves(self) -> Iterator["ParseNode"]:
        if self.is_leaf:
            yield self
            return
        stack = list(reversed(self.children))
        while stack:
            n = stack.pop()
            if n.is_leaf:
                yield n
            else:
                stack.extend(reversed(n.children))

    def text(self) -> str:
        """Concatenation of every leaf value under this node."""
        return "".join(leaf.value for leaf in self.leaves())  # type: ignore[misc]

    def pretty(self, indent: str = "  ") -> str:
        lines: List[str] = []
        stack: List[Tuple["ParseNode", int]] = [(self, 0)]
        while stack:
            n, depth = stack.pop()
            pad = indent * depth
            if n.is_leaf:
                lines.append(f"{pad}{n.value!r} @{n.start}")
                continue
            label = _label(n.name) or "<anon>"
            if not n.matched:
                lines.append(f"{pad}{label} <no match>")
                continue
            lines.append(f"{pad}{label} [{n.start}:{n.end}]")
            for c in reversed(n.children):
                stack.append((c, depth + 1))
        return "\n".join(lines)


def _label(name: Hashable) -> str:
    # enum members print as their value
    return str(getattr(name, "value", name))
