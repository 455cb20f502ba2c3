# pegcalc/expr/reducer.py
"""Tree reduction for the expression grammar.

The parse tree is right-recursive (`2*3+4` is 2 * (3 + (4))), which says
nothing about precedence. `reduce` therefore flattens the Expression spine
into an ordered chain of links,

    [Link(2, *), Link(3, +), Link(4, None)]

and folds the chain once per precedence pass (see `operators.PRECEDENCE`).
Parenthesised sub-expressions are reduced to a single operand first.

Division by zero anywhere aborts the whole reduction; the caller only sees
`(False, 0.0)`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..peg import ParseNode
from .grammar import Symbol, parse
from .formatting import format_number
from .operators import Operator, PRECEDENCE


@dataclass(frozen=True)
class Link:
    value: float
    op: Optional[Operator]  # combines value with the next link; None on the last

    def __str__(self) -> str:
        if self.op is None:
            return f"({format_number(self.value)})"
        return f"({format_number(self.value)} {self.op.value})"


def format_chain(chain: Sequence[Link]) -> str:
    return "".join(f"{link} " for link in chain)


def build_chain(node: ParseNode) -> List[Link]:
    """Flatten a Start/Expression/Parentheses tree into an operator chain.

    Operands are reduced on the way, so this may raise ZeroDivisionError.
    """
    chain: List[Link] = []
    cur = node
    while True:
        kind = cur.name
        if kind is Symbol.START:
            cur = cur.children[0]
            continue
        if kind is Symbol.EXPRESSION:
            value = _operand(cur.children[0])
            if len(cur.children) > 1:
                chain.append(Link(value, Operator.from_char(cur.children[1].value)))
                cur = cur.children[2]
                continue
            chain.append(Link(value, None))
            return chain
        chain.append(Link(_operand(cur), None))
        return chain


def fold(chain: Sequence[Link]) -> float:
    """Collapse a chain to one value, one precedence pass at a time.

    Each pass rebuilds a shorter list: a link whose operator belongs to the
    pass is merged with the link after it, and the merged link keeps the
    latter's operator so runs of the same class fold left to right.
    """
    if not chain:
        raise ValueError("empty operator chain")
    links = list(chain)
    for ops in PRECEDENCE:
        out: List[Link] = []
        for link in links:
            if out and out[-1].op in ops:
                prev = out.pop()
                out.append(Link(prev.op.apply(prev.value, link.value), link.op))  # type: ignore[union-attr]
            else:
                out.append(link)
        links = out
    return links[0].value


def _operand(node: ParseNode) -> float:
    if node.name is Symbol.NUMBER:
        return float(node.text())
    if node.name is Symbol.PARENTHESES:
        # '(' Expression ')'
        return fold(build_chain(node.children[1]))
    raise ValueError(f"not an operand: {node.name!r}")


def reduce(node: ParseNode) -> Tuple[bool, float]:
    """Evaluate a parse tree.

    Returns (True, value) on success and (False, 0.0) when the result is
    indeterminate: division by zero, or a tree from input that did not
    parse at all.
    """
    if not node.matched:
        return False, 0.0
    try:
        return True, fold(build_chain(node))
    except ZeroDivisionError:
        return False, 0.0


def evaluate(text: str) -> Tuple[bool, float]:
    """Shorthand for `reduce(parse(text))`."""
    return reduce(parse(text))
