# pegcalc/peg/engine.py
from __future__ import annotations
from typing import Dict, Hashable, List, Optional, Set, Tuple
from .rules import (
    Terminal, Range, Seq, Choice, Repeat, NonTerminal, Rule,
)
from .tree import ParseNode

# Packrat engine:
# - Memoize only non-terminal applications (rule, pos) -> (ok, end, nodes)
# - Left recursion is not supported (typical PEG restriction).
# - Anonymous combinators do not create nodes of their own: their children
#   are spliced into the nearest enclosing non-terminal node.
# - All state lives in the Packrat instance; rules are never mutated, so one
#   rule graph can serve any number of concurrent parses.

_Nodes = Tuple[ParseNode, ...]
_NO_NODES: _Nodes = ()


class Packrat:
    def __init__(self) -> None:
        # memo: (rule, pos) -> (visited_flag:int, ok:bool, end:int, nodes)
        # visited_flag: 1=in progress, 2=done
        self.memo: Dict[Tuple[NonTerminal, int], Tuple[int, bool, int, _Nodes]] = {}

    # ---- Public entrypoint for one rule ----
    def match(self, rule: Rule, text: str, pos: int = 0) -> Tuple[bool, Optional[ParseNode], int]:
        self.memo.clear()
        ok, end, nodes = self._eval(rule, text, pos)
        if not ok:
            return False, None, pos
        if isinstance(rule, (NonTerminal, Terminal, Range)):
            return True, nodes[0], end
        return True, ParseNode(name="", children=nodes, start=pos, end=end), end

    # ---- Rule application with memoization ----
    def _apply_rule(self, nt: NonTerminal, text: str, pos: int) -> Tuple[bool, int, _Nodes]:
        key = (nt, pos)
        m = self.memo.get(key)
        if m is not None:
            flag, ok, end, nodes = m
            if flag == 1:
                # left recursion or re-entry -> fail (PEG disallows left recursion)
                return False, pos, _NO_NODES
            return ok, end, nodes

        # mark in-progress
        self.memo[key] = (1, False, pos, _NO_NODES)
        ok, end, kids = self._eval(nt.body, text, pos)
        if ok:
            nodes: _Nodes = (ParseNode(name=nt.name, children=kids, start=pos, end=end),)
        else:
            end, nodes = pos, _NO_NODES
        self.memo[key] = (2, ok, end, nodes)
        return ok, end, nodes

    # ---- Evaluator for expressions ----
    def _eval(self, node: Rule, text: str, pos: int) -> Tuple[bool, int, _Nodes]:
        if isinstance(node, Terminal):
            if pos < len(text) and text[pos] == node.char:
                return True, pos + 1, (_leaf(text[pos], pos),)
            return False, pos, _NO_NODES

        if isinstance(node, Range):
            if pos < len(text) and node.lo <= text[pos] <= node.hi:
                return True, pos + 1, (_leaf(text[pos], pos),)
            return False, pos, _NO_NODES

        if isinstance(node, NonTerminal):
            return self._apply_rule(node, text, pos)

        if isinstance(node, Repeat):
            if node.kind == "?":
                ok, end, kids = self._eval(node.node, text, pos)
                if ok:
                    return True, end, kids
                return True, pos, _NO_NODES
            out: List[ParseNode] = []
            cur = pos
            count = 0
            while True:
                ok, end, kids = self._eval(node.node, text, cur)
                if not ok:
                    break
                out.extend(kids)
                count += 1
                if end == cur:
                    break
                cur = end
            if node.kind == "+" and count == 0:
                return False, pos, _NO_NODES
            return True, cur, tuple(out)

        if isinstance(node, Seq):
            out = []
            cur = pos
            for it in node.items:
                ok, end, kids = self._eval(it, text, cur)
                if not ok:
                    return False, pos, _NO_NODES
                out.extend(kids)
                cur = end
            return True, cur, tuple(out)

        if isinstance(node, Choice):
            for it in node.alts:
                ok, end, kids = self._eval(it, text, pos)
                if ok:
                    return True, end, kids
            return False, pos, _NO_NODES

        raise AssertionError(f"unknown rule: {node!r}")


def _leaf(ch: str, pos: int) -> ParseNode:
    return ParseNode(name="", value=ch, start=pos, end=pos + 1)


def match(rule: Rule, text: str, pos: int = 0) -> Tuple[bool, Optional[ParseNode], int]:
    """Match `rule` against `text` at `pos`.

    Returns (ok, node, new_pos). On failure node is None and new_pos == pos.
    """
    return Packrat().match(rule, text, pos)


def _unbound_rules(start: NonTerminal) -> List[Hashable]:
    """Names of every non-terminal reachable from `start` with no body."""
    missing: List[Hashable] = []
    seen: Set[int] = set()
    stack: List[Rule] = [start]
    while stack:
        r = stack.pop()
        if id(r) in seen:
            continue
        seen.add(id(r))
        if isinstance(r, NonTerminal):
            if not r.bound:
                missing.append(r.name)
            else:
                stack.append(r.body)
        elif isinstance(r, Seq):
            stack.extend(r.items)
        elif isinstance(r, Choice):
            stack.extend(r.alts)
        elif isinstance(r, Repeat):
            stack.append(r.node)
    return missing


class Grammar:
    """A rule graph with a designated start rule.

    Construction checks that every reachable non-terminal is bound; after
    that the graph is only read.
    """

    def __init__(self, start: NonTerminal):
        missing = _unbound_rules(start)
        if missing:
            names = ", ".join(f"'{n}'" for n in missing)
            raise SyntaxError(f"PEG: unbound rule(s) {names}")
        self.start = start

    def parse(self, text: str) -> ParseNode:
        """Parse `text` from offset 0.

        The tree covers the longest prefix the start rule accepts; trailing
        input is left out (compare `node.end` with `len(text)`). A complete
        non-match gives a childless node with `matched=False`, and so does
        input nested deeper than the interpreter stack allows.
        """
        try:
            ok, node, _end = match(self.start, text, 0)
        except RecursionError:
            ok, node = False, None
        if not ok or node is None:
            return ParseNode(name=self.start.name, matched=False)
        return node
