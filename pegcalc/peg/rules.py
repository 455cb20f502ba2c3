# pegcalc/peg/rules.py
"""PEG rule graph.

Rules are plain frozen dataclasses; `NonTerminal` is the only node that is
filled in after construction so a rule may refer to itself (directly or
through other rules) before its body exists.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Hashable, Tuple, Union, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .engine import Grammar

# ---- Rule node definitions ----

@dataclass(frozen=True)
class Terminal:
    char: str  # exactly one character

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError(f"Terminal expects a single character, got {self.char!r}")

@dataclass(frozen=True)
class Range:
    lo: str  # inclusive
    hi: str

    def __post_init__(self) -> None:
        if len(self.lo) != 1 or len(self.hi) != 1:
            raise ValueError(f"Range bounds must be single characters: {self.lo!r}..{self.hi!r}")
        if self.lo > self.hi:
            raise ValueError(f"Range bounds inverted: {self.lo!r}..{self.hi!r}")

@dataclass(frozen=True)
class Seq:
    items: Tuple["Rule", ...]

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("Seq needs at least one item")

@dataclass(frozen=True)
class Choice:
    alts: Tuple["Rule", ...]  # tried in order, first match wins

    def __post_init__(self) -> None:
        if not self.alts:
            raise ValueError("Choice needs at least one alternative")

@dataclass(frozen=True)
class Repeat:
    node: "Rule"
    kind: str  # '?', '*', '+'

    def __post_init__(self) -> None:
        if self.kind not in ("?", "*", "+"):
            raise ValueError(f"unknown repeat kind {self.kind!r}")


class NonTerminal:
    """Named rule whose body is bound exactly once.

    Equality and hashing are by identity: two non-terminals with the same
    name are still different rules.
    """

    __slots__ = ("name", "_body")

    def __init__(self, name: Hashable):
        self.name = name
        self._body: Optional[Rule] = None

    @property
    def bound(self) -> bool:
        return self._body is not None

    @property
    def body(self) -> "Rule":
        if self._body is None:
            raise SyntaxError(f"PEG: unbound rule '{self.name}'")
        return self._body

    def bind(self, body: "Rule") -> None:
        if self._body is not None:
            raise SyntaxError(f"PEG: rule '{self.name}' is already bound")
        self._body = body

    def __repr__(self) -> str:
        return f"NonTerminal({self.name!r})"


Rule = Union[Terminal, Range, Seq, Choice, Repeat, NonTerminal]


class RuleBuilder:
    """Combinator vocabulary for declaring grammars in code.

        b = RuleBuilder()
        digit = b.range("0", "9")
        number = b.non_terminal("Number")
        number.bind(b.one_or_more(digit))
    """

    def non_terminal(self, name: Hashable) -> NonTerminal:
        return NonTerminal(name)

    def terminal(self, char: str) -> Terminal:
        return Terminal(char)

    def range(self, lo: str, hi: str) -> Range:
        return Range(lo, hi)

    def sequence(self, *items: Rule) -> Seq:
        return Seq(tuple(items))

    def ordered_choice(self, *alts: Rule) -> Choice:
        return Choice(tuple(alts))

    def optional(self, node: Rule) -> Repeat:
        return Repeat(node, "?")

    def zero_or_more(self, node: Rule) -> Repeat:
        return Repeat(node, "*")

    def one_or_more(self, node: Rule) -> Repeat:
        return Repeat(node, "+")

    def grammar(self, start: NonTerminal) -> "Grammar":
        # local import: engine depends on this module
        from .engine import Grammar
        return Grammar(start)
