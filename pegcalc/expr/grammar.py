# pegcalc/expr/grammar.py
"""Arithmetic expression grammar.

    Start       <- Expression
    Expression  <- (Parentheses / Number) (('-' / '+' / '*' / '/') Expression)?
    Parentheses <- '(' Expression ')'
    Number      <- [0-9]+ '.'? [0-9]*

No whitespace handling: callers join words before parsing.
"""

from __future__ import annotations
from enum import Enum

from ..peg import Grammar, ParseNode, RuleBuilder


class Symbol(Enum):
    START = "Start"
    EXPRESSION = "Expression"
    PARENTHESES = "Parentheses"
    NUMBER = "Number"

    def __str__(self) -> str:
        return self.value


OPERATOR_CHARS = "-+*/"


def build_grammar() -> Grammar:
    b = RuleBuilder()

    start = b.non_terminal(Symbol.START)
    expr = b.non_terminal(Symbol.EXPRESSION)
    paren = b.non_terminal(Symbol.PARENTHESES)
    number = b.non_terminal(Symbol.NUMBER)

    digit = b.range("0", "9")

    start.bind(expr)
    expr.bind(b.sequence(
        b.ordered_choice(paren, number),
        b.optional(b.sequence(
            b.ordered_choice(*(b.terminal(c) for c in OPERATOR_CHARS)),
            expr,
        )),
    ))
    paren.bind(b.sequence(
        b.terminal("("),
        expr,
        b.terminal(")"),
    ))
    number.bind(b.sequence(
        b.one_or_more(digit),
        b.optional(b.terminal(".")),
        b.zero_or_more(digit),
    ))
    return b.grammar(start)


# Built once; read-only afterwards and safe to share.
GRAMMAR = build_grammar()


def parse(text: str) -> ParseNode:
    """Parse an expression; see `Grammar.parse` for partial/failed input."""
    return GRAMMAR.parse(text)
