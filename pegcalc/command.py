# pegcalc/command.py
"""`fox! calc` chat command – text in, reply text out.

The transport (who sent the message, where the reply goes) is not handled
here. A message such as

    fox! calc (2 + 3) * 4

is lower-cased, split into words, and every word after the prefix is glued
together (`(2+3)*4`) before parsing, since the grammar has no whitespace
rule.
"""

from __future__ import annotations
from typing import List, Optional, Tuple
import regex as re

from .expr import parse, reduce
from .expr.formatting import format_number

CALC_PREFIX: Tuple[str, ...] = ("fox!", "calc")
INDETERMINATE_REPLY = "Uma indeterminação foi encontrada"

# Parse depth grows with both; input over either bound is not attempted.
# Each open '(' costs roughly a dozen interpreter frames.
MAX_EXPRESSION_LENGTH = 200
MAX_NESTING_DEPTH = 32

_WORD_RE = re.compile(r"[^\p{White_Space}]+")


def split_words(content: str) -> List[str]:
    return _WORD_RE.findall(content.lower())


def extract_expression(content: str) -> Optional[str]:
    """Return the joined expression text, or None if this is not a calc command."""
    words = split_words(content)
    n = len(CALC_PREFIX)
    if len(words) <= n or tuple(words[:n]) != CALC_PREFIX:
        return None
    return "".join(words[n:])


def nesting_depth(expression: str) -> int:
    """Deepest run of still-open '(' (unclosed ones count too)."""
    depth = deepest = 0
    for ch in expression:
        if ch == "(":
            depth += 1
            deepest = max(deepest, depth)
        elif ch == ")" and depth > 0:
            depth -= 1
    return deepest


def accepts(expression: str,
            max_length: int = MAX_EXPRESSION_LENGTH,
            max_depth: int = MAX_NESTING_DEPTH) -> bool:
    return len(expression) <= max_length and nesting_depth(expression) <= max_depth


def evaluate_expression(expression: str,
                        max_length: int = MAX_EXPRESSION_LENGTH,
                        max_depth: int = MAX_NESTING_DEPTH) -> Tuple[bool, float]:
    if not accepts(expression, max_length, max_depth):
        return False, 0.0
    return reduce(parse(expression))


def handle_message(content: str,
                   max_length: int = MAX_EXPRESSION_LENGTH,
                   max_depth: int = MAX_NESTING_DEPTH) -> Optional[str]:
    """Reply text for a chat message, or None when it is not a calc command."""
    expression = extract_expression(content)
    if expression is None:
        return None
    ok, value = evaluate_expression(expression, max_length, max_depth)
    if not ok:
        return INDETERMINATE_REPLY
    return format_number(value)
