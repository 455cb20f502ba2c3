# pegcalc/expr/__init__.py
"""Arithmetic expressions on top of pegcalc.peg.

- `parse(text)`  -> ParseNode (never raises on malformed input)
- `reduce(tree)` -> (ok, value); ok is False for an indeterminate result
"""

from .grammar import Symbol, GRAMMAR, build_grammar, parse
from .formatting import format_number
from .operators import Operator, PRECEDENCE
from .reducer import Link, build_chain, fold, format_chain, reduce, evaluate
