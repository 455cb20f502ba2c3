# pegcalc/peg/__init__.py
"""Standalone PEG submodule for pegcalc.

This package provides:
- Rule nodes for a small PEG subset (terminal, range, sequence, ordered
  choice, ?/*/+ repetition, lazily bound non-terminals)
- A Packrat (memoizing) matcher that builds parse trees
- `Grammar`, a validated rule graph with a `parse` entry point

It knows nothing about arithmetic; see pegcalc.expr for that.
"""

from .rules import (
    Terminal, Range, Seq, Choice, Repeat, NonTerminal, Rule, RuleBuilder,
)
from .tree import ParseNode
from .engine import Grammar, Packrat, match
