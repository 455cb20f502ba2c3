# pegcalc/__init__.py
"""pegcalc – a small PEG engine and an arithmetic evaluator built on it."""

from .expr import parse, reduce, evaluate

__version__ = "0.1.0"
