# pegcalc/expr/operators.py
from __future__ import annotations
from enum import Enum
from typing import Callable, Dict, Tuple


class Operator(Enum):
    MULTIPLY = "*"
    DIVIDE = "/"
    ADD = "+"
    SUBTRACT = "-"

    @classmethod
    def from_char(cls, ch: str) -> "Operator":
        return cls(ch)

    def apply(self, a: float, b: float) -> float:
        """Combine two operands. Raises ZeroDivisionError for x/0."""
        return _FUNCS[self](a, b)


def _divide(a: float, b: float) -> float:
    if b == 0:
        raise ZeroDivisionError(f"{a} / 0")
    return a / b


_FUNCS: Dict[Operator, Callable[[float, float], float]] = {
    Operator.MULTIPLY: lambda a, b: a * b,
    Operator.DIVIDE: _divide,
    Operator.ADD: lambda a, b: a + b,
    Operator.SUBTRACT: lambda a, b: a - b,
}

# Fold passes, in order. Each pass collapses only the operators it lists,
# scanning the chain left to right. '*' and '/' share a pass, so "8/2*2"
# is (8/2)*2 == 8. Addition and subtraction get separate passes, so
# "10-3+2" folds as 10-(3+2).
PRECEDENCE: Tuple[Tuple[Operator, ...], ...] = (
    (Operator.MULTIPLY, Operator.DIVIDE),
    (Operator.ADD,),
    (Operator.SUBTRACT,),
)
