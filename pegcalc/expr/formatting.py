# pegcalc/expr/formatting.py
from __future__ import annotations
from decimal import Decimal
import math


def format_number(value: float) -> str:
    """Shortest decimal form; exponent notation outside [1e-4, 1e21).

        20.0   -> '20'
        0.5    -> '0.5'
        1e21   -> '1e+21'
        1.5e-7 -> '1.5e-07'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    d = Decimal(repr(value)).normalize()
    if d.is_zero():
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    exp = d.adjusted()
    if -4 <= exp < 21:
        return format(d, "f")
    mantissa = format(d.scaleb(-exp).normalize(), "f")
    sign = "+" if exp >= 0 else "-"
    return f"{mantissa}e{sign}{abs(exp):02d}"
