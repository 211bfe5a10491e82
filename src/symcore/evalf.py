from typing import Dict, Optional, Union

from . import number
from .config import SimplifyConfig
from .expr import Constant, Expr, Float, Integer, Num, Power, _cast
from .replace import subs as _subs
from .simplify import simplify


def evalf(
    expr: Expr, subs: Optional[Dict[Union[str, Expr], Expr]] = None, config: Optional[SimplifyConfig] = None
) -> Expr:
    """Evaluate the expression to a float as far as possible.

    Exact numbers and real constants become Floats, then the simplifier folds the arithmetic and
    evaluates registered functions numerically. Integer exponents stay exact, so x^2 stays x^2.
    """
    expr = _cast(expr)
    if subs:
        expr = _subs(expr, subs, config)
    return simplify(_to_float(expr), config)


def _to_float(expr: Expr) -> Expr:
    if isinstance(expr, Num):
        return expr if not expr.is_exact else Float(number.to_float(expr.value))
    if isinstance(expr, Constant):
        return Float(expr.value) if expr.value is not None else expr
    if isinstance(expr, Power) and isinstance(expr.exponent, Integer):
        return Power(_to_float(expr.base), expr.exponent)
    children = expr.children()
    if not children:
        return expr
    return expr.with_children([_to_float(c) for c in children])
