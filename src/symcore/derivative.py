from typing import Optional

from .config import SimplifyConfig
from .expr import Expr, Symbol, _cast
from .simplify import simplify


def diff(expr: Expr, var: Symbol, order: int = 1, config: Optional[SimplifyConfig] = None) -> Expr:
    """The simplified order-th derivative of expr with respect to var.

    Each node kind knows its own rule (see the `diff` methods in expr.py); functions go through the
    registry and unknown ones come back as a Derivative placeholder. Differentiating a Relation raises
    UnsupportedOperation.
    """
    if not isinstance(var, Symbol):
        raise TypeError(f"Can only differentiate with respect to a Symbol, got {var!r}")
    if order < 0:
        raise ValueError(f"Derivative order must be non-negative, got {order}")

    result = simplify(_cast(expr), config)
    for _ in range(order):
        result = simplify(result.diff(var), config)
    return result


derivative = diff
