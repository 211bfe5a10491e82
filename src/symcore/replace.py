"""Structural replacement on expression trees."""

from typing import Dict, Optional, Union

from .config import SimplifyConfig
from .expr import Expr, Symbol, _cast
from .simplify import simplify
from .utils import ExprCondition, ExprFn


def replace_factory(condition: ExprCondition, perform: ExprFn) -> ExprFn:
    """Every time the condition returns True, you replace that expr with the output of `perform`.
    Otherwise recurse into the children. The result is rebuilt through the constructors but not
    simplified.
    """

    def _replace(expr: Expr) -> Expr:
        if condition(expr):
            return perform(expr)
        children = expr.children()
        if not children:  # Number, Symbol, Constant
            return expr
        return expr.with_children([_replace(c) for c in children])

    return _replace


def replace(expr: Expr, old: Expr, new: Expr) -> Expr:
    """replaces every instance of `old` (that appears in `expr`) with `new`."""
    old, new = _cast(old), _cast(new)
    return replace_factory(lambda e: e == old, lambda e: new)(_cast(expr))


def substitute(expr: Expr, old: Expr, new: Expr, config: Optional[SimplifyConfig] = None) -> Expr:
    """Replace old with new, then simplify the result."""
    return simplify(replace(expr, old, new), config)


def subs(expr: Expr, mapping: Dict[Union[str, Expr], Expr], config: Optional[SimplifyConfig] = None) -> Expr:
    """Substitute several things at once. String keys name scalar symbols.

    The replacements happen simultaneously: subs(x + y, {x: y, y: x}) is y + x, not 2*x.
    """
    table = {}
    for key, value in mapping.items():
        key = Symbol(key) if isinstance(key, str) else _cast(key)
        table[key] = _cast(value)
    result = replace_factory(lambda e: e in table, lambda e: table[e])(_cast(expr))
    return simplify(result, config)
