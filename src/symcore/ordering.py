"""The total order on expressions that canonical form sorts by.

Kinds compare in ExprKind order: Number < Constant < Symbol < Power < Product < Sum < Function <
Relation < the container kinds. Inside a kind:

- numbers: exact before float, then by value
- constants: by declaration order of ConstantKind
- symbols: name, then tag
- powers: base, then exponent
- sums & products: children lexicographically, shorter first on a tie
- functions: name, then arity, then args
- relations: lhs, rhs, then the relation kind
- everything else: children, then the node's own tie breaker
"""

from functools import cmp_to_key
from typing import Sequence

from .expr import Constant, ConstantKind, Expr, ExprKind, Function, Num, Power, Relation, Symbol, SymbolType

_CONSTANT_RANK = {k: i for i, k in enumerate(ConstantKind)}
_TAG_RANK = {t: i for i, t in enumerate(SymbolType)}


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def _compare_sequences(a: Sequence[Expr], b: Sequence[Expr]) -> int:
    for x, y in zip(a, b):
        c = compare(x, y)
        if c:
            return c
    return _sign(len(a), len(b))


def compare(a: Expr, b: Expr) -> int:
    """Returns -1 if a < b, 0 if a == b, 1 if a > b."""
    if a is b:
        return 0
    if a.kind != b.kind:
        return _sign(a.kind, b.kind)

    kind = a.kind
    if kind == ExprKind.NUMBER:
        a: Num
        b: Num
        if a.is_exact != b.is_exact:
            return -1 if a.is_exact else 1
        return _sign(a.value, b.value)
    if kind == ExprKind.CONSTANT:
        a: Constant
        b: Constant
        return _sign(_CONSTANT_RANK[a.which], _CONSTANT_RANK[b.which])
    if kind == ExprKind.SYMBOL:
        a: Symbol
        b: Symbol
        return _sign((a.name, _TAG_RANK[a.tag]), (b.name, _TAG_RANK[b.tag]))
    if kind == ExprKind.POWER:
        a: Power
        b: Power
        return compare(a.base, b.base) or compare(a.exponent, b.exponent)
    if kind == ExprKind.FUNCTION:
        a: Function
        b: Function
        if a.name != b.name:
            return _sign(a.name, b.name)
        if len(a.args) != len(b.args):
            return _sign(len(a.args), len(b.args))
        return _compare_sequences(a.args, b.args)
    if kind == ExprKind.RELATION:
        a: Relation
        b: Relation
        return compare(a.lhs, b.lhs) or compare(a.rhs, b.rhs) or _sign(a._order_extras(), b._order_extras())

    # Sums, products and the container kinds.
    return _compare_sequences(a.children(), b.children()) or _sign(a._order_extras(), b._order_extras())


sort_key = cmp_to_key(compare)
