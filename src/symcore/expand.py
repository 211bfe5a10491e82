"""expand: distribute products over sums and multiply out integer powers of sums.

Factor order is kept everywhere, so noncommutative products expand correctly: (A + B)^2 becomes
A^2 + A*B + B*A + B^2.
"""

import itertools
from typing import Optional

from .combinatorics import generate_permutations, multinomial_coefficient
from .config import SimplifyConfig, resolve_config
from .expr import Expr, Integer, Power, Prod, Sum, _cast
from .simplify import simplify


def expand(expr: Expr, config: Optional[SimplifyConfig] = None) -> Expr:
    config = resolve_config(config)
    expr = simplify(_cast(expr), config)
    return simplify(_expand(expr), config.with_overrides(expand=True))


def _expand(expr: Expr) -> Expr:
    children = expr.children()
    if children:
        expr = expr.with_children([_expand(c) for c in children])
    if isinstance(expr, Prod):
        return _expand_prod(expr)
    if isinstance(expr, Power):
        return _expand_power(expr)
    return expr


def _expand_prod(prod: Prod) -> Expr:
    factors = [f.terms if isinstance(f, Sum) else (f,) for f in prod.terms]
    if all(len(f) == 1 for f in factors):
        return prod
    return Sum([Prod(list(choice)) for choice in itertools.product(*factors)])


def _expand_power(power: Power) -> Expr:
    base, exponent = power.base, power.exponent
    if not isinstance(exponent, Integer):
        return power
    n = exponent.value

    if isinstance(base, Sum):
        expanded = _expand_sum_power(base, abs(n))
        return expanded if n > 0 else Power(expanded, Integer(-1))
    if isinstance(base, Prod) and base.is_commutative:
        return _expand(Prod([Power(f, exponent) for f in base.terms]))
    return power


def _expand_sum_power(base: Sum, n: int) -> Expr:
    if base.is_commutative:
        terms = base.terms
        out = []
        for ks in generate_permutations(len(terms), n):
            coeff = multinomial_coefficient(ks, n)
            out.append(Prod([Integer(coeff)] + [Power(t, Integer(k)) for t, k in zip(terms, ks)]))
        return _expand(Sum(out))

    result = base
    for _ in range(n - 1):
        result = _expand_prod(Prod([result, base]))
    return result
