"""The simplifier: rewrites an expression to canonical form.

One pass is bottom-up: simplify the children, rebuild the node through its constructor, then run the
pass for the node's kind. `simplify` repeats passes until nothing changes, with a guard on the number
of passes.
"""

import logging
import time
import warnings
from typing import Callable, Dict, List, Optional, Tuple

from . import number
from .config import SimplifyConfig, resolve_config
from .errors import DivisionByZero, DivisionByZeroWarning, DomainError, DomainWarning, SimplificationLimitWarning
from .expr import (
    UNDEFINED,
    Const,
    Expr,
    ExprKind,
    Function,
    I,
    Integer,
    Num,
    Power,
    Prod,
    Rational,
    Relation,
    RelationKind,
    Sum,
    _cast,
    false,
    split_coefficient,
    split_power,
    true,
)
from .functions import Parity, canonical_name, evaluate_numeric, get_rule, propagates_undefined
from .ordering import sort_key

logger = logging.getLogger(__name__)


def simplify(expr: Expr, config: Optional[SimplifyConfig] = None, **overrides) -> Expr:
    """Rewrite expr to canonical form.

    config / overrides: see SimplifyConfig. `simplify(e, expand=True)` is the same as
    `simplify(e, SimplifyConfig(expand=True))`.

    Repeats to a fixed point. If config.max_iterations passes aren't enough, warns with a
    SimplificationLimitWarning and returns the last value.
    """
    config = resolve_config(config, **overrides)
    start = time.time()
    original = current = _cast(expr)

    iterations = 0
    while True:
        new = _simplify_pass(current, config)
        iterations += 1
        if new == current:
            break
        current = new
        if iterations >= config.max_iterations:
            logger.debug("simplify gave up after %d passes on %r", iterations, original)
            warnings.warn(
                f"simplify did not reach a fixed point after {iterations} passes",
                SimplificationLimitWarning,
                stacklevel=2,
            )
            break

    if config.logger is not None:
        config.logger.log(original, time.time() - start, iterations)
    return current


def _simplify_pass(expr: Expr, config: SimplifyConfig) -> Expr:
    children = expr.children()
    if children:
        expr = expr.with_children([_simplify_pass(c, config) for c in children])

    handler = _HANDLERS.get(expr.kind)
    if handler is None:
        return expr
    return handler(expr, config)


## Sums


def _simplify_sum(expr: Expr, config: SimplifyConfig) -> Expr:
    """Collect like terms: terms with the same tail get their coefficients summed."""
    if not isinstance(expr, Sum):
        return expr

    constant = None
    coeffs: Dict[Expr, number.Value] = {}
    for term in expr.terms:
        coeff, tail = split_coefficient(term)
        if tail is None:
            constant = coeff.value if constant is None else number.add(constant, coeff.value)
        elif tail in coeffs:
            coeffs[tail] = number.add(coeffs[tail], coeff.value)
        else:
            coeffs[tail] = coeff.value

    new_terms = []
    if constant is not None:
        new_terms.append(Const(constant))
    for tail in sorted(coeffs, key=sort_key):
        coeff = coeffs[tail]
        if coeff == 0:
            continue
        new_terms.append(Prod([Const(coeff), tail]))
    return Sum(new_terms)


## Products


def _simplify_prod(expr: Expr, config: SimplifyConfig) -> Expr:
    """Fold the numbers and combine like factors.

    Commutative factors are grouped by base anywhere in the product. Noncommutative factors only
    merge with the one right before them, so A*B*B^-1*A becomes A^2 but A*B*A stays.
    """
    if not isinstance(expr, Prod):
        return expr

    coeff = 1
    groups: Dict[Expr, List[Expr]] = {}
    run: List[Tuple[Expr, Expr]] = []
    for factor in expr.terms:
        if isinstance(factor, Num):
            coeff = number.mul(coeff, factor.value)
            continue
        base, exponent = split_power(factor)
        if factor.is_commutative:
            groups.setdefault(base, []).append(exponent)
        elif run and run[-1][0] == base:
            _, previous = run.pop()
            merged = Sum([previous, exponent])
            if not merged.is_zero:
                run.append((base, merged))
        else:
            run.append((base, exponent))

    if coeff == 0:
        # the factors are simplified, so none of them hides a 1/0 any more
        return Const(coeff)

    factors = [Const(coeff)]
    factors += [Power(base, Sum(exponents)) for base, exponents in groups.items()]
    factors += [Power(base, exponent) for base, exponent in run]
    return Prod(factors)


## Powers


def _simplify_power(expr: Expr, config: SimplifyConfig) -> Expr:
    if not isinstance(expr, Power):
        return expr
    base, exponent = expr.base, expr.exponent

    if isinstance(exponent, Num) and exponent.value <= 0:
        if isinstance(base, Num) and base.value == 0:
            return _zero_base(expr, config)
        if exponent.value == 0:
            # base is simplified and not 0
            return Integer(1) if exponent.is_exact else Const(1.0)

    if config.real_only and _is_even_root_of_negative(base, exponent):
        raise DomainError(f"{expr} is not real")

    # (-1)^(1/2) = i
    if base == -1 and exponent == Rational(1, 2):
        return I

    # i^n cycles through 1, i, -1, -i
    if base == I and isinstance(exponent, Integer):
        return [Integer(1), I, Integer(-1), Prod([Integer(-1), I])][exponent.value % 4]

    # (b^a)^n = b^(a*n) for integer n
    if isinstance(base, Power) and isinstance(exponent, Integer):
        return Power(base.base, Prod([base.exponent, exponent]))

    if config.expand and isinstance(base, Prod) and base.is_commutative and isinstance(exponent, Integer):
        return Prod([Power(f, exponent) for f in base.terms])

    return expr


def _zero_base(expr: Power, config: SimplifyConfig) -> Expr:
    """0^0 and 0^-n. Undefined with a warning, or an error in strict mode."""
    if expr.exponent.value == 0:
        if config.strict:
            raise DomainError("0^0 is undefined")
        warnings.warn("0^0 is undefined", DomainWarning, stacklevel=4)
    else:
        if config.strict:
            raise DivisionByZero(f"{expr} divides by zero")
        warnings.warn(f"{expr} divides by zero", DivisionByZeroWarning, stacklevel=4)
    return UNDEFINED


def _is_even_root_of_negative(base: Expr, exponent: Expr) -> bool:
    return (
        isinstance(base, Num)
        and base.value < 0
        and isinstance(exponent, Rational)
        and exponent.value.denominator % 2 == 0
    )


## Functions


def _simplify_function(expr: Expr, config: SimplifyConfig) -> Expr:
    if not isinstance(expr, Function):
        return expr
    if propagates_undefined(expr):
        return UNDEFINED

    rule = get_rule(expr.name)
    if rule is None:
        return expr
    if expr.name != rule.name:
        expr = Function(canonical_name(expr.name), expr.args)
    if len(expr.args) != 1:
        return expr
    (arg,) = expr.args

    if rule.is_pole(arg):
        return _domain_violation(expr, config)
    if config.real_only and isinstance(arg, Num) and not rule.in_real_domain(number.to_float(arg.value)):
        raise DomainError(f"{expr} is outside the real domain of {rule.name} ({rule.domain})")

    value = rule.special_value(arg)
    if value is not None:
        return value
    if rule.exact is not None:
        value = rule.exact(arg)
        if value is not None:
            return value
    if isinstance(arg, Num) and not arg.is_exact:
        value = evaluate_numeric(rule, arg.value)
        if value is not None:
            return Const(value)

    if rule.parity is not Parity.NEITHER and arg.is_subtraction:
        inner = Function(rule.name, [_negate(arg)])
        return inner if rule.parity is Parity.EVEN else Prod([Integer(-1), inner])
    return expr


def _negate(expr: Expr) -> Expr:
    if isinstance(expr, Sum):
        return Sum([-t for t in expr.terms])
    return -expr


def _domain_violation(expr: Function, config: SimplifyConfig) -> Expr:
    if config.strict:
        raise DomainError(f"{expr} is undefined")
    warnings.warn(f"{expr} is undefined", DomainWarning, stacklevel=4)
    return UNDEFINED


## Relations


_COMPARISONS: Dict[RelationKind, Callable[[number.Value, number.Value], bool]] = {
    RelationKind.EQ: lambda a, b: a == b,
    RelationKind.NE: lambda a, b: a != b,
    RelationKind.LT: lambda a, b: a < b,
    RelationKind.LE: lambda a, b: a <= b,
    RelationKind.GT: lambda a, b: a > b,
    RelationKind.GE: lambda a, b: a >= b,
}


def _simplify_relation(expr: Expr, config: SimplifyConfig) -> Expr:
    """Relations between two numbers collapse to the canonical true / false."""
    if not isinstance(expr, Relation):
        return expr
    lhs, rhs = expr.lhs, expr.rhs
    if isinstance(lhs, Num) and isinstance(rhs, Num):
        return true if _COMPARISONS[expr.relation](lhs.value, rhs.value) else false
    if lhs == rhs:
        return true if expr.relation in (RelationKind.EQ, RelationKind.LE, RelationKind.GE) else false
    return expr


_HANDLERS: Dict[ExprKind, Callable[[Expr, SimplifyConfig], Expr]] = {
    ExprKind.SUM: _simplify_sum,
    ExprKind.PRODUCT: _simplify_prod,
    ExprKind.POWER: _simplify_power,
    ExprKind.FUNCTION: _simplify_function,
    ExprKind.RELATION: _simplify_relation,
}
