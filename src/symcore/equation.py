"""Solving polynomial equations in one variable."""

import warnings
from fractions import Fraction
from typing import List, Union

from . import number
from .errors import MathWarning, UnsupportedOperation
from .expr import Const, Expr, I, Integer, Power, Prod, Rational, Relation, RelationKind, Sum, Symbol, _cast
from .functions import sqrt
from .ordering import sort_key
from .polynomial import Poly
from .simplify import simplify


def solve(equation: Union[Relation, Expr], var: Symbol) -> List[Expr]:
    """Roots of `equation` in `var`, sorted. A bare expression means expression = 0.

    Handles linear equations (also with symbolic coefficients), quadratics, and the rational roots of
    higher degree integer polynomials. Returns [] for a contradiction such as 1 = 2 and raises
    UnsupportedOperation for an identity or anything it can't solve.
    """
    equation = _cast(equation)
    if isinstance(equation, Relation):
        if equation.relation is not RelationKind.EQ:
            raise UnsupportedOperation(f"Can only solve equations, got {equation}")
        expr = Sum([equation.lhs, -equation.rhs])
    else:
        expr = equation
    expr = simplify(expr)

    if expr.is_zero:
        raise UnsupportedOperation("Infinite solutions (identity equation)")

    poly = Poly.from_expression(expr, var)
    if poly is None:
        return [_solve_linear(expr, var)]
    return sorted(_solve_poly(poly), key=sort_key)


def _solve_linear(expr: Expr, var: Symbol) -> Expr:
    """a*var + b = 0 where a and b don't contain var."""
    expanded = expr.expand()
    terms = expanded.terms if isinstance(expanded, Sum) else (expanded,)
    coeff_a, coeff_b = [], []
    for term in terms:
        if term.free_of(var):
            coeff_b.append(term)
            continue
        a = simplify(Prod([term, Power(var, -1)]))
        if not a.free_of(var):
            raise UnsupportedOperation(f"Can only solve polynomial and linear equations in {var}, got {expr}")
        coeff_a.append(a)

    a = simplify(Sum(coeff_a))
    if a.is_zero:
        raise UnsupportedOperation(f"{expr} = 0 does not determine {var}")
    return simplify(Prod([Integer(-1), Sum(coeff_b), Power(a, -1)]))


def _solve_poly(poly: Poly) -> List[Expr]:
    if poly.degree == 0:
        # nonzero constant = 0
        return []
    if poly.degree == 1:
        c0, c1 = poly.coeffs
        return [Const(Fraction(-c0, 1) / c1)]
    if poly.degree == 2:
        return _solve_quadratic(poly)

    roots = []
    rest = poly
    for root in poly.rational_roots():
        roots.append(Const(root))
        root = Fraction(root)
        linear = Poly([-root.numerator, root.denominator], poly.var)
        while linear.divides(rest):
            rest = rest // linear

    if rest.degree <= 2:
        roots += [r for r in _solve_poly(rest) if r not in roots]
    elif roots:
        warnings.warn(f"Only the rational roots of {poly.to_expression()} were found", MathWarning, stacklevel=3)
    else:
        raise UnsupportedOperation(f"Cannot solve {poly.to_expression()} = 0: no rational roots")
    return roots


def _solve_quadratic(poly: Poly) -> List[Expr]:
    c, b, a = (Fraction(v) for v in poly.coeffs)
    discriminant = b * b - 4 * a * c
    center = -b / (2 * a)
    if discriminant == 0:
        return [Const(number.normalize(center))]

    root = number.power(abs(discriminant), Fraction(1, 2))
    if root is not None:
        half_width = Fraction(root) / (2 * a)
        if discriminant > 0:
            return [Const(number.normalize(center - half_width)), Const(number.normalize(center + half_width))]
        return [
            simplify(Sum([Const(number.normalize(center)), Prod([Const(number.normalize(s * half_width)), I])]))
            for s in (-1, 1)
        ]

    if discriminant > 0:
        radical = sqrt(Const(number.normalize(discriminant)))
    else:
        radical = Prod([I, sqrt(Const(number.normalize(-discriminant)))])
    scale = Rational(1 / (2 * a))
    return [
        simplify(Sum([Const(number.normalize(center)), Prod([-scale, radical])])),
        simplify(Sum([Const(number.normalize(center)), Prod([scale, radical])])),
    ]
