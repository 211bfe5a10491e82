"""gcd, lcm and polynomial division on expressions, bridged onto the dense polynomial kernel.

The bridge tries to read both inputs as integer polynomials in one common variable. When that fails
(several variables, symbolic or negative exponents, non-polynomial terms) it falls back to: the
integer gcd when both inputs are numbers, gcd(a, a) = a, and 1 otherwise.

Polynomial results are primitive with a positive leading coefficient, so gcd(2x + 2, 4x + 4) = x + 1.
"""

from fractions import Fraction
from typing import Optional, Tuple

from .expr import Const, Expr, Integer, Num, Power, Prod, Symbol, _cast
from .polynomial import Poly, integer_gcd, integer_lcm, poly_gcd
from .simplify import simplify


def _common_variable(a: Expr, b: Expr) -> Optional[Symbol]:
    symbols = a.symbols() | b.symbols()
    if len(symbols) != 1:
        return None
    (var,) = symbols
    return var if var.is_commutative else None


def _as_polys(a: Expr, b: Expr) -> Optional[Tuple[Poly, Poly]]:
    var = _common_variable(a, b)
    if var is None:
        return None
    pa = Poly.from_expression(a, var)
    pb = Poly.from_expression(b, var)
    if pa is None or pb is None:
        return None
    return pa, pb


def _both_integers(a: Expr, b: Expr) -> bool:
    return isinstance(a, Num) and isinstance(b, Num) and a.is_integer and b.is_integer


def gcd(a: Expr, b: Expr) -> Expr:
    a, b = simplify(_cast(a)), simplify(_cast(b))
    if _both_integers(a, b):
        return Integer(integer_gcd(a.value, b.value))
    if not (isinstance(a, Num) and isinstance(b, Num)):
        polys = _as_polys(a, b)
        if polys is not None:
            return poly_gcd(*polys).to_expression()
    return a if a == b else Integer(1)


def lcm(a: Expr, b: Expr) -> Expr:
    a, b = simplify(_cast(a)), simplify(_cast(b))
    if _both_integers(a, b):
        return Integer(integer_lcm(a.value, b.value))
    if not (isinstance(a, Num) and isinstance(b, Num)):
        polys = _as_polys(a, b)
        if polys is not None:
            pa, pb = polys
            return pa.lcm(pb).to_expression()
    return a if a == b else simplify(Prod([a, b]))


def cofactors(a: Expr, b: Expr) -> Tuple[Expr, Expr, Expr]:
    """(g, a/g, b/g) with g = gcd(a, b)."""
    a, b = simplify(_cast(a)), simplify(_cast(b))
    if not (isinstance(a, Num) and isinstance(b, Num)):
        polys = _as_polys(a, b)
        if polys is not None:
            pa, pb = polys
            g = poly_gcd(pa, pb)
            if g.is_zero:
                return Integer(0), Integer(0), Integer(0)
            return g.to_expression(), (pa // g).to_expression(), (pb // g).to_expression()
    g = gcd(a, b)
    if g.is_zero:
        return g, Integer(0), Integer(0)
    inverse = Power(g, -1)
    return g, simplify(Prod([a, inverse])), simplify(Prod([b, inverse]))


def div_polynomial(a: Expr, b: Expr, var: Symbol) -> Tuple[Expr, Expr]:
    """(quotient, remainder) of a by b as polynomials in var.

    Raises UnsupportedOperation if either isn't an integer polynomial in var, DivisionByZero if b
    is 0.
    """
    pa = Poly.from_expression(_cast(a), var, must_convert=True)
    pb = Poly.from_expression(_cast(b), var, must_convert=True)
    q, r = divmod(pa, pb)
    return q.to_expression(), r.to_expression()


def quo_polynomial(a: Expr, b: Expr, var: Symbol) -> Expr:
    return div_polynomial(a, b, var)[0]


def rem_polynomial(a: Expr, b: Expr, var: Symbol) -> Expr:
    return div_polynomial(a, b, var)[1]


def factor(expr: Expr, var: Optional[Symbol] = None) -> Expr:
    """Factor a univariate integer polynomial into content * linear factors * square-free rest.

    Linear factors come from the rational roots of each square-free part. Anything that isn't a
    polynomial in a single variable is returned simplified but otherwise unchanged.
    """
    expr = simplify(_cast(expr))
    if var is None:
        symbols = expr.symbols()
        if len(symbols) != 1:
            return expr
        (var,) = symbols
    p = Poly.from_expression(expr, var)
    if p is None or p.degree < 1:
        return expr

    factors = []
    for part, multiplicity in p.square_free():
        rest = part
        for root in part.rational_roots():
            root = Fraction(root)
            linear = Poly([-root.numerator, root.denominator], var)
            rest = rest // linear
            factors.append((linear, multiplicity))
        if rest.degree >= 1:
            factors.append((rest.primitive_part().normalized(), multiplicity))

    # Whatever is left over is the constant that makes the product equal to p.
    lc = Fraction(p.leading_coefficient)
    for f, multiplicity in factors:
        lc /= Fraction(f.leading_coefficient) ** multiplicity
    terms = [Const(lc)] + [Power(f.to_expression(), multiplicity) for f, multiplicity in factors]
    return simplify(Prod(terms))
