"""Dense univariate polynomials with integer (or, after division, rational) coefficients.

Coefficients live in a 1-D numpy object array of python ints / Fractions, lowest degree first, with
the trailing zeros trimmed. The zero polynomial is the empty array and has degree -1.
"""

import logging
import math
import numbers
from fractions import Fraction
from functools import reduce
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from . import number
from .config import MAX_POLY_DEGREE, MODULAR_GCD_MIN_DEGREE
from .errors import DivisionByZero, UnsupportedOperation
from .expr import Const, Expr, Integer, Num, Power, Prod, Sum, Symbol, split_coefficient
from .utils import preorder

logger = logging.getLogger(__name__)

Coefficients = np.ndarray  # has to be 1-D
Coefficient = Union[int, Fraction]


def rid_ending_zeros(lis: Coefficients) -> Coefficients:
    num_zeros = 0
    for i in reversed(range(len(lis))):
        if lis[i] == 0:
            num_zeros += 1
        else:
            break
    return lis[: len(lis) - num_zeros]


def _coefficient(c) -> Coefficient:
    if isinstance(c, Num):
        if not c.is_exact:
            raise TypeError(f"Polynomial coefficients must be exact, got {c!r}")
        c = c.value
    if isinstance(c, numbers.Integral):
        return int(c)
    if isinstance(c, Fraction):
        return number.normalize(c)
    raise TypeError(f"Polynomial coefficients must be exact, got {c!r}")


def integer_gcd(a: int, b: int) -> int:
    """gcd(0, n) = |n|, gcd(0, 0) = 0."""
    return math.gcd(int(a), int(b))


def integer_lcm(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return abs(a * b) // math.gcd(a, b)


class Poly:
    """coeffs[i] is the coefficient of var^i."""

    def __init__(self, coeffs: Iterable, var: Symbol):
        values = [_coefficient(c) for c in coeffs]
        self.coeffs: Coefficients = rid_ending_zeros(np.array(values, dtype=object))
        self.var = var

    @classmethod
    def zero(cls, var: Symbol) -> "Poly":
        return cls([], var)

    @classmethod
    def constant(cls, c, var: Symbol) -> "Poly":
        return cls([c], var)

    @classmethod
    def monomial(cls, c, n: int, var: Symbol) -> "Poly":
        return cls([0] * n + [c], var)

    ## Conversions

    @classmethod
    def from_expression(cls, expr: Expr, var: Symbol, must_convert: bool = False) -> Optional["Poly"]:
        """The polynomial behind expr, if expr is a polynomial in var with integer coefficients.

        expr is expanded first, so (x + 1)*(x - 1) converts. Returns None when it doesn't convert,
        or raises UnsupportedOperation if must_convert. Degrees above MAX_POLY_DEGREE don't convert.
        """
        from .expand import expand

        def reject(reason: str) -> None:
            if must_convert:
                raise UnsupportedOperation(f"{expr} is not a polynomial in {var}: {reason}")
            return None

        if any(_exceeds_max_degree(e) for e in preorder(expr)):
            return reject(f"degree above {MAX_POLY_DEGREE}")
        expanded = expand(expr)
        terms = expanded.terms if isinstance(expanded, Sum) else (expanded,)
        coeffs = {}
        for term in terms:
            coeff, tail = split_coefficient(term)
            degree = _monomial_degree(tail, var)
            if degree is None or not coeff.is_integer:
                return reject("needs integer coefficients and non-negative integer exponents")
            coeffs[degree] = coeffs.get(degree, 0) + coeff.value
        if max(coeffs, default=0) > MAX_POLY_DEGREE:
            return reject(f"degree above {MAX_POLY_DEGREE}")

        values = [0] * (max(coeffs, default=-1) + 1)
        for degree, c in coeffs.items():
            values[degree] = c
        return cls(values, var)

    def to_expression(self) -> Expr:
        from .simplify import simplify

        terms = [Prod([Const(c), Power(self.var, Integer(i))]) for i, c in enumerate(self.coeffs) if c != 0]
        return simplify(Sum(terms))

    ## Basic properties

    @property
    def degree(self) -> int:
        return len(self.coeffs) - 1

    @property
    def leading_coefficient(self) -> Coefficient:
        return self.coeffs[-1] if len(self.coeffs) else 0

    @property
    def is_zero(self) -> bool:
        return len(self.coeffs) == 0

    @property
    def is_integral(self) -> bool:
        return all(isinstance(c, int) for c in self.coeffs)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Poly):
            return NotImplemented
        return self.var == other.var and list(self.coeffs) == list(other.coeffs)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Poly({[c for c in self.coeffs]}, {self.var})"

    ## Arithmetic

    def _coerce(self, other) -> "Poly":
        if isinstance(other, Poly):
            if other.var != self.var:
                raise ValueError(f"Polynomials in different variables: {self.var} and {other.var}")
            return other
        return Poly.constant(other, self.var)

    def __add__(self, other) -> "Poly":
        other = self._coerce(other)
        n = max(len(self.coeffs), len(other.coeffs))
        out = np.zeros(n, dtype=object)
        out[: len(self.coeffs)] += self.coeffs
        out[: len(other.coeffs)] += other.coeffs
        return Poly(out, self.var)

    __radd__ = __add__

    def __neg__(self) -> "Poly":
        return Poly(-self.coeffs, self.var)

    def __sub__(self, other) -> "Poly":
        return self + (-self._coerce(other))

    def __rsub__(self, other) -> "Poly":
        return self._coerce(other) - self

    def __mul__(self, other) -> "Poly":
        other = self._coerce(other)
        if self.is_zero or other.is_zero:
            return Poly.zero(self.var)
        out = np.zeros(len(self.coeffs) + len(other.coeffs) - 1, dtype=object)
        for i, c in enumerate(self.coeffs):
            if c != 0:
                out[i : i + len(other.coeffs)] += c * other.coeffs
        return Poly(out, self.var)

    __rmul__ = __mul__

    def __divmod__(self, other) -> Tuple["Poly", "Poly"]:
        """Long division over the rationals: self = q*other + r with deg(r) < deg(other)."""
        other = self._coerce(other)
        if other.is_zero:
            raise DivisionByZero(f"Cannot divide {self} by the zero polynomial")
        db = other.degree
        if self.degree < db:
            return Poly.zero(self.var), self

        r = np.array([Fraction(c) for c in self.coeffs], dtype=object)
        q = np.zeros(self.degree - db + 1, dtype=object)
        lc = Fraction(other.leading_coefficient)
        for k in range(self.degree - db, -1, -1):
            c = r[k + db] / lc
            q[k] = c
            if c != 0:
                r[k : k + db + 1] -= c * other.coeffs
        return Poly(q, self.var), Poly(r[:db], self.var)

    def __floordiv__(self, other) -> "Poly":
        return divmod(self, other)[0]

    def __mod__(self, other) -> "Poly":
        return divmod(self, other)[1]

    def divides(self, other: "Poly") -> bool:
        """True if self divides other exactly."""
        return (other % self).is_zero

    def pseudo_remainder(self, other: "Poly") -> "Poly":
        """prem(self, other) = remainder of lc(other)^(deg self - deg other + 1) * self by other.

        Stays in the integers when both inputs have integer coefficients.
        """
        other = self._coerce(other)
        if other.is_zero:
            raise DivisionByZero(f"Cannot divide {self} by the zero polynomial")
        db = other.degree
        lc = other.leading_coefficient
        e = self.degree - db + 1
        r = self.coeffs.copy()
        while len(r) - 1 >= db and len(r):
            shift = len(r) - 1 - db
            lr = r[-1]
            r = lc * r
            r[shift:] -= lr * other.coeffs
            r = rid_ending_zeros(r)
            e -= 1
        return Poly(lc ** max(e, 0) * r, self.var)

    ## Content

    def content(self) -> Coefficient:
        """gcd of the numerators over lcm of the denominators. Always non-negative."""
        if self.is_zero:
            return 0
        values = [Fraction(c) for c in self.coeffs]
        num = reduce(math.gcd, (v.numerator for v in values))
        den = reduce(integer_lcm, (v.denominator for v in values))
        return number.normalize(Fraction(num, den))

    def primitive_part(self) -> "Poly":
        if self.is_zero:
            return self
        c = Fraction(self.content())
        return Poly([number.normalize(Fraction(v) / c) for v in self.coeffs], self.var)

    def normalized(self) -> "Poly":
        """Same polynomial up to sign, with a positive leading coefficient."""
        if self.leading_coefficient < 0:
            return -self
        return self

    def monic(self) -> "Poly":
        if self.is_zero:
            return self
        lc = Fraction(self.leading_coefficient)
        return Poly([number.normalize(Fraction(c) / lc) for c in self.coeffs], self.var)

    ## Calculus & evaluation

    def evaluate(self, value):
        """Horner's scheme. value can be a number or an Expr."""
        result = 0
        for c in reversed(self.coeffs):
            result = result * value + c
        return result

    def derivative(self) -> "Poly":
        return Poly([i * c for i, c in enumerate(self.coeffs)][1:], self.var)

    ## GCD and friends

    def gcd(self, other: "Poly") -> "Poly":
        return poly_gcd(self, self._coerce(other))

    def lcm(self, other: "Poly") -> "Poly":
        other = self._coerce(other)
        if self.is_zero or other.is_zero:
            return Poly.zero(self.var)
        g = self.gcd(other)
        return ((self * other) // g).primitive_part().normalized()

    def square_free(self) -> List[Tuple["Poly", int]]:
        """Yun's square-free decomposition of the primitive part.

        Returns [(a_1, 1), (a_2, 2), ...] with each a_i square-free, primitive and pairwise coprime,
        such that pp(self) = +- prod(a_i ^ i). Factors equal to 1 are left out.
        """
        f = self.primitive_part()
        if f.degree < 1:
            return []
        df = f.derivative()
        a = f.gcd(df)
        b = f // a
        c = df // a
        d = c - b.derivative()
        factors = []
        i = 1
        while b.degree > 0:
            a = b.gcd(d)
            if a.degree > 0:
                factors.append((a, i))
            b = b // a
            c = d // a
            d = c - b.derivative()
            i += 1
        return factors

    def rational_roots(self) -> List[Coefficient]:
        """All rational roots, each listed once, sorted ascending."""
        f = self.primitive_part()
        if f.degree < 1:
            return []
        roots = set()
        coeffs = list(f.coeffs)
        if coeffs[0] == 0:
            roots.add(0)
            while coeffs[0] == 0:
                coeffs.pop(0)
            f = Poly(coeffs, self.var)
        if f.degree >= 1:
            for p in _divisors(abs(f.coeffs[0])):
                for q in _divisors(abs(f.leading_coefficient)):
                    for candidate in (Fraction(p, q), Fraction(-p, q)):
                        if f.evaluate(candidate) == 0:
                            roots.add(number.normalize(candidate))
        return sorted(roots)


def _exceeds_max_degree(expr: Expr) -> bool:
    return isinstance(expr, Power) and isinstance(expr.exponent, Integer) and abs(expr.exponent.value) > MAX_POLY_DEGREE


def _monomial_degree(tail: Optional[Expr], var: Symbol) -> Optional[int]:
    if tail is None:
        return 0
    if tail == var:
        return 1
    if isinstance(tail, Power) and tail.base == var and isinstance(tail.exponent, Integer) and tail.exponent.value >= 0:
        return tail.exponent.value
    return None


def _divisors(n: int) -> List[int]:
    small, large = [], []
    for i in range(1, math.isqrt(n) + 1):
        if n % i == 0:
            small.append(i)
            if i != n // i:
                large.append(n // i)
    return small + large[::-1]


def euclidean_gcd(a: Poly, b: Poly) -> Poly:
    """Primitive PRS: pseudo-remainders, taking the primitive part at every step."""
    a, b = a.primitive_part(), b.primitive_part()
    if a.degree < b.degree:
        a, b = b, a
    while not b.is_zero:
        r = a.pseudo_remainder(b)
        a, b = b, r.primitive_part()
    return a.primitive_part().normalized()


def poly_gcd(a: Poly, b: Poly) -> Poly:
    """The primitive gcd with a positive leading coefficient. gcd(0, 0) = 0."""
    var = a.var
    if a.is_zero and b.is_zero:
        return Poly.zero(var)
    if a.is_zero:
        return b.primitive_part().normalized()
    if b.is_zero:
        return a.primitive_part().normalized()
    if a.degree == 0 or b.degree == 0:
        return Poly.constant(1, var)

    a, b = a.primitive_part(), b.primitive_part()
    if min(a.degree, b.degree) >= MODULAR_GCD_MIN_DEGREE:
        from .modular import modular_gcd

        g = modular_gcd(a, b)
        if g is not None:
            return g
        logger.warning("modular gcd of %r and %r failed, falling back to Euclid", a, b)
    return euclidean_gcd(a, b)
