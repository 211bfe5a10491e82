"""Value-level exact arithmetic behind the Number nodes.

Values are plain python `int`, `Fraction` or `float`. Exact results are always
normalized (a Fraction with denominator 1 comes back as an int) and a float
operand poisons the result into a float. Ints are arbitrary precision, so the
only overflow that exists is the float one, which is reported as
NumericOverflow.
"""

import math
from fractions import Fraction
from typing import Optional, Union

from .config import MAX_FOLD_BITS
from .errors import DivisionByZero, NumericOverflow

Value = Union[int, Fraction, float]

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def is_machine_int(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def normalize(value: Value) -> Value:
    if isinstance(value, Fraction) and value.denominator == 1:
        return value.numerator
    return value


def check_float(value: float) -> float:
    if not math.isfinite(value):
        raise NumericOverflow(f"float arithmetic produced {value!r}")
    return value


def to_float(value: Value) -> float:
    try:
        return check_float(float(value))
    except OverflowError as exc:
        raise NumericOverflow(f"{value} does not fit in a float") from exc


def is_integer(value: Value) -> bool:
    return isinstance(value, int) or (isinstance(value, Fraction) and value.denominator == 1)


def add(a: Value, b: Value) -> Value:
    if isinstance(a, float) or isinstance(b, float):
        return check_float(to_float(a) + to_float(b))
    return normalize(a + b)


def mul(a: Value, b: Value) -> Value:
    if isinstance(a, float) or isinstance(b, float):
        return check_float(to_float(a) * to_float(b))
    return normalize(a * b)


def integer_root(n: int, k: int) -> Optional[int]:
    """The exact k-th root of a non-negative int, or None if n is not a perfect power."""
    if n < 0 or k < 1:
        return None
    if n < 2 or k == 1:
        return n
    # Newton from an overestimate converges to floor(n ** (1/k)).
    x = 1 << ((n.bit_length() + k - 1) // k)
    while True:
        y = ((k - 1) * x + n // x ** (k - 1)) // k
        if y >= x:
            break
        x = y
    return x if x**k == n else None


def power(base: Value, exponent: Value) -> Optional[Value]:
    """base ** exponent, or None when the result is not representable exactly.

    Raises DivisionByZero for an exact zero base with a negative exponent.
    """
    if isinstance(base, float) or isinstance(exponent, float):
        if base < 0 and not float(exponent).is_integer():
            return None
        if base == 0 and exponent < 0:
            raise DivisionByZero(f"{base} ** {exponent}")
        try:
            return check_float(to_float(base) ** to_float(exponent))
        except OverflowError as exc:
            raise NumericOverflow(f"{base} ** {exponent} overflows a float") from exc

    exponent = Fraction(exponent)
    base = Fraction(base)
    if base == 0 and exponent < 0:
        raise DivisionByZero(f"{base} ** {exponent}")

    if exponent.denominator == 1:
        e = exponent.numerator
        if base in (0, 1):
            return normalize(base)
        if base == -1:
            return 1 if e % 2 == 0 else -1
        bits = max(base.numerator.bit_length(), base.denominator.bit_length())
        if abs(e) * bits > MAX_FOLD_BITS:
            return None
        return normalize(base**e)

    if base < 0:
        return None
    q = exponent.denominator
    num = integer_root(base.numerator, q)
    den = integer_root(base.denominator, q)
    if num is None or den is None:
        return None
    return power(Fraction(num, den), exponent.numerator)
