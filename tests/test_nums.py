import math
from fractions import Fraction

import pytest

from symcore.debug.test_utils import *
from symcore.errors import DivisionByZero, DivisionByZeroWarning, DomainWarning, NumericOverflow, ParseError
from symcore.expr import *
from symcore import number
from symcore.simplify import simplify


def test_integer_literals():
    assert Integer("12") == 12
    assert Integer(" -7 ") == -7
    with pytest.raises(ParseError):
        Integer("twelve")


def test_big_integers():
    assert type(Integer(2**63 - 1)) is Integer
    big = Integer(2**70)
    assert isinstance(big, BigInteger)
    assert big == 2**70
    assert BigInteger(3) == Integer(3)
    assert Integer(2**62) * 4 == Integer(2**64)


def test_rationals():
    assert Rational(2, 4) == Rational(1, 2)
    assert Rational(-1, -2) == Rational(1, 2)
    assert type(Rational(4, 2)) is Integer
    assert Rational(6, 4).numerator == 3
    assert Rational(6, 4).denominator == 2
    assert Rational(1, 2) + Rational(1, 2) == 1
    with pytest.raises(DivisionByZero):
        Rational(1, 0)


def test_floats():
    assert Float(0.5) != Rational(1, 2)
    assert Integer(1) + 0.5 == 1.5
    assert isinstance(Rational(1, 3) * 0.3, Float)
    with pytest.raises(NumericOverflow):
        Float(math.inf)
    with pytest.raises(NumericOverflow):
        Float(1e308) * 10


def test_combining_in_sum():
    assert eq_float(0.2 * 3 * x, 0.6 * x)
    assert eq_float(0.2 * 3 * x + 0.5, 0.5 + 0.6 * x)


def test_number_powers():
    assert Power(2, 10) == 1024
    assert Power(2, -3) == Rational(1, 8)
    assert Power(4, Rational(1, 2)) == 2
    assert Power(Rational(4, 9), Rational(-1, 2)) == Rational(3, 2)
    assert Power(27, Rational(2, 3)) == 9

    # not exact -> stays a power
    assert isinstance(Power(2, Rational(1, 2)), Power)
    assert isinstance(Power(-8, Rational(1, 3)), Power)
    # too big to fold
    assert isinstance(Power(2, 10**7), Power)


def test_zero_powers():
    # the constructor leaves 0^0 and 1/0 to the simplifier
    assert isinstance(Power(0, 0), Power)
    assert isinstance(Power(0, -1), Power)
    assert Power(0, 3) == 0

    with pytest.warns(DomainWarning):
        assert simplify(Power(0, 0)) == UNDEFINED
    with pytest.warns(DivisionByZeroWarning):
        assert simplify(Power(0, -1)) == UNDEFINED
    with pytest.raises(DivisionByZero):
        simplify(Integer(1) / 0, strict=True)


def test_compare_numbers():
    assert Integer(2) < 3
    assert Rational(1, 2) < Integer(1)
    assert Float(2.5) >= Rational(5, 2)
    assert -Integer(3) == -3
    assert abs(Rational(-1, 2)) == Rational(1, 2)


def test_infinity_basic_ops():
    assert oo + 1 == oo
    assert 2 * oo == oo
    assert -2 * oo == oo_neg
    assert -oo == oo_neg
    assert oo - oo == UNDEFINED
    assert 0 * oo == UNDEFINED
    assert x + UNDEFINED == UNDEFINED


def test_value_helpers():
    assert number.normalize(Fraction(4, 2)) == 2
    assert isinstance(number.normalize(Fraction(4, 2)), int)
    assert number.add(1, 0.5) == 1.5
    assert number.mul(Fraction(1, 2), 4) == 2
    assert number.integer_root(81, 4) == 3
    assert number.integer_root(80, 4) is None
    assert number.power(-1, 5) == -1
    with pytest.raises(DivisionByZero):
        number.power(0, -2)
