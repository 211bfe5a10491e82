import math

import pytest

from symcore.debug.test_utils import assert_eq_strict, eq_float, x, y
from symcore.errors import DomainError, DomainWarning
from symcore.expr import *
from symcore.functions import *
from symcore.simplify import simplify


def test_special_values():
    assert_eq_strict(simplify(sin(0)), 0)
    assert_eq_strict(simplify(sin(pi)), 0)
    assert_eq_strict(simplify(sin(pi / 6)), Rational(1, 2))
    assert_eq_strict(simplify(sin(pi / 2)), 1)
    assert_eq_strict(simplify(cos(pi)), -1)
    assert_eq_strict(simplify(cos(pi / 3)), Rational(1, 2))
    assert_eq_strict(simplify(tan(pi / 4)), 1)
    assert_eq_strict(simplify(asin(Rational(1, 2))), pi / 6)
    assert_eq_strict(simplify(acos(-1)), pi)
    assert_eq_strict(simplify(atan(1)), pi / 4)
    assert_eq_strict(simplify(exp(0)), 1)
    assert_eq_strict(simplify(exp(1)), E)
    assert_eq_strict(simplify(log(1)), 0)
    assert_eq_strict(simplify(log(E)), 1)
    assert_eq_strict(simplify(cosh(0)), 1)


def test_special_values_after_simplifying_the_argument():
    assert_eq_strict(simplify(sin(pi / 4 + pi / 4)), 1)
    assert_eq_strict(simplify(cos(x - x)), 1)


def test_parity():
    assert_eq_strict(simplify(sin(-x)), -sin(x))
    assert_eq_strict(simplify(cos(-x)), cos(x))
    assert_eq_strict(simplify(tan(-2 * x)), -tan(2 * x))
    assert_eq_strict(simplify(Abs(-x)), Abs(x))
    assert_eq_strict(simplify(cos(-x - y)), cos(x + y))
    # exp has no parity
    assert_eq_strict(simplify(exp(-x)), exp(-x))


def test_exact_rules():
    assert_eq_strict(simplify(sqrt(4)), 2)
    assert_eq_strict(simplify(sqrt(Rational(9, 4))), Rational(3, 2))
    assert_eq_strict(simplify(sqrt(-4)), 2 * I)
    assert_eq_strict(simplify(sqrt(-1)), I)
    assert_eq_strict(simplify(sqrt(2)), sqrt(2))
    assert_eq_strict(simplify(exp(log(x))), x)
    assert_eq_strict(simplify(log(exp(x))), x)
    assert_eq_strict(simplify(log(E**y)), y)
    assert_eq_strict(simplify(Abs(-3)), 3)
    assert_eq_strict(simplify(Abs(pi)), pi)
    assert_eq_strict(simplify(sign(-2)), -1)
    assert_eq_strict(simplify(sign(Rational(1, 3))), 1)


def test_float_arguments_evaluate():
    assert eq_float(simplify(sin(0.5)), Float(math.sin(0.5)))
    assert eq_float(simplify(log(2.0)), Float(math.log(2.0)))
    assert eq_float(simplify(sqrt(2.0)), Float(math.sqrt(2)))
    # outside the real domain it stays put
    assert_eq_strict(simplify(log(-2.0)), log(-2.0))


def test_exact_arguments_stay_symbolic():
    assert_eq_strict(simplify(sin(1)), sin(1))
    assert_eq_strict(simplify(log(2)), log(2))


def test_aliases():
    assert_eq_strict(simplify(Function("ln", x)), log(x))
    assert_eq_strict(simplify(Function("arctan", 1)), pi / 4)
    assert get_rule("ln") is REGISTRY["log"]
    assert canonical_name("arcsin") == "asin"
    assert ln is log


def test_log_base():
    assert_eq_strict(log(x, 2), log(x) / log(2))


def test_poles():
    with pytest.warns(DomainWarning):
        assert_eq_strict(simplify(log(0)), UNDEFINED)
    with pytest.warns(DomainWarning):
        assert_eq_strict(simplify(tan(pi / 2)), UNDEFINED)
    with pytest.warns(DomainWarning):
        assert_eq_strict(simplify(x + cot(0)), UNDEFINED)
    with pytest.raises(DomainError):
        simplify(log(0), strict=True)
    with pytest.raises(DomainError):
        simplify(log(x - x), strict=True)


def test_real_only():
    with pytest.raises(DomainError):
        simplify(sqrt(-4), real_only=True)
    with pytest.raises(DomainError):
        simplify(log(-2), real_only=True)
    with pytest.raises(DomainError):
        simplify(asin(2), real_only=True)
    with pytest.raises(DomainError):
        simplify(Power(-4, Rational(1, 2)), real_only=True)
    assert_eq_strict(simplify(sqrt(4), real_only=True), 2)
    assert_eq_strict(simplify(Power(-8, Rational(1, 3)), real_only=True), Power(-8, Rational(1, 3)))


def test_registry():
    assert set(REGISTRY) >= {"sin", "cos", "tan", "exp", "log", "sqrt", "abs", "sign", "atanh"}
    with pytest.raises(TypeError):
        REGISTRY["f"] = FunctionRule("f")
    assert get_rule("f") is None

    rule = get_rule("sin")
    assert rule.parity is Parity.ODD
    assert rule.period == 2 * pi
    assert rule.special_value(pi / 2) == 1
    assert rule.special_value(x) is None
    assert get_rule("log").is_pole(Integer(0))
    assert not get_rule("log").in_real_domain(-1.0)


def test_evaluate_numeric():
    assert evaluate_numeric(get_rule("cos"), 0.0) == 1.0
    assert evaluate_numeric(get_rule("log"), -1.0) is None
    assert evaluate_numeric(get_rule("atanh"), 1.0) is None
    assert evaluate_numeric(get_rule("exp"), 1000.0) is None
