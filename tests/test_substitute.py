import math

import pytest

from symcore.debug.test_utils import assert_eq_strict, assert_eq_value, eq_float, x, y, z
from symcore.evalf import evalf
from symcore.expr import Float, Function, Integer, Rational, Sum, Symbol, pi
from symcore.functions import cos, sin, sqrt
from symcore.replace import replace, replace_factory, subs, substitute
from symcore.simplify import simplify
from symcore.utils import count, preorder, size


def test_subs():
    assert subs(x**2, {"x": 3}) == 9
    assert subs(x * y, {x: 2, y: 5}) == 10
    assert (x + y).subs({x: z}) == simplify(z + y)


def test_subs_is_simultaneous():
    assert_eq_value(subs(x + 2 * y, {x: y, y: x}), 2 * x + y)


def test_substitute():
    assert substitute(sin(x), x, pi) == 0
    assert substitute(cos(x) + x, x, 0) == 1
    assert_eq_value(substitute(x**2 + x, x, y + 1), y**2 + 3 * y + 2)


def test_replace_does_not_simplify():
    result = replace(sin(x) + x, x, y)
    assert_eq_strict(result, Sum([sin(y), y]))


def test_replace_subexpression():
    assert_eq_strict(replace(sin(x + 1) * y, x + 1, z), simplify(sin(z) * y))


def test_replace_factory():
    def is_sin(expr):
        return isinstance(expr, Function) and expr.name == "sin"

    to_cos = replace_factory(is_sin, lambda e: cos(e.children()[0]))
    assert_eq_strict(to_cos(sin(x) + 1), Sum([Integer(1), cos(x)]))


def test_evalf_constants():
    assert evalf(pi) == Float(math.pi)
    assert eq_float(evalf(sqrt(2)), Float(math.sqrt(2)))
    assert eq_float(evalf(Rational(1, 3)), Float(1 / 3))


def test_evalf_with_subs():
    result = evalf(sin(x), {x: pi / 2})
    assert isinstance(result, Float)
    assert result.value == pytest.approx(1.0)

    assert eq_float(evalf(x * y, {"x": 2, "y": Rational(1, 4)}), Float(0.5))


def test_evalf_keeps_symbols():
    result = evalf(x**2 + Rational(1, 2))
    assert eq_float(result, simplify(Float(0.5) + x**2))
    # integer exponents stay exact
    assert_eq_strict(evalf(x**2), x**2)


def test_preorder():
    expr = Sum([x, sin(y)])
    assert list(preorder(expr)) == [expr, x, sin(y), y]
    assert size(expr) == 4
    assert count(expr, lambda e: isinstance(e, Symbol)) == 2
    assert size(x) == 1
