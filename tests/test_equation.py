import math
import warnings

import pytest

from symcore.debug.test_utils import assert_eq_value, unhashable_set_eq, x, y
from symcore.equation import solve
from symcore.errors import MathWarning, UnsupportedOperation
from symcore.evalf import evalf
from symcore.expr import I, Integer, Rational, Relation, RelationKind, equation
from symcore.functions import sin
from symcore.simplify import simplify


def test_linear():
    assert solve(2 * x + 1, x) == [Rational(-1, 2)]
    assert solve(equation(3 * x, 6), x) == [2]
    assert solve(x / 2 + 1, x) == [-2]


def test_quadratic():
    assert solve(equation(x**2, 4), x) == [-2, 2]
    assert solve(x**2 - 2 * x + 1, x) == [1]
    assert solve((2 * x - 1) * (x + 3), x) == [-3, Rational(1, 2)]


def test_irrational_roots():
    roots = solve(x**2 - 2, x)
    assert len(roots) == 2
    values = sorted(evalf(r).value for r in roots)
    assert values == pytest.approx([-math.sqrt(2), math.sqrt(2)])


def test_complex_roots():
    roots = solve(x**2 + 1, x)
    assert unhashable_set_eq(roots, [I, simplify(-I)])


def test_cubic():
    assert solve(x**3 - 6 * x**2 + 11 * x - 6, x) == [1, 2, 3]
    assert solve(x**3 - x, x) == [-1, 0, 1]


def test_partial_solution_warns():
    # x^4 + x + 1 has no rational roots after x = 0 is split off
    with pytest.warns(MathWarning):
        roots = solve(x**5 + x**2 + x, x)
    assert roots == [0]

    with pytest.raises(UnsupportedOperation):
        solve(x**4 + x + 1, x)


def test_identity_and_contradiction():
    with pytest.raises(UnsupportedOperation):
        solve(equation(x + 1, 1 + x), x)
    assert solve(equation(Integer(1), Integer(2)), x) == []


def test_symbolic_coefficients():
    (root,) = solve(y * x + 2, x)
    assert_eq_value(root, -2 / y)
    with pytest.raises(UnsupportedOperation):
        solve(y, x)


def test_unsupported():
    with pytest.raises(UnsupportedOperation):
        solve(Relation(x, Integer(1), RelationKind.LT), x)
    with pytest.raises(UnsupportedOperation):
        solve(sin(x) - 1, x)


def test_roots_satisfy_equation():
    expr = x**3 - 2 * x**2 - 5 * x + 6
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        roots = solve(expr, x)
    assert roots == [-2, 1, 3]
    for root in roots:
        assert simplify(expr.subs({x: root})) == 0
