import itertools

from symcore.debug.test_utils import A, B, x, y
from symcore.containers import Matrix, Set
from symcore.expr import *
from symcore.functions import cos, sin
from symcore.ordering import compare, sort_key


def test_kinds_sort_in_order():
    assert compare(Integer(1), x) == -1
    assert compare(pi, x) == -1
    assert compare(x, x**2) == -1
    assert compare(x**2, x * y) == -1
    assert compare(x * y, x + y) == -1
    assert compare(x + y, sin(x)) == -1
    assert compare(Matrix([[1]]), Set([1])) == -1


def test_within_kind():
    assert compare(Integer(2), Float(1.0)) == -1  # exact first
    assert compare(Rational(1, 2), Integer(1)) == -1
    assert compare(pi, E) == -1
    assert compare(x, y) == -1
    assert compare(x, x) == 0
    assert compare(x**2, x**3) == -1
    assert compare(cos(x), sin(x)) == -1
    assert compare(Function("f", x), Function("f", [x, y])) == -1
    assert compare(Relation(x, 1), Relation(x, 1, RelationKind.LT)) == -1
    assert compare(Symbol("A"), A) == -1  # scalar tag before matrix


def test_sorted():
    exprs = [sin(x), x**2, Integer(3), x, pi, x * y]
    assert sorted(exprs, key=sort_key) == [3, pi, x, x**2, x * y, sin(x)]


def test_total_order():
    exprs = [Integer(1), Float(1.0), Rational(1, 3), x, y, A, B, pi, I, x**2, x * y, x + y, sin(x), cos(y)]
    for a, b in itertools.product(exprs, repeat=2):
        assert compare(a, b) == -compare(b, a)
        assert (compare(a, b) == 0) == (a == b)
