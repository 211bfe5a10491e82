import pytest

from symcore.errors import *


def test_error_kinds():
    assert MathError("oops").kind == "math"
    assert DomainError("log(0)").kind == "domain"
    assert NumericOverflow("inf").kind == "overflow"
    assert UnsupportedOperation("nope").kind == "unsupported"
    assert DivisionByZero("1/0").kind == "division_by_zero"
    assert ParseError("bad").kind == "parse"


def test_errors_are_builtin_errors_too():
    with pytest.raises(ValueError):
        raise DomainError("sqrt(-1)")
    with pytest.raises(ZeroDivisionError):
        raise DivisionByZero("1/0")
    with pytest.raises(NotImplementedError):
        raise DivisionByZero("1/0")
    with pytest.raises(ArithmeticError):
        raise NumericOverflow("1e308 * 10")


def test_message():
    err = DomainError("log(0) is undefined")
    assert err.message == "log(0) is undefined"
    assert str(err) == "log(0) is undefined"
    assert "domain" in repr(err)


def test_warnings_hierarchy():
    for w in (DomainWarning, DivisionByZeroWarning, SimplificationLimitWarning):
        assert issubclass(w, MathWarning)
        assert issubclass(w, UserWarning)
