"""Errors and warnings raised by the algebra.

Every error carries a short `kind` tag so callers can branch on it without
string matching, plus a message that names the offending argument.

The default simplification path is total: 0^0, 1/0 and poles such as log(0)
turn into the Undefined constant and emit one of the warnings below. Pass
`strict=True` to `simplify` to get the exceptions instead.
"""


class MathError(Exception):
    """Base class for all errors surfaced by the core."""

    kind = "math"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind!r}, message={self.message!r})"


class DomainError(MathError, ValueError):
    """log(0), 0^0 under strict mode, sqrt(-1) under real-only mode..."""

    kind = "domain"


class NumericOverflow(MathError, ArithmeticError):
    """Only floats overflow. Exact integers are promoted instead."""

    kind = "overflow"


class UnsupportedOperation(MathError, NotImplementedError):
    kind = "unsupported"


class DivisionByZero(UnsupportedOperation, ZeroDivisionError):
    kind = "division_by_zero"


class ParseError(MathError, ValueError):
    """Reserved for surface parsers that build expressions on top of the core."""

    kind = "parse"


class MathWarning(UserWarning):
    pass


class DomainWarning(MathWarning):
    pass


class DivisionByZeroWarning(MathWarning):
    pass


class SimplificationLimitWarning(MathWarning):
    pass
