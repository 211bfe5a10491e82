"""The function-rule registry.

Each known function name maps to a FunctionRule: its derivative, parity, period, special values,
poles and how to evaluate it numerically. The registry is built once at import time and is
read-only afterwards (a MappingProxyType), so it can be shared freely.

Function nodes are identified by name only, so adding a function means adding a rule here. Nothing
in the node classes has to change.
"""

import math
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

from . import number
from .expr import E, Expr, Function, I, Integer, Num, Power, Prod, Rational, Sum, cast, is_undefined, pi

ExprRule = Callable[[Expr], Expr]
OptionalExprRule = Callable[[Expr], Optional[Expr]]


class Parity(Enum):
    EVEN = "even"
    ODD = "odd"
    NEITHER = "neither"


@dataclass(frozen=True)
class FunctionRule:
    """Declarative properties of one function.

    derivative: u -> f'(u). The differentiator multiplies in du/dx itself.
    special_values: (argument, result) pairs matched structurally against the simplified argument.
    exact: extra exact evaluation that can't be written as a finite table (sqrt(9) = 3). Returns
        None when it doesn't apply.
    poles: arguments where the function is undefined.
    real_domain: predicate on a float argument, True when the real-valued function is defined there.
    """

    name: str
    derivative: Optional[ExprRule] = None
    parity: Parity = Parity.NEITHER
    period: Optional[Expr] = None
    special_values: Tuple[Tuple[Expr, Expr], ...] = ()
    domain: str = "all reals"
    numeric: Optional[Callable[[float], float]] = None
    exact: Optional[OptionalExprRule] = None
    poles: Tuple[Expr, ...] = ()
    real_domain: Optional[Callable[[float], bool]] = None

    def special_value(self, arg: Expr) -> Optional[Expr]:
        for pattern, result in self.special_values:
            if arg == pattern:
                return result
        return None

    def is_pole(self, arg: Expr) -> bool:
        return any(arg == p for p in self.poles)

    def in_real_domain(self, value: float) -> bool:
        return self.real_domain is None or self.real_domain(value)


ALIASES = MappingProxyType({"ln": "log", "arcsin": "asin", "arccos": "acos", "arctan": "atan"})


def canonical_name(name: str) -> str:
    return ALIASES.get(name, name)


def get_rule(name: str) -> Optional[FunctionRule]:
    """O(1) lookup by name. Aliases such as ln resolve to their canonical rule."""
    return REGISTRY.get(canonical_name(name))


## Builders


@cast
def sin(x: Expr) -> Function:
    return Function("sin", [x])


@cast
def cos(x: Expr) -> Function:
    return Function("cos", [x])


@cast
def tan(x: Expr) -> Function:
    return Function("tan", [x])


@cast
def sec(x: Expr) -> Function:
    return Function("sec", [x])


@cast
def csc(x: Expr) -> Function:
    return Function("csc", [x])


@cast
def cot(x: Expr) -> Function:
    return Function("cot", [x])


@cast
def asin(x: Expr) -> Function:
    return Function("asin", [x])


@cast
def acos(x: Expr) -> Function:
    return Function("acos", [x])


@cast
def atan(x: Expr) -> Function:
    return Function("atan", [x])


@cast
def sinh(x: Expr) -> Function:
    return Function("sinh", [x])


@cast
def cosh(x: Expr) -> Function:
    return Function("cosh", [x])


@cast
def tanh(x: Expr) -> Function:
    return Function("tanh", [x])


@cast
def asinh(x: Expr) -> Function:
    return Function("asinh", [x])


@cast
def acosh(x: Expr) -> Function:
    return Function("acosh", [x])


@cast
def atanh(x: Expr) -> Function:
    return Function("atanh", [x])


@cast
def exp(x: Expr) -> Function:
    return Function("exp", [x])


@cast
def log(x: Expr, base: Optional[Expr] = None) -> Expr:
    """Natural log. With a base, log(x)/log(base)."""
    if base is None:
        return Function("log", [x])
    return Prod([Function("log", [x]), Power(Function("log", [base]), -1)])


ln = log


@cast
def sqrt(x: Expr) -> Function:
    return Function("sqrt", [x])


@cast
def Abs(x: Expr) -> Function:
    return Function("abs", [x])


@cast
def sign(x: Expr) -> Function:
    return Function("sign", [x])


## Exact evaluation


def _sqrt_exact(u: Expr) -> Optional[Expr]:
    if not (isinstance(u, Num) and u.is_exact):
        return None
    root = number.power(abs(u.value), Fraction(1, 2))
    if root is None:
        return None
    if u.value < 0:
        return Prod([Rational(root), I])
    return Rational(root)


def _abs_exact(u: Expr) -> Optional[Expr]:
    if isinstance(u, Num):
        return abs(u)
    if u in (pi, E):
        return u
    return None


def _sign_exact(u: Expr) -> Optional[Expr]:
    if isinstance(u, Num):
        return Integer((u.value > 0) - (u.value < 0))
    if u in (pi, E):
        return Integer(1)
    return None


def _exp_exact(u: Expr) -> Optional[Expr]:
    # exp(log(u)) = u
    if isinstance(u, Function) and canonical_name(u.name) == "log" and len(u.args) == 1:
        return u.args[0]
    return None


def _log_exact(u: Expr) -> Optional[Expr]:
    # log(e^u) = u, log(exp(u)) = u
    if isinstance(u, Power) and u.base == E:
        return u.exponent
    if isinstance(u, Function) and u.name == "exp" and len(u.args) == 1:
        return u.args[0]
    return None


def _sign_numeric(v: float) -> float:
    return float((v > 0) - (v < 0))


## The registry


def _half(e: Expr) -> Expr:
    return Prod([Rational(1, 2), e])


def _one_minus_square(u: Expr) -> Expr:
    return Sum([Integer(1), Prod([Integer(-1), Power(u, 2)])])


def _build_registry() -> Dict[str, FunctionRule]:
    two_pi = Prod([Integer(2), pi])
    pi_2 = _half(pi)
    pi_3 = Prod([Rational(1, 3), pi])
    pi_4 = Prod([Rational(1, 4), pi])
    pi_6 = Prod([Rational(1, 6), pi])
    zero, one = Integer(0), Integer(1)

    rules = [
        FunctionRule(
            "sin",
            derivative=cos,
            parity=Parity.ODD,
            period=two_pi,
            special_values=((zero, zero), (pi_6, Rational(1, 2)), (pi_2, one), (pi, zero)),
            numeric=math.sin,
        ),
        FunctionRule(
            "cos",
            derivative=lambda u: Prod([Integer(-1), sin(u)]),
            parity=Parity.EVEN,
            period=two_pi,
            special_values=((zero, one), (pi_3, Rational(1, 2)), (pi_2, zero), (pi, Integer(-1))),
            numeric=math.cos,
        ),
        FunctionRule(
            "tan",
            derivative=lambda u: Power(sec(u), 2),
            parity=Parity.ODD,
            period=pi,
            special_values=((zero, zero), (pi_4, one), (pi, zero)),
            domain="x != pi/2 + k*pi",
            numeric=math.tan,
            poles=(pi_2,),
        ),
        FunctionRule(
            "sec",
            derivative=lambda u: Prod([sec(u), tan(u)]),
            parity=Parity.EVEN,
            period=two_pi,
            special_values=((zero, one), (pi, Integer(-1))),
            domain="x != pi/2 + k*pi",
            numeric=lambda v: 1 / math.cos(v),
            poles=(pi_2,),
        ),
        FunctionRule(
            "csc",
            derivative=lambda u: Prod([Integer(-1), csc(u), cot(u)]),
            parity=Parity.ODD,
            period=two_pi,
            special_values=((pi_2, one),),
            domain="x != k*pi",
            numeric=lambda v: 1 / math.sin(v),
            poles=(zero, pi),
        ),
        FunctionRule(
            "cot",
            derivative=lambda u: Prod([Integer(-1), Power(csc(u), 2)]),
            parity=Parity.ODD,
            period=pi,
            special_values=((pi_4, one), (pi_2, zero)),
            domain="x != k*pi",
            numeric=lambda v: 1 / math.tan(v),
            poles=(zero, pi),
        ),
        FunctionRule(
            "asin",
            derivative=lambda u: Power(_one_minus_square(u), Rational(-1, 2)),
            parity=Parity.ODD,
            special_values=((zero, zero), (Rational(1, 2), pi_6), (one, pi_2)),
            domain="-1 <= x <= 1",
            numeric=math.asin,
            real_domain=lambda v: -1 <= v <= 1,
        ),
        FunctionRule(
            "acos",
            derivative=lambda u: Prod([Integer(-1), Power(_one_minus_square(u), Rational(-1, 2))]),
            special_values=((one, zero), (zero, pi_2), (Rational(1, 2), pi_3), (Integer(-1), pi)),
            domain="-1 <= x <= 1",
            numeric=math.acos,
            real_domain=lambda v: -1 <= v <= 1,
        ),
        FunctionRule(
            "atan",
            derivative=lambda u: Power(Sum([Integer(1), Power(u, 2)]), -1),
            parity=Parity.ODD,
            special_values=((zero, zero), (one, pi_4)),
            numeric=math.atan,
        ),
        FunctionRule("sinh", derivative=cosh, parity=Parity.ODD, special_values=((zero, zero),), numeric=math.sinh),
        FunctionRule("cosh", derivative=sinh, parity=Parity.EVEN, special_values=((zero, one),), numeric=math.cosh),
        FunctionRule(
            "tanh",
            derivative=lambda u: Power(cosh(u), -2),
            parity=Parity.ODD,
            special_values=((zero, zero),),
            numeric=math.tanh,
        ),
        FunctionRule(
            "asinh",
            derivative=lambda u: Power(Sum([Power(u, 2), Integer(1)]), Rational(-1, 2)),
            parity=Parity.ODD,
            special_values=((zero, zero),),
            numeric=math.asinh,
        ),
        FunctionRule(
            "acosh",
            derivative=lambda u: Power(Sum([Power(u, 2), Integer(-1)]), Rational(-1, 2)),
            special_values=((one, zero),),
            domain="x >= 1",
            numeric=math.acosh,
            real_domain=lambda v: v >= 1,
        ),
        FunctionRule(
            "atanh",
            derivative=lambda u: Power(_one_minus_square(u), -1),
            parity=Parity.ODD,
            special_values=((zero, zero),),
            domain="-1 < x < 1",
            numeric=math.atanh,
            poles=(one, Integer(-1)),
            real_domain=lambda v: -1 < v < 1,
        ),
        FunctionRule(
            "exp",
            derivative=exp,
            special_values=((zero, one), (one, E)),
            numeric=math.exp,
            exact=_exp_exact,
        ),
        FunctionRule(
            "log",
            derivative=lambda u: Power(u, -1),
            special_values=((one, zero), (E, one)),
            domain="x > 0",
            numeric=math.log,
            exact=_log_exact,
            poles=(zero,),
            real_domain=lambda v: v > 0,
        ),
        FunctionRule(
            "sqrt",
            derivative=lambda u: _half(Power(sqrt(u), -1)),
            special_values=((zero, zero), (one, one), (Integer(-1), I)),
            domain="x >= 0",
            numeric=math.sqrt,
            exact=_sqrt_exact,
            real_domain=lambda v: v >= 0,
        ),
        FunctionRule(
            "abs",
            derivative=sign,
            parity=Parity.EVEN,
            special_values=((zero, zero),),
            numeric=abs,
            exact=_abs_exact,
        ),
        FunctionRule(
            "sign",
            derivative=lambda u: Integer(0),
            parity=Parity.ODD,
            special_values=((zero, zero),),
            numeric=_sign_numeric,
            exact=_sign_exact,
        ),
    ]
    return {rule.name: rule for rule in rules}


REGISTRY: Mapping[str, FunctionRule] = MappingProxyType(_build_registry())


def evaluate_numeric(rule: FunctionRule, value: float) -> Optional[float]:
    """The float value of rule at value, None if it isn't a finite real number there."""
    if rule.numeric is None or not rule.in_real_domain(value):
        return None
    try:
        result = rule.numeric(value)
    except (ValueError, ZeroDivisionError, OverflowError):
        return None
    if not math.isfinite(result):
        return None
    return result


def propagates_undefined(func: Function) -> bool:
    return any(is_undefined(a) for a in func.args)
