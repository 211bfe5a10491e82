"""symcore: a small computer algebra core. Canonical expression trees, simplification,
differentiation and univariate polynomial gcd."""

from .config import DEFAULT_CONFIG, SimplifyConfig
from .containers import Complex, Derivative, Interval, Matrix, Piecewise, Set
from .derivative import derivative, diff
from .equation import solve
from .errors import (
    DivisionByZero,
    DivisionByZeroWarning,
    DomainError,
    DomainWarning,
    MathError,
    MathWarning,
    NumericOverflow,
    ParseError,
    SimplificationLimitWarning,
    UnsupportedOperation,
)
from .evalf import evalf
from .expand import expand
from .expr import (
    E,
    I,
    UNDEFINED,
    BigInteger,
    Const,
    Constant,
    ConstantKind,
    Expr,
    ExprKind,
    Float,
    Function,
    Integer,
    Num,
    Power,
    Prod,
    Rational,
    Relation,
    RelationKind,
    Sum,
    Symbol,
    SymbolType,
    children,
    constant,
    equation,
    euler_gamma,
    false,
    golden_ratio,
    is_one,
    is_zero,
    kind,
    oo,
    oo_neg,
    pi,
    symbol,
    symbols,
    true,
)
from .functions import (
    Abs,
    acos,
    acosh,
    asin,
    asinh,
    atan,
    atanh,
    cos,
    cosh,
    cot,
    csc,
    exp,
    ln,
    log,
    sec,
    sign,
    sin,
    sinh,
    sqrt,
    tan,
    tanh,
)
from .gcd import cofactors, div_polynomial, factor, gcd, lcm, quo_polynomial, rem_polynomial
from .ordering import compare, sort_key
from .polynomial import Poly
from .replace import replace, subs, substitute
from .simplify import simplify
