"""RULES OF EXPRs:

1. Exprs are never mutated after construction. A canonical Expr is a value: you can put it in a dict,
a set or a numpy object array and trust it to stay the same forever.

2. The class constructors are the only way to build nodes, and they impose the node-local canonical
form: Sum and Prod flatten, fold their numbers into one leading coefficient and drop the identity;
Prod sorts its commutative factors and keeps noncommutative ones in source order; Power applies the
x^1 and 1^x identities, applies x^0 when x is a nonzero number, a symbol or a constant, and folds
exact numeric powers. Zero bases under a zero or negative exponent are left for the simplifier.
Deep rewriting (like terms, like factors, function special values) is the simplifier's job, not the
constructors'.

3. `expr1 == expr2` is structural equality. It says nothing about the values being equal; simplify
both sides first if that's what you want.

Pass `skip_checks=True` to Sum/Prod/Power to build a node exactly as given. Only do that if you
already know the children are canonical.
"""

import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from enum import Enum, IntEnum
from fractions import Fraction
from functools import reduce
from typing import Dict, Iterable, List, Optional, Tuple, Type, Union
from typing import Set as _TypingSet

from . import number
from .errors import DivisionByZero, ParseError, UnsupportedOperation


class ExprKind(IntEnum):
    """Node kinds, in the order they sort in."""

    NUMBER = 0
    CONSTANT = 1
    SYMBOL = 2
    POWER = 3
    PRODUCT = 4
    SUM = 5
    FUNCTION = 6
    RELATION = 7
    COMPLEX = 8
    MATRIX = 9
    SET = 10
    INTERVAL = 11
    PIECEWISE = 12
    CALCULUS = 13


def _cast(x):
    """Cast x to an Expr if possible."""
    if x is None or x is True or x is False or isinstance(x, Expr):
        return x

    if isinstance(x, (numbers.Integral, Fraction, float)):
        return Const(x)

    if isinstance(x, dict):
        return {k: _cast(v) for k, v in x.items()}
    elif isinstance(x, tuple):
        return tuple(_cast(v) for v in x)
    elif isinstance(x, list):
        return [_cast(v) for v in x]

    raise NotImplementedError(f"Cannot cast {x!r} to Expr")


def cast(func):
    """Decorator to cast all arguments to Expr."""

    def wrapper(*args, **kwargs) -> "Expr":
        return func(*map(_cast, args), **{k: _cast(v) for k, v in kwargs.items()})

    return wrapper


class Expr(ABC):
    """Base class for all expressions."""

    kind: ExprKind = None
    _hash: int = None

    def __init__(self, *args, **kwargs):
        # Every node is fully built in __new__.
        pass

    def _finalize(self) -> "Expr":
        self._hash = hash((self.kind, self._key()))
        return self

    def _key(self) -> tuple:
        """Everything that identifies this node among nodes of the same kind: its dataclass fields."""
        return tuple(getattr(self, f.name) for f in fields(self))

    @abstractmethod
    def children(self) -> List["Expr"]:
        raise NotImplementedError(f"Cannot get children of {self.__class__.__name__}")

    @abstractmethod
    def with_children(self, children: List["Expr"], *, skip_checks: bool = False) -> "Expr":
        """Rebuild this node with new children, going through the constructor unless skip_checks."""

    @abstractmethod
    def diff(self, var: "Symbol") -> "Expr":
        """The raw derivative. Use `symcore.derivative.diff` for the simplified one."""
        raise NotImplementedError(f"Cannot get the derivative of {self.__class__.__name__}")

    def _order_extras(self) -> tuple:
        """Tie breaker for the total order once children compare equal."""
        return ()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Expr):
            if isinstance(other, (numbers.Rational, float)) and not isinstance(other, bool):
                other = Const(other)
            else:
                return NotImplemented
        if self is other:
            return True
        return self._hash == other._hash and self.kind == other.kind and self._key() == other._key()

    def __hash__(self) -> int:
        return self._hash

    @property
    def is_commutative(self) -> bool:
        return all(c.is_commutative for c in self.children())

    @property
    def is_subtraction(self) -> bool:
        """True if the expression would be printed with a leading minus inside a sum."""
        return False

    def contains(self, var: "Symbol") -> bool:
        return self == var or any(c.contains(var) for c in self.children())

    def free_of(self, var: "Symbol") -> bool:
        return not self.contains(var)

    def symbols(self) -> _TypingSet["Symbol"]:
        """Get all symbols in the expression."""
        return set().union(*(c.symbols() for c in self.children()))

    def has(self, cls: Type["Expr"]) -> bool:
        return isinstance(self, cls) or any(c.has(cls) for c in self.children())

    @property
    def is_zero(self) -> bool:
        return False

    @property
    def is_one(self) -> bool:
        return False

    def simplify(self, **overrides) -> "Expr":
        from .simplify import simplify

        return simplify(self, **overrides)

    def expand(self) -> "Expr":
        from .expand import expand

        return expand(self)

    def subs(self, mapping: Dict[Union[str, "Expr"], "Expr"]) -> "Expr":
        """Substitute variables with expressions. The result is simplified."""
        from .replace import subs

        return subs(self, mapping)

    def evalf(self, subs: Optional[Dict[Union[str, "Expr"], "Expr"]] = None) -> "Expr":
        from .evalf import evalf

        return evalf(self, subs)

    @cast
    def __add__(self, other) -> "Expr":
        return Sum([self, other])

    @cast
    def __radd__(self, other) -> "Expr":
        return Sum([other, self])

    @cast
    def __sub__(self, other) -> "Expr":
        return Sum([self, -other])

    @cast
    def __rsub__(self, other) -> "Expr":
        return Sum([other, -self])

    @cast
    def __mul__(self, other) -> "Expr":
        return Prod([self, other])

    @cast
    def __rmul__(self, other) -> "Expr":
        return Prod([other, self])

    @cast
    def __pow__(self, other) -> "Expr":
        return Power(self, other)

    @cast
    def __rpow__(self, other) -> "Expr":
        return Power(other, self)

    @cast
    def __truediv__(self, other) -> "Expr":
        return Prod([self, Power(other, -1)])

    @cast
    def __rtruediv__(self, other) -> "Expr":
        return Prod([other, Power(self, -1)])

    def __neg__(self) -> "Expr":
        return Prod([Integer(-1), self])

    @abstractmethod
    def __repr__(self) -> str:
        raise NotImplementedError(f"Cannot represent {self.__class__.__name__}")


## Numbers


@dataclass(init=False, eq=False, repr=False)
class Num(Expr):
    """Base class -- all numbers. `value` is a python int, Fraction or float."""

    kind = ExprKind.NUMBER
    value: number.Value = None
    is_exact = True

    def _key(self) -> tuple:
        return ("exact", self.value)

    def children(self) -> List[Expr]:
        return []

    def with_children(self, children, *, skip_checks=False) -> Expr:
        return self

    def diff(self, var) -> "Integer":
        return Integer(0)

    def symbols(self) -> _TypingSet["Symbol"]:
        return set()

    def __repr__(self) -> str:
        return str(self.value)

    def __lt__(self, other):
        other = _number_value(other)
        return NotImplemented if other is None else self.value < other

    def __le__(self, other):
        other = _number_value(other)
        return NotImplemented if other is None else self.value <= other

    def __gt__(self, other):
        other = _number_value(other)
        return NotImplemented if other is None else self.value > other

    def __ge__(self, other):
        other = _number_value(other)
        return NotImplemented if other is None else self.value >= other

    def __neg__(self) -> "Num":
        return Const(-self.value)

    def __abs__(self) -> "Num":
        return Const(abs(self.value))

    @property
    def is_subtraction(self) -> bool:
        return self.value < 0

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    @property
    def is_one(self) -> bool:
        return self.value == 1

    @property
    def is_integer(self) -> bool:
        return self.is_exact and number.is_integer(self.value)


def _number_value(x) -> Optional[number.Value]:
    if isinstance(x, Num):
        return x.value
    if isinstance(x, (numbers.Rational, float)) and not isinstance(x, bool):
        return x
    return None


class Integer(Num):
    """An exact integer. Values that don't fit a signed 64 bit word come back as BigInteger."""

    value: int

    def __new__(cls, value: Union[int, str]):
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError as exc:
                raise ParseError(f"{value!r} is not an integer literal") from exc
        value = int(value)
        if cls is Integer and not number.is_machine_int(value):
            cls = BigInteger
        instance = object.__new__(cls)
        instance.value = value
        return instance._finalize()


class BigInteger(Integer):
    """Arbitrary precision integer. Compares equal to the Integer with the same value."""


class Rational(Num):
    """An exact fraction in lowest terms with a positive denominator."""

    value: Fraction

    def __new__(cls, numerator: Union[int, Fraction], denominator: int = 1):
        if denominator == 0:
            raise DivisionByZero(f"Rational({numerator}, {denominator})")
        value = Fraction(numerator, denominator)
        if value.denominator == 1:
            return Integer(value.numerator)
        instance = object.__new__(cls)
        instance.value = value
        return instance._finalize()

    @property
    def numerator(self) -> Integer:
        return Integer(self.value.numerator)

    @property
    def denominator(self) -> Integer:
        return Integer(self.value.denominator)


class Float(Num):
    """A double. Floats absorb exact numbers they meet in arithmetic."""

    value: float
    is_exact = False

    def __new__(cls, value: float):
        value = number.check_float(float(value))
        instance = object.__new__(cls)
        instance.value = value
        return instance._finalize()

    def _key(self) -> tuple:
        return ("float", self.value)

    def __repr__(self) -> str:
        return repr(self.value)


def Const(value: Union[number.Value, Num]) -> Num:
    """Wrapper to create a Num object from a value."""
    if isinstance(value, Num):
        return value
    if isinstance(value, numbers.Integral):
        return Integer(int(value))
    if isinstance(value, Fraction):
        return Rational(value)
    if isinstance(value, float):
        return Float(value)
    raise TypeError(f"{value!r} is not a number")


## Symbols


class SymbolType(Enum):
    """The commutativity tag of a symbol. Only scalars commute."""

    SCALAR = "scalar"
    MATRIX = "matrix"
    OPERATOR = "operator"
    QUATERNION = "quaternion"

    @property
    def is_commutative(self) -> bool:
        return self is SymbolType.SCALAR


@dataclass(init=False, eq=False, repr=False)
class Symbol(Expr):
    """A symbol. A variable."""

    kind = ExprKind.SYMBOL
    name: str
    tag: SymbolType

    def __new__(cls, name: str, tag: SymbolType = SymbolType.SCALAR):
        if not name:
            raise ValueError("Symbol name cannot be empty")
        instance = object.__new__(cls)
        instance.name = name
        instance.tag = SymbolType(tag)
        return instance._finalize()

    def children(self) -> List[Expr]:
        return []

    def with_children(self, children, *, skip_checks=False) -> Expr:
        return self

    def diff(self, var) -> Integer:
        return Integer(1) if self == var else Integer(0)

    @property
    def is_commutative(self) -> bool:
        return self.tag.is_commutative

    def symbols(self) -> _TypingSet["Symbol"]:
        return {self}

    def __repr__(self) -> str:
        return self.name


def symbol(name: str, tag: SymbolType = SymbolType.SCALAR) -> Symbol:
    return Symbol(name, tag)


def symbols(names: str, tag: SymbolType = SymbolType.SCALAR) -> Union[Symbol, Tuple[Symbol, ...]]:
    """symbols("x y z") -> (x, y, z). A single name gives back a single Symbol."""
    out = tuple(Symbol(name, tag) for name in names.replace(",", " ").split())
    if len(out) == 1:
        return out[0]
    return out


## Constants


class ConstantKind(Enum):
    PI = "pi"
    E = "e"
    I = "i"
    INFINITY = "oo"
    NEG_INFINITY = "-oo"
    UNDEFINED = "undefined"
    GOLDEN_RATIO = "phi"
    EULER_GAMMA = "gamma"


_CONSTANT_VALUES = {
    ConstantKind.PI: 3.141592653589793,
    ConstantKind.E: 2.718281828459045,
    ConstantKind.GOLDEN_RATIO: 1.618033988749895,
    ConstantKind.EULER_GAMMA: 0.5772156649015329,
}


@dataclass(init=False, eq=False, repr=False)
class Constant(Expr):
    """A named mathematical constant."""

    kind = ExprKind.CONSTANT
    which: ConstantKind

    def __new__(cls, which: Union[ConstantKind, str]):
        instance = object.__new__(cls)
        instance.which = ConstantKind(which)
        return instance._finalize()

    def children(self) -> List[Expr]:
        return []

    def with_children(self, children, *, skip_checks=False) -> Expr:
        return self

    def diff(self, var) -> Expr:
        return self if self.is_undefined else Integer(0)

    def symbols(self) -> _TypingSet[Symbol]:
        return set()

    @property
    def value(self) -> Optional[float]:
        """The float value of a real constant, None for i, the infinities and undefined."""
        return _CONSTANT_VALUES.get(self.which)

    @property
    def is_infinite(self) -> bool:
        return self.which in (ConstantKind.INFINITY, ConstantKind.NEG_INFINITY)

    @property
    def is_undefined(self) -> bool:
        return self.which is ConstantKind.UNDEFINED

    @property
    def is_subtraction(self) -> bool:
        return self.which is ConstantKind.NEG_INFINITY

    def __neg__(self) -> Expr:
        if self.which is ConstantKind.INFINITY:
            return oo_neg
        if self.which is ConstantKind.NEG_INFINITY:
            return oo
        if self.is_undefined:
            return self
        return super().__neg__()

    def __repr__(self) -> str:
        return self.which.value


def constant(which: Union[ConstantKind, str]) -> Constant:
    return Constant(which)


pi = Constant(ConstantKind.PI)
E = Constant(ConstantKind.E)
I = Constant(ConstantKind.I)
oo = Constant(ConstantKind.INFINITY)
oo_neg = Constant(ConstantKind.NEG_INFINITY)
UNDEFINED = Constant(ConstantKind.UNDEFINED)
golden_ratio = Constant(ConstantKind.GOLDEN_RATIO)
euler_gamma = Constant(ConstantKind.EULER_GAMMA)


def is_undefined(expr: Expr) -> bool:
    return isinstance(expr, Constant) and expr.which is ConstantKind.UNDEFINED


def is_infinite(expr: Expr) -> bool:
    return isinstance(expr, Constant) and expr.is_infinite


def _is_nonzero_atom(expr: Expr) -> bool:
    if isinstance(expr, Num):
        return expr.value != 0
    return isinstance(expr, (Symbol, Constant))


def _may_divide_by_zero(expr: Expr) -> bool:
    """A power whose base might turn out to be 0 while its exponent is negative."""
    if not isinstance(expr, Power):
        return False
    exponent = expr.exponent
    return not isinstance(exponent, Num) or exponent.value < 0


## Sums and products


@dataclass(init=False, eq=False, repr=False)
class Associative(Expr):
    """Shared by Sum and Prod. The subclasses' __new__ must handle flattening & folding."""

    terms: Tuple[Expr, ...]

    @classmethod
    def _flatten_terms(cls, terms: Iterable[Expr]) -> List[Expr]:
        """Put any sub-products/sub-sums into the parent
        ex: (x * 3) * y -> x * 3 * y
        """
        new_terms = []
        for t in terms:
            if isinstance(t, cls):
                new_terms += cls._flatten_terms(t.terms)
            else:
                new_terms.append(t)
        return new_terms

    @classmethod
    def _build(cls, terms: List[Expr]) -> "Associative":
        instance = object.__new__(cls)
        instance.terms = tuple(terms)
        return instance._finalize()

    def children(self) -> List[Expr]:
        return list(self.terms)

    def with_children(self, children, *, skip_checks=False) -> Expr:
        return self.__class__(children, skip_checks=skip_checks)

    def __iter__(self):
        return iter(self.terms)

    def __len__(self):
        return len(self.terms)


class Sum(Associative):
    """A sum expression."""

    kind = ExprKind.SUM

    def __new__(cls, terms: Iterable[Expr], *, skip_checks: bool = False) -> Expr:
        """When a sum is initiated:
        - terms are converted to expr
        - flatten
        - fold the numbers into one leading coefficient, drop it if it's zero
        - collapse empty and single-term sums
        """
        terms = _cast(list(terms))
        if skip_checks:
            if len(terms) == 0:
                return Integer(0)
            if len(terms) == 1:
                return terms[0]
            return cls._build(terms)

        terms = cls._flatten_terms(terms)
        values = []
        rest = []
        infinities = []
        for t in terms:
            if is_undefined(t):
                return UNDEFINED
            if isinstance(t, Num):
                values.append(t.value)
            elif is_infinite(t):
                if t not in infinities:
                    infinities.append(t)
                    rest.append(t)
            else:
                rest.append(t)

        if len(infinities) == 2:
            # oo - oo
            return UNDEFINED
        if infinities:
            values = []

        new_terms = rest
        if values:
            total = reduce(number.add, values)
            if total != 0 or not rest:
                new_terms = [Const(total)] + rest

        if len(new_terms) == 0:
            return Integer(0)
        if len(new_terms) == 1:
            return new_terms[0]
        return cls._build(new_terms)

    def diff(self, var) -> Expr:
        return Sum([t.diff(var) for t in self.terms])

    @property
    def is_subtraction(self) -> bool:
        return all(t.is_subtraction for t in self.terms)

    def __repr__(self) -> str:
        ongoing_str = ""
        for i, term in enumerate(self.terms):
            if i == 0:
                ongoing_str += f"{term}"
            elif term.is_subtraction:
                ongoing_str += f" - {-term}"
            else:
                ongoing_str += f" + {term}"
        return ongoing_str


class Prod(Associative):
    """A product expression."""

    kind = ExprKind.PRODUCT

    def __new__(cls, terms: Iterable[Expr], *, skip_checks: bool = False) -> Expr:
        terms = _cast(list(terms))
        if skip_checks:
            if len(terms) == 0:
                return Integer(1)
            if len(terms) == 1:
                return terms[0]
            return cls._build(terms)

        from .ordering import sort_key

        terms = cls._flatten_terms(terms)
        coeff = 1
        sign = 1
        has_infinity = False
        rest = []
        for t in terms:
            if is_undefined(t):
                return UNDEFINED
            if isinstance(t, Num):
                coeff = number.mul(coeff, t.value)
            elif is_infinite(t):
                has_infinity = True
                if t.which is ConstantKind.NEG_INFINITY:
                    sign = -sign
            else:
                rest.append(t)

        if has_infinity:
            if coeff == 0:
                # 0 * oo
                return UNDEFINED
            if coeff < 0:
                sign = -sign
            coeff = 1
            rest.insert(0, oo if sign > 0 else oo_neg)
        elif coeff == 0 and not any(_may_divide_by_zero(t) for t in rest):
            return Const(coeff)

        commutative = sorted((t for t in rest if t.is_commutative), key=sort_key)
        noncommutative = [t for t in rest if not t.is_commutative]
        new_terms = commutative + noncommutative
        if not new_terms:
            return Const(coeff)
        if not (coeff == 1 and not isinstance(coeff, float)):
            new_terms.insert(0, Const(coeff))
        if len(new_terms) == 1:
            return new_terms[0]
        return cls._build(new_terms)

    def diff(self, var) -> Expr:
        """General product rule. Factor order is kept, so it's safe for noncommutative factors."""
        new_terms = []
        for i, term in enumerate(self.terms):
            d = term.diff(var)
            if d.is_zero:
                continue
            new_terms.append(Prod(self.terms[:i] + (d,) + self.terms[i + 1 :]))
        return Sum(new_terms)

    @property
    def coefficient(self) -> Num:
        first = self.terms[0]
        return first if isinstance(first, Num) else Integer(1)

    @property
    def is_subtraction(self) -> bool:
        return self.terms[0].is_subtraction

    def __repr__(self) -> str:
        def _term_repr(term):
            if isinstance(term, (Sum, Rational)) or (isinstance(term, Num) and term.value < 0):
                return "(" + repr(term) + ")"
            return repr(term)

        terms = list(self.terms)
        if isinstance(terms[0], Num) and terms[0].value == -1 and not isinstance(terms[0], Float):
            return "-" + "*".join(map(_term_repr, terms[1:]))
        if terms[0].is_subtraction:
            return "-" + "*".join(map(_term_repr, [-terms[0]] + terms[1:]))
        return "*".join(map(_term_repr, terms))


## Powers


@dataclass(init=False, eq=False, repr=False)
class Power(Expr):
    kind = ExprKind.POWER
    base: Expr
    exponent: Expr

    def __new__(cls, base: Expr, exponent: Expr, *, skip_checks: bool = False) -> Expr:
        base, exponent = _cast(base), _cast(exponent)
        if skip_checks:
            return cls._build(base, exponent)

        if is_undefined(base) or is_undefined(exponent):
            return UNDEFINED

        if isinstance(exponent, Num) and exponent.value == 0:
            # b^0 = 1 only when b can't be 0. Anything else waits for the simplifier.
            if not _is_nonzero_atom(base):
                return cls._build(base, exponent)
            return Integer(1) if exponent.is_exact else Float(1.0)
        if exponent == 1:
            return base
        if base == 1 and not is_infinite(exponent):
            return Integer(1)

        if isinstance(base, Num) and isinstance(exponent, Num):
            if base.value == 0 and exponent.value < 0:
                # 1/0 is reported by the simplifier
                return cls._build(base, exponent)
            value = number.power(base.value, exponent.value)
            if value is not None:
                return Const(value)

        return cls._build(base, exponent)

    @classmethod
    def _build(cls, base: Expr, exponent: Expr) -> "Power":
        instance = object.__new__(cls)
        instance.base = base
        instance.exponent = exponent
        return instance._finalize()

    def children(self) -> List[Expr]:
        return [self.base, self.exponent]

    def with_children(self, children, *, skip_checks=False) -> Expr:
        base, exponent = children
        return Power(base, exponent, skip_checks=skip_checks)

    def diff(self, var) -> Expr:
        u, v = self.base, self.exponent
        if v.free_of(var):
            # v * u^(v-1) * du
            return Prod([v, Power(u, Sum([v, Integer(-1)])), u.diff(var)])
        if u.free_of(var):
            # u^v * log(u) * dv
            return Prod([self, Function("log", [u]), v.diff(var)])
        # u^v * (dv * log(u) + v * du / u)
        return Prod(
            [
                self,
                Sum(
                    [
                        Prod([v.diff(var), Function("log", [u])]),
                        Prod([v, u.diff(var), Power(u, Integer(-1))]),
                    ]
                ),
            ]
        )

    def __repr__(self) -> str:
        def _base_repr(b):
            if isinstance(b, (Sum, Prod, Power, Rational)) or (isinstance(b, Num) and b.value < 0):
                return "(" + repr(b) + ")"
            return repr(b)

        def _exponent_repr(x):
            if isinstance(x, (Symbol, Constant, Function)) or (isinstance(x, Integer) and x.value >= 0):
                return repr(x)
            return "(" + repr(x) + ")"

        return f"{_base_repr(self.base)}^{_exponent_repr(self.exponent)}"


## Functions and relations


@dataclass(init=False, eq=False, repr=False)
class Function(Expr):
    """A named function call, e.g. sin(x). Built as-is; the registry gives it meaning."""

    kind = ExprKind.FUNCTION
    name: str
    args: Tuple[Expr, ...]

    def __new__(cls, name: str, args: Union[Expr, Iterable[Expr]], *, skip_checks: bool = False):
        if not name:
            raise ValueError("Function name cannot be empty")
        if isinstance(args, (Expr, numbers.Number)):
            args = [args]
        instance = object.__new__(cls)
        instance.name = name
        instance.args = tuple(_cast(list(args)))
        return instance._finalize()

    def children(self) -> List[Expr]:
        return list(self.args)

    def with_children(self, children, *, skip_checks=False) -> Expr:
        return Function(self.name, children)

    def diff(self, var) -> Expr:
        """Chain rule through the registry. Unknown functions stay as a Derivative placeholder."""
        from .containers import Derivative
        from .functions import get_rule

        if self.free_of(var):
            return Integer(0)
        rule = get_rule(self.name)
        if rule is None or rule.derivative is None or len(self.args) != 1:
            return Derivative(self, var)
        (u,) = self.args
        return Prod([rule.derivative(u), u.diff(var)])

    def __repr__(self) -> str:
        return f"{self.name}({', '.join(repr(a) for a in self.args)})"


class RelationKind(Enum):
    EQ = "="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="


@dataclass(init=False, eq=False, repr=False)
class Relation(Expr):
    kind = ExprKind.RELATION
    lhs: Expr
    rhs: Expr
    relation: RelationKind

    def __new__(cls, lhs: Expr, rhs: Expr, relation: RelationKind = RelationKind.EQ, *, skip_checks: bool = False):
        instance = object.__new__(cls)
        instance.lhs = _cast(lhs)
        instance.rhs = _cast(rhs)
        instance.relation = RelationKind(relation)
        return instance._finalize()

    def children(self) -> List[Expr]:
        return [self.lhs, self.rhs]

    def with_children(self, children, *, skip_checks=False) -> Expr:
        lhs, rhs = children
        return Relation(lhs, rhs, self.relation)

    def _order_extras(self) -> tuple:
        return (list(RelationKind).index(self.relation),)

    def diff(self, var) -> Expr:
        raise UnsupportedOperation(f"Cannot differentiate the relation {self}")

    def __repr__(self) -> str:
        return f"{self.lhs} {self.relation.value} {self.rhs}"


# The canonical forms relations collapse to.
true = Relation(Integer(0), Integer(0), RelationKind.EQ)
false = Relation(Integer(0), Integer(1), RelationKind.EQ)


## Helpers


def split_coefficient(expr: Expr) -> Tuple[Num, Optional[Expr]]:
    """3*x^2*y -> (3, x^2*y). x -> (1, x). 3 -> (3, None)"""
    if isinstance(expr, Num):
        return expr, None
    if isinstance(expr, Prod) and isinstance(expr.terms[0], Num):
        return expr.terms[0], Prod(list(expr.terms[1:]), skip_checks=True)
    return Integer(1), expr


def split_power(expr: Expr) -> Tuple[Expr, Expr]:
    # x^3 -> (x, 3). x -> (x, 1). 3 -> (3, 1)
    if isinstance(expr, Power):
        return expr.base, expr.exponent
    return expr, Integer(1)


def is_zero(expr: Expr) -> bool:
    return _cast(expr).is_zero


def is_one(expr: Expr) -> bool:
    return _cast(expr).is_one


def children(expr: Expr) -> List[Expr]:
    return expr.children()


def kind(expr: Expr) -> ExprKind:
    return expr.kind


def equation(lhs: Expr, rhs: Expr) -> Relation:
    return Relation(lhs, rhs, RelationKind.EQ)
