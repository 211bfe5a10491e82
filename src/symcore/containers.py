"""The less-hot node kinds. The simplifier doesn't know anything special about them: it simplifies
their children and rebuilds them through `with_children`.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import UnsupportedOperation
from .expr import Expr, ExprKind, Integer, Relation, Symbol, _cast


@dataclass(init=False, eq=False, repr=False)
class Complex(Expr):
    """real + imag*i kept as a pair."""

    kind = ExprKind.COMPLEX
    real: Expr
    imag: Expr

    def __new__(cls, real: Expr, imag: Expr, *, skip_checks: bool = False):
        instance = object.__new__(cls)
        instance.real = _cast(real)
        instance.imag = _cast(imag)
        return instance._finalize()

    def children(self) -> List[Expr]:
        return [self.real, self.imag]

    def with_children(self, children, *, skip_checks=False) -> Expr:
        real, imag = children
        return Complex(real, imag)

    def diff(self, var) -> Expr:
        return Complex(self.real.diff(var), self.imag.diff(var))

    def __repr__(self) -> str:
        return f"({self.real} + {self.imag}*i)"


@dataclass(init=False, eq=False, repr=False)
class Matrix(Expr):
    """A rectangular matrix of expressions. Never commutes with anything."""

    kind = ExprKind.MATRIX
    rows: Tuple[Tuple[Expr, ...], ...]

    def __new__(cls, rows: Sequence[Sequence[Expr]], *, skip_checks: bool = False):
        rows = tuple(tuple(_cast(list(row))) for row in rows)
        if len({len(row) for row in rows}) > 1:
            raise ValueError(f"Matrix rows have different lengths: {[len(r) for r in rows]}")
        instance = object.__new__(cls)
        instance.rows = rows
        return instance._finalize()

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.rows), (len(self.rows[0]) if self.rows else 0)

    def children(self) -> List[Expr]:
        return [entry for row in self.rows for entry in row]

    def with_children(self, children, *, skip_checks=False) -> Expr:
        n_rows, n_cols = self.shape
        return Matrix([children[i * n_cols : (i + 1) * n_cols] for i in range(n_rows)])

    def _order_extras(self) -> tuple:
        return self.shape

    @property
    def is_commutative(self) -> bool:
        return False

    def diff(self, var) -> Expr:
        return Matrix([[entry.diff(var) for entry in row] for row in self.rows])

    def __repr__(self) -> str:
        return "[" + ", ".join("[" + ", ".join(map(repr, row)) + "]" for row in self.rows) + "]"


@dataclass(init=False, eq=False, repr=False)
class Set(Expr):
    """A finite set. Elements are deduplicated, keeping the first occurrence."""

    kind = ExprKind.SET
    elements: Tuple[Expr, ...]

    def __new__(cls, elements: Sequence[Expr], *, skip_checks: bool = False):
        unique = []
        for el in _cast(list(elements)):
            if el not in unique:
                unique.append(el)
        instance = object.__new__(cls)
        instance.elements = tuple(unique)
        return instance._finalize()

    def children(self) -> List[Expr]:
        return list(self.elements)

    def with_children(self, children, *, skip_checks=False) -> Expr:
        return Set(children)

    def diff(self, var) -> Expr:
        raise UnsupportedOperation(f"Cannot differentiate the set {self}")

    def __contains__(self, item) -> bool:
        return _cast(item) in self.elements

    def __len__(self) -> int:
        return len(self.elements)

    def __repr__(self) -> str:
        return "{" + ", ".join(map(repr, self.elements)) + "}"


@dataclass(init=False, eq=False, repr=False)
class Interval(Expr):
    kind = ExprKind.INTERVAL
    start: Expr
    end: Expr
    left_open: bool
    right_open: bool

    def __new__(cls, start: Expr, end: Expr, left_open: bool = False, right_open: bool = False, *, skip_checks=False):
        instance = object.__new__(cls)
        instance.start = _cast(start)
        instance.end = _cast(end)
        instance.left_open = bool(left_open)
        instance.right_open = bool(right_open)
        return instance._finalize()

    def children(self) -> List[Expr]:
        return [self.start, self.end]

    def with_children(self, children, *, skip_checks=False) -> Expr:
        start, end = children
        return Interval(start, end, self.left_open, self.right_open)

    def _order_extras(self) -> tuple:
        return (self.left_open, self.right_open)

    def diff(self, var) -> Expr:
        raise UnsupportedOperation(f"Cannot differentiate the interval {self}")

    def __repr__(self) -> str:
        left = "(" if self.left_open else "["
        right = ")" if self.right_open else "]"
        return f"{left}{self.start}, {self.end}{right}"


@dataclass(init=False, eq=False, repr=False)
class Piecewise(Expr):
    """(value, condition) pairs tried in order, with a fallback value."""

    kind = ExprKind.PIECEWISE
    pieces: Tuple[Tuple[Expr, Relation], ...]
    otherwise: Optional[Expr]

    def __new__(cls, pieces: Sequence[Tuple[Expr, Relation]], otherwise: Optional[Expr] = None, *, skip_checks=False):
        instance = object.__new__(cls)
        instance.pieces = tuple((_cast(value), _cast(cond)) for value, cond in pieces)
        instance.otherwise = _cast(otherwise)
        return instance._finalize()

    def children(self) -> List[Expr]:
        out = [e for piece in self.pieces for e in piece]
        if self.otherwise is not None:
            out.append(self.otherwise)
        return out

    def with_children(self, children, *, skip_checks=False) -> Expr:
        n = len(self.pieces)
        pieces = [(children[2 * i], children[2 * i + 1]) for i in range(n)]
        otherwise = children[2 * n] if self.otherwise is not None else None
        return Piecewise(pieces, otherwise)

    def _order_extras(self) -> tuple:
        return (len(self.pieces), self.otherwise is None)

    def diff(self, var) -> Expr:
        pieces = [(value.diff(var), cond) for value, cond in self.pieces]
        otherwise = self.otherwise.diff(var) if self.otherwise is not None else None
        return Piecewise(pieces, otherwise)

    def __repr__(self) -> str:
        parts = [f"{value} if {cond}" for value, cond in self.pieces]
        if self.otherwise is not None:
            parts.append(f"{self.otherwise} otherwise")
        return "piecewise(" + "; ".join(parts) + ")"


@dataclass(init=False, eq=False, repr=False)
class Derivative(Expr):
    """An unevaluated derivative, d^order/dvar^order of expr."""

    kind = ExprKind.CALCULUS
    expr: Expr
    var: Symbol
    order: int

    def __new__(cls, expr: Expr, var: Symbol, order: int = 1, *, skip_checks=False):
        if order < 1:
            raise ValueError(f"Derivative order must be at least 1, got {order}")
        instance = object.__new__(cls)
        instance.expr = _cast(expr)
        instance.var = var
        instance.order = int(order)
        return instance._finalize()

    def children(self) -> List[Expr]:
        return [self.expr, self.var]

    def with_children(self, children, *, skip_checks=False) -> Expr:
        expr, var = children
        return Derivative(expr, var, self.order)

    def _order_extras(self) -> tuple:
        return (self.order,)

    def diff(self, var) -> Expr:
        if self.expr.free_of(var):
            return Integer(0)
        if var == self.var:
            return Derivative(self.expr, self.var, self.order + 1)
        return Derivative(self, var)

    def __repr__(self) -> str:
        if self.order == 1:
            return f"d/d{self.var}({self.expr})"
        return f"d^{self.order}/d{self.var}^{self.order}({self.expr})"

