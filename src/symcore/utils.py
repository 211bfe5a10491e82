from typing import Callable, Iterator

from .expr import Expr

ExprFn = Callable[[Expr], Expr]
ExprCondition = Callable[[Expr], bool]


def preorder(expr: Expr) -> Iterator[Expr]:
    """Walks the tree parent first. Handy for visitors and formatters."""
    yield expr
    for child in expr.children():
        yield from preorder(child)


def count(expr: Expr, condition: ExprCondition) -> int:
    """Number of subexpressions (including expr itself) for which condition holds."""
    return sum(1 for e in preorder(expr) if condition(e))


def size(expr: Expr) -> int:
    return count(expr, lambda e: True)
