from ..expr import Associative, Expr, Num, Symbol


def debug_repr(expr: Expr) -> str:
    """Structural repr that shows the node types, so Integer(2) and Float(2.0) don't look alike."""
    if isinstance(expr, Num):
        return f"{expr.__class__.__name__}({expr.value!r})"
    if isinstance(expr, Symbol):
        return f"Symbol({expr.name!r})" if expr.is_commutative else f"Symbol({expr.name!r}, {expr.tag.name})"
    children = expr.children()
    if not children:
        return repr(expr)
    name = expr.__class__.__name__
    if isinstance(expr, Associative):
        return f"{name}[{', '.join(debug_repr(t) for t in children)}]"
    return f"{name}({', '.join(debug_repr(c) for c in children)})"
