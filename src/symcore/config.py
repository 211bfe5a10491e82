"""Knobs for the simplifier and the guard constants of the iterative algorithms."""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

# Fixed-point guard of `simplify`.
MAX_SIMPLIFY_ITERATIONS = 32

# Number of primes the modular GCD tries before falling back to Euclid.
MAX_CRT_ITERATIONS = 50

# Exact powers whose result would need more bits than this stay symbolic.
MAX_FOLD_BITS = 1 << 20

# Polynomials of at least this degree go through the modular GCD first.
MODULAR_GCD_MIN_DEGREE = 3

# Expressions of higher degree are not turned into dense polynomials.
MAX_POLY_DEGREE = 10_000


@dataclass(frozen=True)
class SimplifyConfig:
    """Options for one `simplify` call.

    expand: distribute Power(Product, k) over commutative factors for integer k.
    strict: raise DomainError / DivisionByZero instead of returning Undefined.
    real_only: reject numeric arguments outside a function's real domain.
    logger: optional `symcore.debug.logger.Logger` that records every call.
    """

    max_iterations: int = MAX_SIMPLIFY_ITERATIONS
    expand: bool = False
    strict: bool = False
    real_only: bool = False
    logger: Optional[Any] = field(default=None, compare=False)

    def __post_init__(self):
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")

    def with_overrides(self, **overrides) -> "SimplifyConfig":
        if not overrides:
            return self
        return replace(self, **overrides)


DEFAULT_CONFIG = SimplifyConfig()


def resolve_config(config: Optional[SimplifyConfig] = None, **overrides) -> SimplifyConfig:
    return (config or DEFAULT_CONFIG).with_overrides(**overrides)
