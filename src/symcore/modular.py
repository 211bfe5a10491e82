"""Modular GCD of integer polynomials.

Take the gcd in F_p for a run of large primes, scale each image by gcd(lc(a), lc(b)), glue the images
together with the Chinese remainder theorem and map the result to the symmetric range. Once the
candidate stops changing, check it by trial division. Primes that divide a leading coefficient are
skipped; an image whose degree is higher than one seen before comes from an unlucky prime and is
skipped too, while a lower degree means every earlier image was unlucky and the reconstruction
restarts.

Field arithmetic runs on numpy int64 arrays. Every prime is below 2^31, so products of two residues
fit in 63 bits.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from .config import MAX_CRT_ITERATIONS
from .polynomial import Poly, integer_gcd

logger = logging.getLogger(__name__)

FieldPoly = np.ndarray  # int64, lowest degree first, trailing zeros trimmed


def is_prime(n: int) -> bool:
    """Deterministic Miller-Rabin, exact for every n below 3.4e14."""
    if n < 2:
        return False
    small = (2, 3, 5, 7, 11, 13, 17)
    for p in small:
        if n % p == 0:
            return n == p
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for a in small:
        x = pow(a, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True


def _generate_primes(start: int, count: int) -> Tuple[int, ...]:
    primes = []
    n = start
    while len(primes) < count:
        if is_prime(n):
            primes.append(n)
        n -= 1
    return tuple(primes)


LARGE_PRIMES = _generate_primes((1 << 31) - 1, MAX_CRT_ITERATIONS)


## Arithmetic in F_p


def _trim(a: FieldPoly) -> FieldPoly:
    return np.trim_zeros(a, "b")


def _reduce(poly: Poly, p: int) -> FieldPoly:
    return _trim(np.array([int(c) % p for c in poly.coeffs], dtype=np.int64))


def _monic(a: FieldPoly, p: int) -> FieldPoly:
    inv = pow(int(a[-1]), p - 2, p)
    return (a * inv) % p


def _rem_mod(a: FieldPoly, b: FieldPoly, p: int) -> FieldPoly:
    a = a.copy()
    db = len(b) - 1
    inv = pow(int(b[-1]), p - 2, p)
    while len(a) and len(a) - 1 >= db:
        coef = int(a[-1]) * inv % p
        shift = len(a) - 1 - db
        a[shift:] = (a[shift:] - coef * b) % p
        a = _trim(a)
    return a


def _gcd_mod(a: FieldPoly, b: FieldPoly, p: int) -> FieldPoly:
    while len(b):
        a, b = b, _rem_mod(a, b, p)
    return _monic(a, p)


## Reconstruction


def _crt(residues: List[int], modulus: int, image: FieldPoly, p: int) -> List[int]:
    """Combine x = r (mod modulus) with x = image (mod p), coefficient-wise."""
    inv = pow(modulus % p, p - 2, p)
    return [r + modulus * ((int(s) - r) * inv % p) for r, s in zip(residues, image)]


def _symmetric(residues: List[int], modulus: int) -> List[int]:
    half = modulus // 2
    return [r - modulus if r > half else r for r in residues]


def modular_gcd(a: Poly, b: Poly) -> Optional[Poly]:
    """gcd of two primitive integer polynomials of degree >= 1, or None if the primes ran out."""
    var = a.var
    lc_a, lc_b = int(a.leading_coefficient), int(b.leading_coefficient)
    lc_gcd = integer_gcd(lc_a, lc_b)

    degree = None
    residues: List[int] = []
    modulus = 1
    candidate = None
    for p in LARGE_PRIMES:
        if lc_a % p == 0 or lc_b % p == 0:
            logger.debug("skipping prime %d: it divides a leading coefficient", p)
            continue

        image = _gcd_mod(_reduce(a, p), _reduce(b, p), p)
        d = len(image) - 1
        if d == 0:
            return Poly.constant(1, var)
        image = (image * (lc_gcd % p)) % p

        if degree is None or d < degree:
            if degree is not None:
                logger.debug("prime %d lowered the gcd degree to %d, restarting", p, d)
            degree, residues, modulus = d, [int(c) for c in image], p
            candidate = None
            continue
        if d > degree:
            logger.debug("skipping unlucky prime %d", p)
            continue

        residues = _crt(residues, modulus, image, p)
        modulus *= p
        new_candidate = Poly(_symmetric(residues, modulus), var).primitive_part()
        if new_candidate == candidate and candidate.divides(a) and candidate.divides(b):
            return candidate.normalized()
        candidate = new_candidate

    logger.debug("modular gcd exhausted %d primes", len(LARGE_PRIMES))
    return None
