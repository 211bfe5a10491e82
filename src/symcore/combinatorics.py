import math
from functools import reduce
from typing import List


def generate_permutations(i: int, n: int) -> List[List[int]]:
    """
    All lists of i non-negative integers that sum up to n, in lexicographic order.

    i: number of terms
    n: sum of terms

    Picks the first value from 0 to n and recurses on the rest with what's left of the sum.
    """
    if i == 0:
        return [[]] if n == 0 else []
    if i == 1:
        return [[n]]
    return [[first] + rest for first in range(n + 1) for rest in generate_permutations(i - 1, n - first)]


def multinomial_coefficient(xs: List[int], n: int) -> int:
    """n! / (x_1! x_2! ... (n - sum(xs))!)"""
    if any(x < 0 for x in xs) or sum(xs) > n:
        raise ValueError(f"Invalid multinomial {xs} of {n}: entries must be non-negative and sum to at most n")

    denominator = reduce(lambda acc, x: acc * math.factorial(x), xs, math.factorial(n - sum(xs)))
    return math.factorial(n) // denominator
