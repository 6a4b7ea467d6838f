from __future__ import annotations

from typing import Tuple


def range_intersection(lo1: int, hi1: int, lo2: int, hi2: int) -> Tuple[int, int]:
    """Intersects two inclusive ranges. The result is empty when lo > hi."""
    return max(lo1, lo2), min(hi1, hi2)


def between(a: int, b: int) -> range:
    """Integers strictly between a and b, in ascending order."""
    return range(min(a, b) + 1, max(a, b))


def chebyshev(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))
