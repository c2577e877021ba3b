"""Integer gcd/lcm helpers used to compute hyperperiods.

Python integers are arbitrary precision, so the same functions serve 32-bit
and 64-bit magnitudes alike; combining large periods never overflows.
"""

import math
from typing import Iterable


def gcd(x: int, y: int) -> int:
    """Return the greatest common divisor of |x| and |y| (0 if both are zero)."""
    return math.gcd(abs(x), abs(y))


def lcm(x: int, y: int) -> int:
    """Return the least common multiple of |x| and |y| (0 if either is zero)."""
    x, y = abs(x), abs(y)
    if x == 0 or y == 0:
        return 0
    return (x // math.gcd(x, y)) * y


def gcd_all(values: Iterable[int]) -> int:
    """Fold gcd left-to-right over ``values``.

    Returns 0 for an empty sequence. Stops as soon as the running result
    reaches 1, since no smaller positive divisor exists.
    """
    result = None
    for value in values:
        if result is None:
            result = abs(value)
        else:
            result = gcd(value, result)
        if result == 1:
            break
    return 0 if result is None else result


def lcm_all(values: Iterable[int]) -> int:
    """Fold lcm left-to-right over ``values``.

    Returns 0 for an empty sequence or when any value is zero.
    """
    result = None
    for value in values:
        if result is None:
            result = abs(value)
        else:
            result = lcm(value, result)
        if result == 0:
            break
    return 0 if result is None else result
