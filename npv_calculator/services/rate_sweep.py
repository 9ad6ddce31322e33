"""
Discount-Rate Sweep Generator.

Turns ``(lower, upper, increment)`` into the ordered, finite sequence of
percentage rates the calculator evaluates.  Pure functions: every call
returns a fresh iterator and nothing is cached between calls.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal
from typing import Iterator

from npv_calculator.utils.math_utils import InvalidInputError

__all__ = ["DEFAULT_RATE_TOLERANCE", "count_rate_steps", "generate_discount_rates"]

DEFAULT_RATE_TOLERANCE: Decimal = Decimal("0.001")


def count_rate_steps(lower: Decimal, upper: Decimal, increment: Decimal) -> int:
    """Number of terms in the sweep: ``ceil((upper - lower) / increment) + 1``.

    Raises:
        InvalidInputError: If *increment* is not positive.
    """
    if increment <= 0:
        raise InvalidInputError("rate_increment", "Rate increment must be positive")
    steps = ((upper - lower) / increment).to_integral_value(rounding=ROUND_CEILING)
    return int(steps) + 1


def generate_discount_rates(
    lower: Decimal,
    upper: Decimal,
    increment: Decimal,
    tolerance: Decimal = DEFAULT_RATE_TOLERANCE,
) -> Iterator[Decimal]:
    """Yield ``lower + increment * i`` for ``i = 0, 1, ...`` in ascending order.

    Each rate is computed from its index rather than by repeated addition.
    The sequence stops at the first rate above ``upper + tolerance``, so an
    upper bound that divides evenly is always included and an uneven one
    never gains an extra step beyond it.

    The step count is validated eagerly, before the first ``next()``.
    """
    total = count_rate_steps(lower, upper, increment)
    return _iter_rates(lower, upper + tolerance, increment, total)


def _iter_rates(
    lower: Decimal,
    limit: Decimal,
    increment: Decimal,
    total: int,
) -> Iterator[Decimal]:
    for i in range(total):
        rate = lower + increment * i
        if rate > limit:
            return
        yield rate
