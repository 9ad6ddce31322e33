"""
Financial Math Utilities.

Decimal NPV evaluation for a single discount rate.  Amounts are accumulated
as ``Decimal``; the only binary floating-point step is the discount factor
itself, kept in :func:`discount_factor` so it can be swapped for a
higher-precision implementation without touching the accumulation loop.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Optional, Sequence

__all__: list[str] = [
    "InvalidInputError",
    "calculate_npv",
    "discount_factor",
    "round_money",
]

_ONE: Decimal = Decimal("1")
_CENT: Decimal = Decimal("0.01")


class InvalidInputError(ValueError):
    """Raised when an argument makes the calculation meaningless.

    This is always the caller's fault and is never retried.  ``parameter``
    names the offending argument.
    """

    def __init__(self, parameter: str, message: str) -> None:
        self.parameter: str = parameter
        self.message: str = message
        super().__init__(f"{message} (parameter: {parameter})")


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half to even."""
    return value.quantize(_CENT, rounding=ROUND_HALF_EVEN)


def discount_factor(discount_rate: Decimal, period: int) -> Decimal:
    """Return ``1 / (1 + r) ** period`` as a ``Decimal``.

    Period 0 is exactly ``1``; no exponentiation is performed.  Later
    periods are computed in float and converted through the shortest
    ``repr`` of the result.

    Raises:
        OverflowError: If the factor is not representable as a float.
    """
    if period == 0:
        return _ONE
    factor: float = math.pow(1.0 + float(discount_rate), -period)
    return Decimal(repr(factor))


def calculate_npv(
    cash_flows: Optional[Sequence[Decimal]],
    discount_rate: Decimal,
) -> Decimal:
    """Calculate Net Present Value at one periodic rate.

        NPV = sum_{t=0..n-1} CF[t] / (1 + r)^t

    Args:
        cash_flows: Amounts where index 0 is period 0 (t=0).  Must not be
                    empty.
        discount_rate: Fractional rate per period (``0.10`` for 10%).  Must
                       be greater than -1.

    Returns:
        The NPV rounded to 2 decimal places.  Rounding happens once, on the
        total.

    Raises:
        InvalidInputError: If *cash_flows* is ``None`` or empty, or
            *discount_rate* <= -1.
        OverflowError: If a discount factor or the rounded total exceeds
            what float or the decimal context can represent.
    """
    if not cash_flows:
        raise InvalidInputError("cash_flows", "Cash flows cannot be null or empty")

    if discount_rate <= -_ONE:
        # (1 + r) <= 0 has no real discount factor for every period.
        raise InvalidInputError(
            "discount_rate",
            f"Discount rate must be greater than -100%, got {discount_rate * 100}%",
        )

    npv: Decimal = Decimal("0")
    for period, amount in enumerate(cash_flows):
        npv += amount * discount_factor(discount_rate, period)

    try:
        return round_money(npv)
    except InvalidOperation:
        # Quantizing to cents needs more digits than the decimal context holds.
        raise OverflowError(
            f"NPV at discount rate {discount_rate * 100}% is too large to represent"
        ) from None
