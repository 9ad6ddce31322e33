"""
String Helpers: Cash-Flow Text Parsing.

Single source of truth for turning the comma-separated cash-flow text typed
by a user (``"-1000, 300, 400, 500"``) into ``Decimal`` amounts.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

__all__ = [
    "parse_cash_flows",
    "parse_decimal",
    "split_cash_flow_tokens",
]

# A plain signed decimal number: optional sign, digits with an optional
# fractional part (or a bare fractional part), optional exponent.
_RE_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def split_cash_flow_tokens(text: Optional[str]) -> list[str]:
    """Split *text* on commas, dropping blank entries.

    ``"-1000, 300,,400 "`` -> ``["-1000", "300", "400"]``
    """
    if not text:
        return []
    return [token.strip() for token in text.split(",") if token.strip()]


def parse_decimal(token: str) -> Optional[Decimal]:
    """Parse a single amount, or return ``None`` if it is not a finite number.

    Only plain numeric literals are accepted, so ``"NaN"``, ``"Infinity"``
    and ``"1_000"`` (all valid for ``Decimal()``) are rejected.
    """
    if not _RE_DECIMAL.fullmatch(token):
        return None
    try:
        return Decimal(token)
    except InvalidOperation:
        return None


def parse_cash_flows(text: Optional[str]) -> list[Decimal]:
    """Parse comma-separated cash flows, in period order.

    Raises:
        ValueError: If any token is not a number.  The message lists every
            offending token.
    """
    amounts: list[Decimal] = []
    invalid: list[str] = []
    for token in split_cash_flow_tokens(text):
        value = parse_decimal(token)
        if value is None:
            invalid.append(token)
        else:
            amounts.append(value)
    if invalid:
        raise ValueError(f"Invalid cash flow values: {', '.join(invalid)}")
    return amounts
