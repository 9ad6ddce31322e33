"""Shared utility functions for the NPV calculator.

This package provides convenience re-exports so that consumers can import
directly from ``npv_calculator.utils`` (e.g. ``from npv_calculator.utils
import calculate_npv``) while full absolute imports (e.g. ``from
npv_calculator.utils.math_utils import calculate_npv``) remain supported.
"""

from npv_calculator.utils.general import convert_to_json_safe
from npv_calculator.utils.math_utils import (
    InvalidInputError,
    calculate_npv,
    discount_factor,
    round_money,
)
from npv_calculator.utils.string_helpers import (
    parse_cash_flows,
    parse_decimal,
    split_cash_flow_tokens,
)

__all__ = [
    "InvalidInputError",
    "calculate_npv",
    "convert_to_json_safe",
    "discount_factor",
    "parse_cash_flows",
    "parse_decimal",
    "round_money",
    "split_cash_flow_tokens",
]
