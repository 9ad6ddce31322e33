"""
Input Validation Service.

First-line checks on raw user input, before an :class:`NpvRequest` exists:
the cash flows arrive as comma-separated text and the three rates as
numbers.  These checks only guarantee the text can be turned into a
request; business limits are enforced afterwards by
:class:`ValidationService`.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from npv_calculator.logger import StructuredLogger
from npv_calculator.models.npv_models import NpvRequest, ValidationOutcome
from npv_calculator.services.base_service import BaseService
from npv_calculator.utils.string_helpers import (
    parse_cash_flows,
    parse_decimal,
    split_cash_flow_tokens,
)


class NpvInput(BaseModel):
    """Raw form input.  Defaults are the values a blank form starts with."""

    cash_flows_text: str = "-1000,300,400,500"
    lower_bound_rate: Decimal = Decimal("1.00")
    upper_bound_rate: Decimal = Decimal("15.00")
    rate_increment: Decimal = Decimal("0.25")


class InputValidationService(BaseService):
    """Validates raw form input and converts it into an :class:`NpvRequest`."""

    def __init__(self, logger: StructuredLogger) -> None:
        super().__init__(logger)

    def validate_input(self, model: NpvInput) -> ValidationOutcome:
        """Collect every problem with *model*; never raises for bad input."""
        outcome = ValidationOutcome()
        self._validate_cash_flows(model.cash_flows_text, outcome)
        self._validate_rates(model, outcome)
        return outcome

    def build_request(self, model: NpvInput) -> NpvRequest:
        """Parse *model* into a request.

        Raises:
            ValueError: If the cash-flow text contains non-numeric entries.
        """
        return NpvRequest(
            cash_flows=parse_cash_flows(model.cash_flows_text),
            lower_bound_rate=model.lower_bound_rate,
            upper_bound_rate=model.upper_bound_rate,
            rate_increment=model.rate_increment,
        )

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_cash_flows(text: Optional[str], outcome: ValidationOutcome) -> None:
        if not text or not text.strip():
            outcome.add_error("Cash flows cannot be empty")
            return

        tokens = split_cash_flow_tokens(text)
        if not tokens:
            outcome.add_error("At least one cash flow is required")
            return

        invalid = [token for token in tokens if parse_decimal(token) is None]
        if invalid:
            outcome.add_error(f"Invalid cash flow values: {', '.join(invalid)}")

        if len(invalid) == len(tokens):
            outcome.add_error("No valid cash flows found")

    @staticmethod
    def _validate_rates(model: NpvInput, outcome: ValidationOutcome) -> None:
        if model.upper_bound_rate <= model.lower_bound_rate:
            outcome.add_error("Upper bound rate must be greater than lower bound rate")

        if model.rate_increment <= 0:
            outcome.add_error("Rate increment must be positive")

        if model.rate_increment > model.upper_bound_rate - model.lower_bound_rate:
            outcome.add_error("Rate increment cannot be larger than the rate range")
