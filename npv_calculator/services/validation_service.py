"""
Request Validation Service.

Pre-flight checks on an :class:`NpvRequest` before any rate is evaluated.
Every rule runs independently so the caller sees all problems at once;
problems are reported through a :class:`ValidationOutcome`, never raised.
Validation is pure arithmetic on the request: it does not generate rates
or evaluate NPVs.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from npv_calculator.config import AppConfig
from npv_calculator.logger import StructuredLogger
from npv_calculator.models.npv_models import NpvRequest, ValidationOutcome
from npv_calculator.services.base_service import BaseService


class ValidationService(BaseService):
    """Checks structural and business limits on a calculation request.

    All limits come from :class:`AppConfig`; none are hard-coded here.
    """

    def __init__(self, config: AppConfig, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._config: AppConfig = config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate_request(self, request: Optional[NpvRequest]) -> ValidationOutcome:
        """Validate *request* and return its errors and warnings.

        A missing request yields a single error and skips every other rule.
        The request is never modified.
        """
        outcome = ValidationOutcome()

        if request is None:
            outcome.add_error("Request cannot be null")
            return outcome

        self._validate_cash_flows(request.cash_flows, outcome)
        self._validate_rate_bounds(request, outcome)
        self._validate_sweep_size(request, outcome)
        self._collect_warnings(request.cash_flows, outcome)

        if not outcome.is_valid:
            self._logger.warning(
                "Validation failed with %d errors", len(outcome.errors),
                extra={"validation_summary": outcome.get_summary()},
            )

        return outcome

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _validate_cash_flows(
        self,
        cash_flows: Optional[list[Decimal]],
        outcome: ValidationOutcome,
    ) -> None:
        if cash_flows is None:
            outcome.add_error("Cash flows cannot be null")
            return

        if not cash_flows:
            outcome.add_error("At least one cash flow is required")
            return

        max_count = self._config.MAX_CASH_FLOWS
        if len(cash_flows) > max_count:
            outcome.add_error(f"Too many cash flows. Maximum allowed: {max_count}")

        max_magnitude = self._config.MAX_CASH_FLOW_MAGNITUDE
        if any(abs(amount) > max_magnitude for amount in cash_flows):
            outcome.add_error("Cash flows contain extremely large values")

    def _validate_rate_bounds(self, request: NpvRequest, outcome: ValidationOutcome) -> None:
        cfg = self._config
        lower = request.lower_bound_rate
        upper = request.upper_bound_rate
        increment = request.rate_increment

        if lower < cfg.MIN_LOWER_BOUND_RATE:
            outcome.add_error(
                f"Lower bound rate cannot be less than {cfg.MIN_LOWER_BOUND_RATE}%"
            )

        if upper > cfg.MAX_UPPER_BOUND_RATE:
            outcome.add_error(f"Upper bound rate cannot exceed {cfg.MAX_UPPER_BOUND_RATE}%")

        if upper <= lower:
            outcome.add_error("Upper bound must be greater than lower bound")

        if increment < cfg.MIN_RATE_INCREMENT:
            outcome.add_error(f"Rate increment must be at least {cfg.MIN_RATE_INCREMENT}%")

    def _validate_sweep_size(self, request: NpvRequest, outcome: ValidationOutcome) -> None:
        span = request.upper_bound_rate - request.lower_bound_rate
        increment = request.rate_increment

        # A non-positive increment is already an error; there is no count to cap.
        if increment > 0:
            total_calculations = span / increment
            if total_calculations > self._config.MAX_CALCULATIONS:
                outcome.add_error(
                    f"Too many calculations ({total_calculations:.0f}). "
                    f"Maximum: {self._config.MAX_CALCULATIONS}"
                )

        if increment > span:
            outcome.add_error("Rate increment cannot be larger than the rate range")

    @staticmethod
    def _collect_warnings(
        cash_flows: Optional[list[Decimal]],
        outcome: ValidationOutcome,
    ) -> None:
        if not cash_flows:
            return

        if all(amount >= 0 for amount in cash_flows):
            outcome.add_warning("All cash flows are positive - unusual for NPV calculations")

        if cash_flows[0] > 0:
            outcome.add_warning(
                "First cash flow is positive - typically initial investment is negative"
            )
