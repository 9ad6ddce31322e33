"""
NPV Engine Facade.

The three operations the calculation core offers to its callers:
``validate``, ``calculate_sync`` and ``calculate_async``.  The facade adds
no behaviour of its own; validation and calculation stay separate calls so
the caller decides when (and whether) to validate.
"""

from __future__ import annotations

from typing import Optional

from npv_calculator.models.npv_models import NpvRequest, NpvResult, ValidationOutcome
from npv_calculator.services.npv_calculator_service import (
    CancellationSignal,
    NpvCalculatorService,
)
from npv_calculator.services.validation_service import ValidationService


class NpvEngine:
    """Groups the validator and the orchestrator behind one object."""

    def __init__(
        self,
        validator: ValidationService,
        calculator: NpvCalculatorService,
    ) -> None:
        self._validator: ValidationService = validator
        self._calculator: NpvCalculatorService = calculator

    def validate(self, request: Optional[NpvRequest]) -> ValidationOutcome:
        return self._validator.validate_request(request)

    def calculate_sync(self, request: NpvRequest) -> list[NpvResult]:
        return self._calculator.calculate(request)

    async def calculate_async(
        self,
        request: NpvRequest,
        cancellation: Optional[CancellationSignal] = None,
    ) -> list[NpvResult]:
        return await self._calculator.calculate_async(request, cancellation)
