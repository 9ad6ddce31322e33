from __future__ import annotations

"""
Data Models Package.

Re-exports all Pydantic models for convenient imports:
    from npv_calculator.models import NpvRequest, NpvResult, ValidationOutcome
    from npv_calculator.models import NpvApplicationResult, CalculationStatus
"""

from npv_calculator.models.enums import CalculationStatus
from npv_calculator.models.npv_models import NpvRequest, NpvResult, ValidationOutcome
from npv_calculator.models.service_models import NpvApplicationResult, ServiceResult

__all__ = [
    "CalculationStatus",
    "NpvApplicationResult",
    "NpvRequest",
    "NpvResult",
    "ServiceResult",
    "ValidationOutcome",
]
