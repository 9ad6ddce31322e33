"""
Service Layer Data Transfer Objects.

Pydantic models for the envelopes returned at service boundaries.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from npv_calculator.models.enums import CalculationStatus
from npv_calculator.models.npv_models import NpvResult
from npv_calculator.utils.general import JsonSafeType, convert_to_json_safe

T = TypeVar("T")

__all__ = [
    "NpvApplicationResult",
    "ServiceResult",
]

CANCELLED_MESSAGE: str = "Operation was cancelled"


class ServiceResult(BaseModel, Generic[T]):
    """
    Standard service return envelope.

    All service methods return this, providing a consistent contract
    for the command layer.

    Generic over ``T`` so callers can annotate return types precisely
    (e.g. ``ServiceResult[list[NpvResult]]``).
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    status_code: int = 200


class NpvApplicationResult(ServiceResult[list[NpvResult]]):
    """Outcome of one calculation request as seen by the caller.

    Carries every validation error (not just the first) and the advisory
    warnings, which are returned on success as well as on failure.
    """

    status: CalculationStatus = CalculationStatus.SUCCESS
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def success_result(
        cls,
        data: list[NpvResult],
        warnings: Optional[list[str]] = None,
    ) -> "NpvApplicationResult":
        return cls(
            success=True,
            data=list(data),
            warnings=list(warnings or []),
            status=CalculationStatus.SUCCESS,
            status_code=200,
        )

    @classmethod
    def validation_failure(
        cls,
        errors: list[str],
        warnings: Optional[list[str]] = None,
    ) -> "NpvApplicationResult":
        return cls(
            success=False,
            error=errors[0] if errors else None,
            errors=list(errors),
            warnings=list(warnings or []),
            status=CalculationStatus.VALIDATION_FAILED,
            status_code=400,
        )

    @classmethod
    def invalid_input(
        cls,
        message: str,
        warnings: Optional[list[str]] = None,
    ) -> "NpvApplicationResult":
        return cls(
            success=False,
            error=message,
            errors=[message],
            warnings=list(warnings or []),
            status=CalculationStatus.INVALID_INPUT,
            status_code=400,
        )

    @classmethod
    def cancelled(cls) -> "NpvApplicationResult":
        """Partial results are never attached to a cancelled calculation."""
        return cls(
            success=False,
            error=CANCELLED_MESSAGE,
            errors=[CANCELLED_MESSAGE],
            status=CalculationStatus.CANCELLED,
            status_code=409,
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_response(self) -> dict[str, JsonSafeType]:
        """Render the camelCase response body.

        Success: ``{"success": true, "data": [{"rate", "value"}], "warnings": [...]}``.
        Failure: ``{"success": false, "errors": [...], "warnings": [...]}``.
        """
        if self.success:
            body: dict[str, object] = {
                "success": True,
                "data": self.data or [],
                "warnings": self.warnings,
            }
        else:
            body = {
                "success": False,
                "errors": self.errors,
                "warnings": self.warnings,
            }
        return convert_to_json_safe(body)
