"""
NPV Domain Models.

Pydantic models for the calculation request, the per-rate result and the
validation outcome.  Rates are percentages throughout (``5`` means 5%);
monetary amounts are ``Decimal``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "NpvRequest",
    "NpvResult",
    "ValidationOutcome",
]


class NpvRequest(BaseModel):
    """A cash-flow series plus the rate sweep to evaluate it over.

    Accepts both snake_case and the camelCase keys used on the wire
    (``cashFlows``, ``lowerBoundRate``, ...), so it can be constructed
    from a request body via ``NpvRequest.model_validate(payload)``.
    ``cash_flows[t]`` is the amount at period ``t``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cash_flows: Optional[list[Decimal]] = Field(default_factory=list, alias="cashFlows")
    lower_bound_rate: Decimal = Field(default=Decimal("0"), alias="lowerBoundRate")
    upper_bound_rate: Decimal = Field(default=Decimal("0"), alias="upperBoundRate")
    rate_increment: Decimal = Field(default=Decimal("0"), alias="rateIncrement")


class NpvResult(BaseModel):
    """NPV at one swept rate.  Both fields are rounded to 2 decimal places."""

    model_config = ConfigDict(frozen=True)

    rate: Decimal
    value: Decimal


class ValidationOutcome(BaseModel):
    """Blocking errors and advisory warnings collected for one request.

    Blank messages are dropped on insertion, so ``is_valid`` is exactly
    "no error was reported".
    """

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, error: Optional[str]) -> None:
        if error and error.strip():
            self.errors.append(error)

    def add_errors(self, errors: Optional[Iterable[Optional[str]]]) -> None:
        for error in errors or ():
            self.add_error(error)

    def add_warning(self, warning: Optional[str]) -> None:
        """Record an advisory message.  Warnings never affect ``is_valid``."""
        if warning and warning.strip():
            self.warnings.append(warning)

    def get_summary(self) -> str:
        """One-line summary of every issue, for logs and CLI output."""
        parts: list[str] = []
        if self.errors:
            parts.append(f"Errors: {', '.join(self.errors)}")
        if self.warnings:
            parts.append(f"Warnings: {', '.join(self.warnings)}")
        return "; ".join(parts) if parts else "No validation issues"

    def clear(self) -> None:
        self.errors.clear()
        self.warnings.clear()
