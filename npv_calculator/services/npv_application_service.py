"""
NPV Application Service.

Entry point for a calculation request coming from any outer layer (CLI,
HTTP handler, UI).  Validates once, runs the engine only for valid
requests, and translates the engine's outcome into an
:class:`NpvApplicationResult`:

==================  ===================  ===========
Engine outcome      Result status        status_code
==================  ===================  ===========
results             SUCCESS              200
validation errors   VALIDATION_FAILED    400
InvalidInputError   INVALID_INPUT        400
cancelled           CANCELLED            409
anything else       (logged, re-raised)  --
==================  ===================  ===========
"""

from __future__ import annotations

from typing import Optional

from npv_calculator.logger import StructuredLogger
from npv_calculator.models.npv_models import NpvRequest, NpvResult, ValidationOutcome
from npv_calculator.models.service_models import NpvApplicationResult
from npv_calculator.services.base_service import BaseService
from npv_calculator.services.npv_calculator_service import (
    CalculationCancelledError,
    CancellationSignal,
)
from npv_calculator.services.npv_engine import NpvEngine
from npv_calculator.utils.math_utils import InvalidInputError


class NpvApplicationService(BaseService):
    """Validates and runs NPV calculation requests."""

    def __init__(self, engine: NpvEngine, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._engine: NpvEngine = engine

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process_calculation(self, request: Optional[NpvRequest]) -> NpvApplicationResult:
        """Validate *request* and, if valid, run the sweep synchronously."""
        validation = self._begin(request)
        if not validation.is_valid:
            return NpvApplicationResult.validation_failure(validation.errors, validation.warnings)

        try:
            results = self._engine.calculate_sync(request)
        except InvalidInputError as exc:
            return self._invalid_input(exc, validation)
        except Exception:
            self._logger.error("Error in NPV calculation processing", exc_info=True)
            raise

        return self._succeeded(results, validation)

    async def process_calculation_async(
        self,
        request: Optional[NpvRequest],
        cancellation: Optional[CancellationSignal] = None,
    ) -> NpvApplicationResult:
        """Async variant of :meth:`process_calculation` honouring *cancellation*."""
        validation = self._begin(request)
        if not validation.is_valid:
            return NpvApplicationResult.validation_failure(validation.errors, validation.warnings)

        try:
            results = await self._engine.calculate_async(request, cancellation)
        except CalculationCancelledError:
            self._logger.info("NPV calculation was cancelled")
            return NpvApplicationResult.cancelled()
        except InvalidInputError as exc:
            return self._invalid_input(exc, validation)
        except Exception:
            self._logger.error("Error in NPV calculation processing", exc_info=True)
            raise

        return self._succeeded(results, validation)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _begin(self, request: Optional[NpvRequest]) -> ValidationOutcome:
        count = len(request.cash_flows or []) if request is not None else 0
        self._logger.info(
            "Processing NPV calculation request with %d cash flows", count,
        )
        return self._engine.validate(request)

    def _succeeded(
        self,
        results: list[NpvResult],
        validation: ValidationOutcome,
    ) -> NpvApplicationResult:
        self._logger.info("NPV calculation completed with %d results", len(results))
        return NpvApplicationResult.success_result(results, validation.warnings)

    def _invalid_input(
        self,
        exc: InvalidInputError,
        validation: ValidationOutcome,
    ) -> NpvApplicationResult:
        self._logger.warning(
            "NPV calculation rejected input: %s", exc.message,
            extra={"parameter": exc.parameter},
        )
        return NpvApplicationResult.invalid_input(exc.message, validation.warnings)
