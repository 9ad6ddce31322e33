"""
NPV Calculation Orchestrator.

Drives the rate-sweep generator and the NPV evaluator over every rate of a
request and assembles the ordered result list.

Concurrency
-----------
The service holds only its injected configuration and logger; every call
owns its own rate iterator and result list, so one instance can serve
concurrent calculations without locking.  The async variant suspends only
between rates, never inside a single NPV evaluation, and checks the
cancellation signal at the same boundary.  Output is identical whether or
not suspension happens.

The orchestrator assumes its input has already been validated; it never
calls :class:`ValidationService` itself.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Awaitable, Callable, Iterator, Optional, Protocol

from npv_calculator.config import AppConfig
from npv_calculator.logger import StructuredLogger
from npv_calculator.models.npv_models import NpvRequest, NpvResult
from npv_calculator.services.base_service import BaseService
from npv_calculator.services.rate_sweep import count_rate_steps, generate_discount_rates
from npv_calculator.utils.math_utils import InvalidInputError, calculate_npv, round_money

__all__ = [
    "CalculationCancelledError",
    "CancellationSignal",
    "NpvCalculatorService",
    "Scheduler",
]

_HUNDRED: Decimal = Decimal("100")


class CancellationSignal(Protocol):
    """Anything with an ``is_set()`` flag: ``threading.Event``, ``asyncio.Event``."""

    def is_set(self) -> bool: ...  # noqa: E704


Scheduler = Callable[[], Awaitable[None]]
"""Awaitable factory used to hand control back to the host event loop."""


class CalculationCancelledError(Exception):
    """Raised when the cancellation signal is observed mid-sweep.

    Results computed before cancellation are discarded; only the progress
    counters are kept for logging.
    """

    def __init__(self, completed: int, total: int) -> None:
        self.completed: int = completed
        self.total: int = total
        super().__init__(f"NPV calculation cancelled after {completed} of {total} rates")


async def _yield_to_event_loop() -> None:
    await asyncio.sleep(0)


class NpvCalculatorService(BaseService):
    """Evaluates the NPV of a request's cash flows at every swept rate."""

    def __init__(self, config: AppConfig, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._config: AppConfig = config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def calculate(
        self,
        request: NpvRequest,
        cancellation: Optional[CancellationSignal] = None,
    ) -> list[NpvResult]:
        """Return one :class:`NpvResult` per swept rate, in ascending rate order.

        Raises:
            CalculationCancelledError: If *cancellation* is set before the
                sweep finishes.
            InvalidInputError: Propagated unchanged from the evaluator.
        """
        total, rates = self._plan(request)
        results: list[NpvResult] = []

        for rate in rates:
            self._raise_if_cancelled(cancellation, len(results), total)
            results.append(self._evaluate(request, rate))

        self._log_completed(results)
        return results

    async def calculate_async(
        self,
        request: NpvRequest,
        cancellation: Optional[CancellationSignal] = None,
        *,
        yield_every: Optional[int] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> list[NpvResult]:
        """Same output as :meth:`calculate`, yielding to the event loop as it goes.

        Args:
            request: A request that already passed validation.
            cancellation: Checked before every rate.
            yield_every: Suspend after this many rates (``YIELD_INTERVAL``
                by default).
            scheduler: Awaited at each suspension point
                (``asyncio.sleep(0)`` by default).

        Raises:
            InvalidInputError: If *yield_every* is given and not positive.
        """
        if yield_every is not None and yield_every <= 0:
            raise InvalidInputError("yield_every", "Yield interval must be positive")
        interval: int = self._config.YIELD_INTERVAL if yield_every is None else yield_every
        pause: Scheduler = scheduler or _yield_to_event_loop

        total, rates = self._plan(request)
        results: list[NpvResult] = []

        for index, rate in enumerate(rates, start=1):
            self._raise_if_cancelled(cancellation, len(results), total)
            results.append(self._evaluate(request, rate))
            if index % interval == 0:
                await pause()

        self._log_completed(results)
        return results

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _plan(self, request: NpvRequest) -> tuple[int, Iterator[Decimal]]:
        total = count_rate_steps(
            request.lower_bound_rate, request.upper_bound_rate, request.rate_increment,
        )
        rates = generate_discount_rates(
            request.lower_bound_rate,
            request.upper_bound_rate,
            request.rate_increment,
            tolerance=self._config.RATE_TOLERANCE,
        )
        self._logger.info("Starting NPV calculation for %d rates", total)
        return total, rates

    @staticmethod
    def _evaluate(request: NpvRequest, rate: Decimal) -> NpvResult:
        value = calculate_npv(request.cash_flows, rate / _HUNDRED)
        return NpvResult(rate=round_money(rate), value=value)

    def _raise_if_cancelled(
        self,
        cancellation: Optional[CancellationSignal],
        completed: int,
        total: int,
    ) -> None:
        if cancellation is not None and cancellation.is_set():
            self._logger.info(
                "NPV calculation cancelled after %d of %d rates", completed, total,
            )
            raise CalculationCancelledError(completed, total)

    def _log_completed(self, results: list[NpvResult]) -> None:
        self._logger.info("NPV calculation completed with %d results", len(results))
