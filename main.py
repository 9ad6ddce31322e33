"""
NPV Calculator Command-Line Entry Point.

Wires the service graph, checks the raw input, runs one calculation and
prints the JSON response on stdout.  Logs go to stderr as JSON lines.

Usage::

    python main.py --cash-flows=-1000,300,400,500 --lower 1 --upper 15 --increment 0.25
    python main.py --cash-flows=-1000,300,400,500 --async --timeout 0.5

Exit codes: 0 success, 1 invalid request, 2 cancelled (timeout reached or
interrupted with Ctrl-C while the sweep runs).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from decimal import Decimal
from typing import Optional

from npv_calculator.config import get_config
from npv_calculator.logger import StructuredLogger, get_logger
from npv_calculator.models.enums import CalculationStatus
from npv_calculator.models.npv_models import NpvRequest
from npv_calculator.models.service_models import NpvApplicationResult
from npv_calculator.services import create_services
from npv_calculator.services.input_validation_service import NpvInput
from npv_calculator.services.npv_application_service import NpvApplicationService
from npv_calculator.utils.string_helpers import parse_decimal

_DEFAULTS = NpvInput()

EXIT_OK: int = 0
EXIT_INVALID: int = 1
EXIT_CANCELLED: int = 2


def _decimal_arg(text: str) -> Decimal:
    value = parse_decimal(text.strip())
    if value is None:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")
    return value


def _parse_args(argv: Optional[list[str]]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="npv-calculator",
        description="Net Present Value of a cash-flow series across a range of discount rates.",
    )
    p.add_argument(
        "--cash-flows",
        default=_DEFAULTS.cash_flows_text,
        help="Comma-separated cash flows, period 0 first. Use --cash-flows=-1000,... "
             f"when the first value is negative (default: {_DEFAULTS.cash_flows_text}).",
    )
    p.add_argument("--lower", type=_decimal_arg, default=_DEFAULTS.lower_bound_rate,
                   help="Lower bound rate in percent (default: %(default)s).")
    p.add_argument("--upper", type=_decimal_arg, default=_DEFAULTS.upper_bound_rate,
                   help="Upper bound rate in percent (default: %(default)s).")
    p.add_argument("--increment", type=_decimal_arg, default=_DEFAULTS.rate_increment,
                   help="Rate increment in percent (default: %(default)s).")
    p.add_argument("--async", dest="use_async", action="store_true",
                   help="Run the sweep on the asyncio event loop.")
    p.add_argument("--timeout", type=float, default=None,
                   help="Cancel the sweep after this many seconds (requires --async).")
    args = p.parse_args(argv)
    if args.timeout is not None and not args.use_async:
        p.error("--timeout requires --async")
    return args


async def _run_async(
    service: NpvApplicationService,
    request: NpvRequest,
    timeout: Optional[float],
) -> NpvApplicationResult:
    cancellation = asyncio.Event()
    handle = None
    if timeout is not None:
        handle = asyncio.get_running_loop().call_later(timeout, cancellation.set)
    try:
        return await service.process_calculation_async(request, cancellation)
    finally:
        if handle is not None:
            handle.cancel()


def _exit_code(result: NpvApplicationResult) -> int:
    if result.success:
        return EXIT_OK
    if result.status == CalculationStatus.CANCELLED:
        return EXIT_CANCELLED
    return EXIT_INVALID


def main(argv: Optional[list[str]] = None) -> int:
    """Command-line entry point.  Returns the process exit code."""
    args = _parse_args(argv)
    logger: StructuredLogger = get_logger("npv_calculator.main")

    services = create_services(get_config())
    form = NpvInput(
        cash_flows_text=args.cash_flows,
        lower_bound_rate=args.lower,
        upper_bound_rate=args.upper,
        rate_increment=args.increment,
    )

    input_check = services["input_validation_service"].validate_input(form)
    if not input_check.is_valid:
        logger.info("Rejected command-line input: %s", input_check.get_summary())
        result = NpvApplicationResult.validation_failure(input_check.errors, input_check.warnings)
    else:
        request = services["input_validation_service"].build_request(form)
        app_service = services["npv_application_service"]
        try:
            if args.use_async:
                result = asyncio.run(_run_async(app_service, request, args.timeout))
            else:
                result = app_service.process_calculation(request)
        except KeyboardInterrupt:
            logger.info("NPV calculation interrupted from the terminal")
            result = NpvApplicationResult.cancelled()

    print(json.dumps(result.to_response(), indent=2))
    return _exit_code(result)


if __name__ == "__main__":
    sys.exit(main())
