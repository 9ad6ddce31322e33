from __future__ import annotations

import io
from decimal import Decimal

import pytest

from npv_calculator.config import AppConfig
from npv_calculator.logger import StructuredLogger, get_logger
from npv_calculator.models.npv_models import NpvRequest
from npv_calculator.services import create_services
from npv_calculator.services.npv_application_service import NpvApplicationService
from npv_calculator.services.npv_calculator_service import NpvCalculatorService
from npv_calculator.services.npv_engine import NpvEngine
from npv_calculator.services.validation_service import ValidationService


@pytest.fixture(scope="session", autouse=True)
def _bind_named_loggers():
    # Attach handlers to the session-wide stderr before any test swaps it out.
    create_services()
    get_logger("npv_calculator.main")


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def logger(request, log_stream) -> StructuredLogger:
    # One logger name per test so each test gets a fresh handler on its own stream.
    return StructuredLogger(name=f"tests.{request.node.name}", stream=log_stream)


@pytest.fixture
def config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def validator(config, logger) -> ValidationService:
    return ValidationService(config=config, logger=logger)


@pytest.fixture
def calculator(config, logger) -> NpvCalculatorService:
    return NpvCalculatorService(config=config, logger=logger)


@pytest.fixture
def app_service(validator, calculator, logger) -> NpvApplicationService:
    return NpvApplicationService(engine=NpvEngine(validator, calculator), logger=logger)


def make_request(
    cash_flows=("-1000", "300", "400", "500"),
    lower="1",
    upper="5",
    increment="1",
) -> NpvRequest:
    return NpvRequest(
        cash_flows=None if cash_flows is None else [Decimal(str(cf)) for cf in cash_flows],
        lower_bound_rate=Decimal(lower),
        upper_bound_rate=Decimal(upper),
        rate_increment=Decimal(increment),
    )
