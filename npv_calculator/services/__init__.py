"""
Business Logic Services Package.

The ``create_services()`` factory wires every service together, returning a
typed dict that the command layer can consume without knowing the internal
dependency graph.  Each service gets its own named logger.
"""

from __future__ import annotations

from typing import Optional, TypedDict

from npv_calculator.config import AppConfig, get_config
from npv_calculator.logger import get_logger
from npv_calculator.services.input_validation_service import InputValidationService
from npv_calculator.services.npv_application_service import NpvApplicationService
from npv_calculator.services.npv_calculator_service import NpvCalculatorService
from npv_calculator.services.npv_engine import NpvEngine
from npv_calculator.services.validation_service import ValidationService


class ServiceContainer(TypedDict):
    """Typed container for all application services."""

    input_validation_service: InputValidationService
    validation_service: ValidationService
    npv_calculator_service: NpvCalculatorService
    npv_engine: NpvEngine
    npv_application_service: NpvApplicationService


def create_services(config: Optional[AppConfig] = None) -> ServiceContainer:
    """
    Wire all services together.

    Args:
        config: Application configuration.  Falls back to the cached
                ``get_config()`` singleton when omitted.

    Returns:
        ServiceContainer with every service ready to use.
    """
    cfg = config or get_config()

    validation_service = ValidationService(
        config=cfg, logger=get_logger("npv_calculator.validation"),
    )
    npv_calculator_service = NpvCalculatorService(
        config=cfg, logger=get_logger("npv_calculator.calculator"),
    )
    npv_engine = NpvEngine(
        validator=validation_service, calculator=npv_calculator_service,
    )

    return ServiceContainer(
        input_validation_service=InputValidationService(
            logger=get_logger("npv_calculator.input"),
        ),
        validation_service=validation_service,
        npv_calculator_service=npv_calculator_service,
        npv_engine=npv_engine,
        npv_application_service=NpvApplicationService(
            engine=npv_engine, logger=get_logger("npv_calculator.application"),
        ),
    )
