"""
Service base class.

Every NPV service is constructed with an injected :class:`StructuredLogger`
(see ``create_services``); this class only stores it.
"""

from __future__ import annotations

from npv_calculator.logger import StructuredLogger


class BaseService:
    """Holds the service's named logger as ``self._logger``."""

    def __init__(self, logger: StructuredLogger) -> None:
        self._logger: StructuredLogger = logger
