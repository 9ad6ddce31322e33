"""
Shared Enumerations for NPV Calculator Models.

StrEnum values compare equal to their string equivalents,
so code like ``if status == 'SUCCESS'`` continues to work.
"""

from __future__ import annotations
from enum import StrEnum


class CalculationStatus(StrEnum):
    """Outcome of a single calculation request.

    ``CANCELLED`` is neither a success nor a failure of the inputs: the
    caller aborted the sweep while it was running.
    """

    SUCCESS = "SUCCESS"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_INPUT = "INVALID_INPUT"
    CANCELLED = "CANCELLED"
