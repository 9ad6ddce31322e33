"""
Application Configuration.

Pydantic Settings model for the NPV calculator.
All configuration is loaded from environment variables and .env files.
Inject an AppConfig instance via dependency injection where needed.
"""

from __future__ import annotations

import logging
import threading
from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class AppConfig(BaseSettings):
    """Central configuration loaded from environment variables and defaults."""

    # --- Request limits (policy values, not resource measurements) ---
    MAX_CASH_FLOWS: int = Field(default=1000, gt=0)
    MAX_CASH_FLOW_MAGNITUDE: Decimal = Decimal("1000000000000")
    MIN_LOWER_BOUND_RATE: Decimal = Decimal("-100")
    MAX_UPPER_BOUND_RATE: Decimal = Decimal("1000")
    MIN_RATE_INCREMENT: Decimal = Decimal("0.01")
    MAX_CALCULATIONS: int = Field(default=10000, gt=0)

    # --- Rate sweep ---
    # Absorbs rounding error introduced by the step-count ceiling.
    RATE_TOLERANCE: Decimal = Decimal("0.001")
    # Async sweeps hand control back to the event loop every N rates.
    YIELD_INTERVAL: int = Field(default=5, gt=0)

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # empty: console only
    LOG_MAX_BYTES: int = 5_242_880  # 5 MB
    LOG_BACKUP_COUNT: int = 3

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @model_validator(mode="after")
    def _check_limits(self) -> "AppConfig":
        """Reject inconsistent limits and warn when running on defaults.

        Pydantic silently falls back to defaults when ``.env`` is missing,
        so the fallback is logged at debug level.
        """
        if self.MIN_LOWER_BOUND_RATE >= self.MAX_UPPER_BOUND_RATE:
            raise ValueError(
                "MIN_LOWER_BOUND_RATE must be lower than MAX_UPPER_BOUND_RATE"
            )
        if self.MIN_RATE_INCREMENT <= 0:
            raise ValueError("MIN_RATE_INCREMENT must be positive")
        if self.MAX_CASH_FLOW_MAGNITUDE <= 0:
            raise ValueError("MAX_CASH_FLOW_MAGNITUDE must be positive")
        if self.RATE_TOLERANCE < 0:
            raise ValueError("RATE_TOLERANCE must not be negative")

        if not Path(".env").exists():
            logging.getLogger("npv_calculator.config").debug(
                "No .env file found; configuration loaded from "
                "environment variables or defaults."
            )

        return self

    @property
    def log_level(self) -> int:
        """Numeric ``logging`` level for ``LOG_LEVEL`` (INFO if unknown)."""
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO


# ---------------------------------------------------------------------------
# Module-level singleton factory
# ---------------------------------------------------------------------------

_config_instance: Optional[AppConfig] = None
_config_lock: threading.Lock = threading.Lock()


def get_config() -> AppConfig:
    """Return a cached ``AppConfig`` singleton.

    On first call, creates an ``AppConfig`` instance (reading from ``.env``).
    Subsequent calls return the same instance.  Uses a check-lock-check
    pattern to avoid the lock overhead on the fast path while remaining
    thread-safe during first initialisation.

    Prefer direct constructor injection of ``AppConfig`` in new code.
    """
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = AppConfig()
    return _config_instance
