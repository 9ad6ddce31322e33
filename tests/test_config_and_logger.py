import io
import json
import logging
import sys
from decimal import Decimal

import pytest
from pydantic import ValidationError

from npv_calculator.config import AppConfig, get_config
from npv_calculator.logger import JSONFormatter, StructuredLogger


def test_defaults():
    config = AppConfig()

    assert config.MAX_CASH_FLOWS == 1000
    assert config.MAX_CASH_FLOW_MAGNITUDE == Decimal("1000000000000")
    assert config.MIN_LOWER_BOUND_RATE == Decimal("-100")
    assert config.MAX_UPPER_BOUND_RATE == Decimal("1000")
    assert config.MIN_RATE_INCREMENT == Decimal("0.01")
    assert config.MAX_CALCULATIONS == 10000
    assert config.RATE_TOLERANCE == Decimal("0.001")
    assert config.YIELD_INTERVAL == 5


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MAX_CALCULATIONS", "250")
    monkeypatch.setenv("MIN_RATE_INCREMENT", "0.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = AppConfig()

    assert config.MAX_CALCULATIONS == 250
    assert config.MIN_RATE_INCREMENT == Decimal("0.5")
    assert config.log_level == logging.DEBUG


@pytest.mark.parametrize(
    "overrides",
    [
        {"MIN_LOWER_BOUND_RATE": Decimal("10"), "MAX_UPPER_BOUND_RATE": Decimal("5")},
        {"MIN_RATE_INCREMENT": Decimal("0")},
        {"MAX_CALCULATIONS": 0},
        {"YIELD_INTERVAL": 0},
    ],
)
def test_inconsistent_limits_rejected(overrides):
    with pytest.raises(ValidationError):
        AppConfig(**overrides)


def test_unknown_log_level_falls_back_to_info():
    assert AppConfig(LOG_LEVEL="chatty").log_level == logging.INFO


def test_get_config_is_cached():
    assert get_config() is get_config()


def test_json_formatter_includes_extra_and_exception():
    formatter = JSONFormatter()
    try:
        raise ValueError("bad rate")
    except ValueError:
        record = logging.LogRecord(
            name="npv", level=logging.ERROR, pathname=__file__, lineno=1,
            msg="failed after %d rates", args=(3,), exc_info=sys.exc_info(),
        )
    record.parameter = "discount_rate"

    entry = json.loads(formatter.format(record))

    assert entry["level"] == "ERROR"
    assert entry["logger_name"] == "npv"
    assert entry["message"] == "failed after 3 rates"
    assert entry["extra"] == {"parameter": "discount_rate"}
    assert "ValueError: bad rate" in entry["exception"]


def test_structured_logger_writes_json_lines():
    stream = io.StringIO()
    log = StructuredLogger(name="tests.json_lines", stream=stream)

    log.info("Sweep finished", extra={"result_count": 57})

    entry = json.loads(stream.getvalue().strip())
    assert entry["message"] == "Sweep finished"
    assert entry["extra"] == {"result_count": "57"}


def test_structured_logger_rotating_file(tmp_path):
    log_file = tmp_path / "logs" / "npv.log"
    log = StructuredLogger(name="tests.file_output", stream=io.StringIO(), log_file=str(log_file))

    log.warning("written to disk")
    for handler in log.logger.handlers:
        handler.flush()

    assert "written to disk" in log_file.read_text(encoding="utf-8")


def test_structured_logger_reuses_handlers():
    first = StructuredLogger(name="tests.reuse", stream=io.StringIO())
    second = StructuredLogger(name="tests.reuse", stream=io.StringIO())

    assert first.logger is second.logger
    assert len(second.logger.handlers) == 1
