from decimal import Decimal

import pytest
from pydantic import ValidationError

from npv_calculator.models import (
    CalculationStatus,
    NpvApplicationResult,
    NpvRequest,
    NpvResult,
    ValidationOutcome,
)
from npv_calculator.utils.general import convert_to_json_safe


def test_request_accepts_camel_case_payload():
    request = NpvRequest.model_validate(
        {"cashFlows": [-1000, "300.5", 400], "lowerBoundRate": 1, "upperBoundRate": "15", "rateIncrement": 0.25},
    )

    assert request.cash_flows == [Decimal("-1000"), Decimal("300.5"), Decimal("400")]
    assert request.upper_bound_rate == Decimal("15")
    assert request.rate_increment == Decimal("0.25")


def test_request_is_frozen():
    request = NpvRequest(cash_flows=[Decimal("1")])

    with pytest.raises(ValidationError):
        request.lower_bound_rate = Decimal("3")


def test_request_rejects_non_finite_amounts():
    with pytest.raises(ValidationError):
        NpvRequest(cash_flows=["NaN"])


def test_validation_outcome_ignores_blank_messages():
    outcome = ValidationOutcome()
    outcome.add_error("")
    outcome.add_error("   ")
    outcome.add_error(None)
    outcome.add_warning(" ")

    assert outcome.is_valid
    assert outcome.warnings == []


def test_validation_outcome_add_errors_and_summary():
    outcome = ValidationOutcome()
    assert outcome.get_summary() == "No validation issues"

    outcome.add_errors(["first", "", "second"])
    outcome.add_warning("careful")

    assert not outcome.is_valid
    assert outcome.errors == ["first", "second"]
    assert outcome.get_summary() == "Errors: first, second; Warnings: careful"


def test_validation_outcome_warnings_only_summary_and_clear():
    outcome = ValidationOutcome()
    outcome.add_warning("careful")

    assert outcome.is_valid
    assert outcome.get_summary() == "Warnings: careful"

    outcome.clear()
    assert outcome.errors == [] and outcome.warnings == []


def test_result_is_frozen():
    result = NpvResult(rate=Decimal("1.00"), value=Decimal("-21.04"))

    with pytest.raises(ValidationError):
        result.value = Decimal("0")


def test_cancelled_result_has_no_data():
    result = NpvApplicationResult.cancelled()

    assert result.status == CalculationStatus.CANCELLED
    assert result.status == "CANCELLED"
    assert result.to_response() == {
        "success": False,
        "errors": ["Operation was cancelled"],
        "warnings": [],
    }


def test_success_result_response():
    result = NpvApplicationResult.success_result(
        [NpvResult(rate=Decimal("2.50"), value=Decimal("10.10"))], ["note"],
    )

    assert result.to_response() == {
        "success": True,
        "data": [{"rate": 2.5, "value": 10.1}],
        "warnings": ["note"],
    }


@pytest.mark.parametrize("amount", [Decimal("NaN"), Decimal("Infinity"), Decimal("-Infinity")])
def test_non_finite_decimal_renders_as_null(amount):
    assert convert_to_json_safe({"value": amount, "rows": [amount]}) == {"value": None, "rows": [None]}


def test_convert_to_json_safe_renders_models_and_amounts():
    body = {"success": True, "data": [NpvResult(rate=Decimal("1.25"), value=Decimal("-3.50"))], "count": 1}

    assert convert_to_json_safe(body) == {
        "success": True,
        "data": [{"rate": 1.25, "value": -3.5}],
        "count": 1,
    }


def test_convert_to_json_safe_rejects_unknown_types():
    with pytest.raises(TypeError, match="set"):
        convert_to_json_safe({"bad": {1, 2}})
