from decimal import Decimal

import pytest

from npv_calculator.services.input_validation_service import InputValidationService, NpvInput
from npv_calculator.utils.string_helpers import parse_cash_flows, parse_decimal, split_cash_flow_tokens


@pytest.fixture
def input_validator(logger):
    return InputValidationService(logger=logger)


def test_default_form_is_valid(input_validator):
    form = NpvInput()

    assert input_validator.validate_input(form).is_valid
    request = input_validator.build_request(form)
    assert request.cash_flows == [Decimal("-1000"), Decimal("300"), Decimal("400"), Decimal("500")]
    assert request.lower_bound_rate == Decimal("1.00")
    assert request.upper_bound_rate == Decimal("15.00")
    assert request.rate_increment == Decimal("0.25")


@pytest.mark.parametrize("text", ["", "   "])
def test_blank_cash_flows(input_validator, text):
    outcome = input_validator.validate_input(NpvInput(cash_flows_text=text))

    assert outcome.errors == ["Cash flows cannot be empty"]


def test_only_separators(input_validator):
    outcome = input_validator.validate_input(NpvInput(cash_flows_text=" , ,"))

    assert outcome.errors == ["At least one cash flow is required"]


def test_some_invalid_tokens(input_validator):
    outcome = input_validator.validate_input(NpvInput(cash_flows_text="abc, 100, x1"))

    assert outcome.errors == ["Invalid cash flow values: abc, x1"]


def test_no_valid_tokens(input_validator):
    outcome = input_validator.validate_input(NpvInput(cash_flows_text="abc, NaN"))

    assert outcome.errors == ["Invalid cash flow values: abc, NaN", "No valid cash flows found"]


def test_rate_checks(input_validator):
    outcome = input_validator.validate_input(
        NpvInput(lower_bound_rate=Decimal("5"), upper_bound_rate=Decimal("5"), rate_increment=Decimal("0")),
    )

    assert outcome.errors == [
        "Upper bound rate must be greater than lower bound rate",
        "Rate increment must be positive",
    ]


def test_increment_larger_than_range(input_validator):
    outcome = input_validator.validate_input(
        NpvInput(lower_bound_rate=Decimal("1"), upper_bound_rate=Decimal("2"), rate_increment=Decimal("3")),
    )

    assert outcome.errors == ["Rate increment cannot be larger than the rate range"]


def test_build_request_rejects_bad_text(input_validator):
    with pytest.raises(ValueError, match="Invalid cash flow values: oops"):
        input_validator.build_request(NpvInput(cash_flows_text="-100, oops"))


def test_split_tokens():
    assert split_cash_flow_tokens("-1000, 300,,400 ") == ["-1000", "300", "400"]
    assert split_cash_flow_tokens(None) == []


@pytest.mark.parametrize(
    "token, expected",
    [
        ("-1000", Decimal("-1000")),
        ("+3.", Decimal("3")),
        ("-.5", Decimal("-0.5")),
        ("1e3", Decimal("1000")),
        ("250.75", Decimal("250.75")),
    ],
)
def test_parse_decimal_accepts_plain_numbers(token, expected):
    assert parse_decimal(token) == expected


@pytest.mark.parametrize("token", ["NaN", "Infinity", "1_000", "1,0", "", "--1", "12a"])
def test_parse_decimal_rejects_non_numbers(token):
    assert parse_decimal(token) is None


def test_parse_cash_flows_keeps_period_order():
    assert parse_cash_flows("5, -3, 0.5") == [Decimal("5"), Decimal("-3"), Decimal("0.5")]
