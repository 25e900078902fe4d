from __future__ import annotations

from math import isclose

import pytest
from pydantic import ValidationError

from backend.core.returns import calculate_returns
from backend.schemas.returns import ReturnsRequest


def test_initial_investment_only_compounds_monthly():
    result = calculate_returns(ReturnsRequest(initialInvestment=1000, expectedReturn=12, years=1))

    assert isclose(result.monthlyRate, 1.0)
    assert isclose(result.finalAmount, 1000 * 1.01 ** 12, rel_tol=1e-9)
    assert isclose(result.totalInvestment, 1000)
    assert isclose(result.totalReturn, result.finalAmount - 1000)


def test_contributions_add_annuity_value():
    result = calculate_returns(
        ReturnsRequest(initialInvestment=1000, monthlyContribution=100, expectedReturn=6, years=2)
    )
    rate = 0.06 / 12
    expected = 1000 * (1 + rate) ** 24 + 100 * (((1 + rate) ** 24 - 1) / rate)

    assert isclose(result.finalAmount, expected, rel_tol=1e-9)
    assert isclose(result.totalInvestment, 1000 + 100 * 24)


def test_zero_return_keeps_contributions_only():
    result = calculate_returns(
        ReturnsRequest(initialInvestment=500, monthlyContribution=50, expectedReturn=0, years=3)
    )

    assert isclose(result.finalAmount, 500 + 50 * 36)
    assert isclose(result.totalReturn, 0.0, abs_tol=1e-9)
    assert result.monthlyRate == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"initialInvestment": 0, "expectedReturn": 5, "years": 1},
        {"initialInvestment": 100, "expectedReturn": -1, "years": 1},
        {"initialInvestment": 100, "expectedReturn": 5, "years": 0},
        {"initialInvestment": 100, "monthlyContribution": -5, "expectedReturn": 5, "years": 1},
    ],
)
def test_invalid_requests_rejected(payload):
    with pytest.raises(ValidationError):
        ReturnsRequest.model_validate(payload)


@pytest.mark.parametrize(
    "payload",
    [
        {"initialInvestment": 1000, "expectedReturn": 100000, "years": 100},
        {"initialInvestment": 1e12, "expectedReturn": 5, "years": 1},
        {"initialInvestment": 100, "expectedReturn": 5, "years": 101},
    ],
)
def test_out_of_range_requests_rejected(payload):
    with pytest.raises(ValidationError):
        ReturnsRequest.model_validate(payload)


def test_largest_accepted_request_stays_finite():
    result = calculate_returns(
        ReturnsRequest(
            initialInvestment=1_000_000_000,
            monthlyContribution=1_000_000_000,
            expectedReturn=500,
            years=100,
        )
    )

    assert result.finalAmount < float("inf")
