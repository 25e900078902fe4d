"""Monthly-compounding returns calculator."""

from backend.core.errors import CalculationRangeError
from backend.schemas.returns import ReturnsRequest, ReturnsResponse


def calculate_returns(request: ReturnsRequest) -> ReturnsResponse:
    """Future value of an initial investment plus end-of-month contributions."""
    monthly_rate = request.expectedReturn / 12 / 100
    months = request.years * 12

    try:
        growth = (1 + monthly_rate) ** months
    except OverflowError as exc:
        raise CalculationRangeError() from exc

    future_value_initial = request.initialInvestment * growth
    if monthly_rate == 0:
        future_value_contributions = request.monthlyContribution * months
    else:
        future_value_contributions = request.monthlyContribution * ((growth - 1) / monthly_rate)

    total_investment = request.initialInvestment + request.monthlyContribution * months
    final_amount = future_value_initial + future_value_contributions

    return ReturnsResponse(
        totalInvestment=total_investment,
        totalReturn=final_amount - total_investment,
        finalAmount=final_amount,
        monthlyRate=monthly_rate * 100,
    )
