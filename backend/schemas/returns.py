"""Data contracts for the investment returns calculator."""

from pydantic import BaseModel, ConfigDict, Field


class ReturnsRequest(BaseModel):
    """Inputs for projecting a monthly-compounded investment."""

    model_config = ConfigDict(extra="forbid")

    initialInvestment: float = Field(..., gt=0, le=1_000_000_000, description="Amount invested at month 0.")
    monthlyContribution: float = Field(
        0.0,
        ge=0,
        le=1_000_000_000,
        description="Contribution added at the end of each month.",
    )
    expectedReturn: float = Field(
        ...,
        ge=0,
        le=500,
        description="Expected annual return as a percentage (e.g. 8 for 8%).",
    )
    years: int = Field(..., ge=1, le=100, description="Number of years to project.")


class ReturnsResponse(BaseModel):
    """Projected outcome of a returns calculation."""

    totalInvestment: float = Field(..., ge=0)
    totalReturn: float
    finalAmount: float = Field(..., ge=0)
    monthlyRate: float = Field(..., ge=0, description="Monthly rate as a percentage.")
