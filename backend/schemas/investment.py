"""Data contracts for packages, investments and the dashboard."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from backend.core.accrual import (
    AccrualResult,
    DailyProfitSignal,
    InvestmentRecord,
    InvestmentStatus,
    UserSummary,
)
from backend.db.models import TransactionTypeEnum
from backend.domain.models import InvestmentPackage, LedgerEntry, Page
from backend.utils.time import as_utc


class CreateInvestmentRequest(BaseModel):
    """Body of ``POST /investments``."""

    model_config = ConfigDict(extra="forbid")

    packageId: int = Field(..., ge=1)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class TransactionQuery(BaseModel):
    """Query string of ``GET /transactions``."""

    # keeps the row offset inside a signed 64-bit integer
    page: int = Field(1, ge=1, le=1_000_000)
    limit: int = Field(20, ge=1)
    type: Optional[TransactionTypeEnum] = None


class PackageView(BaseModel):
    id: int
    name: str
    minimumInvestment: float
    dailyInterestRate: float
    duration: int
    description: Optional[str] = None

    @classmethod
    def from_domain(cls, package: InvestmentPackage) -> "PackageView":
        return cls(
            id=package.id,
            name=package.name,
            minimumInvestment=package.minimum_investment,
            dailyInterestRate=package.daily_interest_rate,
            duration=package.duration,
            description=package.description,
        )


class InvestmentView(BaseModel):
    """One investment as listed on the dashboard."""

    id: int
    packageName: str
    amount: float
    status: InvestmentStatus
    startDate: datetime
    endDate: Optional[datetime] = None
    dailyReturn: float
    totalReturn: float
    daysActive: int = Field(..., ge=0)

    @classmethod
    def from_accrual(cls, record: InvestmentRecord, accrual: AccrualResult) -> "InvestmentView":
        return cls(
            id=record.id,
            packageName=record.package_name,
            amount=record.principal,
            status=record.status,
            startDate=as_utc(record.start_date),
            endDate=as_utc(record.end_date) if record.end_date else None,
            dailyReturn=accrual.daily_profit,
            totalReturn=accrual.cumulative_profit,
            daysActive=accrual.days_active,
        )


class ProfitSignalView(BaseModel):
    date: date
    profit: float
    percentage: str

    @field_serializer("profit")
    def _round_profit(self, value: float) -> float:
        return round(value, 2)

    @classmethod
    def from_signal(cls, signal: DailyProfitSignal) -> "ProfitSignalView":
        return cls(date=signal.date, profit=signal.profit, percentage=signal.percentage_label)


class DashboardStatsResponse(BaseModel):
    totalInvestment: float
    totalDailyProfit: float
    totalProfit: float
    activeInvestments: int
    profitSignals: List[ProfitSignalView]

    @classmethod
    def from_summary(
        cls, summary: UserSummary, signals: List[DailyProfitSignal]
    ) -> "DashboardStatsResponse":
        return cls(
            totalInvestment=summary.total_principal,
            totalDailyProfit=summary.total_daily_profit,
            totalProfit=summary.total_cumulative_profit,
            activeInvestments=summary.active_count,
            profitSignals=[ProfitSignalView.from_signal(signal) for signal in signals],
        )


class TransactionView(BaseModel):
    id: int
    investmentId: Optional[int] = None
    type: str
    amount: float
    status: str
    createdAt: datetime

    @classmethod
    def from_domain(cls, entry: LedgerEntry) -> "TransactionView":
        return cls(
            id=entry.id,
            investmentId=entry.investment_id,
            type=entry.type,
            amount=entry.amount,
            status=entry.status,
            createdAt=as_utc(entry.created_at),
        )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class TransactionListResponse(BaseModel):
    transactions: List[TransactionView]
    pagination: Pagination

    @classmethod
    def from_page(cls, page: Page) -> "TransactionListResponse":
        return cls(
            transactions=[TransactionView.from_domain(entry) for entry in page.items],
            pagination=Pagination(
                page=page.page,
                limit=page.limit,
                total=page.total,
                totalPages=page.total_pages,
            ),
        )
