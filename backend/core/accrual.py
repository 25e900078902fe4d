"""Daily-return accrual for investment packages.

Accrual is simple and linear: an active investment earns
``principal * daily_rate_percent / 100`` for every whole day elapsed since its
start. Nothing here touches storage; callers load records, pick the reference
time, and hand both in.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional

from backend.utils.time import as_utc, utc_now

DEFAULT_WINDOW_DAYS = 7

# Display heuristic used by the dashboard chart, not a rate of return.
PERCENTAGE_LABEL_BASE = 1000.0


class InvestmentStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class InvestmentRecord:
    id: int
    principal: float
    daily_rate_percent: float
    duration_days: int
    status: InvestmentStatus
    start_date: datetime
    package_name: str
    end_date: Optional[datetime] = None
    user_id: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status == InvestmentStatus.ACTIVE


@dataclass(frozen=True)
class AccrualResult:
    days_active: int
    daily_profit: float
    cumulative_profit: float


@dataclass(frozen=True)
class UserSummary:
    total_principal: float = 0.0
    total_daily_profit: float = 0.0
    total_cumulative_profit: float = 0.0
    active_count: int = 0


@dataclass(frozen=True)
class DailyProfitSignal:
    date: date
    profit: float
    percentage_label: str


def _resolve_as_of(as_of: Optional[datetime]) -> datetime:
    return as_utc(as_of) if as_of is not None else utc_now()


def days_elapsed(start: datetime, as_of: datetime) -> int:
    """Whole days between ``start`` and ``as_of``, floored and clamped at zero."""
    delta = as_utc(as_of) - as_utc(start)
    # timedelta.days already floors toward negative infinity
    return max(0, delta.days)


def daily_profit(record: InvestmentRecord) -> float:
    if not record.is_active:
        return 0.0
    return record.principal * (record.daily_rate_percent / 100)


def compute_accrual(record: InvestmentRecord, as_of: Optional[datetime] = None) -> AccrualResult:
    """Accrual of a single investment as of ``as_of`` (defaults to now, UTC)."""
    as_of = _resolve_as_of(as_of)
    days_active = days_elapsed(record.start_date, as_of)
    profit = daily_profit(record)
    return AccrualResult(
        days_active=days_active,
        daily_profit=profit,
        cumulative_profit=profit * days_active,
    )


def summarize(records: Iterable[InvestmentRecord], as_of: Optional[datetime] = None) -> UserSummary:
    """Fold a user's investments into portfolio totals. Empty input gives zeros."""
    as_of = _resolve_as_of(as_of)

    total_principal = 0.0
    total_daily = 0.0
    total_cumulative = 0.0
    active_count = 0

    for record in records:
        accrual = compute_accrual(record, as_of)
        total_principal += record.principal
        total_cumulative += accrual.cumulative_profit
        if record.is_active:
            total_daily += accrual.daily_profit
            active_count += 1

    return UserSummary(
        total_principal=total_principal,
        total_daily_profit=total_daily,
        total_cumulative_profit=total_cumulative,
        active_count=active_count,
    )


def percentage_label(profit: float) -> str:
    if profit > 0:
        return f"+{profit / PERCENTAGE_LABEL_BASE * 100:.2f}%"
    return "0%"


def build_profit_signals(
    records: Iterable[InvestmentRecord],
    as_of: Optional[datetime] = None,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> List[DailyProfitSignal]:
    """
    One entry per calendar day, oldest first, ending on the date of ``as_of``.

    A day's profit is the daily profit of every active investment that had
    already started by that day.
    """
    as_of = _resolve_as_of(as_of)
    last_day = as_of.date()
    active = [
        (as_utc(record.start_date).date(), daily_profit(record))
        for record in records
        if record.is_active
    ]

    signals: List[DailyProfitSignal] = []
    for offset in range(window_days - 1, -1, -1):
        day = last_day - timedelta(days=offset)
        profit = sum((amount for started, amount in active if started <= day), 0.0)
        signals.append(
            DailyProfitSignal(date=day, profit=profit, percentage_label=percentage_label(profit))
        )
    return signals


def maturity_date(record: InvestmentRecord) -> datetime:
    if record.end_date is not None:
        return as_utc(record.end_date)
    return as_utc(record.start_date) + timedelta(days=record.duration_days)


def is_matured(record: InvestmentRecord, as_of: Optional[datetime] = None) -> bool:
    """True for an active investment whose package lifetime has run out."""
    if not record.is_active:
        return False
    return maturity_date(record) <= _resolve_as_of(as_of)
