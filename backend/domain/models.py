"""Domain entities handed out by the repositories."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class InvestmentPackage:
    id: int
    name: str
    minimum_investment: float
    daily_interest_rate: float
    duration: int
    description: Optional[str] = None


@dataclass(frozen=True)
class LedgerEntry:
    id: int
    user_id: int
    investment_id: Optional[int]
    type: str
    amount: float
    status: str
    created_at: datetime


@dataclass(frozen=True)
class Page:
    items: list
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return -(-self.total // self.limit)
