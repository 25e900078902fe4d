"""
Investment workflows

Opening and cancelling investments, maturing finished ones, and assembling
the per-user views the dashboard reads. Every public method runs in its own
transaction on the injected Database.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple

from backend.core.accrual import (
    AccrualResult,
    DailyProfitSignal,
    InvestmentRecord,
    InvestmentStatus,
    UserSummary,
    build_profit_signals,
    compute_accrual,
    is_matured,
    summarize,
)
from backend.core.errors import (
    InvestmentAccessError,
    InvestmentNotActiveError,
    InvestmentNotFoundError,
    MinimumInvestmentError,
    PackageNotFoundError,
)
from backend.core.logging import get_logger
from backend.db.database import Database
from backend.db.models import TransactionTypeEnum
from backend.db.repositories import (
    InvestmentRepository,
    PackageRepository,
    TransactionRepository,
)
from backend.domain.models import InvestmentPackage, Page
from backend.utils.time import as_utc

logger = get_logger(__name__)

SEED_PACKAGES = [
    {
        "name": "Gold Package",
        "minimum_investment": Decimal("1000.00"),
        "daily_interest_rate": Decimal("4.50"),
        "duration": 30,
        "description": "Perfect for beginners",
    },
    {
        "name": "Platinum Package",
        "minimum_investment": Decimal("2500.00"),
        "daily_interest_rate": Decimal("8.50"),
        "duration": 30,
        "description": "For serious investors",
    },
    {
        "name": "Diamond Package",
        "minimum_investment": Decimal("5000.00"),
        "daily_interest_rate": Decimal("15.00"),
        "duration": 30,
        "description": "Premium investment opportunity",
    },
]


class InvestmentService:
    """Coordinates repositories and the accrual engine for one request."""

    def __init__(self, database: Database, profit_signal_window: int = 7):
        self.database = database
        self.profit_signal_window = profit_signal_window

    # Packages

    def list_packages(self) -> List[InvestmentPackage]:
        with self.database.session_scope() as session:
            return PackageRepository(session).list_all()

    def seed_packages(self) -> int:
        """Insert the default packages that are missing. Returns how many were added."""
        added = 0
        with self.database.session_scope() as session:
            repo = PackageRepository(session)
            for package in SEED_PACKAGES:
                if repo.get_by_name(package["name"]) is not None:
                    continue
                repo.create(**package)
                added += 1
        logger.info("Seeded %d investment package(s)", added)
        return added

    # Investments

    def create_investment(
        self,
        user_id: int,
        package_id: int,
        amount: Decimal,
        as_of: datetime,
    ) -> Tuple[InvestmentRecord, AccrualResult]:
        start = as_utc(as_of)
        with self.database.session_scope() as session:
            package = PackageRepository(session).get(package_id)
            if package is None:
                raise PackageNotFoundError(package_id)
            if amount < Decimal(str(package.minimum_investment)):
                raise MinimumInvestmentError(package.minimum_investment)

            record = InvestmentRepository(session).create(
                user_id=user_id,
                package_id=package.id,
                amount=amount,
                start_date=start,
                end_date=start + timedelta(days=package.duration),
            )
            TransactionRepository(session).add(
                user_id=user_id,
                type=TransactionTypeEnum.INVESTMENT,
                amount=-amount,
                investment_id=record.id,
            )

        logger.info(
            "Investment %s opened: user=%s package=%s amount=%s",
            record.id, user_id, package.name, amount,
        )
        return record, compute_accrual(record, start)

    def get_investment(
        self, user_id: int, investment_id: int, as_of: datetime
    ) -> Tuple[InvestmentRecord, AccrualResult]:
        self.complete_matured(user_id, as_of)
        with self.database.session_scope() as session:
            record = InvestmentRepository(session).get(investment_id)
        self._check_owner(record, user_id, investment_id)
        return record, compute_accrual(record, as_of)

    def cancel_investment(self, user_id: int, investment_id: int, as_of: datetime) -> InvestmentRecord:
        self.complete_matured(user_id, as_of)
        with self.database.session_scope() as session:
            investments = InvestmentRepository(session)
            record = investments.get(investment_id)
            self._check_owner(record, user_id, investment_id)
            if not record.is_active:
                raise InvestmentNotActiveError(investment_id)

            if not investments.transition(investment_id, InvestmentStatus.CANCELLED):
                raise InvestmentNotActiveError(investment_id)
            TransactionRepository(session).add(
                user_id=user_id,
                type=TransactionTypeEnum.REFUND,
                amount=Decimal(str(record.principal)),
                investment_id=investment_id,
            )

        logger.info("Investment %s cancelled by user %s", investment_id, user_id)
        return record

    def complete_matured(self, user_id: int, as_of: datetime) -> int:
        """Move active investments past their end date to ``completed``."""
        completed = 0
        with self.database.session_scope() as session:
            investments = InvestmentRepository(session)
            for record in investments.list_for_user(user_id):
                if is_matured(record, as_of) and investments.transition(
                    record.id, InvestmentStatus.COMPLETED
                ):
                    completed += 1
        if completed:
            logger.info("Completed %d matured investment(s) for user %s", completed, user_id)
        return completed

    def list_investments(
        self, user_id: int, as_of: datetime
    ) -> List[Tuple[InvestmentRecord, AccrualResult]]:
        records = self._load_records(user_id, as_of)
        return [(record, compute_accrual(record, as_of)) for record in records]

    def dashboard(
        self, user_id: int, as_of: datetime
    ) -> Tuple[UserSummary, List[DailyProfitSignal]]:
        records = self._load_records(user_id, as_of)
        summary = summarize(records, as_of)
        signals = build_profit_signals(records, as_of, window_days=self.profit_signal_window)
        return summary, signals

    # Ledger

    def list_transactions(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        type: Optional[TransactionTypeEnum] = None,
    ) -> Page:
        with self.database.session_scope() as session:
            return TransactionRepository(session).list_for_user(user_id, page=page, limit=limit, type=type)

    def _load_records(self, user_id: int, as_of: datetime) -> List[InvestmentRecord]:
        self.complete_matured(user_id, as_of)
        with self.database.session_scope() as session:
            return InvestmentRepository(session).list_for_user(user_id)

    @staticmethod
    def _check_owner(record: Optional[InvestmentRecord], user_id: int, investment_id: int) -> None:
        if record is None:
            raise InvestmentNotFoundError(investment_id)
        if record.user_id != user_id:
            raise InvestmentAccessError(investment_id)
