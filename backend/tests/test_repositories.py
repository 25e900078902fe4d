from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from backend.core.accrual import InvestmentStatus
from backend.db.database import Database
from backend.db.models import TransactionTypeEnum
from backend.db.repositories import InvestmentRepository, PackageRepository, TransactionRepository
from backend.services.investments import InvestmentService

START = datetime(2025, 1, 1, 9, 30, tzinfo=timezone.utc)


def test_investment_roundtrip(database: Database):
    with database.session_scope() as session:
        package = PackageRepository(session).create(
            name="Gold Package",
            minimum_investment=Decimal("1000.00"),
            daily_interest_rate=Decimal("4.50"),
            duration=30,
        )
        created = InvestmentRepository(session).create(
            user_id=3,
            package_id=package.id,
            amount=Decimal("1250.50"),
            start_date=START,
            end_date=START + timedelta(days=30),
        )

    with database.session_scope() as session:
        record = InvestmentRepository(session).get(created.id)

    assert record.user_id == 3
    assert record.principal == 1250.5
    assert record.daily_rate_percent == 4.5
    assert record.duration_days == 30
    assert record.package_name == "Gold Package"
    assert record.status == InvestmentStatus.ACTIVE
    assert record.start_date.replace(tzinfo=timezone.utc) == START


def test_transition_and_listing(database: Database):
    with database.session_scope() as session:
        package = PackageRepository(session).create(
            name="Platinum Package",
            minimum_investment=Decimal("2500.00"),
            daily_interest_rate=Decimal("8.50"),
            duration=30,
        )
        investments = InvestmentRepository(session)
        first = investments.create(3, package.id, Decimal("2500"), START, START + timedelta(days=30))
        investments.create(4, package.id, Decimal("3000"), START, START + timedelta(days=30))
        assert investments.transition(first.id, InvestmentStatus.CANCELLED)
        assert not investments.transition(first.id, InvestmentStatus.COMPLETED)

    with database.session_scope() as session:
        records = InvestmentRepository(session).list_for_user(3)

    assert [record.status for record in records] == [InvestmentStatus.CANCELLED]


def test_session_scope_rolls_back_on_error(database: Database):
    try:
        with database.session_scope() as session:
            PackageRepository(session).create(
                name="Broken",
                minimum_investment=Decimal("1"),
                daily_interest_rate=Decimal("1"),
                duration=1,
            )
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    with database.session_scope() as session:
        assert PackageRepository(session).get_by_name("Broken") is None


def test_transactions_filter_by_type(database: Database):
    with database.session_scope() as session:
        ledger = TransactionRepository(session)
        ledger.add(5, TransactionTypeEnum.INVESTMENT, Decimal("-100"))
        ledger.add(5, TransactionTypeEnum.REFUND, Decimal("100"))

    with database.session_scope() as session:
        page = TransactionRepository(session).list_for_user(5, type=TransactionTypeEnum.REFUND)

    assert page.total == 1
    assert page.items[0].type == "refund"
    assert page.items[0].amount == 100.0


def test_seed_packages_is_idempotent(database: Database):
    service = InvestmentService(database)

    assert service.seed_packages() == 3
    assert service.seed_packages() == 0
    assert [package.name for package in service.list_packages()] == [
        "Gold Package",
        "Platinum Package",
        "Diamond Package",
    ]

