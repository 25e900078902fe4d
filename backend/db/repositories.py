"""
Repositories
Translate ORM rows into domain records for the service layer
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from backend.core.accrual import InvestmentRecord, InvestmentStatus
from backend.db.models import (
    InvestmentModel,
    InvestmentPackageModel,
    TransactionModel,
    TransactionStatusEnum,
    TransactionTypeEnum,
)
from backend.domain.models import InvestmentPackage, LedgerEntry, Page
from backend.utils.time import utc_now


def _to_float(value: Optional[Decimal]) -> float:
    return float(value) if value is not None else 0.0


class PackageRepository:
    """Repository for InvestmentPackage"""

    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[InvestmentPackage]:
        result = self.session.execute(
            select(InvestmentPackageModel).order_by(InvestmentPackageModel.minimum_investment)
        )
        return [self._to_domain(model) for model in result.scalars()]

    def get(self, package_id: int) -> Optional[InvestmentPackage]:
        model = self.session.get(InvestmentPackageModel, package_id)
        return self._to_domain(model) if model else None

    def get_by_name(self, name: str) -> Optional[InvestmentPackage]:
        result = self.session.execute(
            select(InvestmentPackageModel).where(InvestmentPackageModel.name == name)
        )
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    def create(
        self,
        name: str,
        minimum_investment: Decimal,
        daily_interest_rate: Decimal,
        duration: int,
        description: Optional[str] = None,
    ) -> InvestmentPackage:
        model = InvestmentPackageModel(
            name=name,
            minimum_investment=minimum_investment,
            daily_interest_rate=daily_interest_rate,
            duration=duration,
            description=description,
        )
        self.session.add(model)
        self.session.flush()
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: InvestmentPackageModel) -> InvestmentPackage:
        return InvestmentPackage(
            id=model.id,
            name=model.name,
            minimum_investment=_to_float(model.minimum_investment),
            daily_interest_rate=_to_float(model.daily_interest_rate),
            duration=model.duration,
            description=model.description,
        )


class InvestmentRepository:
    """Repository for user investments"""

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        user_id: int,
        package_id: int,
        amount: Decimal,
        start_date: datetime,
        end_date: datetime,
    ) -> InvestmentRecord:
        model = InvestmentModel(
            user_id=user_id,
            package_id=package_id,
            amount=amount,
            status=InvestmentStatus.ACTIVE,
            start_date=start_date,
            end_date=end_date,
        )
        self.session.add(model)
        self.session.flush()
        self.session.refresh(model)
        return self._to_domain(model)

    def get(self, investment_id: int) -> Optional[InvestmentRecord]:
        model = self.session.get(InvestmentModel, investment_id)
        return self._to_domain(model) if model else None

    def list_for_user(self, user_id: int) -> List[InvestmentRecord]:
        result = self.session.execute(
            select(InvestmentModel)
            .where(InvestmentModel.user_id == user_id)
            .order_by(InvestmentModel.start_date.desc(), InvestmentModel.id.desc())
        )
        return [self._to_domain(model) for model in result.scalars()]

    def transition(
        self,
        investment_id: int,
        to_status: InvestmentStatus,
        from_status: InvestmentStatus = InvestmentStatus.ACTIVE,
    ) -> bool:
        """
        Move an investment to ``to_status`` only if it is still in ``from_status``.

        Returns:
            False when another writer changed the status first
        """
        result = self.session.execute(
            update(InvestmentModel)
            .where(
                InvestmentModel.id == investment_id,
                InvestmentModel.status == from_status,
            )
            .values(status=to_status, updated_at=utc_now())
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1

    @staticmethod
    def _to_domain(model: InvestmentModel) -> InvestmentRecord:
        package = model.package
        return InvestmentRecord(
            id=model.id,
            principal=_to_float(model.amount),
            daily_rate_percent=_to_float(package.daily_interest_rate) if package else 0.0,
            duration_days=package.duration if package else 0,
            status=InvestmentStatus(model.status),
            start_date=model.start_date,
            package_name=package.name if package else "",
            end_date=model.end_date,
            user_id=model.user_id,
        )


class TransactionRepository:
    """Repository for the transaction ledger"""

    def __init__(self, session: Session):
        self.session = session

    def add(
        self,
        user_id: int,
        type: TransactionTypeEnum,
        amount: Decimal,
        investment_id: Optional[int] = None,
        status: TransactionStatusEnum = TransactionStatusEnum.COMPLETED,
    ) -> LedgerEntry:
        model = TransactionModel(
            user_id=user_id,
            investment_id=investment_id,
            type=type,
            amount=amount,
            status=status,
        )
        self.session.add(model)
        self.session.flush()
        return self._to_domain(model)

    def list_for_user(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        type: Optional[TransactionTypeEnum] = None,
    ) -> Page:
        filters = [TransactionModel.user_id == user_id]
        if type is not None:
            filters.append(TransactionModel.type == type)

        total = self.session.execute(
            select(func.count(TransactionModel.id)).where(*filters)
        ).scalar_one()

        result = self.session.execute(
            select(TransactionModel)
            .where(*filters)
            .order_by(TransactionModel.created_at.desc(), TransactionModel.id.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        items = [self._to_domain(model) for model in result.scalars()]
        return Page(items=items, page=page, limit=limit, total=total)

    @staticmethod
    def _to_domain(model: TransactionModel) -> LedgerEntry:
        return LedgerEntry(
            id=model.id,
            user_id=model.user_id,
            investment_id=model.investment_id,
            type=TransactionTypeEnum(model.type).value,
            amount=_to_float(model.amount),
            status=TransactionStatusEnum(model.status).value,
            created_at=model.created_at,
        )
