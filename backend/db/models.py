"""
Database Models (SQLAlchemy ORM)
Packages, user investments and the transaction ledger
"""

import enum

from sqlalchemy import (
    Column, Integer, String, Numeric, DateTime, ForeignKey, Text, Enum as SQLEnum, Index
)
from sqlalchemy.orm import relationship

from backend.core.accrual import InvestmentStatus
from backend.db.database import Base
from backend.utils.time import utc_now


# Enums
class TransactionTypeEnum(str, enum.Enum):
    INVESTMENT = "investment"
    REFUND = "refund"


class TransactionStatusEnum(str, enum.Enum):
    # pending matches the ledger schema; rows written here settle immediately
    PENDING = "pending"
    COMPLETED = "completed"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


# Tables

class InvestmentPackageModel(Base):
    """Fixed-rate package users can invest in"""
    __tablename__ = "investment_packages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    minimum_investment = Column(Numeric(12, 2), nullable=False)
    daily_interest_rate = Column(Numeric(5, 2), nullable=False)
    duration = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    investments = relationship("InvestmentModel", back_populates="package")


class InvestmentModel(Base):
    """Principal committed by a user to a package"""
    __tablename__ = "investments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    package_id = Column(Integer, ForeignKey("investment_packages.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    status = Column(
        SQLEnum(InvestmentStatus, values_callable=_enum_values, native_enum=False, length=20),
        nullable=False,
        default=InvestmentStatus.ACTIVE,
    )
    start_date = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    end_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    package = relationship("InvestmentPackageModel", back_populates="investments", lazy="joined")
    transactions = relationship("TransactionModel", back_populates="investment")

    __table_args__ = (
        Index("idx_investments_user_status", "user_id", "status"),
    )


class TransactionModel(Base):
    """Ledger entry; negative amounts leave the user's balance"""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    investment_id = Column(Integer, ForeignKey("investments.id"), nullable=True)
    type = Column(
        SQLEnum(TransactionTypeEnum, values_callable=_enum_values, native_enum=False, length=20),
        nullable=False,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    status = Column(
        SQLEnum(TransactionStatusEnum, values_callable=_enum_values, native_enum=False, length=20),
        nullable=False,
        default=TransactionStatusEnum.COMPLETED,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    investment = relationship("InvestmentModel", back_populates="transactions")

    __table_args__ = (
        Index("idx_transactions_user_created", "user_id", "created_at"),
    )
