"""Transaction model for the database."""

import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric, Enum, Index
from sqlalchemy.orm import relationship

from components.core.database import Base, PreciseDateTime


class TransactionType(str, enum.Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    TRANSFER = "TRANSFER"


class TransactionStatus(str, enum.Enum):
    POSTED = "POSTED"    # realized
    PLANNED = "PLANNED"  # scheduled, not paid yet
    VOID = "VOID"        # cancelled; terminal


class Transaction(Base):
    """Dated monetary movement within a workspace."""
    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_workspace_date", "workspace_id", "date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)
    date = Column(PreciseDateTime, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(Enum(TransactionType), nullable=False)
    description = Column(String(255), nullable=True)
    status = Column(Enum(TransactionStatus), nullable=False, default=TransactionStatus.POSTED)
    account_id = Column(Integer, ForeignKey("financial_accounts.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("budget_categories.id"), nullable=True, index=True)
    income_category_id = Column(Integer, ForeignKey("income_categories.id"), nullable=True, index=True)
    installment_plan_id = Column(Integer, ForeignKey("installment_plans.id"), nullable=True, index=True)
    installment_number = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    # Relationships
    account = relationship("FinancialAccount", back_populates="transactions")
    category = relationship("BudgetCategory")
    income_category = relationship("IncomeCategory")
    installment_plan = relationship("InstallmentPlan", back_populates="transactions")
