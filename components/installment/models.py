"""Installment plan model for the database."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from components.core.database import Base, PreciseDateTime


class InstallmentPlan(Base):
    """Purchase split into monthly planned expense transactions."""
    __tablename__ = "installment_plans"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)
    description = Column(String(200), nullable=False)
    merchant = Column(String(100), nullable=True)
    total_amount = Column(Numeric(12, 2), nullable=False)
    installments_count = Column(Integer, nullable=False)
    first_due_date = Column(PreciseDateTime, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    account_id = Column(Integer, ForeignKey("financial_accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("budget_categories.id"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    # Relationships
    transactions = relationship(
        "Transaction",
        back_populates="installment_plan",
        order_by="Transaction.installment_number",
    )
