"""Financial account model for the database."""

import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship

from components.core.database import Base


class AccountType(str, enum.Enum):
    CASH = "CASH"
    BANK = "BANK"
    CREDIT = "CREDIT"
    INVESTMENT = "INVESTMENT"
    DEBT = "DEBT"


class FinancialAccount(Base):
    """Place where money sits (wallet, bank account, credit card...)."""
    __tablename__ = "financial_accounts"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    type = Column(Enum(AccountType), nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    # Relationships
    transactions = relationship("Transaction", back_populates="account")
