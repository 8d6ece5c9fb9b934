"""Budget configuration models for the database."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from components.core.database import Base


class BudgetGroup(Base):
    """Named spending bucket with the default share of monthly income."""
    __tablename__ = "budget_groups"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    default_percent = Column(Numeric(5, 2), nullable=False, default=0)
    color = Column(String(20), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    # Relationships
    categories = relationship("BudgetCategory", back_populates="group")


class BudgetCategory(Base):
    """Expense category; belongs to exactly one budget group."""
    __tablename__ = "budget_categories"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)
    group_id = Column(Integer, ForeignKey("budget_groups.id"), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    icon = Column(String(20), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    group = relationship("BudgetGroup", back_populates="categories")


class IncomeCategory(Base):
    """Optional label for income transactions."""
    __tablename__ = "income_categories"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    icon = Column(String(20), nullable=True)
    color = Column(String(20), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)
