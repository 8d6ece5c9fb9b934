"""Monthly budget plan models for the database."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship

from components.core.database import Base


class MonthlyBudgetPlan(Base):
    """Frozen snapshot of group percentages for one workspace month."""
    __tablename__ = "monthly_budget_plans"
    __table_args__ = (
        UniqueConstraint("workspace_id", "year_month", name="uq_monthly_budget_plans_workspace_month"),
    )

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)
    year_month = Column(String(7), nullable=False)  # YYYY-MM
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    # Relationships
    allocations = relationship(
        "MonthlyGroupAllocation",
        back_populates="plan",
        cascade="all, delete-orphan",
    )


class MonthlyGroupAllocation(Base):
    """Percent of income given to one group in one monthly plan."""
    __tablename__ = "monthly_group_allocations"
    __table_args__ = (
        UniqueConstraint("plan_id", "group_id", name="uq_monthly_group_allocations_plan_group"),
    )

    id = Column(Integer, primary_key=True, index=True)
    plan_id = Column(Integer, ForeignKey("monthly_budget_plans.id"), nullable=False, index=True)
    group_id = Column(Integer, ForeignKey("budget_groups.id"), nullable=False)
    percent_snapshot = Column(Numeric(5, 2), nullable=False)

    plan = relationship("MonthlyBudgetPlan", back_populates="allocations")
    group = relationship("BudgetGroup")
