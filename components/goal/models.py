"""Savings goal models for the database."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from components.core.database import Base, PreciseDateTime


class Goal(Base):
    """Savings target tracked through contributions."""
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    target_amount = Column(Numeric(12, 2), nullable=False)
    initial_amount = Column(Numeric(12, 2), nullable=False, default=0)
    color = Column(String(20), nullable=True)
    icon = Column(String(20), nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    # Relationships
    contributions = relationship("GoalContribution", back_populates="goal", order_by="desc(GoalContribution.date)")


class GoalContribution(Base):
    """Amount put towards a goal."""
    __tablename__ = "goal_contributions"

    id = Column(Integer, primary_key=True, index=True)
    goal_id = Column(Integer, ForeignKey("goals.id"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(PreciseDateTime, nullable=False)
    note = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    goal = relationship("Goal", back_populates="contributions")
