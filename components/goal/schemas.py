"""Pydantic schemas for savings goal data validation."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from components.core.schemas import PartialUpdate


class GoalBase(BaseModel):
    """Base goal schema."""
    name: str = Field(min_length=1, max_length=100)
    target_amount: Decimal = Field(gt=0, decimal_places=2)
    initial_amount: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    color: Optional[str] = None
    icon: Optional[str] = None


class GoalCreate(GoalBase):
    """Schema for goal creation."""
    pass


class GoalUpdate(PartialUpdate):
    """Schema for partial goal update."""
    NOT_NULL = ("name", "target_amount", "initial_amount")

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    target_amount: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2)
    initial_amount: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    color: Optional[str] = None
    icon: Optional[str] = None


class ContributionCreate(BaseModel):
    """Schema for adding a contribution to a goal."""
    amount: Decimal = Field(gt=0, decimal_places=2)
    date: datetime
    note: Optional[str] = Field(default=None, max_length=255)


class Contribution(BaseModel):
    """Schema for contribution response."""
    id: int
    goal_id: int
    amount: Decimal
    date: datetime
    note: Optional[str] = None

    class Config:
        from_attributes = True


class Goal(GoalBase):
    """Schema for goal response."""
    id: int
    is_completed: bool

    class Config:
        from_attributes = True


class GoalWithProgress(Goal):
    """Goal with its contributions and derived progress."""
    current_amount: Decimal
    remaining_amount: Decimal
    progress_percent: Decimal
    contributions: List[Contribution] = []
