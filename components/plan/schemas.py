"""Pydantic schemas for monthly plan data validation."""

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class MonthlyAllocationUpdate(BaseModel):
    """Schema for overriding one group's percent for a single month."""
    group_id: int
    percent: Decimal = Field(ge=0, le=100, decimal_places=2)


class MonthlyAllocation(BaseModel):
    """Schema for a monthly allocation response."""
    group_id: int
    group_name: str
    group_color: Optional[str] = None
    sort_order: int
    percent_snapshot: Decimal


class MonthlyPlan(BaseModel):
    """Schema for a monthly plan with its allocations."""
    plan_id: int
    year_month: str
    allocations: List[MonthlyAllocation]
