"""Pydantic schemas for budget configuration data validation."""

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from components.core.schemas import PartialUpdate


class BudgetGroupBase(BaseModel):
    """Base budget group schema."""
    name: str = Field(min_length=1, max_length=50)
    default_percent: Decimal = Field(ge=0, le=100, decimal_places=2)
    color: Optional[str] = None


class BudgetGroupCreate(BudgetGroupBase):
    """Schema for budget group creation."""
    pass


class BudgetGroupUpdate(PartialUpdate):
    """Schema for partial budget group update."""
    NOT_NULL = ("name", "default_percent")

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    default_percent: Optional[Decimal] = Field(default=None, ge=0, le=100, decimal_places=2)
    color: Optional[str] = None


class BudgetGroup(BudgetGroupBase):
    """Schema for budget group response."""
    id: int
    sort_order: int
    is_active: bool

    class Config:
        from_attributes = True


class GroupPercentage(BaseModel):
    """New default percent for one group."""
    group_id: int
    percent: Decimal = Field(ge=0, le=100, decimal_places=2)


class BudgetCategoryCreate(BaseModel):
    """Schema for category creation."""
    name: str = Field(min_length=1, max_length=50)
    group_id: int
    icon: Optional[str] = None


class BudgetCategoryUpdate(PartialUpdate):
    """Schema for partial category update."""
    NOT_NULL = ("name",)

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    icon: Optional[str] = None


class BudgetCategory(BaseModel):
    """Schema for category response."""
    id: int
    name: str
    icon: Optional[str] = None
    is_active: bool
    group_id: int

    class Config:
        from_attributes = True


class BudgetGroupWithCategories(BudgetGroup):
    """Schema for a group listed together with its active categories."""
    categories: List[BudgetCategory] = []


class IncomeCategoryCreate(BaseModel):
    """Schema for income category creation."""
    name: str = Field(min_length=1, max_length=50)
    icon: Optional[str] = None
    color: Optional[str] = None


class IncomeCategoryUpdate(PartialUpdate):
    """Schema for partial income category update."""
    NOT_NULL = ("name",)

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    icon: Optional[str] = None
    color: Optional[str] = None


class IncomeCategory(BaseModel):
    """Schema for income category response."""
    id: int
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True
