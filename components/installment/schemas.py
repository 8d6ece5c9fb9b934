"""Pydantic schemas for installment plan data validation."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from components.transaction.schemas import Transaction

MIN_INSTALLMENTS = 2
MAX_INSTALLMENTS = 48


class InstallmentPlanCreate(BaseModel):
    """Schema for installment plan creation."""
    description: str = Field(min_length=1, max_length=200)
    merchant: Optional[str] = Field(default=None, max_length=100)
    total_amount: Decimal = Field(gt=0, decimal_places=2)
    installments_count: int
    first_due_date: datetime
    account_id: int
    category_id: int


class InstallmentPlan(BaseModel):
    """Schema for installment plan response."""
    id: int
    description: str
    merchant: Optional[str] = None
    total_amount: Decimal
    installments_count: int
    first_due_date: datetime
    is_active: bool
    account_id: int
    category_id: int

    class Config:
        from_attributes = True


class InstallmentPlanDetails(InstallmentPlan):
    """Installment plan with its progress and generated transactions."""
    paid_count: int
    remaining_count: int
    next_due_date: Optional[datetime] = None
    transactions: List[Transaction] = []


class UpcomingInstallment(BaseModel):
    """A planned installment that is due today or later."""
    transaction_id: int
    plan_id: int
    description: Optional[str] = None
    amount: Decimal
    date: datetime
    installment_number: int
    installments_count: int
    account_name: str
    category_name: Optional[str] = None


class InstallmentPlanDeletion(BaseModel):
    """Outcome of deleting an installment plan."""
    plan_id: int
    hard_deleted: bool
