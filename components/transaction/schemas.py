"""Pydantic schemas for transaction data validation."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from components.core.schemas import PartialUpdate
from components.transaction.models import TransactionType, TransactionStatus


class TransactionBase(BaseModel):
    """Base transaction schema."""
    date: datetime
    amount: Decimal = Field(gt=0, decimal_places=2)
    type: TransactionType
    description: Optional[str] = Field(default=None, max_length=255)
    account_id: int
    category_id: Optional[int] = None
    income_category_id: Optional[int] = None


class TransactionCreate(TransactionBase):
    """Schema for transaction creation; only POSTED or PLANNED may be entered."""
    status: TransactionStatus = TransactionStatus.POSTED


class TransactionUpdate(PartialUpdate):
    """Schema for partial transaction update."""
    NOT_NULL = ("date", "amount", "type", "account_id", "status")

    date: Optional[datetime] = None
    amount: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2)
    type: Optional[TransactionType] = None
    description: Optional[str] = Field(default=None, max_length=255)
    account_id: Optional[int] = None
    category_id: Optional[int] = None
    income_category_id: Optional[int] = None
    status: Optional[TransactionStatus] = None


class TransactionFilters(BaseModel):
    """Optional filters for listing a month's transactions."""
    type: Optional[TransactionType] = None
    status: Optional[TransactionStatus] = None
    category_id: Optional[int] = None
    account_id: Optional[int] = None
    search: Optional[str] = None


class Transaction(TransactionBase):
    """Schema for transaction response."""
    id: int
    status: TransactionStatus
    installment_plan_id: Optional[int] = None
    installment_number: Optional[int] = None

    class Config:
        from_attributes = True
