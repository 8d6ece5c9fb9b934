"""Pydantic schemas for financial account data validation."""

from typing import Optional
from pydantic import BaseModel, Field

from components.account.models import AccountType
from components.core.schemas import PartialUpdate


class AccountBase(BaseModel):
    """Base account schema."""
    name: str = Field(min_length=1, max_length=50)
    type: AccountType
    is_default: bool = False


class AccountCreate(AccountBase):
    """Schema for account creation."""
    pass


class AccountUpdate(PartialUpdate):
    """Schema for partial account update."""
    NOT_NULL = ("name", "type", "is_default")

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    type: Optional[AccountType] = None
    is_default: Optional[bool] = None


class Account(AccountBase):
    """Schema for account response."""
    id: int
    is_active: bool

    class Config:
        from_attributes = True


class AccountDeletion(BaseModel):
    """Outcome of deleting an account."""
    account_id: int
    hard_deleted: bool
