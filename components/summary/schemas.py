"""Pydantic schemas for month summary responses."""

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel


class GroupBudgetSummary(BaseModel):
    """Budget versus actual spending for one group in one month."""
    group_id: int
    group_name: str
    group_color: Optional[str] = None
    percent_allocation: Decimal
    budget_amount: Decimal
    spent_amount: Decimal
    remaining_amount: Decimal


class MonthSummary(BaseModel):
    """Income, expenses and group budgets of one month."""
    month_key: str
    income_total: Decimal
    expense_total: Decimal
    balance: Decimal
    budget_groups: List[GroupBudgetSummary]
