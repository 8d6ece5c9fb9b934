"""Repository for month budget-vs-actual aggregations."""

from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from components.budget.models import BudgetCategory
from components.core.money import ZERO, percent_of, round_money
from components.core.months import get_month_date_range
from components.plan.repository import PlanRepository
from components.summary import schemas
from components.transaction.models import Transaction, TransactionType, TransactionStatus


class SummaryRepository:
    """Repository for aggregating posted transactions against monthly budgets."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session
        self.plans = PlanRepository(session)

    def _posted_in_month(self, query, workspace_id: str, month_key: str, tx_type: TransactionType):
        start, end = get_month_date_range(month_key)
        return query.where(
            Transaction.workspace_id == workspace_id,
            Transaction.type == tx_type,
            Transaction.status == TransactionStatus.POSTED,
            Transaction.date >= start,
            Transaction.date <= end,
        )

    async def _sum_posted(self, workspace_id: str, month_key: str, tx_type: TransactionType) -> Decimal:
        query = self._posted_in_month(
            select(func.coalesce(func.sum(Transaction.amount), 0)), workspace_id, month_key, tx_type
        )
        result = await self.session.execute(query)
        return round_money(result.scalar() or 0)

    async def compute_income_total(self, workspace_id: str, month_key: str) -> Decimal:
        """Sum of posted income dated within the month."""
        return await self._sum_posted(workspace_id, month_key, TransactionType.INCOME)

    async def compute_expense_total(self, workspace_id: str, month_key: str) -> Decimal:
        """Sum of posted expenses dated within the month."""
        return await self._sum_posted(workspace_id, month_key, TransactionType.EXPENSE)

    async def compute_spending_by_group(self, workspace_id: str, month_key: str) -> Dict[int, Decimal]:
        """
        Posted expenses of the month totalled per budget group.

        Spending is first summed per category, then rolled up to each
        category's group. Inactive categories still count; expenses without a
        category are not attributed to any group.
        """
        query = self._posted_in_month(
            select(Transaction.category_id, func.sum(Transaction.amount)),
            workspace_id,
            month_key,
            TransactionType.EXPENSE,
        ).where(Transaction.category_id.is_not(None)).group_by(Transaction.category_id)
        result = await self.session.execute(query)
        by_category = {category_id: amount for category_id, amount in result.all()}
        if not by_category:
            return {}

        result = await self.session.execute(
            select(BudgetCategory.id, BudgetCategory.group_id).where(
                BudgetCategory.id.in_(list(by_category)),
                BudgetCategory.workspace_id == workspace_id,
            )
        )
        category_groups = dict(result.all())

        spending = defaultdict(lambda: ZERO)
        for category_id, amount in by_category.items():
            group_id = category_groups.get(category_id)
            if group_id is not None:
                spending[group_id] += round_money(amount)
        return dict(spending)

    async def compute_group_budgets(
        self,
        workspace_id: str,
        month_key: str,
        income_total: Optional[Decimal] = None,
    ) -> List[schemas.GroupBudgetSummary]:
        """
        Budget versus spending for every allocation of the month's snapshot.

        The budget of a group is its snapshot percent of the month's posted
        income, so a month without income has zero budgets. Remaining amounts
        go negative when a group overspends.

        Args:
            workspace_id: Workspace to aggregate
            month_key: Month in YYYY-MM format
            income_total: Already computed income of the month, if available

        Returns:
            One summary per allocation, ordered like the groups
        """
        allocations = await self.plans.get_monthly_allocations(workspace_id, month_key)
        if income_total is None:
            income_total = await self.compute_income_total(workspace_id, month_key)
        spending = await self.compute_spending_by_group(workspace_id, month_key)

        budgets = []
        for allocation in allocations:
            budget_amount = percent_of(income_total, allocation.percent_snapshot)
            spent_amount = spending.get(allocation.group_id, ZERO)
            budgets.append(
                schemas.GroupBudgetSummary(
                    group_id=allocation.group_id,
                    group_name=allocation.group.name,
                    group_color=allocation.group.color,
                    percent_allocation=allocation.percent_snapshot,
                    budget_amount=budget_amount,
                    spent_amount=spent_amount,
                    remaining_amount=budget_amount - spent_amount,
                )
            )
        return budgets

    async def compute_month_summary(self, workspace_id: str, month_key: str) -> schemas.MonthSummary:
        """Income, expenses, balance and group budgets of a month."""
        income_total = await self.compute_income_total(workspace_id, month_key)
        expense_total = await self.compute_expense_total(workspace_id, month_key)
        budget_groups = await self.compute_group_budgets(workspace_id, month_key, income_total=income_total)

        return schemas.MonthSummary(
            month_key=month_key,
            income_total=income_total,
            expense_total=expense_total,
            balance=income_total - expense_total,
            budget_groups=budget_groups,
        )
