"""Repository for monthly budget plan operations."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from components.budget.models import BudgetGroup
from components.core.database import insert_or_fetch
from components.core.exceptions import InvalidArgumentError, NotFoundError
from components.core.logging_config import get_logger
from components.core.money import HUNDRED, round_money, to_decimal, Number
from components.core.months import parse_month_key
from components.plan.models import MonthlyBudgetPlan, MonthlyGroupAllocation
from components.plan import schemas

logger = get_logger(__name__)


class PlanRepository:
    """Repository for monthly budget plan (snapshot) operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _find_plan(self, workspace_id: str, year_month: str) -> Optional[MonthlyBudgetPlan]:
        result = await self.session.execute(
            select(MonthlyBudgetPlan).where(
                MonthlyBudgetPlan.workspace_id == workspace_id,
                MonthlyBudgetPlan.year_month == year_month,
            )
        )
        return result.scalar_one_or_none()

    async def _find_allocation(self, plan_id: int, group_id: int) -> Optional[MonthlyGroupAllocation]:
        result = await self.session.execute(
            select(MonthlyGroupAllocation).where(
                MonthlyGroupAllocation.plan_id == plan_id,
                MonthlyGroupAllocation.group_id == group_id,
            )
        )
        return result.scalar_one_or_none()

    async def ensure_plan_exists(self, workspace_id: str, year_month: str) -> int:
        """
        Ensure a monthly budget plan exists for the given month.

        On first access the plan is created with one allocation per active
        budget group, copying each group's current default percent. Plan and
        allocations are committed together. When another request creates the
        same month first, its plan id is returned instead.

        Returns:
            The id of the month's plan
        """
        parse_month_key(year_month)

        existing_plan = await self._find_plan(workspace_id, year_month)
        if existing_plan:
            return existing_plan.id

        result = await self.session.execute(
            select(BudgetGroup)
            .where(
                BudgetGroup.workspace_id == workspace_id,
                BudgetGroup.is_active.is_(True),
            )
            .order_by(BudgetGroup.sort_order)
        )
        groups = result.scalars().all()

        plan = MonthlyBudgetPlan(
            workspace_id=workspace_id,
            year_month=year_month,
            allocations=[
                MonthlyGroupAllocation(group_id=group.id, percent_snapshot=group.default_percent)
                for group in groups
            ],
        )
        plan, created = await insert_or_fetch(
            self.session, plan, lambda: self._find_plan(workspace_id, year_month)
        )
        if created:
            logger.info(
                f"Created budget snapshot {year_month} for workspace {workspace_id} "
                f"with {len(groups)} allocations"
            )
        return plan.id

    async def get_monthly_allocations(self, workspace_id: str, year_month: str) -> List[MonthlyGroupAllocation]:
        """Get the month's allocations (creating the snapshot if needed), ordered like the groups."""
        plan_id = await self.ensure_plan_exists(workspace_id, year_month)

        result = await self.session.execute(
            select(MonthlyGroupAllocation)
            .join(BudgetGroup, MonthlyGroupAllocation.group_id == BudgetGroup.id)
            .where(MonthlyGroupAllocation.plan_id == plan_id)
            .options(selectinload(MonthlyGroupAllocation.group))
            .order_by(BudgetGroup.sort_order, BudgetGroup.id)
        )
        return list(result.scalars().all())

    async def get_monthly_plan(self, workspace_id: str, year_month: str) -> schemas.MonthlyPlan:
        """Get the month's plan with its allocations."""
        allocations = await self.get_monthly_allocations(workspace_id, year_month)
        plan = await self._find_plan(workspace_id, year_month)

        return schemas.MonthlyPlan(
            plan_id=plan.id,
            year_month=year_month,
            allocations=[
                schemas.MonthlyAllocation(
                    group_id=allocation.group_id,
                    group_name=allocation.group.name,
                    group_color=allocation.group.color,
                    sort_order=allocation.group.sort_order,
                    percent_snapshot=allocation.percent_snapshot,
                )
                for allocation in allocations
            ],
        )

    async def update_monthly_allocation(
        self,
        workspace_id: str,
        year_month: str,
        group_id: int,
        new_percent: Number,
    ) -> MonthlyGroupAllocation:
        """
        Override one group's percent for a single month.

        The group's default percent is left untouched, so later months keep
        using the default.
        """
        parse_month_key(year_month)
        percent = round_money(to_decimal(new_percent))
        if percent < 0 or percent > HUNDRED:
            raise InvalidArgumentError(f"Percent must be between 0 and 100, got {percent}")

        result = await self.session.execute(
            select(BudgetGroup.id).where(
                BudgetGroup.id == group_id,
                BudgetGroup.workspace_id == workspace_id,
            )
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Budget group not found")

        plan_id = await self.ensure_plan_exists(workspace_id, year_month)

        allocation = await self._find_allocation(plan_id, group_id)
        if allocation is None:
            allocation, created = await insert_or_fetch(
                self.session,
                MonthlyGroupAllocation(plan_id=plan_id, group_id=group_id, percent_snapshot=percent),
                lambda: self._find_allocation(plan_id, group_id),
            )
            if created:
                return allocation

        allocation.percent_snapshot = percent
        await self.session.commit()
        return allocation
