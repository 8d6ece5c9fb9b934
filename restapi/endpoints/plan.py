"""Monthly plan and summary endpoints for the API."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.actions import run_action
from components.core.init_db import get_db
from components.plan.repository import PlanRepository
from components.plan import schemas
from components.summary.repository import SummaryRepository
from components.summary import schemas as summary_schemas
from restapi.responses import unwrap

router = APIRouter(
    prefix="/workspaces/{workspace_id}/months",
    tags=["plans"],
    responses={404: {"description": "Not found"}},
)


@router.get("/{year_month}/plan", response_model=schemas.MonthlyPlan)
async def get_monthly_plan(
    workspace_id: str,
    year_month: str,
    db: AsyncSession = Depends(get_db)
):
    """
    Get the budget snapshot of a month.

    The snapshot is created from the current group defaults the first time a
    month is requested and keeps its percentages afterwards.
    """
    repo = PlanRepository(db)
    return unwrap(await run_action(
        repo.get_monthly_plan(workspace_id, year_month), "Failed to get monthly plan"
    ))


@router.put("/{year_month}/allocations", response_model=schemas.MonthlyPlan)
async def update_monthly_allocation(
    workspace_id: str,
    year_month: str,
    allocation: schemas.MonthlyAllocationUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Override one group's percent for this month only."""
    repo = PlanRepository(db)

    async def update_and_reload() -> schemas.MonthlyPlan:
        await repo.update_monthly_allocation(workspace_id, year_month, allocation.group_id, allocation.percent)
        return await repo.get_monthly_plan(workspace_id, year_month)

    return unwrap(await run_action(update_and_reload(), "Failed to update allocation"))


@router.get("/{year_month}/summary", response_model=summary_schemas.MonthSummary)
async def get_month_summary(
    workspace_id: str,
    year_month: str,
    db: AsyncSession = Depends(get_db)
):
    """
    Get income, expenses and budget versus actual per group for a month.

    Returns:
    - Posted income and expense totals of the month and their balance
    - For every group of the month's snapshot: percent, budget amount,
      spent amount and remaining amount (negative when overspent)
    """
    repo = SummaryRepository(db)
    return unwrap(await run_action(
        repo.compute_month_summary(workspace_id, year_month), "Failed to compute month summary"
    ))
