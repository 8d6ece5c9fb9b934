"""Helper endpoints for onboarding a workspace."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from components.budget.repository import BudgetRepository
from components.core.actions import run_action
from components.core.init_db import get_db
from restapi.responses import unwrap

router = APIRouter(
    prefix="/workspaces/{workspace_id}/helpers",
    tags=["helpers"],
    responses={404: {"description": "Not found"}},
)


class SeedDefaultsResult(BaseModel):
    """Number of rows created by seeding the defaults."""
    groups_created: int
    income_categories_created: int


@router.post("/seed-defaults", response_model=SeedDefaultsResult)
async def seed_defaults(workspace_id: str, db: AsyncSession = Depends(get_db)):
    """
    Create the default budget setup of a new workspace.

    Adds the Essentials (50%), Lifestyle (30%) and Investments (20%) groups
    when the workspace has no groups yet, and the default income categories
    that are missing. Calling it again creates nothing.
    """
    repo = BudgetRepository(db)

    async def seed() -> SeedDefaultsResult:
        groups = await repo.seed_default_groups(workspace_id)
        income_categories = await repo.seed_default_income_categories(workspace_id)
        return SeedDefaultsResult(
            groups_created=len(groups),
            income_categories_created=len(income_categories),
        )

    return unwrap(await run_action(seed(), "Failed to seed workspace defaults"))
