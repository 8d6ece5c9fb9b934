"""Budget configuration endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.budget.repository import BudgetRepository
from components.budget import schemas
from components.core.actions import run_action
from components.core.init_db import get_db
from components.core.schemas import PercentageValidation
from restapi.responses import unwrap

router = APIRouter(
    prefix="/workspaces/{workspace_id}/budget",
    tags=["budget"],
    responses={404: {"description": "Not found"}},
)


@router.get("/groups", response_model=List[schemas.BudgetGroupWithCategories])
async def get_groups(workspace_id: str, db: AsyncSession = Depends(get_db)):
    """Get active budget groups with their active categories."""
    repo = BudgetRepository(db)
    return unwrap(await run_action(repo.get_groups(workspace_id), "Failed to get budget groups"))


@router.post("/groups", response_model=schemas.BudgetGroup, status_code=201)
async def create_group(
    workspace_id: str,
    group: schemas.BudgetGroupCreate,
    db: AsyncSession = Depends(get_db)
):
    repo = BudgetRepository(db)
    return unwrap(await run_action(repo.create_group(workspace_id, group), "Failed to create budget group"))


@router.put("/groups/percentages", response_model=PercentageValidation)
async def update_group_percentages(
    workspace_id: str,
    percentages: List[schemas.GroupPercentage],
    db: AsyncSession = Depends(get_db)
):
    """
    Update the default percent of several groups.

    Returns whether the new defaults add up to 100. Totals that do not are
    still saved.
    """
    repo = BudgetRepository(db)
    return unwrap(await run_action(
        repo.update_group_percentages(workspace_id, percentages), "Failed to update percentages"
    ))


@router.patch("/groups/{group_id}", response_model=schemas.BudgetGroup)
async def update_group(
    workspace_id: str,
    group_id: int,
    group: schemas.BudgetGroupUpdate,
    db: AsyncSession = Depends(get_db)
):
    repo = BudgetRepository(db)
    return unwrap(await run_action(
        repo.update_group(workspace_id, group_id, group), "Failed to update budget group"
    ))


@router.delete("/groups/{group_id}", status_code=204)
async def delete_group(workspace_id: str, group_id: int, db: AsyncSession = Depends(get_db)):
    repo = BudgetRepository(db)
    unwrap(await run_action(repo.delete_group(workspace_id, group_id), "Failed to delete budget group"))


@router.post("/categories", response_model=schemas.BudgetCategory, status_code=201)
async def create_category(
    workspace_id: str,
    category: schemas.BudgetCategoryCreate,
    db: AsyncSession = Depends(get_db)
):
    repo = BudgetRepository(db)
    return unwrap(await run_action(repo.create_category(workspace_id, category), "Failed to create category"))


@router.patch("/categories/{category_id}", response_model=schemas.BudgetCategory)
async def update_category(
    workspace_id: str,
    category_id: int,
    category: schemas.BudgetCategoryUpdate,
    db: AsyncSession = Depends(get_db)
):
    repo = BudgetRepository(db)
    return unwrap(await run_action(
        repo.update_category(workspace_id, category_id, category), "Failed to update category"
    ))


@router.delete("/categories/{category_id}", status_code=204)
async def delete_category(workspace_id: str, category_id: int, db: AsyncSession = Depends(get_db)):
    repo = BudgetRepository(db)
    unwrap(await run_action(repo.delete_category(workspace_id, category_id), "Failed to delete category"))


@router.get("/income-categories", response_model=List[schemas.IncomeCategory])
async def get_income_categories(workspace_id: str, db: AsyncSession = Depends(get_db)):
    repo = BudgetRepository(db)
    return unwrap(await run_action(
        repo.get_income_categories(workspace_id), "Failed to get income categories"
    ))


@router.post("/income-categories", response_model=schemas.IncomeCategory, status_code=201)
async def create_income_category(
    workspace_id: str,
    category: schemas.IncomeCategoryCreate,
    db: AsyncSession = Depends(get_db)
):
    repo = BudgetRepository(db)
    return unwrap(await run_action(
        repo.create_income_category(workspace_id, category), "Failed to create income category"
    ))


@router.patch("/income-categories/{category_id}", response_model=schemas.IncomeCategory)
async def update_income_category(
    workspace_id: str,
    category_id: int,
    category: schemas.IncomeCategoryUpdate,
    db: AsyncSession = Depends(get_db)
):
    repo = BudgetRepository(db)
    return unwrap(await run_action(
        repo.update_income_category(workspace_id, category_id, category), "Failed to update income category"
    ))


@router.delete("/income-categories/{category_id}", status_code=204)
async def delete_income_category(workspace_id: str, category_id: int, db: AsyncSession = Depends(get_db)):
    repo = BudgetRepository(db)
    unwrap(await run_action(
        repo.delete_income_category(workspace_id, category_id), "Failed to delete income category"
    ))
