"""Installment plan endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.actions import run_action
from components.core.init_db import get_db
from components.installment.repository import InstallmentRepository
from components.installment import schemas
from components.transaction import schemas as transaction_schemas
from restapi.responses import unwrap

router = APIRouter(
    prefix="/workspaces/{workspace_id}/installments",
    tags=["installments"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.InstallmentPlanDetails])
async def get_plans(workspace_id: str, db: AsyncSession = Depends(get_db)):
    """Get active installment plans with their progress."""
    repo = InstallmentRepository(db)
    return unwrap(await run_action(repo.get_plans(workspace_id), "Failed to get installment plans"))


@router.post("/", response_model=schemas.InstallmentPlanDetails, status_code=201)
async def create_plan(
    workspace_id: str,
    plan: schemas.InstallmentPlanCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create an installment plan.

    One planned expense is generated per installment, a month apart, starting
    at the first due date. The last installment absorbs the rounding
    remainder.
    """
    repo = InstallmentRepository(db)
    return unwrap(await run_action(
        repo.create_installment_plan(workspace_id, plan), "Failed to create installment plan"
    ))


@router.get("/upcoming", response_model=List[schemas.UpcomingInstallment])
async def get_upcoming(
    workspace_id: str,
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of installments"),
    db: AsyncSession = Depends(get_db)
):
    """Get planned installments due today or later."""
    repo = InstallmentRepository(db)
    return unwrap(await run_action(
        repo.get_upcoming_installments(workspace_id, limit=limit), "Failed to get upcoming installments"
    ))


@router.post("/transactions/{transaction_id}/post", response_model=transaction_schemas.Transaction)
async def post_installment(workspace_id: str, transaction_id: int, db: AsyncSession = Depends(get_db)):
    """Mark an installment as paid."""
    repo = InstallmentRepository(db)
    return unwrap(await run_action(
        repo.mark_installment_as_posted(workspace_id, transaction_id), "Failed to post installment"
    ))


@router.get("/{plan_id}", response_model=schemas.InstallmentPlanDetails)
async def get_plan(workspace_id: str, plan_id: int, db: AsyncSession = Depends(get_db)):
    repo = InstallmentRepository(db)
    return unwrap(await run_action(
        repo.get_plan_with_details(workspace_id, plan_id), "Failed to get installment plan"
    ))


@router.post("/{plan_id}/cancel", response_model=schemas.InstallmentPlan)
async def cancel_plan(workspace_id: str, plan_id: int, db: AsyncSession = Depends(get_db)):
    """Deactivate a plan and void its remaining planned installments."""
    repo = InstallmentRepository(db)
    return unwrap(await run_action(repo.cancel_plan(workspace_id, plan_id), "Failed to cancel installment plan"))


@router.delete("/{plan_id}", response_model=schemas.InstallmentPlanDeletion)
async def delete_plan(workspace_id: str, plan_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a plan that has no paid installments, otherwise cancel it."""
    repo = InstallmentRepository(db)
    return unwrap(await run_action(repo.delete_plan(workspace_id, plan_id), "Failed to delete installment plan"))
