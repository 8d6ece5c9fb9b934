"""Savings goal endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.actions import run_action
from components.core.init_db import get_db
from components.goal.repository import GoalRepository
from components.goal import schemas
from restapi.responses import unwrap

router = APIRouter(
    prefix="/workspaces/{workspace_id}/goals",
    tags=["goals"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.GoalWithProgress])
async def get_goals(workspace_id: str, db: AsyncSession = Depends(get_db)):
    """Get all goals with current amount, remaining amount and progress."""
    repo = GoalRepository(db)
    return unwrap(await run_action(repo.get_goals(workspace_id), "Failed to get goals"))


@router.post("/", response_model=schemas.Goal, status_code=201)
async def create_goal(workspace_id: str, goal: schemas.GoalCreate, db: AsyncSession = Depends(get_db)):
    repo = GoalRepository(db)
    return unwrap(await run_action(repo.create_goal(workspace_id, goal), "Failed to create goal"))


@router.delete("/contributions/{contribution_id}", status_code=204)
async def delete_contribution(workspace_id: str, contribution_id: int, db: AsyncSession = Depends(get_db)):
    repo = GoalRepository(db)
    unwrap(await run_action(
        repo.delete_contribution(workspace_id, contribution_id), "Failed to delete contribution"
    ))


@router.get("/{goal_id}", response_model=schemas.GoalWithProgress)
async def get_goal(workspace_id: str, goal_id: int, db: AsyncSession = Depends(get_db)):
    repo = GoalRepository(db)
    return unwrap(await run_action(repo.get_goal(workspace_id, goal_id), "Failed to get goal"))


@router.patch("/{goal_id}", response_model=schemas.Goal)
async def update_goal(
    workspace_id: str,
    goal_id: int,
    goal: schemas.GoalUpdate,
    db: AsyncSession = Depends(get_db)
):
    repo = GoalRepository(db)
    return unwrap(await run_action(repo.update_goal(workspace_id, goal_id, goal), "Failed to update goal"))


@router.delete("/{goal_id}", status_code=204)
async def delete_goal(workspace_id: str, goal_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a goal together with its contributions."""
    repo = GoalRepository(db)
    unwrap(await run_action(repo.delete_goal(workspace_id, goal_id), "Failed to delete goal"))


@router.post("/{goal_id}/contributions", response_model=schemas.Contribution, status_code=201)
async def add_contribution(
    workspace_id: str,
    goal_id: int,
    contribution: schemas.ContributionCreate,
    db: AsyncSession = Depends(get_db)
):
    """Add a contribution. The goal is marked completed once it reaches its target."""
    repo = GoalRepository(db)
    return unwrap(await run_action(
        repo.add_contribution(workspace_id, goal_id, contribution), "Failed to add contribution"
    ))
