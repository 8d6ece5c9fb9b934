"""Financial account endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.account.repository import AccountRepository
from components.account import schemas
from components.core.actions import run_action
from components.core.init_db import get_db
from restapi.responses import unwrap

router = APIRouter(
    prefix="/workspaces/{workspace_id}/accounts",
    tags=["accounts"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.Account])
async def get_accounts(workspace_id: str, db: AsyncSession = Depends(get_db)):
    """Get active accounts, the default account first."""
    repo = AccountRepository(db)
    return unwrap(await run_action(repo.get_accounts(workspace_id), "Failed to get accounts"))


@router.post("/", response_model=schemas.Account, status_code=201)
async def create_account(
    workspace_id: str,
    account: schemas.AccountCreate,
    db: AsyncSession = Depends(get_db)
):
    repo = AccountRepository(db)
    return unwrap(await run_action(repo.create_account(workspace_id, account), "Failed to create account"))


@router.patch("/{account_id}", response_model=schemas.Account)
async def update_account(
    workspace_id: str,
    account_id: int,
    account: schemas.AccountUpdate,
    db: AsyncSession = Depends(get_db)
):
    repo = AccountRepository(db)
    return unwrap(await run_action(
        repo.update_account(workspace_id, account_id, account), "Failed to update account"
    ))


@router.delete("/{account_id}", response_model=schemas.AccountDeletion)
async def delete_account(workspace_id: str, account_id: int, db: AsyncSession = Depends(get_db)):
    """Delete an account, or only deactivate it when transactions use it."""
    repo = AccountRepository(db)
    return unwrap(await run_action(repo.delete_account(workspace_id, account_id), "Failed to delete account"))
