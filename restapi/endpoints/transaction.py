"""Transaction endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.actions import run_action
from components.core.init_db import get_db
from components.core.months import get_current_month_key
from components.transaction.models import TransactionType, TransactionStatus
from components.transaction.repository import TransactionRepository
from components.transaction import schemas
from restapi.responses import unwrap

router = APIRouter(
    prefix="/workspaces/{workspace_id}/transactions",
    tags=["transactions"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.Transaction])
async def get_transactions(
    workspace_id: str,
    month: Optional[str] = Query(None, description="Month in YYYY-MM format (defaults to the current month)"),
    type: Optional[TransactionType] = Query(None, description="Filter by transaction type"),
    status: Optional[TransactionStatus] = Query(None, description="Filter by status"),
    category_id: Optional[int] = Query(None, description="Filter by expense category"),
    account_id: Optional[int] = Query(None, description="Filter by account"),
    search: Optional[str] = Query(None, description="Case-insensitive search in the description"),
    db: AsyncSession = Depends(get_db)
):
    """Get the month's transactions, newest first. Void transactions are never listed."""
    filters = schemas.TransactionFilters(
        type=type,
        status=status,
        category_id=category_id,
        account_id=account_id,
        search=search,
    )
    repo = TransactionRepository(db)
    return unwrap(await run_action(
        repo.get_transactions(workspace_id, month or get_current_month_key(), filters),
        "Failed to get transactions"
    ))


@router.post("/", response_model=schemas.Transaction, status_code=201)
async def create_transaction(
    workspace_id: str,
    transaction: schemas.TransactionCreate,
    db: AsyncSession = Depends(get_db)
):
    repo = TransactionRepository(db)
    return unwrap(await run_action(
        repo.create_transaction(workspace_id, transaction), "Failed to create transaction"
    ))


@router.patch("/{transaction_id}", response_model=schemas.Transaction)
async def update_transaction(
    workspace_id: str,
    transaction_id: int,
    transaction: schemas.TransactionUpdate,
    db: AsyncSession = Depends(get_db)
):
    repo = TransactionRepository(db)
    return unwrap(await run_action(
        repo.update_transaction(workspace_id, transaction_id, transaction), "Failed to update transaction"
    ))


@router.delete("/{transaction_id}", response_model=schemas.Transaction)
async def void_transaction(workspace_id: str, transaction_id: int, db: AsyncSession = Depends(get_db)):
    """Void a transaction. It stays stored but no longer counts anywhere."""
    repo = TransactionRepository(db)
    return unwrap(await run_action(
        repo.void_transaction(workspace_id, transaction_id), "Failed to delete transaction"
    ))


@router.post("/{transaction_id}/post", response_model=schemas.Transaction)
async def mark_as_posted(workspace_id: str, transaction_id: int, db: AsyncSession = Depends(get_db)):
    """Mark a planned transaction as paid."""
    repo = TransactionRepository(db)
    return unwrap(await run_action(
        repo.mark_as_posted(workspace_id, transaction_id), "Failed to post transaction"
    ))
