"""Repository for transaction ledger operations."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.account.models import FinancialAccount
from components.budget.models import BudgetCategory, IncomeCategory
from components.core.exceptions import InvalidArgumentError, NotFoundError
from components.core.logging_config import get_logger
from components.core.money import round_money
from components.core.months import get_month_date_range
from components.transaction.models import Transaction, TransactionType, TransactionStatus
from components.transaction import schemas

logger = get_logger(__name__)

ALLOWED_TRANSITIONS = {
    TransactionStatus.PLANNED: {TransactionStatus.POSTED, TransactionStatus.VOID},
    TransactionStatus.POSTED: {TransactionStatus.VOID},
    TransactionStatus.VOID: set(),
}


class TransactionRepository:
    """Repository for transaction operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_transaction(self, workspace_id: str, transaction_id: int) -> Transaction:
        """Get a transaction of the workspace or raise NotFoundError."""
        result = await self.session.execute(
            select(Transaction).where(
                Transaction.id == transaction_id,
                Transaction.workspace_id == workspace_id,
            )
        )
        transaction = result.scalar_one_or_none()
        if transaction is None:
            raise NotFoundError("Transaction not found")
        return transaction

    async def get_transactions(
        self,
        workspace_id: str,
        month_key: str,
        filters: Optional[schemas.TransactionFilters] = None,
    ) -> List[Transaction]:
        """
        Get non-void transactions of a month, newest first.

        Args:
            workspace_id: Workspace the transactions belong to
            month_key: Month in YYYY-MM format
            filters: Optional type, status, category, account and description filters

        Returns:
            List of transactions
        """
        start, end = get_month_date_range(month_key)
        query = select(Transaction).where(
            Transaction.workspace_id == workspace_id,
            Transaction.date >= start,
            Transaction.date <= end,
            Transaction.status != TransactionStatus.VOID,
        )

        if filters:
            if filters.type:
                query = query.where(Transaction.type == filters.type)
            if filters.status:
                query = query.where(Transaction.status == filters.status)
            if filters.category_id:
                query = query.where(Transaction.category_id == filters.category_id)
            if filters.account_id:
                query = query.where(Transaction.account_id == filters.account_id)
            if filters.search:
                query = query.where(Transaction.description.ilike(f"%{filters.search}%"))

        result = await self.session.execute(query.order_by(Transaction.date.desc(), Transaction.id.desc()))
        return list(result.scalars().all())

    async def _check_references(
        self,
        workspace_id: str,
        account_id: Optional[int],
        category_id: Optional[int],
        income_category_id: Optional[int],
    ) -> None:
        checks = (
            (FinancialAccount, account_id, "Account not found"),
            (BudgetCategory, category_id, "Category not found"),
            (IncomeCategory, income_category_id, "Income category not found"),
        )
        for model, ref_id, message in checks:
            if ref_id is None:
                continue
            result = await self.session.execute(
                select(model.id).where(model.id == ref_id, model.workspace_id == workspace_id)
            )
            if result.scalar_one_or_none() is None:
                raise NotFoundError(message)

    async def create_transaction(
        self, workspace_id: str, transaction: schemas.TransactionCreate
    ) -> Transaction:
        """Record a posted or planned transaction."""
        if transaction.status == TransactionStatus.VOID:
            raise InvalidArgumentError("A transaction cannot be created as VOID")
        if transaction.type == TransactionType.EXPENSE and transaction.category_id is None:
            raise InvalidArgumentError("Expense transactions require a category")

        await self._check_references(
            workspace_id,
            transaction.account_id,
            transaction.category_id,
            transaction.income_category_id,
        )

        db_transaction = Transaction(
            workspace_id=workspace_id,
            date=transaction.date,
            amount=round_money(transaction.amount),
            type=transaction.type,
            description=transaction.description,
            status=transaction.status,
            account_id=transaction.account_id,
            category_id=transaction.category_id,
            income_category_id=transaction.income_category_id,
        )
        self.session.add(db_transaction)
        await self.session.commit()
        return db_transaction

    async def update_transaction(
        self, workspace_id: str, transaction_id: int, transaction: schemas.TransactionUpdate
    ) -> Transaction:
        """Partially update a transaction; void transactions cannot change."""
        db_transaction = await self.get_transaction(workspace_id, transaction_id)
        if db_transaction.status == TransactionStatus.VOID:
            raise InvalidArgumentError("Void transactions cannot be modified")

        data = transaction.changes()
        new_status = data.get("status")
        if new_status is not None and new_status != db_transaction.status:
            if new_status not in ALLOWED_TRANSITIONS[db_transaction.status]:
                raise InvalidArgumentError(
                    f"Cannot change status from {db_transaction.status.value} to {new_status.value}"
                )
        if data.get("amount") is not None:
            data["amount"] = round_money(data["amount"])

        new_type = data.get("type") or db_transaction.type
        new_category = data["category_id"] if "category_id" in data else db_transaction.category_id
        if new_type == TransactionType.EXPENSE and new_category is None:
            raise InvalidArgumentError("Expense transactions require a category")

        await self._check_references(
            workspace_id,
            data.get("account_id"),
            data.get("category_id"),
            data.get("income_category_id"),
        )

        for field, value in data.items():
            setattr(db_transaction, field, value)

        await self.session.commit()
        return db_transaction

    async def void_transaction(self, workspace_id: str, transaction_id: int) -> Transaction:
        """Soft delete a transaction by marking it VOID."""
        db_transaction = await self.get_transaction(workspace_id, transaction_id)
        if db_transaction.status == TransactionStatus.VOID:
            return db_transaction

        db_transaction.status = TransactionStatus.VOID
        await self.session.commit()
        logger.info(f"Voided transaction {transaction_id} in workspace {workspace_id}")
        return db_transaction

    async def mark_as_posted(self, workspace_id: str, transaction_id: int) -> Transaction:
        """Mark a planned transaction as paid."""
        db_transaction = await self.get_transaction(workspace_id, transaction_id)
        if db_transaction.status != TransactionStatus.PLANNED:
            raise InvalidArgumentError("Only planned transactions can be marked as posted")

        db_transaction.status = TransactionStatus.POSTED
        await self.session.commit()
        return db_transaction
