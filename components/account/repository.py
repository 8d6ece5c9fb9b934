"""Repository for financial account operations."""

from typing import List

from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession

from components.account.models import FinancialAccount
from components.account import schemas
from components.core.exceptions import NotFoundError
from components.core.logging_config import get_logger
from components.transaction.models import Transaction

logger = get_logger(__name__)


class AccountRepository:
    """Repository for financial account operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_account(self, workspace_id: str, account_id: int) -> FinancialAccount:
        """Get an account of the workspace or raise NotFoundError."""
        result = await self.session.execute(
            select(FinancialAccount).where(
                FinancialAccount.id == account_id,
                FinancialAccount.workspace_id == workspace_id,
            )
        )
        account = result.scalar_one_or_none()
        if account is None:
            raise NotFoundError("Account not found")
        return account

    async def get_accounts(self, workspace_id: str) -> List[FinancialAccount]:
        """Get active accounts, the default one first."""
        result = await self.session.execute(
            select(FinancialAccount)
            .where(
                FinancialAccount.workspace_id == workspace_id,
                FinancialAccount.is_active.is_(True),
            )
            .order_by(FinancialAccount.is_default.desc(), FinancialAccount.name)
        )
        return list(result.scalars().all())

    async def _unset_defaults(self, workspace_id: str, keep_id: int = None) -> None:
        query = update(FinancialAccount).where(
            FinancialAccount.workspace_id == workspace_id,
            FinancialAccount.is_default.is_(True),
        )
        if keep_id is not None:
            query = query.where(FinancialAccount.id != keep_id)
        await self.session.execute(query.values(is_default=False))

    async def create_account(self, workspace_id: str, account: schemas.AccountCreate) -> FinancialAccount:
        """Create an account; a new default account replaces the previous default."""
        if account.is_default:
            await self._unset_defaults(workspace_id)

        db_account = FinancialAccount(
            workspace_id=workspace_id,
            name=account.name,
            type=account.type,
            is_default=account.is_default,
            is_active=True,
        )
        self.session.add(db_account)
        await self.session.commit()
        return db_account

    async def update_account(
        self, workspace_id: str, account_id: int, account: schemas.AccountUpdate
    ) -> FinancialAccount:
        db_account = await self.get_account(workspace_id, account_id)

        data = account.changes()
        if data.get("is_default"):
            await self._unset_defaults(workspace_id, keep_id=account_id)
        for field, value in data.items():
            setattr(db_account, field, value)

        await self.session.commit()
        return db_account

    async def delete_account(self, workspace_id: str, account_id: int) -> schemas.AccountDeletion:
        """
        Delete an account.

        Accounts referenced by any transaction, void ones included, are only
        deactivated; unused accounts are removed.
        """
        db_account = await self.get_account(workspace_id, account_id)

        result = await self.session.execute(
            select(func.count(Transaction.id)).where(Transaction.account_id == account_id)
        )
        if result.scalar():
            db_account.is_active = False
            await self.session.commit()
            logger.info(f"Deactivated account {account_id} in workspace {workspace_id}")
            return schemas.AccountDeletion(account_id=account_id, hard_deleted=False)

        await self.session.delete(db_account)
        await self.session.commit()
        return schemas.AccountDeletion(account_id=account_id, hard_deleted=True)
