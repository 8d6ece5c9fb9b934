"""Tests for financial accounts."""

import pytest

from components.account.models import AccountType
from components.account.repository import AccountRepository
from components.account import schemas
from components.core.exceptions import NotFoundError
from components.transaction.models import TransactionStatus


class TestAccounts:
    """Tests for account management."""

    async def test_default_account_listed_first(self, session, workspace):
        repo = AccountRepository(session)
        await repo.create_account(workspace.id, schemas.AccountCreate(name="Cash", type=AccountType.CASH))

        accounts = await repo.get_accounts(workspace.id)
        assert [a.name for a in accounts] == ["Main", "Cash"]

    async def test_new_default_replaces_previous(self, session, workspace):
        repo = AccountRepository(session)
        card = await repo.create_account(
            workspace.id, schemas.AccountCreate(name="Card", type=AccountType.CREDIT, is_default=True)
        )

        accounts = await repo.get_accounts(workspace.id)
        assert [(a.name, a.is_default) for a in accounts] == [("Card", True), ("Main", False)]

        await repo.update_account(workspace.id, workspace.account.id, schemas.AccountUpdate(is_default=True))
        accounts = await repo.get_accounts(workspace.id)
        assert {a.id: a.is_default for a in accounts} == {workspace.account.id: True, card.id: False}

    async def test_update_of_other_workspace(self, session, workspace):
        with pytest.raises(NotFoundError):
            await AccountRepository(session).update_account(
                "ws-other", workspace.account.id, schemas.AccountUpdate(name="Mine")
            )

    async def test_unused_account_is_hard_deleted(self, session, workspace):
        repo = AccountRepository(session)
        spare = await repo.create_account(workspace.id, schemas.AccountCreate(name="Spare", type=AccountType.CASH))

        result = await repo.delete_account(workspace.id, spare.id)
        assert result.hard_deleted is True
        with pytest.raises(NotFoundError):
            await repo.get_account(workspace.id, spare.id)

    async def test_referenced_account_is_deactivated(self, session, workspace, add_transaction):
        await add_transaction(workspace, "10", category=workspace.categories["groceries"])
        repo = AccountRepository(session)

        result = await repo.delete_account(workspace.id, workspace.account.id)
        assert result.hard_deleted is False
        assert (await repo.get_account(workspace.id, workspace.account.id)).is_active is False
        assert await repo.get_accounts(workspace.id) == []

    async def test_account_with_only_void_rows_is_kept(self, session, workspace, add_transaction):
        await add_transaction(
            workspace, "10", category=workspace.categories["groceries"], status=TransactionStatus.VOID
        )

        result = await AccountRepository(session).delete_account(workspace.id, workspace.account.id)
        assert result.hard_deleted is False
