"""Tests for the transaction ledger."""

from datetime import datetime
from decimal import Decimal

import pytest

from components.budget.models import IncomeCategory
from components.core.exceptions import InvalidArgumentError, NotFoundError
from components.transaction.models import TransactionType, TransactionStatus
from components.transaction.repository import TransactionRepository
from components.transaction import schemas

MONTH = "2024-03"
OTHER_WORKSPACE = "ws-other"


def expense(workspace, amount="12.50", **overrides):
    data = dict(
        date=datetime(2024, 3, 10, 9, 0),
        amount=Decimal(amount),
        type=TransactionType.EXPENSE,
        description="Lunch",
        account_id=workspace.account.id,
        category_id=workspace.categories["groceries"].id,
    )
    data.update(overrides)
    return schemas.TransactionCreate(**data)


class TestCreateTransaction:
    """Tests for recording transactions."""

    async def test_create_posted_expense(self, session, workspace):
        transaction = await TransactionRepository(session).create_transaction(workspace.id, expense(workspace))

        assert transaction.id is not None
        assert transaction.status == TransactionStatus.POSTED
        assert transaction.amount == Decimal("12.50")
        assert transaction.workspace_id == workspace.id

    async def test_expense_requires_category(self, session, workspace):
        with pytest.raises(InvalidArgumentError):
            await TransactionRepository(session).create_transaction(
                workspace.id, expense(workspace, category_id=None)
            )

    async def test_income_without_category(self, session, workspace):
        income_category = IncomeCategory(workspace_id=workspace.id, name="Salary", is_active=True)
        session.add(income_category)
        await session.commit()

        transaction = await TransactionRepository(session).create_transaction(
            workspace.id,
            expense(
                workspace,
                "3000",
                type=TransactionType.INCOME,
                category_id=None,
                income_category_id=income_category.id,
            ),
        )
        assert transaction.income_category_id == income_category.id

    async def test_cannot_create_void(self, session, workspace):
        with pytest.raises(InvalidArgumentError):
            await TransactionRepository(session).create_transaction(
                workspace.id, expense(workspace, status=TransactionStatus.VOID)
            )

    async def test_amount_must_be_positive(self, workspace):
        with pytest.raises(ValueError):
            expense(workspace, "0")

    @pytest.mark.parametrize(
        "override",
        [
            {"account_id": 9999},
            {"category_id": 9999},
            {"income_category_id": 9999},
        ],
    )
    async def test_references_must_exist(self, session, workspace, override):
        with pytest.raises(NotFoundError):
            await TransactionRepository(session).create_transaction(workspace.id, expense(workspace, **override))

    async def test_references_of_other_workspace(self, session, workspace):
        with pytest.raises(NotFoundError):
            await TransactionRepository(session).create_transaction(OTHER_WORKSPACE, expense(workspace))


class TestListTransactions:
    """Tests for listing a month's transactions."""

    async def test_newest_first_without_void(self, session, workspace):
        repo = TransactionRepository(session)
        early = await repo.create_transaction(workspace.id, expense(workspace, date=datetime(2024, 3, 2)))
        late = await repo.create_transaction(workspace.id, expense(workspace, date=datetime(2024, 3, 28)))
        voided = await repo.create_transaction(workspace.id, expense(workspace, date=datetime(2024, 3, 15)))
        await repo.create_transaction(workspace.id, expense(workspace, date=datetime(2024, 4, 1)))
        await repo.void_transaction(workspace.id, voided.id)

        transactions = await repo.get_transactions(workspace.id, MONTH)
        assert [t.id for t in transactions] == [late.id, early.id]

    async def test_filters(self, session, workspace):
        repo = TransactionRepository(session)
        await repo.create_transaction(workspace.id, expense(workspace, description="Weekly GROCERIES"))
        await repo.create_transaction(
            workspace.id,
            expense(workspace, description="Movie night", category_id=workspace.categories["cinema"].id),
        )
        await repo.create_transaction(
            workspace.id,
            expense(workspace, description="Next rent", status=TransactionStatus.PLANNED),
        )

        by_search = await repo.get_transactions(workspace.id, MONTH, schemas.TransactionFilters(search="groceries"))
        assert [t.description for t in by_search] == ["Weekly GROCERIES"]

        by_category = await repo.get_transactions(
            workspace.id, MONTH, schemas.TransactionFilters(category_id=workspace.categories["cinema"].id)
        )
        assert [t.description for t in by_category] == ["Movie night"]

        by_status = await repo.get_transactions(
            workspace.id, MONTH, schemas.TransactionFilters(status=TransactionStatus.PLANNED)
        )
        assert [t.description for t in by_status] == ["Next rent"]

        by_type = await repo.get_transactions(
            workspace.id, MONTH, schemas.TransactionFilters(type=TransactionType.INCOME)
        )
        assert by_type == []

    async def test_invalid_month(self, session, workspace):
        with pytest.raises(InvalidArgumentError):
            await TransactionRepository(session).get_transactions(workspace.id, "2024-13")


class TestStatusChanges:
    """Tests for the POSTED / PLANNED / VOID status machine."""

    async def test_mark_planned_as_posted(self, session, workspace):
        repo = TransactionRepository(session)
        planned = await repo.create_transaction(workspace.id, expense(workspace, status=TransactionStatus.PLANNED))

        posted = await repo.mark_as_posted(workspace.id, planned.id)
        assert posted.status == TransactionStatus.POSTED

        with pytest.raises(InvalidArgumentError):
            await repo.mark_as_posted(workspace.id, planned.id)

    async def test_void_is_terminal(self, session, workspace):
        repo = TransactionRepository(session)
        transaction = await repo.create_transaction(workspace.id, expense(workspace))
        await repo.void_transaction(workspace.id, transaction.id)

        with pytest.raises(InvalidArgumentError):
            await repo.update_transaction(
                workspace.id, transaction.id, schemas.TransactionUpdate(description="Changed")
            )
        with pytest.raises(InvalidArgumentError):
            await repo.mark_as_posted(workspace.id, transaction.id)

        again = await repo.void_transaction(workspace.id, transaction.id)
        assert again.status == TransactionStatus.VOID

    async def test_posted_cannot_go_back_to_planned(self, session, workspace):
        repo = TransactionRepository(session)
        transaction = await repo.create_transaction(workspace.id, expense(workspace))

        with pytest.raises(InvalidArgumentError):
            await repo.update_transaction(
                workspace.id, transaction.id, schemas.TransactionUpdate(status=TransactionStatus.PLANNED)
            )

    async def test_void_of_other_workspace(self, session, workspace):
        repo = TransactionRepository(session)
        transaction = await repo.create_transaction(workspace.id, expense(workspace))

        with pytest.raises(NotFoundError):
            await repo.void_transaction(OTHER_WORKSPACE, transaction.id)


class TestUpdateTransaction:
    """Tests for partial updates."""

    async def test_partial_update(self, session, workspace):
        repo = TransactionRepository(session)
        transaction = await repo.create_transaction(workspace.id, expense(workspace))

        updated = await repo.update_transaction(
            workspace.id,
            transaction.id,
            schemas.TransactionUpdate(amount=Decimal("20.25"), category_id=workspace.categories["cinema"].id),
        )
        assert updated.amount == Decimal("20.25")
        assert updated.category_id == workspace.categories["cinema"].id
        assert updated.description == "Lunch"

    async def test_expense_cannot_lose_category(self, session, workspace):
        repo = TransactionRepository(session)
        transaction = await repo.create_transaction(workspace.id, expense(workspace))

        with pytest.raises(InvalidArgumentError):
            await repo.update_transaction(workspace.id, transaction.id, schemas.TransactionUpdate(category_id=None))

    async def test_unknown_account(self, session, workspace):
        repo = TransactionRepository(session)
        transaction = await repo.create_transaction(workspace.id, expense(workspace))

        with pytest.raises(NotFoundError):
            await repo.update_transaction(workspace.id, transaction.id, schemas.TransactionUpdate(account_id=9999))

    @pytest.mark.parametrize("field", ["amount", "date", "type", "account_id", "status"])
    async def test_required_fields_cannot_be_cleared(self, session, workspace, field):
        repo = TransactionRepository(session)
        transaction = await repo.create_transaction(workspace.id, expense(workspace))

        with pytest.raises(InvalidArgumentError, match=field):
            await repo.update_transaction(workspace.id, transaction.id, schemas.TransactionUpdate(**{field: None}))

        stored = await repo.get_transaction(workspace.id, transaction.id)
        assert stored.amount == transaction.amount
        assert stored.status == TransactionStatus.POSTED

    async def test_optional_fields_can_be_cleared(self, session, workspace):
        repo = TransactionRepository(session)
        transaction = await repo.create_transaction(workspace.id, expense(workspace))

        updated = await repo.update_transaction(
            workspace.id, transaction.id, schemas.TransactionUpdate(description=None)
        )
        assert updated.description is None
