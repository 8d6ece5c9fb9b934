"""
Shared fixtures.

Every test gets its own in-memory SQLite database (aiosqlite) with the full
schema, and an AsyncSession bound to it.
"""

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

import components.core.init_db  # noqa: F401  registers every model
from components.account.models import AccountType, FinancialAccount
from components.budget.models import BudgetCategory
from components.budget.repository import BudgetRepository
from components.core.database import DatabaseManager
from components.transaction.models import Transaction, TransactionType, TransactionStatus

WORKSPACE = "ws-main"
OTHER_WORKSPACE = "ws-other"


@pytest.fixture
async def db_manager():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    manager = DatabaseManager(engine)
    await manager.create_all()
    yield manager
    await engine.dispose()


@pytest.fixture
async def session(db_manager):
    async with db_manager.get_db() as session:
        yield session


@pytest.fixture
async def workspace(session):
    """
    A workspace with the default 50/30/20 groups, one category per group and
    a default bank account.
    """
    groups = await BudgetRepository(session).seed_default_groups(WORKSPACE)
    by_name = {group.name: group for group in groups}

    categories = {
        "groceries": BudgetCategory(workspace_id=WORKSPACE, group_id=by_name["Essentials"].id, name="Groceries"),
        "cinema": BudgetCategory(workspace_id=WORKSPACE, group_id=by_name["Lifestyle"].id, name="Cinema"),
        "stocks": BudgetCategory(workspace_id=WORKSPACE, group_id=by_name["Investments"].id, name="Stocks"),
    }
    account = FinancialAccount(
        workspace_id=WORKSPACE, name="Main", type=AccountType.BANK, is_default=True, is_active=True
    )
    session.add_all([*categories.values(), account])
    await session.commit()

    return SimpleNamespace(
        id=WORKSPACE,
        groups=by_name,
        categories=categories,
        account=account,
    )


@pytest.fixture
def add_transaction(session):
    """Insert a ledger row directly, bypassing the repository's input checks."""

    async def _add(
        workspace,
        amount,
        tx_type=TransactionType.EXPENSE,
        date=datetime(2024, 3, 15, 12, 0),
        category=None,
        status=TransactionStatus.POSTED,
        description=None,
    ) -> Transaction:
        transaction = Transaction(
            workspace_id=workspace.id,
            date=date,
            amount=Decimal(str(amount)),
            type=tx_type,
            status=status,
            description=description,
            account_id=workspace.account.id,
            category_id=category.id if category is not None else None,
        )
        session.add(transaction)
        await session.commit()
        return transaction

    return _add
