"""Script to seed a demo workspace into the database."""

from datetime import datetime
from decimal import Decimal
import asyncio
import sys

from components.account.models import AccountType
from components.account.repository import AccountRepository
from components.account import schemas as account_schemas
from components.budget.repository import BudgetRepository
from components.budget import schemas as budget_schemas
from components.core.init_db import db_manager
from components.core.logging_config import get_logger, setup_logging
from components.core.months import add_months, get_current_month_key, parse_month_key
from components.goal.repository import GoalRepository
from components.goal import schemas as goal_schemas
from components.installment.repository import InstallmentRepository
from components.installment import schemas as installment_schemas
from components.plan.repository import PlanRepository
from components.summary.repository import SummaryRepository
from components.transaction.models import TransactionType
from components.transaction.repository import TransactionRepository
from components.transaction import schemas as transaction_schemas

logger = get_logger(__name__)

DEMO_CATEGORIES = {
    "Essentials": [("Rent", "🏠"), ("Groceries", "🛒"), ("Utilities", "💡")],
    "Lifestyle": [("Restaurants", "🍽️"), ("Entertainment", "🎬")],
    "Investments": [("Brokerage", "📈")],
}


async def seed_data(workspace_id: str = "demo"):
    """Seed groups, categories, an account, transactions, an installment plan and a goal."""
    await db_manager.create_all()

    async with db_manager.get_db() as db:
        budget_repo = BudgetRepository(db)
        groups = await budget_repo.seed_default_groups(workspace_id)
        if not groups:
            logger.info(f"Workspace {workspace_id} already has budget groups, nothing to seed")
            return
        income_categories = await budget_repo.seed_default_income_categories(workspace_id)
        salary_id = next((c.id for c in income_categories if c.name == "Salary"), None)

        categories = {}
        for group in groups:
            for name, icon in DEMO_CATEGORIES.get(group.name, []):
                categories[name] = await budget_repo.create_category(
                    workspace_id,
                    budget_schemas.BudgetCategoryCreate(name=name, group_id=group.id, icon=icon),
                )

        account = await AccountRepository(db).create_account(
            workspace_id,
            account_schemas.AccountCreate(name="Main account", type=AccountType.BANK, is_default=True),
        )

        month_key = get_current_month_key()
        month_start = datetime.combine(parse_month_key(month_key), datetime.min.time())
        await PlanRepository(db).ensure_plan_exists(workspace_id, month_key)

        tx_repo = TransactionRepository(db)
        entries = [
            (1, TransactionType.INCOME, "3000.00", "Monthly salary", None, salary_id),
            (2, TransactionType.EXPENSE, "1200.00", "Rent", "Rent", None),
            (5, TransactionType.EXPENSE, "86.40", "Weekly groceries", "Groceries", None),
            (9, TransactionType.EXPENSE, "54.99", "Dinner out", "Restaurants", None),
            (12, TransactionType.EXPENSE, "500.00", "Index fund", "Brokerage", None),
        ]
        for day, tx_type, amount, description, category_name, income_category_id in entries:
            await tx_repo.create_transaction(
                workspace_id,
                transaction_schemas.TransactionCreate(
                    date=month_start.replace(day=day),
                    amount=Decimal(amount),
                    type=tx_type,
                    description=description,
                    account_id=account.id,
                    category_id=categories[category_name].id if category_name else None,
                    income_category_id=income_category_id,
                ),
            )

        await InstallmentRepository(db).create_installment_plan(
            workspace_id,
            installment_schemas.InstallmentPlanCreate(
                description="Laptop",
                merchant="Electronics store",
                total_amount=Decimal("1000.00"),
                installments_count=3,
                first_due_date=add_months(month_start, 1),
                account_id=account.id,
                category_id=categories["Entertainment"].id,
            ),
        )

        goal_repo = GoalRepository(db)
        goal = await goal_repo.create_goal(
            workspace_id,
            goal_schemas.GoalCreate(name="Emergency fund", target_amount=Decimal("5000.00"), color="#22c55e"),
        )
        await goal_repo.add_contribution(
            workspace_id,
            goal.id,
            goal_schemas.ContributionCreate(amount=Decimal("750.00"), date=month_start, note="First deposit"),
        )

        summary = await SummaryRepository(db).compute_month_summary(workspace_id, month_key)
        logger.info(
            f"Seeded workspace {workspace_id}: income {summary.income_total}, "
            f"expenses {summary.expense_total}, balance {summary.balance}"
        )


if __name__ == "__main__":
    setup_logging(service_name="seed-data")
    asyncio.run(seed_data(*sys.argv[1:2]))
