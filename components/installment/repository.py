"""Repository for installment plan operations."""

from datetime import date, datetime, time
from typing import List, Optional

from sqlalchemy import select, func, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from components.account.models import FinancialAccount
from components.budget.models import BudgetCategory
from components.core import config
from components.core.database import atomic_insert
from components.core.exceptions import InvalidArgumentError, NotFoundError
from components.core.logging_config import get_logger
from components.core.money import distribute_amount, round_money
from components.core.months import add_months
from components.installment.models import InstallmentPlan
from components.installment import schemas
from components.transaction.models import Transaction, TransactionType, TransactionStatus
from components.transaction.repository import TransactionRepository
from components.transaction.schemas import Transaction as TransactionSchema

settings = config.get_settings()
logger = get_logger(__name__)


class InstallmentRepository:
    """Repository for installment plans and their generated transactions."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _get_plan(self, workspace_id: str, plan_id: int, with_transactions: bool = False) -> InstallmentPlan:
        query = select(InstallmentPlan).where(
            InstallmentPlan.id == plan_id,
            InstallmentPlan.workspace_id == workspace_id,
        )
        if with_transactions:
            query = query.options(selectinload(InstallmentPlan.transactions))
        result = await self.session.execute(query)
        plan = result.scalar_one_or_none()
        if plan is None:
            raise NotFoundError("Installment plan not found")
        return plan

    @staticmethod
    def _to_details(plan: InstallmentPlan) -> schemas.InstallmentPlanDetails:
        transactions = sorted(plan.transactions, key=lambda t: t.installment_number or 0)
        paid_count = sum(1 for t in transactions if t.status == TransactionStatus.POSTED)
        planned = [t for t in transactions if t.status == TransactionStatus.PLANNED]

        return schemas.InstallmentPlanDetails(
            id=plan.id,
            description=plan.description,
            merchant=plan.merchant,
            total_amount=plan.total_amount,
            installments_count=plan.installments_count,
            first_due_date=plan.first_due_date,
            is_active=plan.is_active,
            account_id=plan.account_id,
            category_id=plan.category_id,
            paid_count=paid_count,
            remaining_count=plan.installments_count - paid_count,
            next_due_date=planned[0].date if planned else None,
            transactions=[TransactionSchema.model_validate(t) for t in transactions],
        )

    async def create_installment_plan(
        self, workspace_id: str, plan: schemas.InstallmentPlanCreate
    ) -> schemas.InstallmentPlanDetails:
        """
        Create an installment plan with one planned expense per installment.

        The total is split with the last installment absorbing the rounding
        remainder, and installment ``i`` falls ``i`` months after the first
        due date. The plan and all its transactions are committed together.
        """
        count = plan.installments_count
        if count < schemas.MIN_INSTALLMENTS or count > schemas.MAX_INSTALLMENTS:
            raise InvalidArgumentError(
                f"Installments count must be between {schemas.MIN_INSTALLMENTS} "
                f"and {schemas.MAX_INSTALLMENTS}, got {count}"
            )

        result = await self.session.execute(
            select(FinancialAccount.id).where(
                FinancialAccount.id == plan.account_id,
                FinancialAccount.workspace_id == workspace_id,
            )
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Account not found")

        result = await self.session.execute(
            select(BudgetCategory.id).where(
                BudgetCategory.id == plan.category_id,
                BudgetCategory.workspace_id == workspace_id,
            )
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Category not found")

        total_amount = round_money(plan.total_amount)
        db_plan = InstallmentPlan(
            workspace_id=workspace_id,
            description=plan.description,
            merchant=plan.merchant,
            total_amount=total_amount,
            installments_count=count,
            first_due_date=plan.first_due_date,
            is_active=True,
            account_id=plan.account_id,
            category_id=plan.category_id,
        )
        db_plan.transactions = [
            Transaction(
                workspace_id=workspace_id,
                date=add_months(plan.first_due_date, index),
                amount=amount,
                type=TransactionType.EXPENSE,
                description=f"{plan.description} ({index + 1}/{count})",
                status=TransactionStatus.PLANNED,
                account_id=plan.account_id,
                category_id=plan.category_id,
                installment_number=index + 1,
            )
            for index, amount in enumerate(distribute_amount(total_amount, count))
        ]
        await atomic_insert(self.session, [db_plan])

        logger.info(f"Generated {count} installments for plan {db_plan.id} in workspace {workspace_id}")
        return self._to_details(db_plan)

    async def get_plan_with_details(self, workspace_id: str, plan_id: int) -> schemas.InstallmentPlanDetails:
        plan = await self._get_plan(workspace_id, plan_id, with_transactions=True)
        return self._to_details(plan)

    async def get_plans(self, workspace_id: str) -> List[schemas.InstallmentPlanDetails]:
        """Get active installment plans, newest first."""
        result = await self.session.execute(
            select(InstallmentPlan)
            .where(
                InstallmentPlan.workspace_id == workspace_id,
                InstallmentPlan.is_active.is_(True),
            )
            .options(selectinload(InstallmentPlan.transactions))
            .order_by(InstallmentPlan.created_at.desc(), InstallmentPlan.id.desc())
        )
        return [self._to_details(plan) for plan in result.scalars().all()]

    async def mark_installment_as_posted(self, workspace_id: str, transaction_id: int) -> Transaction:
        """Mark a planned installment transaction as paid."""
        transactions = TransactionRepository(self.session)
        transaction = await transactions.get_transaction(workspace_id, transaction_id)
        if transaction.installment_plan_id is None:
            raise NotFoundError("Installment not found")
        return await transactions.mark_as_posted(workspace_id, transaction_id)

    async def get_upcoming_installments(
        self,
        workspace_id: str,
        limit: Optional[int] = None,
        today: Optional[date] = None,
    ) -> List[schemas.UpcomingInstallment]:
        """
        Get planned installments due today or later, soonest first.

        Args:
            workspace_id: Workspace to look in
            limit: Maximum number of rows, defaults to UPCOMING_INSTALLMENTS_LIMIT
            today: Reference day, defaults to the current date

        Returns:
            List of upcoming installments
        """
        since = datetime.combine(today or date.today(), time.min)
        result = await self.session.execute(
            select(Transaction)
            .where(
                Transaction.workspace_id == workspace_id,
                Transaction.status == TransactionStatus.PLANNED,
                Transaction.installment_plan_id.is_not(None),
                Transaction.date >= since,
            )
            .options(
                selectinload(Transaction.installment_plan),
                selectinload(Transaction.account),
                selectinload(Transaction.category),
            )
            .order_by(Transaction.date, Transaction.id)
            .limit(limit or settings.UPCOMING_INSTALLMENTS_LIMIT)
        )

        return [
            schemas.UpcomingInstallment(
                transaction_id=t.id,
                plan_id=t.installment_plan_id,
                description=t.installment_plan.description,
                amount=t.amount,
                date=t.date,
                installment_number=t.installment_number,
                installments_count=t.installment_plan.installments_count,
                account_name=t.account.name,
                category_name=t.category.name if t.category else None,
            )
            for t in result.scalars().all()
        ]

    async def cancel_plan(self, workspace_id: str, plan_id: int) -> InstallmentPlan:
        """Deactivate a plan and void its remaining planned installments."""
        plan = await self._get_plan(workspace_id, plan_id)

        plan.is_active = False
        await self.session.execute(
            update(Transaction)
            .where(
                Transaction.installment_plan_id == plan_id,
                Transaction.workspace_id == workspace_id,
                Transaction.status == TransactionStatus.PLANNED,
            )
            .values(status=TransactionStatus.VOID)
        )
        await self.session.commit()
        logger.info(f"Cancelled installment plan {plan_id} in workspace {workspace_id}")
        return plan

    async def delete_plan(self, workspace_id: str, plan_id: int) -> schemas.InstallmentPlanDeletion:
        """
        Delete an installment plan.

        A plan whose installments are all still planned is removed together
        with them, transactions first. Any other plan is cancelled instead so
        posted installments stay in the ledger.
        """
        await self._get_plan(workspace_id, plan_id)

        result = await self.session.execute(
            select(func.count(Transaction.id)).where(
                Transaction.installment_plan_id == plan_id,
                Transaction.status != TransactionStatus.PLANNED,
            )
        )
        if result.scalar():
            await self.cancel_plan(workspace_id, plan_id)
            return schemas.InstallmentPlanDeletion(plan_id=plan_id, hard_deleted=False)

        try:
            await self.session.execute(
                delete(Transaction).where(Transaction.installment_plan_id == plan_id)
            )
            await self.session.execute(
                delete(InstallmentPlan).where(
                    InstallmentPlan.id == plan_id,
                    InstallmentPlan.workspace_id == workspace_id,
                )
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(f"Deleted installment plan {plan_id} in workspace {workspace_id}")
        return schemas.InstallmentPlanDeletion(plan_id=plan_id, hard_deleted=True)
