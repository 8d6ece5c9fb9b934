"""Repository for savings goal operations."""

from decimal import Decimal
from typing import List, Iterable

from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from components.core.exceptions import NotFoundError
from components.core.logging_config import get_logger
from components.core.money import ZERO, progress_percent, round_money, to_decimal
from components.goal.models import Goal, GoalContribution
from components.goal import schemas

logger = get_logger(__name__)


def goal_progress(target: Decimal, initial: Decimal, contributions: Iterable[Decimal]):
    """
    Derive current amount, remaining amount and progress percent of a goal.

    Returns:
        Tuple of (current, remaining, progress) where remaining never goes
        below zero and progress is capped at 100
    """
    current = round_money(to_decimal(initial) + sum((to_decimal(a) for a in contributions), ZERO))
    remaining = max(ZERO, round_money(to_decimal(target) - current))
    return current, remaining, progress_percent(current, target)


class GoalRepository:
    """Repository for goals and their contributions."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _get_goal(self, workspace_id: str, goal_id: int, with_contributions: bool = False) -> Goal:
        query = select(Goal).where(Goal.id == goal_id, Goal.workspace_id == workspace_id)
        if with_contributions:
            query = query.options(selectinload(Goal.contributions))
        result = await self.session.execute(query)
        goal = result.scalar_one_or_none()
        if goal is None:
            raise NotFoundError("Goal not found")
        return goal

    @staticmethod
    def _with_progress(goal: Goal) -> schemas.GoalWithProgress:
        current, remaining, progress = goal_progress(
            goal.target_amount, goal.initial_amount, (c.amount for c in goal.contributions)
        )
        return schemas.GoalWithProgress(
            id=goal.id,
            name=goal.name,
            target_amount=goal.target_amount,
            initial_amount=goal.initial_amount,
            color=goal.color,
            icon=goal.icon,
            is_completed=goal.is_completed,
            current_amount=current,
            remaining_amount=remaining,
            progress_percent=progress,
            contributions=[schemas.Contribution.model_validate(c) for c in goal.contributions],
        )

    async def get_goals(self, workspace_id: str) -> List[schemas.GoalWithProgress]:
        """Get all goals with their progress, newest first."""
        result = await self.session.execute(
            select(Goal)
            .where(Goal.workspace_id == workspace_id)
            .options(selectinload(Goal.contributions))
            .order_by(Goal.created_at.desc(), Goal.id.desc())
        )
        return [self._with_progress(goal) for goal in result.scalars().all()]

    async def get_goal(self, workspace_id: str, goal_id: int) -> schemas.GoalWithProgress:
        goal = await self._get_goal(workspace_id, goal_id, with_contributions=True)
        return self._with_progress(goal)

    async def create_goal(self, workspace_id: str, goal: schemas.GoalCreate) -> Goal:
        db_goal = Goal(
            workspace_id=workspace_id,
            name=goal.name,
            target_amount=round_money(goal.target_amount),
            initial_amount=round_money(goal.initial_amount),
            color=goal.color,
            icon=goal.icon,
            is_completed=False,
        )
        self.session.add(db_goal)
        await self.session.commit()
        return db_goal

    async def update_goal(self, workspace_id: str, goal_id: int, goal: schemas.GoalUpdate) -> Goal:
        db_goal = await self._get_goal(workspace_id, goal_id)

        data = goal.changes()
        for field in ("target_amount", "initial_amount"):
            if data.get(field) is not None:
                data[field] = round_money(data[field])
        for field, value in data.items():
            setattr(db_goal, field, value)

        await self.session.commit()
        return db_goal

    async def delete_goal(self, workspace_id: str, goal_id: int) -> None:
        """Delete a goal together with its contributions in one commit."""
        await self._get_goal(workspace_id, goal_id)

        try:
            await self.session.execute(delete(GoalContribution).where(GoalContribution.goal_id == goal_id))
            await self.session.execute(
                delete(Goal).where(Goal.id == goal_id, Goal.workspace_id == workspace_id)
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info(f"Deleted goal {goal_id} in workspace {workspace_id}")

    async def add_contribution(
        self, workspace_id: str, goal_id: int, contribution: schemas.ContributionCreate
    ) -> GoalContribution:
        """
        Add a contribution to a goal.

        The goal is marked completed in the same commit once the saved amount
        reaches its target.
        """
        db_goal = await self._get_goal(workspace_id, goal_id)

        db_contribution = GoalContribution(
            goal_id=goal_id,
            amount=round_money(contribution.amount),
            date=contribution.date,
            note=contribution.note,
        )
        self.session.add(db_contribution)
        await self.session.flush()

        result = await self.session.execute(
            select(func.coalesce(func.sum(GoalContribution.amount), 0)).where(GoalContribution.goal_id == goal_id)
        )
        current, _, _ = goal_progress(db_goal.target_amount, db_goal.initial_amount, [result.scalar() or 0])
        if current >= db_goal.target_amount and not db_goal.is_completed:
            db_goal.is_completed = True
            logger.info(f"Goal {goal_id} in workspace {workspace_id} completed")

        await self.session.commit()
        return db_contribution

    async def delete_contribution(self, workspace_id: str, contribution_id: int) -> None:
        """Delete a contribution that belongs to a goal of the workspace."""
        result = await self.session.execute(
            select(GoalContribution)
            .join(Goal, GoalContribution.goal_id == Goal.id)
            .where(
                GoalContribution.id == contribution_id,
                Goal.workspace_id == workspace_id,
            )
        )
        contribution = result.scalar_one_or_none()
        if contribution is None:
            raise NotFoundError("Contribution not found")

        await self.session.delete(contribution)
        await self.session.commit()
