"""Tests for savings goals and contributions."""

from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import select, func

from components.core.exceptions import NotFoundError
from components.goal.models import Goal, GoalContribution
from components.goal.repository import GoalRepository, goal_progress
from components.goal import schemas

WORKSPACE = "ws-main"


def contribution(amount, day=1, note=None):
    return schemas.ContributionCreate(amount=Decimal(amount), date=datetime(2024, 3, day), note=note)


class TestGoalProgress:
    """Tests for the derived goal figures."""

    def test_progress_from_initial_and_contributions(self):
        current, remaining, progress = goal_progress(Decimal("1000"), Decimal("100"), [Decimal("150"), Decimal("50")])
        assert current == Decimal("300.00")
        assert remaining == Decimal("700.00")
        assert progress == Decimal("30.00")

    def test_overshoot_is_capped(self):
        current, remaining, progress = goal_progress(Decimal("500"), Decimal("0"), [Decimal("800")])
        assert current == Decimal("800.00")
        assert remaining == Decimal("0.00")
        assert progress == Decimal("100.00")


class TestGoals:
    """Tests for goal management."""

    async def test_create_and_get_goal(self, session):
        repo = GoalRepository(session)
        goal = await repo.create_goal(
            WORKSPACE,
            schemas.GoalCreate(name="Vacation", target_amount=Decimal("2000"), initial_amount=Decimal("500")),
        )
        await repo.add_contribution(WORKSPACE, goal.id, contribution("250", day=1))
        await repo.add_contribution(WORKSPACE, goal.id, contribution("250", day=20, note="Bonus"))

        details = await repo.get_goal(WORKSPACE, goal.id)
        assert details.current_amount == Decimal("1000.00")
        assert details.remaining_amount == Decimal("1000.00")
        assert details.progress_percent == Decimal("50.00")
        assert details.is_completed is False
        assert [c.note for c in details.contributions] == ["Bonus", None]

    async def test_goal_completes_at_target(self, session):
        repo = GoalRepository(session)
        goal = await repo.create_goal(WORKSPACE, schemas.GoalCreate(name="Bike", target_amount=Decimal("300")))

        await repo.add_contribution(WORKSPACE, goal.id, contribution("299.99"))
        details = await repo.get_goal(WORKSPACE, goal.id)
        assert details.is_completed is False
        assert details.remaining_amount == Decimal("0.01")
        assert details.progress_percent == Decimal("99.99")

        await repo.add_contribution(WORKSPACE, goal.id, contribution("0.01"))
        assert (await repo.get_goal(WORKSPACE, goal.id)).is_completed is True

    async def test_get_goals_newest_first(self, session):
        repo = GoalRepository(session)
        first = await repo.create_goal(WORKSPACE, schemas.GoalCreate(name="First", target_amount=Decimal("10")))
        second = await repo.create_goal(WORKSPACE, schemas.GoalCreate(name="Second", target_amount=Decimal("10")))

        goals = await repo.get_goals(WORKSPACE)
        assert [g.id for g in goals] == [second.id, first.id]
        assert await repo.get_goals("ws-other") == []

    async def test_update_goal(self, session):
        repo = GoalRepository(session)
        goal = await repo.create_goal(WORKSPACE, schemas.GoalCreate(name="Car", target_amount=Decimal("10000")))

        updated = await repo.update_goal(WORKSPACE, goal.id, schemas.GoalUpdate(target_amount=Decimal("8000")))
        assert updated.target_amount == Decimal("8000.00")
        assert updated.name == "Car"

        with pytest.raises(NotFoundError):
            await repo.update_goal("ws-other", goal.id, schemas.GoalUpdate(name="Mine"))

    async def test_delete_goal_removes_contributions(self, session):
        repo = GoalRepository(session)
        goal = await repo.create_goal(WORKSPACE, schemas.GoalCreate(name="Trip", target_amount=Decimal("900")))
        await repo.add_contribution(WORKSPACE, goal.id, contribution("100"))
        await repo.add_contribution(WORKSPACE, goal.id, contribution("200"))

        await repo.delete_goal(WORKSPACE, goal.id)

        assert (await session.execute(select(func.count(Goal.id)))).scalar() == 0
        assert (await session.execute(select(func.count(GoalContribution.id)))).scalar() == 0

    async def test_delete_goal_of_other_workspace(self, session):
        repo = GoalRepository(session)
        goal = await repo.create_goal(WORKSPACE, schemas.GoalCreate(name="Trip", target_amount=Decimal("900")))

        with pytest.raises(NotFoundError):
            await repo.delete_goal("ws-other", goal.id)
        assert (await session.execute(select(func.count(Goal.id)))).scalar() == 1


class TestContributions:
    """Tests for adding and removing contributions."""

    async def test_add_to_unknown_goal(self, session):
        with pytest.raises(NotFoundError):
            await GoalRepository(session).add_contribution(WORKSPACE, 9999, contribution("10"))

    async def test_delete_contribution_is_scoped_by_workspace(self, session):
        repo = GoalRepository(session)
        goal = await repo.create_goal(WORKSPACE, schemas.GoalCreate(name="Trip", target_amount=Decimal("900")))
        added = await repo.add_contribution(WORKSPACE, goal.id, contribution("100"))

        with pytest.raises(NotFoundError):
            await repo.delete_contribution("ws-other", added.id)

        await repo.delete_contribution(WORKSPACE, added.id)
        assert (await session.execute(select(func.count(GoalContribution.id)))).scalar() == 0
