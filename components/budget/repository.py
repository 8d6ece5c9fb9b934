"""Repository for budget configuration operations."""

from typing import List, Sequence

from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from components.budget.models import BudgetGroup, BudgetCategory, IncomeCategory
from components.budget import schemas
from components.core.database import atomic_insert
from components.core.exceptions import NotFoundError
from components.core.logging_config import get_logger
from components.core.money import round_money, validate_percentages
from components.core.schemas import PercentageValidation

logger = get_logger(__name__)

DEFAULT_GROUPS = (
    {"name": "Essentials", "default_percent": 50, "color": "#8b5cf6"},
    {"name": "Lifestyle", "default_percent": 30, "color": "#ec4899"},
    {"name": "Investments", "default_percent": 20, "color": "#10b981"},
)

DEFAULT_INCOME_CATEGORIES = (
    {"name": "Salary", "icon": "💼", "color": "#22c55e"},
    {"name": "Freelance", "icon": "💻", "color": "#3b82f6"},
    {"name": "Investments", "icon": "📈", "color": "#8b5cf6"},
    {"name": "Gift", "icon": "🎁", "color": "#ec4899"},
    {"name": "Refund", "icon": "↩️", "color": "#f97316"},
    {"name": "Other", "icon": "📦", "color": "#6b7280"},
)


class BudgetRepository:
    """Repository for budget groups, expense categories and income categories."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    # Budget groups

    async def get_group(self, workspace_id: str, group_id: int) -> BudgetGroup:
        """Get a group of the workspace or raise NotFoundError."""
        result = await self.session.execute(
            select(BudgetGroup).where(
                BudgetGroup.id == group_id,
                BudgetGroup.workspace_id == workspace_id,
            )
        )
        group = result.scalar_one_or_none()
        if group is None:
            raise NotFoundError("Budget group not found")
        return group

    async def get_groups(self, workspace_id: str) -> List[schemas.BudgetGroupWithCategories]:
        """Get active budget groups with their active categories."""
        result = await self.session.execute(
            select(BudgetGroup)
            .where(
                BudgetGroup.workspace_id == workspace_id,
                BudgetGroup.is_active.is_(True),
            )
            .options(selectinload(BudgetGroup.categories))
            .order_by(BudgetGroup.sort_order)
        )
        groups = result.scalars().all()

        return [
            schemas.BudgetGroupWithCategories(
                id=group.id,
                name=group.name,
                default_percent=group.default_percent,
                color=group.color,
                sort_order=group.sort_order,
                is_active=group.is_active,
                categories=[
                    schemas.BudgetCategory.model_validate(category)
                    for category in sorted(group.categories, key=lambda c: c.name)
                    if category.is_active
                ],
            )
            for group in groups
        ]

    async def create_group(self, workspace_id: str, group: schemas.BudgetGroupCreate) -> BudgetGroup:
        """Create a group placed after the existing ones."""
        result = await self.session.execute(
            select(func.max(BudgetGroup.sort_order)).where(BudgetGroup.workspace_id == workspace_id)
        )
        max_order = result.scalar() or 0

        db_group = BudgetGroup(
            workspace_id=workspace_id,
            name=group.name,
            default_percent=round_money(group.default_percent),
            color=group.color,
            sort_order=max_order + 1,
            is_active=True,
        )
        self.session.add(db_group)
        await self.session.commit()
        return db_group

    async def update_group(
        self, workspace_id: str, group_id: int, group: schemas.BudgetGroupUpdate
    ) -> BudgetGroup:
        """Update a group; a new default percent only affects months not yet snapshotted."""
        db_group = await self.get_group(workspace_id, group_id)

        data = group.changes()
        if data.get("default_percent") is not None:
            data["default_percent"] = round_money(data["default_percent"])
        for field, value in data.items():
            setattr(db_group, field, value)

        await self.session.commit()
        return db_group

    async def update_group_percentages(
        self, workspace_id: str, percentages: Sequence[schemas.GroupPercentage]
    ) -> PercentageValidation:
        """
        Update the default percent of several groups at once.

        The returned validation is advisory: totals other than 100 are saved too.
        """
        validation = validate_percentages(p.percent for p in percentages)

        for p in percentages:
            await self.session.execute(
                update(BudgetGroup)
                .where(
                    BudgetGroup.id == p.group_id,
                    BudgetGroup.workspace_id == workspace_id,
                )
                .values(default_percent=round_money(p.percent))
            )
        await self.session.commit()
        return validation

    async def delete_group(self, workspace_id: str, group_id: int) -> None:
        """Soft delete a group; existing snapshots keep their allocation."""
        db_group = await self.get_group(workspace_id, group_id)
        db_group.is_active = False
        await self.session.commit()
        logger.info(f"Deactivated budget group {group_id} in workspace {workspace_id}")

    async def seed_default_groups(self, workspace_id: str) -> List[BudgetGroup]:
        """Create the default 50/30/20 groups for a workspace that has none."""
        result = await self.session.execute(
            select(func.count(BudgetGroup.id)).where(BudgetGroup.workspace_id == workspace_id)
        )
        if result.scalar():
            return []

        groups = [
            BudgetGroup(
                workspace_id=workspace_id,
                name=data["name"],
                default_percent=round_money(data["default_percent"]),
                color=data["color"],
                sort_order=index,
                is_active=True,
            )
            for index, data in enumerate(DEFAULT_GROUPS, start=1)
        ]
        await atomic_insert(self.session, groups)
        return groups

    # Expense categories

    async def get_category(self, workspace_id: str, category_id: int) -> BudgetCategory:
        """Get a category of the workspace or raise NotFoundError."""
        result = await self.session.execute(
            select(BudgetCategory).where(
                BudgetCategory.id == category_id,
                BudgetCategory.workspace_id == workspace_id,
            )
        )
        category = result.scalar_one_or_none()
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def create_category(
        self, workspace_id: str, category: schemas.BudgetCategoryCreate
    ) -> BudgetCategory:
        """Create a category inside one of the workspace's groups."""
        await self.get_group(workspace_id, category.group_id)

        db_category = BudgetCategory(
            workspace_id=workspace_id,
            group_id=category.group_id,
            name=category.name,
            icon=category.icon,
            is_active=True,
        )
        self.session.add(db_category)
        await self.session.commit()
        return db_category

    async def update_category(
        self, workspace_id: str, category_id: int, category: schemas.BudgetCategoryUpdate
    ) -> BudgetCategory:
        db_category = await self.get_category(workspace_id, category_id)
        for field, value in category.changes().items():
            setattr(db_category, field, value)
        await self.session.commit()
        return db_category

    async def delete_category(self, workspace_id: str, category_id: int) -> None:
        """Soft delete a category; its past spending still counts for its group."""
        db_category = await self.get_category(workspace_id, category_id)
        db_category.is_active = False
        await self.session.commit()

    # Income categories

    async def get_income_category(self, workspace_id: str, category_id: int) -> IncomeCategory:
        result = await self.session.execute(
            select(IncomeCategory).where(
                IncomeCategory.id == category_id,
                IncomeCategory.workspace_id == workspace_id,
            )
        )
        category = result.scalar_one_or_none()
        if category is None:
            raise NotFoundError("Income category not found")
        return category

    async def get_income_categories(self, workspace_id: str) -> List[IncomeCategory]:
        result = await self.session.execute(
            select(IncomeCategory)
            .where(
                IncomeCategory.workspace_id == workspace_id,
                IncomeCategory.is_active.is_(True),
            )
            .order_by(IncomeCategory.name)
        )
        return list(result.scalars().all())

    async def create_income_category(
        self, workspace_id: str, category: schemas.IncomeCategoryCreate
    ) -> IncomeCategory:
        db_category = IncomeCategory(
            workspace_id=workspace_id,
            name=category.name,
            icon=category.icon,
            color=category.color,
            is_active=True,
        )
        self.session.add(db_category)
        await self.session.commit()
        return db_category

    async def update_income_category(
        self, workspace_id: str, category_id: int, category: schemas.IncomeCategoryUpdate
    ) -> IncomeCategory:
        db_category = await self.get_income_category(workspace_id, category_id)
        for field, value in category.changes().items():
            setattr(db_category, field, value)
        await self.session.commit()
        return db_category

    async def delete_income_category(self, workspace_id: str, category_id: int) -> None:
        db_category = await self.get_income_category(workspace_id, category_id)
        db_category.is_active = False
        await self.session.commit()

    async def seed_default_income_categories(self, workspace_id: str) -> List[IncomeCategory]:
        """Create the default income categories, skipping names already in use."""
        result = await self.session.execute(
            select(IncomeCategory.name).where(IncomeCategory.workspace_id == workspace_id)
        )
        existing = set(result.scalars().all())

        categories = [
            IncomeCategory(workspace_id=workspace_id, is_active=True, **data)
            for data in DEFAULT_INCOME_CATEGORIES
            if data["name"] not in existing
        ]
        if categories:
            await atomic_insert(self.session, categories)
        return categories

