"""Repository for category operations."""

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.category.models import Category
from tracker.category.schemas import CategoryCreate


class CategoryRepository:
    """Repository for category operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_all(self) -> List[Category]:
        result = await self.session.execute(select(Category).order_by(Category.id))
        return list(result.scalars().all())

    async def get_by_type(self, category_type: str) -> List[Category]:
        result = await self.session.execute(
            select(Category).where(Category.type == category_type).order_by(Category.id)
        )
        return list(result.scalars().all())

    async def get_by_id(self, category_id: int) -> Optional[Category]:
        result = await self.session.execute(
            select(Category).where(Category.id == category_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[Category]:
        result = await self.session.execute(
            select(Category).where(Category.name == name)
        )
        return result.scalar_one_or_none()

    async def any_exists(self) -> bool:
        """Check whether the table holds at least one row."""
        result = await self.session.execute(select(Category.id).limit(1))
        return result.scalar_one_or_none() is not None

    async def create(self, category: CategoryCreate) -> Category:
        db_category = Category(**category.model_dump())
        self.session.add(db_category)
        await self.session.commit()
        await self.session.refresh(db_category)
        return db_category

    async def create_many(self, categories: Iterable[CategoryCreate]) -> int:
        """Insert several categories in one commit."""
        rows = [Category(**category.model_dump()) for category in categories]
        self.session.add_all(rows)
        await self.session.commit()
        return len(rows)

    async def update(self, category_id: int, updates: Dict[str, Any]) -> Optional[Category]:
        db_category = await self.get_by_id(category_id)
        if not db_category:
            return None

        for field, value in updates.items():
            setattr(db_category, field, value)

        await self.session.commit()
        await self.session.refresh(db_category)
        return db_category

    async def delete(self, category_id: int) -> bool:
        db_category = await self.get_by_id(category_id)
        if not db_category:
            return False

        await self.session.delete(db_category)
        await self.session.commit()
        return True
