"""Repository for budget operations."""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.budget.models import Budget
from tracker.budget.schemas import BudgetCreate


class BudgetRepository:
    """Repository for budget operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_all(self, user_id: Optional[int] = None) -> List[Budget]:
        """Get budgets, optionally only those of one user."""
        query = select(Budget)
        if user_id is not None:
            query = query.where(Budget.user_id == user_id)
        result = await self.session.execute(query.order_by(Budget.id))
        return list(result.scalars().all())

    async def get_by_id(self, budget_id: int) -> Optional[Budget]:
        result = await self.session.execute(select(Budget).where(Budget.id == budget_id))
        return result.scalar_one_or_none()

    async def create(self, budget: BudgetCreate) -> Budget:
        db_budget = Budget(**budget.model_dump())
        self.session.add(db_budget)
        await self.session.commit()
        await self.session.refresh(db_budget)
        return db_budget

    async def update(self, budget_id: int, updates: Dict[str, Any]) -> Optional[Budget]:
        db_budget = await self.get_by_id(budget_id)
        if not db_budget:
            return None

        for field, value in updates.items():
            setattr(db_budget, field, value)

        await self.session.commit()
        await self.session.refresh(db_budget)
        return db_budget

    async def delete(self, budget_id: int) -> bool:
        db_budget = await self.get_by_id(budget_id)
        if not db_budget:
            return False

        await self.session.delete(db_budget)
        await self.session.commit()
        return True
