"""Repository for goal operations."""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.goal.models import Goal
from tracker.goal.schemas import GoalCreate


class GoalRepository:
    """Repository for goal operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_all(self, user_id: Optional[int] = None) -> List[Goal]:
        query = select(Goal)
        if user_id is not None:
            query = query.where(Goal.user_id == user_id)
        result = await self.session.execute(query.order_by(Goal.id))
        return list(result.scalars().all())

    async def get_by_id(self, goal_id: int) -> Optional[Goal]:
        result = await self.session.execute(select(Goal).where(Goal.id == goal_id))
        return result.scalar_one_or_none()

    async def create(self, goal: GoalCreate) -> Goal:
        db_goal = Goal(**goal.model_dump())
        self.session.add(db_goal)
        await self.session.commit()
        await self.session.refresh(db_goal)
        return db_goal

    async def update(self, goal_id: int, updates: Dict[str, Any]) -> Optional[Goal]:
        db_goal = await self.get_by_id(goal_id)
        if not db_goal:
            return None

        for field, value in updates.items():
            setattr(db_goal, field, value)

        await self.session.commit()
        await self.session.refresh(db_goal)
        return db_goal

    async def delete(self, goal_id: int) -> bool:
        db_goal = await self.get_by_id(goal_id)
        if not db_goal:
            return False

        await self.session.delete(db_goal)
        await self.session.commit()
        return True
