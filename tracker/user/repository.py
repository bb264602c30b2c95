"""Repository for user operations."""

from typing import Any, Dict, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.user.models import User
from tracker.user.schemas import UserCreate


class UserRepository:
    """Repository for user operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def create(self, user: UserCreate, password_hash: str) -> User:
        """Create a new user with an already hashed password."""
        db_user = User(
            username=user.username,
            password=password_hash,
            email=user.email,
        )
        self.session.add(db_user)
        await self.session.commit()
        await self.session.refresh(db_user)
        return db_user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def update(self, user_id: int, updates: Dict[str, Any]) -> Optional[User]:
        """Update user fields by ID."""
        db_user = await self.get_by_id(user_id)
        if not db_user:
            return None

        for field, value in updates.items():
            setattr(db_user, field, value)

        await self.session.commit()
        await self.session.refresh(db_user)
        return db_user
