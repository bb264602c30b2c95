"""Pydantic schemas for goal data validation."""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Literal, Optional, Tuple
from pydantic import Field, computed_field

from tracker.analytics.aggregation import percentage_of_target
from tracker.core.schemas import CamelModel, Money, PartialModel, UtcDateTime

GoalPriority = Literal["low", "medium", "high"]
GoalStatus = Literal["active", "completed", "paused"]


class GoalBase(CamelModel):
    """Base goal schema."""
    user_id: int
    title: str = Field(min_length=1, max_length=100)
    goal_type: str = Field(default="savings", min_length=1, max_length=30)
    target_amount: Money
    current_amount: Money = Decimal("0.00")
    target_date: Optional[UtcDateTime] = None
    priority: GoalPriority = "medium"
    status: GoalStatus = "active"
    auto_contribute: bool = False
    monthly_contribution: Optional[Money] = None


class GoalCreate(GoalBase):
    """Schema for goal creation."""
    pass


class GoalUpdate(PartialModel):
    """Schema for partial goal update."""
    not_nullable: ClassVar[Tuple[str, ...]] = (
        "user_id", "title", "goal_type", "target_amount", "current_amount",
        "priority", "status", "auto_contribute",
    )

    user_id: Optional[int] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    goal_type: Optional[str] = Field(default=None, min_length=1, max_length=30)
    target_amount: Optional[Money] = None
    current_amount: Optional[Money] = None
    target_date: Optional[UtcDateTime] = None
    priority: Optional[GoalPriority] = None
    status: Optional[GoalStatus] = None
    auto_contribute: Optional[bool] = None
    monthly_contribution: Optional[Money] = None


class Goal(GoalBase):
    """Schema for goal response."""
    id: int
    created_at: datetime

    @computed_field
    @property
    def progress(self) -> float:
        return percentage_of_target(self.current_amount, self.target_amount)
