"""Pydantic schemas for budget data validation."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, ClassVar, Literal, Optional, Tuple
from pydantic import AfterValidator, Field, computed_field, model_validator

from tracker.analytics.aggregation import budget_status, percentage_of_target
from tracker.core.schemas import CamelModel, Money, PartialModel, UtcDateTime, quantize_money

BudgetPeriod = Literal["weekly", "monthly", "quarterly", "yearly"]
Threshold = Annotated[Decimal, Field(ge=0, le=1, max_digits=3, decimal_places=2), AfterValidator(quantize_money)]


class BudgetBase(CamelModel):
    """Base budget schema."""
    user_id: int
    name: str = Field(min_length=1, max_length=100)
    category_id: Optional[int] = None
    budget_type: str = Field(default="expense", min_length=1, max_length=20)
    target_amount: Money
    current_amount: Money = Decimal("0.00")
    period: BudgetPeriod
    start_date: UtcDateTime
    end_date: UtcDateTime
    alert_threshold: Threshold = Decimal("0.80")
    is_active: bool = True


class BudgetCreate(BudgetBase):
    """Schema for budget creation."""

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class BudgetUpdate(PartialModel):
    """Schema for partial budget update."""
    not_nullable: ClassVar[Tuple[str, ...]] = (
        "user_id", "name", "budget_type", "target_amount", "current_amount",
        "period", "start_date", "end_date", "alert_threshold", "is_active",
    )

    user_id: Optional[int] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    category_id: Optional[int] = None
    budget_type: Optional[str] = Field(default=None, min_length=1, max_length=20)
    target_amount: Optional[Money] = None
    current_amount: Optional[Money] = None
    period: Optional[BudgetPeriod] = None
    start_date: Optional[UtcDateTime] = None
    end_date: Optional[UtcDateTime] = None
    alert_threshold: Optional[Threshold] = None
    is_active: Optional[bool] = None


class Budget(BudgetBase):
    """Schema for budget response."""
    id: int
    created_at: datetime

    @computed_field
    @property
    def progress(self) -> float:
        """Percent of the target already spent."""
        return percentage_of_target(self.current_amount, self.target_amount)

    @computed_field
    @property
    def status(self) -> str:
        return budget_status(self.progress, self.alert_threshold)
