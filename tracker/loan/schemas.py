"""Pydantic schemas for loan data validation."""

from datetime import datetime
from typing import ClassVar, Literal, Optional, Tuple
from pydantic import Field, computed_field, model_validator

from tracker.analytics.aggregation import loan_progress
from tracker.core.schemas import CamelModel, Money, PartialModel, Rate, UtcDateTime

LoanStatus = Literal["active", "paid", "overdue"]


class LoanBase(CamelModel):
    """Base loan schema."""
    name: str = Field(min_length=1, max_length=100)
    total_amount: Money
    remaining_amount: Money
    interest_rate: Optional[Rate] = None
    monthly_payment: Optional[Money] = None
    due_date: Optional[UtcDateTime] = None
    status: LoanStatus = "active"


class LoanCreate(LoanBase):
    """Schema for loan creation."""

    @model_validator(mode="after")
    def check_amounts(self):
        if self.remaining_amount < 0:
            raise ValueError("remainingAmount must not be negative")
        if self.remaining_amount > self.total_amount:
            raise ValueError("remainingAmount must not exceed totalAmount")
        return self


class LoanUpdate(PartialModel):
    """Schema for partial loan update."""
    not_nullable: ClassVar[Tuple[str, ...]] = ("name", "total_amount", "remaining_amount", "status")

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    total_amount: Optional[Money] = None
    remaining_amount: Optional[Money] = None
    interest_rate: Optional[Rate] = None
    monthly_payment: Optional[Money] = None
    due_date: Optional[UtcDateTime] = None
    status: Optional[LoanStatus] = None


class Loan(LoanBase):
    """Schema for loan response."""
    id: int
    created_at: datetime

    @computed_field
    @property
    def progress(self) -> float:
        """Percent of the loan already paid off."""
        return loan_progress(self.total_amount, self.remaining_amount)
