"""Pydantic schemas for transaction data validation."""

from datetime import datetime
from typing import ClassVar, List, Literal, Optional, Tuple
from pydantic import Field

from tracker.core.schemas import CamelModel, Money, PartialModel, UtcDateTime

TransactionType = Literal["income", "expense", "business", "loan"]

INCOME_TYPES = ("income",)
EXPENSE_TYPES = ("expense", "business", "loan")


class TransactionBase(CamelModel):
    """Base transaction schema."""
    type: TransactionType
    amount: Money
    category: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=1000)
    date: UtcDateTime


class TransactionCreate(TransactionBase):
    """Schema for transaction creation."""
    pass


class TransactionUpdate(PartialModel):
    """Schema for partial transaction update."""
    not_nullable: ClassVar[Tuple[str, ...]] = ("type", "amount", "category", "description", "date")

    type: Optional[TransactionType] = None
    amount: Optional[Money] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    date: Optional[UtcDateTime] = None


class Transaction(TransactionBase):
    """Schema for transaction response."""
    id: int
    created_at: datetime


class ImportRowError(CamelModel):
    """Schema for one rejected CSV row."""
    row: int
    message: str


class ImportResponse(CamelModel):
    """Schema for CSV import response."""
    success: bool
    message: str
    imported: int = 0
    errors: Optional[List[ImportRowError]] = None
