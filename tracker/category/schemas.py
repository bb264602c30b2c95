"""Pydantic schemas for category data validation."""

from typing import ClassVar, Optional, Tuple
from pydantic import Field

from tracker.core.schemas import CamelModel, PartialModel
from tracker.transaction.schemas import TransactionType

HEX_COLOR = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class CategoryBase(CamelModel):
    """Base category schema."""
    name: str = Field(min_length=1, max_length=100)
    type: TransactionType
    color: str = Field(pattern=HEX_COLOR)
    icon: str = Field(min_length=1, max_length=50)


class CategoryCreate(CategoryBase):
    """Schema for category creation."""
    pass


class CategoryUpdate(PartialModel):
    """Schema for partial category update."""
    not_nullable: ClassVar[Tuple[str, ...]] = ("name", "type", "color", "icon")

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    type: Optional[TransactionType] = None
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    icon: Optional[str] = Field(default=None, min_length=1, max_length=50)


class Category(CategoryBase):
    """Schema for category response."""
    id: int
