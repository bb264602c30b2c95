"""Pydantic schemas for user data validation."""

from datetime import datetime
from typing import Literal, Optional
from pydantic import Field

from tracker.core.schemas import CamelModel

SubscriptionStatus = Literal["free", "monthly_trial", "annual_trial", "monthly", "annual"]


class UserCreate(CamelModel):
    """Schema for user registration."""
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6, max_length=128)
    email: Optional[str] = Field(default=None, max_length=255)


class User(CamelModel):
    """Schema for user response. Secrets are never part of it."""
    id: int
    username: str
    email: Optional[str] = None
    subscription_status: SubscriptionStatus = "free"
    trial_started_at: Optional[datetime] = None
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    subscription_expires_at: Optional[datetime] = None
    plaid_item_id: Optional[str] = None
    created_at: datetime


class UserInDB(User):
    """Schema for user as stored, including the password hash."""
    password: str
    plaid_access_token: Optional[str] = None


class UserWithToken(User):
    """Schema for user with a bearer token."""
    access_token: str
    token_type: str = "bearer"
