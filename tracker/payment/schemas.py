"""Pydantic schemas for subscription payments."""

from pydantic import Field

from tracker.core.schemas import CamelModel
from tracker.subscription.plans import PlanKind


class SubscriptionIntentCreate(CamelModel):
    """Schema for creating a subscription payment intent."""
    plan_type: PlanKind
    amount: int = Field(gt=0, description="Amount in cents")


class SubscriptionIntent(CamelModel):
    client_secret: str


class WebhookAck(CamelModel):
    received: bool = True
