"""Applies verified payment events to user subscriptions."""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from tracker.storage.base import Storage
from tracker.subscription.plans import PAID_PERIOD_DAYS
from tracker.user.schemas import UserInDB

logger = logging.getLogger(__name__)


async def handle_event(storage: Storage, event: Dict[str, Any], now: datetime) -> Optional[UserInDB]:
    """Mark the paying user as subscribed when a payment intent succeeds.

    Returns the updated user, or None when the event needs no action.
    """
    event_type = event.get("type")
    if event_type != "payment_intent.succeeded":
        logger.debug("Ignoring Stripe event %s", event_type)
        return None

    intent = (event.get("data") or {}).get("object") or {}
    metadata = intent.get("metadata") or {}
    plan_type = metadata.get("planType")
    user_id = metadata.get("userId")

    if plan_type not in PAID_PERIOD_DAYS or not str(user_id or "").isdigit():
        logger.warning("Payment %s succeeded without usable plan metadata", intent.get("id"))
        return None

    updates = {
        "subscription_status": plan_type,
        "subscription_expires_at": now + timedelta(days=PAID_PERIOD_DAYS[plan_type]),
    }
    if intent.get("customer"):
        updates["stripe_customer_id"] = intent["customer"]

    user = await storage.update_user(int(user_id), updates)
    if user is None:
        logger.warning("Payment %s references unknown user %s", intent.get("id"), user_id)
        return None

    logger.info("Payment succeeded for user %s, plan %s", user.id, plan_type)
    return user
