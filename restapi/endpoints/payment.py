"""Subscription payment endpoints (Stripe)."""

import logging
from typing import Optional
import stripe
from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool

from restapi.dependencies import get_storage, get_stripe
from restapi.endpoints.auth import get_current_user
from tracker.core.schemas import utcnow
from tracker.payment import schemas
from tracker.payment.gateway import InvalidWebhook, StripeGateway, WebhookNotConfigured
from tracker.payment.service import handle_event
from tracker.storage.base import Storage
from tracker.user.schemas import UserInDB

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["payments"])


@router.post("/create-subscription-intent", response_model=schemas.SubscriptionIntent)
async def create_subscription_intent(
    intent: schemas.SubscriptionIntentCreate,
    gateway: StripeGateway = Depends(get_stripe),
    current_user: UserInDB = Depends(get_current_user),
):
    """Create a payment intent for a monthly or annual subscription."""
    try:
        client_secret = await run_in_threadpool(
            gateway.create_payment_intent,
            intent.amount,
            "usd",
            {"planType": intent.plan_type, "userId": str(current_user.id)},
        )
    except stripe.StripeError as e:
        logger.error("Payment intent for user %s failed: %s", current_user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error creating subscription payment intent: {e.user_message or e}",
        ) from e

    return schemas.SubscriptionIntent(client_secret=client_secret)


@router.post("/stripe-webhook", response_model=schemas.WebhookAck)
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(None, alias="Stripe-Signature"),
    gateway: StripeGateway = Depends(get_stripe),
    storage: Storage = Depends(get_storage),
):
    """
    Receive Stripe events.

    The raw body must carry a valid `Stripe-Signature` header. A succeeded
    payment intent with `userId` and `planType` metadata upgrades that user.
    """
    payload = await request.body()
    try:
        event = gateway.parse_webhook(payload, stripe_signature)
    except WebhookNotConfigured as e:
        logger.error("Rejected webhook: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Webhook signing secret is not configured",
        ) from e
    except InvalidWebhook as e:
        logger.warning("Rejected webhook: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    logger.info("Stripe event %s received", event.get("type"))
    await handle_event(storage, event, utcnow())
    return schemas.WebhookAck()
