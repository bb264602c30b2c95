"""Stripe payment-intent creation and webhook verification."""

import json
import logging
from typing import Any, Dict, Optional

import stripe

logger = logging.getLogger(__name__)

# Seconds a signed webhook stays acceptable
WEBHOOK_TOLERANCE = 300


class WebhookNotConfigured(Exception):
    """No signing secret is configured, so no event can be trusted."""


class InvalidWebhook(Exception):
    """Payload or signature did not verify."""


class StripeGateway:
    """Thin wrapper over the Stripe SDK so endpoints can be tested without it."""

    def __init__(self, secret_key: str, webhook_secret: Optional[str] = None) -> None:
        self.secret_key = secret_key
        self.webhook_secret = webhook_secret

    def create_payment_intent(self, amount: int, currency: str, metadata: Dict[str, str]) -> str:
        """Create a payment intent and return its client secret."""
        intent = stripe.PaymentIntent.create(
            api_key=self.secret_key,
            amount=amount,  # Smallest currency unit
            currency=currency,
            metadata=metadata,
        )
        return intent["client_secret"]

    def parse_webhook(self, payload: bytes, signature: Optional[str]) -> Dict[str, Any]:
        """Verify the Stripe-Signature header and decode the event."""
        if not self.webhook_secret:
            raise WebhookNotConfigured("STRIPE_WEBHOOK_SECRET is not set")
        if not signature:
            raise InvalidWebhook("Missing Stripe-Signature header")

        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                body, signature, self.webhook_secret, WEBHOOK_TOLERANCE
            )
            return json.loads(body)
        except stripe.SignatureVerificationError as e:
            raise InvalidWebhook(f"Signature verification failed: {e}") from e
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise InvalidWebhook(f"Invalid payload: {e}") from e
