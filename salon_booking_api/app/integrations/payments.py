"""
Stripe payment gateway.

Wraps the ``stripe`` SDK behind a small object so the payment service
can be given a fake in tests.  The API key is passed per call instead
of being assigned to the module‑global ``stripe.api_key``.
"""

import logging

import stripe

from ..core.errors import IntegrationError

logger = logging.getLogger(__name__)


class StripePaymentGateway:
    """Creates payment intents with Stripe."""

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    def create_payment_intent(self, amount: int, currency: str, description: str) -> str:
        """Create a payment intent and return its client secret.

        ``amount`` is in the currency's minor unit.  Blocking; callers
        on the event loop should run it in the threadpool.
        """
        if not self._api_key:
            raise IntegrationError("Stripe secret key not configured")
        try:
            intent = stripe.PaymentIntent.create(
                api_key=self._api_key,
                amount=amount,
                currency=currency,
                description=description,
            )
        except stripe.StripeError as exc:
            raise IntegrationError(f"Stripe API error: {exc}") from exc
        logger.info("Created payment intent %s for %s %s", intent.id, amount, currency)
        return intent.client_secret
