"""
Business logic for booking deposits.

A client pays a deposit of 25 % of the service price up front.  The
amount is computed in cents and rounded half up, so a 6000 service
takes a 1500 deposit and a 6002 service a 1501 deposit.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from fastapi.concurrency import run_in_threadpool

from ..core.db import Database
from ..core.errors import IntegrationError, UpstreamFailure, ValidationFailed

logger = logging.getLogger(__name__)

DEPOSIT_RATE = Decimal("0.25")


def compute_deposit(price: int) -> int:
    """Return the deposit in cents for a price in cents."""
    return int((Decimal(price) * DEPOSIT_RATE).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentService:
    """Creates deposit payment intents for catalog services."""

    def __init__(self, db: Database, gateway, currency: str) -> None:
        self.db = db
        self.gateway = gateway
        self.currency = currency

    async def create_deposit_intent(self, service_id: int) -> str:
        """Create a payment intent for a service's deposit.

        Returns the client secret.  An unknown service is a client error
        (400); a processor failure is reported as a generic 500.
        """
        with self.db.get_cursor() as cursor:
            row = cursor.execute("SELECT id, name, price FROM services WHERE id = ?", (service_id,)).fetchone()
        if not row:
            raise ValidationFailed("Service not found")
        amount = compute_deposit(row["price"])
        try:
            return await run_in_threadpool(
                self.gateway.create_payment_intent,
                amount=amount,
                currency=self.currency,
                description=f"25% deposit for {row['name']}",
            )
        except IntegrationError as exc:
            logger.exception("Payment intent error for service %s", service_id)
            raise UpstreamFailure("Failed to create payment intent") from exc
