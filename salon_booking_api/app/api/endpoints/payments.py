"""
Deposit payment endpoint.

Public: the booking page calls it before showing the card form.  The
deposit amount is computed on the server from the catalog price, the
client only names the service.
"""

from fastapi import APIRouter, Depends

from ...schemas.payment import PaymentIntentRead, PaymentIntentRequest
from ...services.payment_service import PaymentService
from ..dependencies import get_payment_service

router = APIRouter()


@router.post("/create-payment-intent", response_model=PaymentIntentRead)
async def create_payment_intent(
    payload: PaymentIntentRequest,
    payments: PaymentService = Depends(get_payment_service),
) -> PaymentIntentRead:
    client_secret = await payments.create_deposit_intent(payload.service_id)
    return PaymentIntentRead(client_secret=client_secret)
