"""
Pydantic models for deposit payments.

The client sends the catalog id of the service it wants to book and
receives the Stripe client secret used to confirm the card payment in
the browser.
"""

from pydantic import BaseModel, Field


class PaymentIntentRequest(BaseModel):
    service_id: int = Field(..., alias="serviceId", examples=[3])

    model_config = {
        "populate_by_name": True,
    }


class PaymentIntentRead(BaseModel):
    client_secret: str = Field(..., alias="clientSecret")

    model_config = {
        "populate_by_name": True,
    }
