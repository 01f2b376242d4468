"""
Pydantic models for calendar bookings.

``date_time`` accepts any ISO‑8601 string.  Values without an offset
are interpreted in the business timezone by ``BookingService``.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class BookingRequest(BaseModel):
    name: str = Field(..., examples=["Ana Cruz"])
    phone: str = Field(..., examples=["226-555-0134"])
    email: str = Field(..., examples=["ana@example.com"])
    service: str = Field(..., examples=["Manicure - 60min"])
    performer: str = Field(..., examples=["Trechan"])
    date_time: datetime = Field(..., alias="dateTime", examples=["2026-10-17T14:30:00-04:00"])

    model_config = {
        "populate_by_name": True,
    }


class BookingResult(BaseModel):
    success: bool = True
    message: str
    email_sent: bool = Field(..., alias="emailSent")

    model_config = {
        "populate_by_name": True,
    }
