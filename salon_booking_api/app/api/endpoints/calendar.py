"""
Availability and booking endpoints backed by Google Calendar.

``calendarId`` is the Google Calendar id of the performer's calendar;
the booking page knows which calendar belongs to which performer.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ...schemas.booking import BookingRequest, BookingResult
from ...services.booking_service import BookingService
from ..dependencies import get_booking_service

router = APIRouter()


@router.get("/freebusy/{calendar_id}")
async def get_freebusy(
    calendar_id: str,
    time_min: Optional[str] = Query(None, alias="timeMin"),
    time_max: Optional[str] = Query(None, alias="timeMax"),
    bookings: BookingService = Depends(get_booking_service),
) -> Dict[str, Any]:
    """Return Google's free/busy response for the calendar unchanged."""
    return await bookings.get_availability(calendar_id, time_min, time_max)


@router.post("/book/{calendar_id}", response_model=BookingResult)
async def book_appointment(
    calendar_id: str,
    booking: BookingRequest,
    bookings: BookingService = Depends(get_booking_service),
) -> BookingResult:
    """Create the calendar event and email the client a confirmation.

    A failed email does not undo the booking; ``emailSent`` tells the
    page whether the confirmation went out.
    """
    return await bookings.create_booking(calendar_id, booking)
