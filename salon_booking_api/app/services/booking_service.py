"""
Business logic for calendar bookings.

A booking becomes an event in the performer's Google Calendar.  Its
length is the duration of the catalog service with exactly the booked
name whose performer contains the booked performer (ignoring case);
when no such service exists the event lasts ``DEFAULT_DURATION_MINUTES``.

The calendar event is the record of the booking.  The confirmation
email is sent afterwards and a failed email does not fail the booking;
the response reports it through ``emailSent``.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from fastapi.concurrency import run_in_threadpool

from ..core.db import Database
from ..core.errors import IntegrationError, UpstreamFailure
from ..schemas.booking import BookingRequest, BookingResult
from .notification_service import NotificationService

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 60


def build_event(booking: BookingRequest, start: datetime, end: datetime, timezone_name: str) -> Dict[str, Any]:
    """Return the Calendar API event resource for a booking."""
    return {
        "summary": f"Booking: {booking.name} - {booking.service}",
        "description": (
            f"Client: {booking.name}\n"
            f"Phone: {booking.phone}\n"
            f"Email: {booking.email}\n"
            f"Service: {booking.service}\n"
            f"Provider: {booking.performer}"
        ),
        "start": {"dateTime": start.isoformat(), "timeZone": timezone_name},
        "end": {"dateTime": end.isoformat(), "timeZone": timezone_name},
    }


class BookingService:
    def __init__(
        self,
        db: Database,
        calendar,
        notifications: NotificationService,
        timezone_name: str,
    ) -> None:
        self.db = db
        self.calendar = calendar
        self.notifications = notifications
        self.timezone_name = timezone_name

    async def get_availability(self, calendar_id: str, time_min: Optional[str], time_max: Optional[str]) -> Dict[str, Any]:
        """Proxy a free/busy query; the provider's response is returned unchanged."""
        try:
            return await run_in_threadpool(self.calendar.query_freebusy, calendar_id, time_min, time_max)
        except IntegrationError as exc:
            logger.exception("Free/busy error for calendar %s", calendar_id)
            raise UpstreamFailure("Failed to fetch availability") from exc

    def resolve_duration(self, service_name: str, performer: str) -> int:
        with self.db.get_cursor() as cursor:
            row = cursor.execute(
                "SELECT duration FROM services WHERE name = ? AND instr(casefold(performer), casefold(?)) > 0 "
                "ORDER BY id LIMIT 1",
                (service_name, performer),
            ).fetchone()
        if row and row["duration"]:
            return row["duration"]
        return DEFAULT_DURATION_MINUTES

    def localize(self, moment: datetime) -> datetime:
        """Attach the business timezone to naive datetimes."""
        if moment.tzinfo is None:
            return moment.replace(tzinfo=ZoneInfo(self.timezone_name))
        return moment

    async def create_booking(self, calendar_id: str, booking: BookingRequest) -> BookingResult:
        """Insert the calendar event, then send the confirmation email."""
        start = self.localize(booking.date_time)
        try:
            duration = self.resolve_duration(booking.service, booking.performer)
            end = start + timedelta(minutes=duration)
            event = build_event(booking, start, end, self.timezone_name)
            await run_in_threadpool(self.calendar.insert_event, calendar_id, event)
        except Exception as exc:
            logger.exception("Booking error for %s on calendar %s", booking.name, calendar_id)
            raise UpstreamFailure("Failed to create booking") from exc

        email_sent = await self.notifications.send_booking_confirmation(booking, start)
        logger.info(
            "Booking created for %s (%s with %s) on %s, email sent: %s",
            booking.name,
            booking.service,
            booking.performer,
            start.isoformat(),
            email_sent,
        )
        if email_sent:
            return BookingResult(message="Booking confirmed", email_sent=True)
        return BookingResult(
            message="Booking confirmed, but the confirmation email could not be sent",
            email_sent=False,
        )
