"""
Booking confirmation emails.

The confirmation is a fixed HTML template with the lounge logo and
banner attached inline and referenced as ``cid:logo`` and
``cid:banner``.  The appointment time is written in the business
timezone in the long Canadian English form, e.g.
``Saturday, October 17, 2026 at 2:30 p.m.``.
"""

import html
import logging
from datetime import datetime
from email.mime.image import MIMEImage
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from zoneinfo import ZoneInfo

from fastapi.concurrency import run_in_threadpool

from ..core.errors import IntegrationError
from ..schemas.booking import BookingRequest

logger = logging.getLogger(__name__)

SUBJECT = "Your Appointment is Confirmed!"

# (file name in the assets directory, content id used by the template)
INLINE_IMAGES = (("AWL_Logo.jpg", "logo"), ("AWL_Banner.jpg", "banner"))

TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: auto; padding: 20px; border: 1px solid #eee; border-radius: 10px; color: #333;">
  <div style="text-align: center; margin-bottom: 30px;">
    <img src="cid:logo" alt="AWL Logo" style="max-width: 150px; height: auto;">
  </div>
  <h2 style="text-align: center; color: #2a2a2a;">Appointment Confirmed!</h2>
  <p style="text-align: center;">Hi <strong>{name}</strong>,</p>
  <p style="text-align: center;">Your appointment for <strong>{service}</strong> with <strong>{performer}</strong> is confirmed.</p>
  <div style="background: #f7f7f7; padding: 15px; border-radius: 8px; margin: 20px 0;">
    <p style="margin: 5px 0;"><strong>Date &amp; Time:</strong> {when}</p>
    <p style="margin: 5px 0;"><strong>Provider:</strong> {performer}</p>
    <p style="margin: 5px 0;"><strong>Service:</strong> {service}</p>
  </div>
  <hr style="border: none; border-top: 1px solid #eee; margin: 30px 0;">
  <div style="text-align: center;">
    <img src="cid:banner" alt="AWL Banner" style="max-width: 350px; height: auto;"><br>
    <p style="font-size: 14px; color: #777; text-align: center;">Aesthetics and Wellness Lounge<br>www.awlounge.ca<br>577 Dundas St, Woodstock, ON | 226-796-5138 | awl.jm2@gmail.com</p>
  </div>
</div>
"""


def format_appointment_time(moment: datetime, timezone_name: str) -> str:
    local = moment.astimezone(ZoneInfo(timezone_name))
    hour = local.hour % 12 or 12
    suffix = "a.m." if local.hour < 12 else "p.m."
    return f"{local:%A}, {local:%B} {local.day}, {local.year} at {hour}:{local.minute:02d} {suffix}"


def render_confirmation_html(name: str, service: str, performer: str, when: str) -> str:
    return TEMPLATE.format(
        name=html.escape(name),
        service=html.escape(service),
        performer=html.escape(performer),
        when=html.escape(when),
    )


class NotificationService:
    """Builds and sends booking confirmation emails."""

    def __init__(self, mailer, assets_dir: str, timezone_name: str) -> None:
        self.mailer = mailer
        self.assets_dir = Path(assets_dir)
        self.timezone_name = timezone_name

    def build_confirmation(self, booking: BookingRequest, start: datetime) -> MIMEMultipart:
        """Compose the confirmation message with its inline images.

        Raises ``OSError`` if an image is missing from the assets directory.
        """
        body = render_confirmation_html(
            booking.name,
            booking.service,
            booking.performer,
            format_appointment_time(start, self.timezone_name),
        )
        message = MIMEMultipart("related")
        message["Subject"] = SUBJECT
        message["From"] = self.mailer.sender
        message["To"] = booking.email
        message.attach(MIMEText(body, "html", "utf-8"))
        for filename, content_id in INLINE_IMAGES:
            image = MIMEImage((self.assets_dir / filename).read_bytes(), _subtype="jpeg")
            image.add_header("Content-ID", f"<{content_id}>")
            image.add_header("Content-Disposition", "inline", filename=filename)
            message.attach(image)
        return message

    async def send_booking_confirmation(self, booking: BookingRequest, start: datetime) -> bool:
        """Send the confirmation; return whether it went out.

        Failures are logged and reported through the return value, the
        booking itself already exists in the calendar at this point.
        """
        try:
            message = self.build_confirmation(booking, start)
            await run_in_threadpool(self.mailer.send, message)
        except (IntegrationError, OSError):
            logger.exception("Confirmation email to %s failed", booking.email)
            return False
        return True
