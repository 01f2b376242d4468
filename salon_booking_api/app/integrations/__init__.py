"""
Clients for the external providers the API relies on.

:func:`build_integrations` constructs one client per provider from the
settings when the application starts; :meth:`Integrations.aclose`
releases them at shutdown.  Tests pass their own ``Integrations`` with
fake clients to ``create_app``.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from ..core.config import Settings
from .cloudinary_media import CloudinaryUploader
from .google_calendar import GoogleCalendarClient
from .payments import StripePaymentGateway
from .smtp_mailer import SmtpMailer


@dataclass
class Integrations:
    payments: Any
    calendar: Any
    mailer: Any
    media: Any
    http_client: Optional[httpx.AsyncClient] = field(default=None, repr=False)

    async def aclose(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()


def build_integrations(settings: Settings) -> Integrations:
    http_client = httpx.AsyncClient(timeout=settings.external_timeout_seconds)
    return Integrations(
        payments=StripePaymentGateway(settings.stripe_secret_key),
        calendar=GoogleCalendarClient(
            settings.google_service_account_info,
            timeout=settings.external_timeout_seconds,
        ),
        mailer=SmtpMailer(
            host=settings.email_smtp_server,
            port=settings.email_smtp_port,
            username=settings.email_user,
            password=settings.email_pass,
            timeout=settings.external_timeout_seconds,
        ),
        media=CloudinaryUploader(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            client=http_client,
        ),
        http_client=http_client,
    )
