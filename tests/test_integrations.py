# These tests cover the provider clients and the pure helpers around
# them, with the SDKs and the network patched out.

from __future__ import annotations

import asyncio
import hashlib
from datetime import UTC, datetime
from email.mime.text import MIMEText
from unittest.mock import MagicMock, patch

import httpx
import pytest
import stripe

from salon_booking_api.app.core.errors import IntegrationError
from salon_booking_api.app.integrations.cloudinary_media import CloudinaryUploader, sign_params
from salon_booking_api.app.integrations.google_calendar import GoogleCalendarClient
from salon_booking_api.app.integrations.payments import StripePaymentGateway
from salon_booking_api.app.integrations.smtp_mailer import SmtpMailer
from salon_booking_api.app.services.image_service import public_id_for
from salon_booking_api.app.services.notification_service import (
    format_appointment_time,
    render_confirmation_html,
)


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (datetime(2026, 10, 17, 18, 30, tzinfo=UTC), "Saturday, October 17, 2026 at 2:30 p.m."),
        (datetime(2026, 1, 5, 5, 5, tzinfo=UTC), "Monday, January 5, 2026 at 12:05 a.m."),
        (datetime(2026, 7, 1, 16, 0, tzinfo=UTC), "Wednesday, July 1, 2026 at 12:00 p.m."),
    ],
)
def test_format_appointment_time_in_business_zone(moment: datetime, expected: str) -> None:
    assert format_appointment_time(moment, "America/Toronto") == expected


def test_confirmation_html_escapes_client_values() -> None:
    body = render_confirmation_html("<b>Ana</b>", "Facial", "Jessa", "today")

    assert "&lt;b&gt;Ana&lt;/b&gt;" in body
    assert "<b>Ana</b>" not in body
    assert 'src="cid:logo"' in body


@pytest.mark.parametrize(
    ("filename", "public_id"),
    [
        ("Lash Lift 2.png", "Lash_Lift_2"),
        ("C:\\Users\\staff\\brow  after.jpeg", "brow_after"),
        ("facial.tar.gz", "facial.tar"),
    ],
)
def test_public_id_for(filename: str, public_id: str) -> None:
    assert public_id_for(filename) == public_id


def test_sign_params_sorts_and_skips_empty_values() -> None:
    params = {"timestamp": "1700000000", "public_id": "Lash_Lift_2", "folder": "awl_services", "tags": ""}

    expected = hashlib.sha1(
        b"folder=awl_services&public_id=Lash_Lift_2&timestamp=1700000000secret"
    ).hexdigest()
    assert sign_params(params, "secret") == expected


def _run(coro):
    return asyncio.run(coro)


def test_cloudinary_upload_posts_signed_form() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"secure_url": "https://res.cloudinary.com/demo/image/upload/x.jpg"})

    async def upload() -> str:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            uploader = CloudinaryUploader("demo", "key", "secret", client=client)
            return await uploader.upload(b"img", filename="x.png", folder="awl_services", public_id="x")

    assert _run(upload()) == "https://res.cloudinary.com/demo/image/upload/x.jpg"
    request = seen[0]
    assert str(request.url) == "https://api.cloudinary.com/v1_1/demo/image/upload"
    body = request.content
    assert b'name="signature"' in body
    assert b'name="api_key"' in body
    assert b"awl_services" in body


def test_cloudinary_error_status_raises_integration_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "Invalid Signature"}})

    async def upload() -> str:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            uploader = CloudinaryUploader("demo", "key", "secret", client=client)
            return await uploader.upload(b"img", filename="x.png", folder="f", public_id="x")

    with pytest.raises(IntegrationError):
        _run(upload())


def test_cloudinary_requires_credentials() -> None:
    async def upload() -> str:
        async with httpx.AsyncClient() as client:
            return await CloudinaryUploader("", "", "", client=client).upload(
                b"img", filename="x.png", folder="f", public_id="x"
            )

    with pytest.raises(IntegrationError):
        _run(upload())


def test_stripe_gateway_passes_key_per_call() -> None:
    intent = MagicMock(id="pi_1", client_secret="pi_1_secret")
    with patch.object(stripe.PaymentIntent, "create", return_value=intent) as create:
        secret = StripePaymentGateway("sk_test_123").create_payment_intent(1500, "cad", "25% deposit for Facial")

    assert secret == "pi_1_secret"
    create.assert_called_once_with(
        api_key="sk_test_123", amount=1500, currency="cad", description="25% deposit for Facial"
    )


def test_stripe_gateway_wraps_sdk_errors() -> None:
    with patch.object(stripe.PaymentIntent, "create", side_effect=stripe.StripeError("card declined")):
        with pytest.raises(IntegrationError):
            StripePaymentGateway("sk_test_123").create_payment_intent(1500, "cad", "deposit")


def test_stripe_gateway_requires_key() -> None:
    with pytest.raises(IntegrationError):
        StripePaymentGateway("").create_payment_intent(1500, "cad", "deposit")


def test_smtp_mailer_uses_starttls_on_submission_port() -> None:
    message = MIMEText("hi")
    message["To"] = "ana@example.com"
    with patch("smtplib.SMTP") as smtp:
        SmtpMailer("smtp.gmail.com", 587, "bookings@example.com", "app-pass").send(message)

    server = smtp.return_value
    smtp.assert_called_once_with("smtp.gmail.com", 587, timeout=30)
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("bookings@example.com", "app-pass")
    server.send_message.assert_called_once_with(message)


def test_smtp_mailer_uses_implicit_tls_on_465() -> None:
    message = MIMEText("hi")
    with patch("smtplib.SMTP_SSL") as smtp_ssl, patch("smtplib.SMTP") as smtp:
        SmtpMailer("smtp.gmail.com", 465, "bookings@example.com", "app-pass").send(message)

    smtp.assert_not_called()
    server = smtp_ssl.return_value
    server.starttls.assert_not_called()
    server.send_message.assert_called_once_with(message)


def test_smtp_mailer_requires_credentials() -> None:
    with pytest.raises(IntegrationError):
        SmtpMailer("smtp.gmail.com", 587, "", "").send(MIMEText("hi"))


def test_smtp_failure_raises_integration_error() -> None:
    with patch("smtplib.SMTP", side_effect=OSError("connection refused")):
        with pytest.raises(IntegrationError):
            SmtpMailer("smtp.gmail.com", 587, "u", "p").send(MIMEText("hi"))


def test_calendar_without_credentials_raises_integration_error() -> None:
    client = GoogleCalendarClient(None)

    with pytest.raises(IntegrationError):
        client.query_freebusy("primary", "a", "b")


def test_calendar_insert_uses_events_resource() -> None:
    client = GoogleCalendarClient({"client_email": "svc@x.iam"})
    service = MagicMock()
    service.events.return_value.insert.return_value.execute.return_value = {"id": "evt1"}
    client._service = service

    assert client.insert_event("primary", {"summary": "Booking"}) == {"id": "evt1"}
    service.events.return_value.insert.assert_called_once_with(calendarId="primary", body={"summary": "Booking"})
